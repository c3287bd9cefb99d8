# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for Required/Optional/Nullable/Empty short-circuit semantics."""

import pytest
from hypothesis import HealthCheck, given, settings

from rulechain import Undefined, Validator
from rulechain.skip import SkipDecision, evaluate_sentinel
from rulechain.testing import SpyRule, make_registry, missing_values, present_values


class TestEvaluateSentinel:
    """Tests for the pure sentinel decision function."""

    @pytest.mark.parametrize("value", [None, Undefined, ""])
    def test_required_fails_on_missing(self, value):
        """Test Required fails on None, Undefined and empty string."""
        assert evaluate_sentinel("Required", value) is SkipDecision.FAIL

    @pytest.mark.parametrize("value", [0, False, [], {}, " ", "x", 0.0])
    def test_required_accepts_present(self, value):
        """Test Required treats falsy non-empty values as present."""
        assert evaluate_sentinel("Required", value) is SkipDecision.CONTINUE

    def test_optional_only_skips_undefined(self):
        """Test Optional skips Undefined but not None."""
        assert evaluate_sentinel("Optional", Undefined) is SkipDecision.SKIP
        assert evaluate_sentinel("Optional", None) is SkipDecision.CONTINUE
        assert evaluate_sentinel("Optional", "") is SkipDecision.CONTINUE

    def test_nullable_skips_none_and_undefined(self):
        """Test Nullable skips None and Undefined."""
        assert evaluate_sentinel("Nullable", None) is SkipDecision.SKIP
        assert evaluate_sentinel("Nullable", Undefined) is SkipDecision.SKIP
        assert evaluate_sentinel("Nullable", "") is SkipDecision.CONTINUE

    def test_empty_only_skips_empty_string(self):
        """Test Empty skips the empty string only."""
        assert evaluate_sentinel("Empty", "") is SkipDecision.SKIP
        assert evaluate_sentinel("Empty", None) is SkipDecision.CONTINUE
        assert evaluate_sentinel("Empty", []) is SkipDecision.CONTINUE

    def test_unknown_sentinel_raises(self):
        """Test non-sentinel names are rejected."""
        with pytest.raises(ValueError):
            evaluate_sentinel("Email", "x")


class TestSkipInChains:
    """Tests for sentinels inside rule chains."""

    @pytest.mark.asyncio
    async def test_optional_undefined_skips_rule(self):
        """Test [Optional, R] passes on Undefined without running R."""
        spy = SpyRule(result="boom")
        validator = Validator(registry=make_registry(Spy=spy))
        result = await validator.validate(Undefined, ["Optional", "Spy"])
        assert result.is_valid
        assert spy.calls == 0

    @pytest.mark.asyncio
    async def test_optional_none_runs_rule(self):
        """Test [Optional, R] evaluates R when the value is None."""
        spy = SpyRule(result="boom")
        validator = Validator(registry=make_registry(Spy=spy))
        result = await validator.validate(None, ["Optional", "Spy"])
        assert not result.is_valid
        assert result.message == "boom"
        assert spy.calls == 1

    @pytest.mark.asyncio
    async def test_omitted_value_is_undefined(self):
        """Test validate() without a value behaves as Undefined."""
        spy = SpyRule(result="boom")
        validator = Validator(registry=make_registry(Spy=spy))
        result = await validator.validate(rules=["Optional", "Spy"])
        assert result.is_valid
        assert spy.calls == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [None, Undefined])
    async def test_nullable_skips(self, value):
        """Test [Nullable, R] passes on None/Undefined."""
        spy = SpyRule(result="boom")
        validator = Validator(registry=make_registry(Spy=spy))
        assert (await validator.validate(value, ["Nullable", "Spy"])).is_valid
        assert spy.calls == 0

    @pytest.mark.asyncio
    async def test_empty_skips_empty_string(self):
        """Test [Empty, R] passes on "" and evaluates R otherwise."""
        spy = SpyRule(result="boom")
        validator = Validator(registry=make_registry(Spy=spy))
        assert (await validator.validate("", ["Empty", "Spy"])).is_valid
        assert spy.calls == 0
        assert not (await validator.validate("x", ["Empty", "Spy"])).is_valid
        assert spy.calls == 1

    @pytest.mark.asyncio
    async def test_sentinel_after_failure_has_no_effect(self):
        """Test a sentinel placed after a failing rule cannot rescue the chain."""
        validator = Validator(registry=make_registry(Fail=SpyRule(result="nope")))
        result = await validator.validate(Undefined, ["Fail", "Optional"])
        assert result.message == "nope"

    @pytest.mark.asyncio
    async def test_skip_affects_all_subsequent_units(self):
        """Test a triggered sentinel skips every later unit, not just the next."""
        first, second = SpyRule(result="a"), SpyRule(result="b")
        validator = Validator(registry=make_registry(First=first, Second=second))
        result = await validator.validate("", ["Empty", "First", "Second"])
        assert result.is_valid
        assert first.calls == second.calls == 0

    @pytest.mark.asyncio
    async def test_redundant_sentinels_allowed(self):
        """Test [Nullable, Optional] is redundant but valid."""
        validator = Validator(registry=make_registry())
        assert (await validator.validate(None, ["Nullable", "Optional", "Email"])).is_valid

    @pytest.mark.asyncio
    async def test_required_message_uses_field_name(self):
        """Test Required failure message names the field."""
        validator = Validator(registry=make_registry())
        result = await validator.validate("", ["Required"], field_name="email")
        assert result.message == "email is required"


class TestSentinelProperties:
    """Property-based checks over arbitrary values."""

    @settings(suppress_health_check=[HealthCheck.function_scoped_fixture], max_examples=50)
    @given(value=present_values())
    def test_required_passes_present_values(self, value):
        """Test [Required] passes for every present value."""
        assert evaluate_sentinel("Required", value) is SkipDecision.CONTINUE

    @settings(suppress_health_check=[HealthCheck.function_scoped_fixture], max_examples=10)
    @given(value=missing_values())
    def test_required_fails_missing_values(self, value):
        """Test [Required] fails for None, Undefined and ""."""
        assert evaluate_sentinel("Required", value) is SkipDecision.FAIL

    @settings(suppress_health_check=[HealthCheck.function_scoped_fixture], max_examples=50)
    @given(value=present_values())
    def test_nullable_never_skips_present_values(self, value):
        """Test Nullable lets every non-null value through to later rules."""
        assert evaluate_sentinel("Nullable", value) is SkipDecision.CONTINUE

# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for result models, errors and the Undefined sentinel."""

import copy
import pickle

import pytest

from rulechain import (
    FieldError,
    TargetResult,
    Undefined,
    UndefinedType,
    UnknownRuleError,
    ValidationError,
    ValidationResult,
    is_absent,
    is_undefined,
)


class TestUndefined:
    """Tests for the Undefined sentinel."""

    def test_singleton(self):
        """Test UndefinedType always returns the same instance."""
        assert UndefinedType() is Undefined
        assert copy.deepcopy(Undefined) is Undefined
        assert pickle.loads(pickle.dumps(Undefined)) is Undefined

    def test_falsy_and_repr(self):
        """Test Undefined is falsy and prints as Undefined."""
        assert not Undefined
        assert repr(Undefined) == "Undefined"

    def test_predicates(self):
        """Test is_undefined distinguishes None; is_absent does not."""
        assert is_undefined(Undefined)
        assert not is_undefined(None)
        assert is_absent(None)
        assert is_absent(Undefined)
        assert not is_absent("")


class TestFieldError:
    """Tests for FieldError path prefixing."""

    def test_prefixed(self):
        """Test dotted and index prefixes."""
        error = FieldError(field="city", message="m")
        assert error.prefixed("address").field == "address.city"
        assert FieldError(field="[1].name", message="m").prefixed("items").field == "items[1].name"
        assert error.prefixed("").field == "city"

    def test_frozen(self):
        """Test FieldError is immutable."""
        error = FieldError(field="a", message="m")
        with pytest.raises(Exception):
            error.field = "b"


class TestResults:
    """Tests for ValidationResult and TargetResult."""

    def test_validation_result_raise(self):
        """Test raise_for_error raises only when invalid."""
        ValidationResult.ok("x").raise_for_error()
        with pytest.raises(ValidationError, match="too short"):
            ValidationResult.fail("too short").raise_for_error()

    def test_target_result_from_errors(self):
        """Test is_valid follows the error list and data is dropped on failure."""
        ok = TargetResult.from_errors([], {"a": 1})
        bad = TargetResult.from_errors([FieldError(field="a", message="m")], {"a": 1})
        assert ok.is_valid and ok.data == {"a": 1}
        assert not bad.is_valid and bad.data is None
        assert bad.error_for("missing") is None

    def test_unknown_rule_error_lists_available(self):
        """Test UnknownRuleError keeps the rule name and suggestions."""
        error = UnknownRuleError("Emial", ["Email", "Url"])
        assert error.rule_name == "Emial"
        assert "Available" in str(error)

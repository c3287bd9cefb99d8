# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for rule specification resolution."""

import pytest

from rulechain import (
    AllOf,
    ArrayOf,
    ConfigurationError,
    InvalidRuleParamsError,
    OneOf,
    RuleResolver,
    RuleUnit,
    Schema,
    UnitKind,
    UnknownRuleError,
    ValidateNested,
)
from rulechain.resolver import parse_rule_string
from rulechain.testing import SpyRule, make_registry


@pytest.fixture
def resolver(registry):
    return RuleResolver(registry)


class TestParseRuleString:
    """Tests for the bracket rule syntax."""

    def test_bare_name(self):
        """Test a bare name has no params."""
        assert parse_rule_string("Email") == ("Email", ())

    def test_params(self):
        """Test params are split on commas and stripped."""
        assert parse_rule_string("Length[3, 10]") == ("Length", ("3", "10"))

    def test_empty_brackets(self):
        """Test empty brackets mean no params."""
        assert parse_rule_string("Email[]") == ("Email", ())

    def test_nested_brackets_kept_together(self):
        """Test commas inside nested brackets do not split."""
        name, params = parse_rule_string(r"Matches[^[a-z]{2,4}$, custom]")
        assert name == "Matches"
        assert params == (r"^[a-z]{2,4}$", "custom")

    def test_surrounding_whitespace(self):
        """Test whitespace around the spec is ignored."""
        assert parse_rule_string("  In[a,b]  ") == ("In", ("a", "b"))

    @pytest.mark.parametrize(
        "spec", ["MinLength[3]]", "Length[(3, 10]", "In[a], b]", "Matches[{1,2]"]
    )
    def test_unbalanced_brackets(self, spec):
        """Test unbalanced brackets in params fail at parse time."""
        with pytest.raises(ConfigurationError):
            parse_rule_string(spec)

    def test_escaped_brackets(self):
        """Test backslash-escaped brackets do not count toward balance."""
        assert parse_rule_string(r"Matches[\[\d+\]]") == ("Matches", (r"\[\d+\]",))

    def test_unbalanced_rejected_before_validation(self, resolver):
        """Test the resolver surfaces the error without running any rule."""
        with pytest.raises(ConfigurationError, match="Unbalanced"):
            resolver.resolve_chain(["Required", "MinLength[3]]"])

    @pytest.mark.parametrize("spec", ["", "1Email", "Email[3", "Min Length"])
    def test_malformed(self, spec):
        """Test malformed strings raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            parse_rule_string(spec)


class TestResolveLeaf:
    """Tests for resolving single leaf specifications."""

    def test_string_lookup(self, resolver, registry):
        """Test a name resolves to the registry function."""
        unit = resolver.resolve("Email")
        assert unit.name == "Email"
        assert unit.params == ()
        assert unit.invoke is registry.get("Email")
        assert unit.kind is UnitKind.RULE

    def test_mapping_params(self, resolver):
        """Test the single-key mapping form carries list params."""
        unit = resolver.resolve({"MinLength": [3]})
        assert unit.name == "MinLength"
        assert unit.params == (3,)

    def test_mapping_tuple_params(self, resolver):
        """Test tuple params are accepted."""
        assert resolver.resolve({"Between": (1, 5)}).params == (1, 5)

    def test_mapping_non_list_params(self, resolver):
        """Test non-list params raise InvalidRuleParamsError."""
        with pytest.raises(InvalidRuleParamsError) as exc_info:
            resolver.resolve({"MinLength": 3})
        assert exc_info.value.rule_name == "MinLength"

    def test_mapping_multiple_keys(self, resolver):
        """Test multi-key mappings are rejected."""
        with pytest.raises(ConfigurationError, match="exactly one key"):
            resolver.resolve({"MinLength": [3], "MaxLength": [5]})

    def test_unknown_rule(self, resolver):
        """Test unknown names raise UnknownRuleError naming the rule."""
        with pytest.raises(UnknownRuleError) as exc_info:
            resolver.resolve("DoesNotExist")
        assert exc_info.value.rule_name == "DoesNotExist"
        assert "DoesNotExist" in str(exc_info.value)

    def test_unknown_rule_is_configuration_error(self, resolver):
        """Test UnknownRuleError is a ConfigurationError."""
        with pytest.raises(ConfigurationError):
            resolver.resolve({"Nope": []})

    def test_sentinel_bypasses_registry(self):
        """Test sentinels resolve even with an empty registry."""
        resolver = RuleResolver(make_registry(builtins=False))
        unit = resolver.resolve("Required")
        assert unit.kind is UnitKind.SENTINEL
        assert unit.invoke is None

    def test_sentinel_with_params(self, resolver):
        """Test sentinels reject parameters."""
        with pytest.raises(InvalidRuleParamsError):
            resolver.resolve({"Required": [1]})

    def test_inline_function(self, resolver):
        """Test callables become units without lookup."""

        def no_spaces(ctx):
            return " " not in ctx.value

        unit = resolver.resolve(no_spaces)
        assert unit.name == "no_spaces"
        assert unit.invoke is no_spaces

    def test_callable_object_name(self, resolver):
        """Test callable objects use their __name__ attribute."""
        spy = SpyRule(name="Probe")
        assert resolver.resolve(spy).name == "Probe"

    def test_rule_unit_passthrough(self, resolver):
        """Test already-resolved units are returned unchanged."""
        unit = RuleUnit(name="X", invoke=lambda ctx: True)
        assert resolver.resolve(unit) is unit

    @pytest.mark.parametrize("spec", [42, 3.5, object()])
    def test_unsupported_type(self, resolver, spec):
        """Test unsupported specification types raise."""
        with pytest.raises(ConfigurationError, match="Unsupported"):
            resolver.resolve(spec)


class TestResolveChain:
    """Tests for chain resolution."""

    def test_order_preserved(self, resolver):
        """Test chain order matches declaration order."""
        chain = resolver.resolve_chain(["Required", "String", {"MinLength": [2]}])
        assert [u.name for u in chain] == ["Required", "String", "MinLength"]

    def test_none_is_empty(self, resolver):
        """Test None resolves to an empty chain."""
        assert resolver.resolve_chain(None) == ()

    def test_lone_spec(self, resolver):
        """Test a lone spec becomes a one-element chain."""
        chain = resolver.resolve_chain("Email")
        assert len(chain) == 1

    def test_error_anywhere_aborts(self, resolver):
        """Test one bad entry fails the whole chain."""
        with pytest.raises(UnknownRuleError):
            resolver.resolve_chain(["Required", "Nope"])


class TestResolveComposite:
    """Tests for composite and nested resolution."""

    def test_one_of_sub_chains(self, resolver):
        """Test each OneOf argument becomes its own chain."""
        unit = resolver.resolve(OneOf("Email", ["Number", "Positive"]))
        assert unit.kind is UnitKind.ONE_OF
        assert [[u.name for u in chain] for chain in unit.chains] == [
            ["Email"],
            ["Number", "Positive"],
        ]

    def test_single_list_unpacked(self, resolver):
        """Test OneOf([a, b]) equals OneOf(a, b)."""
        unit = resolver.resolve(OneOf(["Email", "UUID"]))
        assert len(unit.chains) == 2

    def test_array_of_and_all_of_kinds(self, resolver):
        """Test ArrayOf/AllOf resolve to their kinds."""
        assert resolver.resolve(ArrayOf("String")).kind is UnitKind.ARRAY_OF
        assert resolver.resolve(AllOf("String", "Lowercase")).kind is UnitKind.ALL_OF

    def test_empty_composite(self, resolver):
        """Test composites need at least one sub-rule."""
        with pytest.raises(ConfigurationError, match="at least one"):
            resolver.resolve(OneOf())

    def test_empty_sub_chain(self, resolver):
        """Test an empty alternative is rejected."""
        with pytest.raises(ConfigurationError, match="empty sub-rule chain"):
            resolver.resolve(AllOf([], "String"))

    def test_unknown_inside_composite(self, resolver):
        """Test unknown names inside composites surface at resolution."""
        with pytest.raises(UnknownRuleError):
            resolver.resolve(ArrayOf("String", "Nope"))

    def test_validate_nested(self, resolver):
        """Test ValidateNested resolves the nested schema eagerly."""
        address = Schema({"city": ["Required"], "zip": [{"Length": [5]}]})
        unit = resolver.resolve(ValidateNested(address))
        assert unit.kind is UnitKind.NESTED
        assert unit.schema is address
        assert [[u.name for u in chain] for chain in unit.chains] == [["Required"], ["Length"]]

    def test_schema_value_is_nested_shorthand(self, resolver):
        """Test a bare Schema resolves like ValidateNested(schema)."""
        unit = resolver.resolve(Schema({"city": ["Required"]}))
        assert unit.kind is UnitKind.NESTED

    def test_schema_error_notes_field(self, resolver):
        """Test schema resolution errors mention the offending field."""
        schema = Schema({"name": ["Required"], "age": ["NotARule"]})
        with pytest.raises(UnknownRuleError) as exc_info:
            resolver.resolve_schema(schema)
        assert any("age" in note for note in exc_info.value.__notes__)

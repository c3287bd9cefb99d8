# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Rule specification resolver.

Turns heterogeneous rule specifications into RuleUnits:

    "Email"                     registry lookup, no params
    "Length[3, 10]"             registry lookup, params ("3", "10")
    {"MinLength": [3]}          registry lookup, params (3,)
    lambda ctx: ...             inline rule, no lookup
    OneOf(...)/AllOf(...)/ArrayOf(...)   composite, sub-chains resolved recursively
    ValidateNested(schema)      nested object, schema resolved recursively
    "Required"/"Optional"/"Nullable"/"Empty"   skip sentinels

Resolution is synchronous, performs no I/O and only reads the registry.
Every mistake surfaces as ConfigurationError before a value is inspected.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from .composites import CompositeSpec
from .errors import ConfigurationError, InvalidRuleParamsError, UnknownRuleError
from .registry import RuleRegistry
from .schema import NestedSpec, Schema
from .skip import SKIP_SENTINELS
from .types import RuleChain, RuleUnit, UnitKind

__all__ = ("RuleResolver", "parse_rule_string")

_RULE_STRING = re.compile(r"^\s*(?P<name>[A-Za-z_][\w.]*)\s*(?:\[(?P<params>.*)\])?\s*$", re.DOTALL)

_OPENERS = {"[": "]", "(": ")", "{": "}"}
_CLOSERS = frozenset(_OPENERS.values())


def _split_params(raw: str, spec: str) -> tuple[str, ...]:
    """Split on top-level commas; commas inside (), [] or {} are kept.

    Backslash-escaped characters are taken literally.

    Raises:
        ConfigurationError: If the brackets in ``raw`` are unbalanced
    """
    if not raw.strip():
        return ()
    parts: list[str] = []
    closers: list[str] = []
    current: list[str] = []
    escaped = False
    for ch in raw:
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch in _OPENERS:
            closers.append(_OPENERS[ch])
        elif ch in _CLOSERS:
            if not closers or closers.pop() != ch:
                raise ConfigurationError(f"Unbalanced '{ch}' in rule specification: {spec!r}")
        elif ch == "," and not closers:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(ch)
    if closers:
        raise ConfigurationError(f"Unclosed bracket in rule specification: {spec!r}")
    parts.append("".join(current).strip())
    return tuple(parts)


def parse_rule_string(spec: str) -> tuple[str, tuple[str, ...]]:
    """Parse ``"Name"`` or ``"Name[p1, p2]"`` into (name, params).

    Raises:
        ConfigurationError: If the string is not a valid rule reference
    """
    match = _RULE_STRING.match(spec)
    if match is None:
        raise ConfigurationError(f"Malformed rule specification: {spec!r}")
    params = match.group("params")
    return match.group("name"), _split_params(params, spec) if params is not None else ()


class RuleResolver:
    """Resolves rule specifications against a RuleRegistry."""

    def __init__(self, registry: RuleRegistry):
        self.registry = registry

    def resolve(self, spec: Any) -> RuleUnit:
        """Resolve one specification entry into a RuleUnit.

        Raises:
            UnknownRuleError: Name not registered
            InvalidRuleParamsError: Parameters malformed
            ConfigurationError: Any other malformed specification
        """
        if isinstance(spec, RuleUnit):
            return spec
        if isinstance(spec, str):
            name, params = parse_rule_string(spec)
            return self._lookup(name, params)
        if isinstance(spec, Mapping):
            return self._resolve_mapping(spec)
        if isinstance(spec, CompositeSpec):
            return self._resolve_composite(spec)
        if isinstance(spec, NestedSpec):
            return self._resolve_nested(spec.schema)
        if isinstance(spec, Schema):
            return self._resolve_nested(spec)
        if callable(spec):
            name = getattr(spec, "__name__", None) or type(spec).__name__
            return RuleUnit(name=name, invoke=spec)
        raise ConfigurationError(
            f"Unsupported rule specification of type {type(spec).__name__}: {spec!r}"
        )

    def resolve_chain(self, rules: Any) -> RuleChain:
        """Resolve an ordered chain; a lone specification is a one-element chain."""
        if rules is None:
            return ()
        if isinstance(rules, (list, tuple)):
            return tuple(self.resolve(spec) for spec in rules)
        return (self.resolve(rules),)

    def resolve_schema(self, schema: Schema) -> tuple[RuleChain, ...]:
        """Resolve every field chain of ``schema`` in declaration order."""
        chains: list[RuleChain] = []
        for field_name, rules in schema.items():
            try:
                chains.append(self.resolve_chain(rules))
            except ConfigurationError as e:
                e.add_note(f"while resolving schema field '{field_name}'")
                raise
        return tuple(chains)

    def _lookup(self, name: str, params: tuple[Any, ...]) -> RuleUnit:
        if name in SKIP_SENTINELS:
            if params:
                raise InvalidRuleParamsError(name, "skip sentinels take no parameters", params)
            return RuleUnit(name=name, kind=UnitKind.SENTINEL)

        rule = self.registry.get(name)
        if rule is None:
            raise UnknownRuleError(name, self.registry.list_names())
        return RuleUnit(name=name, params=params, invoke=rule)

    def _resolve_mapping(self, spec: Mapping[Any, Any]) -> RuleUnit:
        if len(spec) != 1:
            raise ConfigurationError(
                f"Rule mapping must have exactly one key (rule name), got {list(spec)!r}"
            )
        name, params = next(iter(spec.items()))
        if not isinstance(name, str):
            raise ConfigurationError(f"Rule name must be a string, got {name!r}")
        if not isinstance(params, (list, tuple)):
            raise InvalidRuleParamsError(
                name, f"expected a list of parameters, got {type(params).__name__}", params
            )
        return self._lookup(name, tuple(params))

    def _resolve_composite(self, spec: CompositeSpec) -> RuleUnit:
        if not spec.rules:
            raise ConfigurationError(
                f"{spec.name}: missing required composite argument (at least one sub-rule)"
            )
        chains = tuple(self.resolve_chain(sub) for sub in spec.rules)
        if any(not chain for chain in chains):
            raise ConfigurationError(f"{spec.name} received an empty sub-rule chain")
        return RuleUnit(name=spec.name, kind=spec.kind, chains=chains)

    def _resolve_nested(self, schema: Schema) -> RuleUnit:
        return RuleUnit(
            name="ValidateNested",
            kind=UnitKind.NESTED,
            chains=self.resolve_schema(schema),
            schema=schema,
        )

    def __repr__(self) -> str:
        return f"RuleResolver(registry={self.registry!r})"

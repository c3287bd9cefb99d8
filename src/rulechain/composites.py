# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Composite rules: OneOf (OR), AllOf (AND), ArrayOf (per-element AND).

Builders return inert markers; the resolver turns them into composite
RuleUnits whose ``chains`` hold the resolved sub-chains, and the engine
calls the evaluators below.

Sub-rule arguments:
    OneOf("Email", "UUID")             two alternatives
    OneOf(["Email", "UUID"])           same (a single list is unpacked)
    OneOf(["Number", "Positive"], "Empty")  first alternative is a chain
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .types import RuleUnit, UnitKind

if TYPE_CHECKING:
    from .engine import ChainOutcome, ValidationEngine, _Frame

__all__ = (
    "AllOf",
    "ArrayOf",
    "CompositeSpec",
    "OneOf",
    "evaluate_all_of",
    "evaluate_array_of",
    "evaluate_one_of",
    "is_array_like",
)


@dataclass(frozen=True, slots=True)
class CompositeSpec:
    """Unresolved composite marker."""

    kind: UnitKind
    rules: tuple[Any, ...]

    @property
    def name(self) -> str:
        return _NAMES[self.kind]


_NAMES = {
    UnitKind.ONE_OF: "OneOf",
    UnitKind.ALL_OF: "AllOf",
    UnitKind.ARRAY_OF: "ArrayOf",
}


def _collect(rules: tuple[Any, ...]) -> tuple[Any, ...]:
    if len(rules) == 1 and isinstance(rules[0], list):
        return tuple(rules[0])
    return rules


def OneOf(*rules: Any) -> CompositeSpec:
    """Pass if any alternative passes (short-circuits on first success)."""
    return CompositeSpec(UnitKind.ONE_OF, _collect(rules))


def AllOf(*rules: Any) -> CompositeSpec:
    """Pass if every sub-rule passes; report only the first failure."""
    return CompositeSpec(UnitKind.ALL_OF, _collect(rules))


def ArrayOf(*rules: Any) -> CompositeSpec:
    """Apply AllOf(rules) to every element of an array value."""
    return CompositeSpec(UnitKind.ARRAY_OF, _collect(rules))


def is_array_like(value: Any) -> bool:
    """Lists and tuples; strings, bytes and mappings are not arrays."""
    if isinstance(value, (str, bytes, bytearray, Mapping)):
        return False
    return isinstance(value, (list, tuple))


async def evaluate_one_of(
    engine: ValidationEngine, unit: RuleUnit, value: Any, frame: _Frame
) -> ChainOutcome:
    from .engine import ChainOutcome

    failures: list[str] = []
    for chain in unit.chains:
        outcome = await engine.run_chain(chain, value, frame)
        if outcome.passed:
            return outcome
        failures.append(outcome.message or "")
    ctx = engine.make_context(unit, value, frame)
    return ChainOutcome.fail(ctx.t("validator.oneOf", messages="; ".join(failures)))


async def evaluate_all_of(
    engine: ValidationEngine, unit: RuleUnit, value: Any, frame: _Frame
) -> ChainOutcome:
    from .engine import ChainOutcome

    for chain in unit.chains:
        outcome = await engine.run_chain(chain, value, frame)
        if not outcome.passed:
            return outcome
    return ChainOutcome.ok()


async def evaluate_array_of(
    engine: ValidationEngine, unit: RuleUnit, value: Any, frame: _Frame
) -> ChainOutcome:
    from .engine import ChainOutcome

    if not is_array_like(value):
        return ChainOutcome.fail(engine.make_context(unit, value, frame).t("validator.array"))

    for index, item in enumerate(value):
        item_frame = frame.child(f"[{index}]")
        for chain in unit.chains:
            outcome = await engine.run_chain(chain, item, item_frame)
            if outcome.passed:
                continue
            ctx = engine.make_context(unit, value, frame)
            message = ctx.t("validator.arrayOf", index=index, message=outcome.message)
            nested = tuple(e.prefixed(f"[{index}]") for e in outcome.nested_errors)
            return ChainOutcome.fail(message, nested, index=index)
    return ChainOutcome.ok()

# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Validation engine - runs resolved rule chains against values.

Single value:
    units run left-to-right, each awaited before the next
    first failure ends the chain (its message is the chain's message)
    a triggered skip sentinel ends the chain as passed

Target (object):
    every declared field runs (no early abort), failures are collected
    in schema order, ValidateNested recurses through the same engine and
    re-roots nested failures under the parent field (``address.city``)
"""

from __future__ import annotations

import inspect
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

import anyio

from ._sentinel import Undefined, is_absent
from .composites import evaluate_all_of, evaluate_array_of, evaluate_one_of
from .config import ValidatorConfig
from .errors import ConfigurationError
from .i18n import MessageTranslator, Translator
from .results import FieldError
from .schema import Schema
from .skip import SkipDecision, evaluate_sentinel
from .types import RuleChain, RuleContext, RuleUnit, UnitKind

__all__ = (
    "ROOT_FIELD",
    "ChainOutcome",
    "ValidationEngine",
    "is_target",
    "read_field",
    "value_at",
)

logger = logging.getLogger(__name__)

ROOT_FIELD = "_root"

_SCALARS = (str, bytes, bytearray, int, float, complex, bool, list, tuple, set, frozenset)


def is_target(data: Any) -> bool:
    """Mappings and attribute-bearing objects; not scalars, sequences or None."""
    if isinstance(data, Mapping):
        return True
    return not is_absent(data) and not isinstance(data, _SCALARS)


def read_field(data: Any, field_name: str) -> Any:
    """Field value from a mapping or object; Undefined when missing."""
    if isinstance(data, Mapping):
        return data.get(field_name, Undefined)
    return getattr(data, field_name, Undefined)


_INDEX = re.compile(r"\[(\d+)\]")


def value_at(data: Any, path: str, separator: str = ".") -> Any:
    """Value addressed by an error path (``address.city``, ``items[1].name``)."""
    value = data
    for part in path.split(separator):
        name = part.partition("[")[0]
        if name:
            value = read_field(value, name)
        for index in _INDEX.findall(part):
            if not isinstance(value, (list, tuple)) or int(index) >= len(value):
                return Undefined
            value = value[int(index)]
    return value


@dataclass(frozen=True, slots=True)
class ChainOutcome:
    """Result of running one chain (or one unit).

    ``nested_errors`` are relative to the field being validated.
    """

    passed: bool
    message: str | None = None
    nested_errors: tuple[FieldError, ...] = ()
    index: int | None = None

    @classmethod
    def ok(cls) -> ChainOutcome:
        return _PASSED

    @classmethod
    def fail(
        cls,
        message: str,
        nested_errors: tuple[FieldError, ...] = (),
        *,
        index: int | None = None,
    ) -> ChainOutcome:
        return cls(passed=False, message=message, nested_errors=nested_errors, index=index)


_PASSED = ChainOutcome(passed=True)


@dataclass(frozen=True, slots=True)
class _Frame:
    """Per-call state threaded through chains; never shared between calls."""

    field_name: str | None = None
    path: str = ""
    context: Any = None
    data: Any = None
    depth: int = 0
    separator: str = "."

    def child(self, segment: str) -> _Frame:
        """Same field, deeper path segment (array index)."""
        return replace(self, path=f"{self.path}{segment}")

    def for_field(self, field_name: str, data: Any) -> _Frame:
        path = f"{self.path}{self.separator}{field_name}" if self.path else field_name
        return replace(self, field_name=field_name, path=path, data=data)

    def descend(self) -> _Frame:
        return replace(self, depth=self.depth + 1)


class ValidationEngine:
    """Executes resolved chains; stateless across calls.

    All per-call state lives in ``_Frame`` instances, so one engine can
    serve concurrent validations.
    """

    def __init__(
        self,
        translate: Translator | None = None,
        config: ValidatorConfig | None = None,
    ):
        self.translate: Translator = translate or MessageTranslator()
        self.config = config or ValidatorConfig()

    def root_frame(
        self,
        *,
        field_name: str | None = None,
        context: Any = None,
        data: Any = None,
    ) -> _Frame:
        return _Frame(
            field_name=field_name,
            path=field_name or "",
            context=context,
            data=data,
            separator=self.config.path_separator,
        )

    def make_context(self, unit: RuleUnit, value: Any, frame: _Frame) -> RuleContext:
        return RuleContext(
            value=value,
            params=unit.params,
            field_name=frame.field_name,
            rule_name=unit.name,
            context=frame.context,
            data=frame.data,
            path=frame.path,
            translate=self.translate,
        )

    async def run_chain(self, chain: RuleChain, value: Any, frame: _Frame) -> ChainOutcome:
        """Run ``chain`` against ``value``; first failure wins."""
        for position, unit in enumerate(chain):
            match unit.kind:
                case UnitKind.SENTINEL:
                    decision = evaluate_sentinel(unit.name, value)
                    if decision is SkipDecision.FAIL:
                        ctx = self.make_context(unit, value, frame)
                        return ChainOutcome.fail(ctx.t("validator.required"))
                    if decision is SkipDecision.SKIP:
                        skipped = len(chain) - position - 1
                        logger.debug(
                            f"{unit.name} skipped {skipped} rule(s) for '{frame.path or 'value'}'"
                        )
                        return ChainOutcome.ok()
                    continue
                case UnitKind.ONE_OF:
                    outcome = await evaluate_one_of(self, unit, value, frame)
                case UnitKind.ALL_OF:
                    outcome = await evaluate_all_of(self, unit, value, frame)
                case UnitKind.ARRAY_OF:
                    outcome = await evaluate_array_of(self, unit, value, frame)
                case UnitKind.NESTED:
                    outcome = await self.validate_nested(unit, value, frame)
                case _:
                    outcome = await self.invoke_unit(unit, value, frame)

            if not outcome.passed:
                return outcome
        return ChainOutcome.ok()

    async def invoke_unit(self, unit: RuleUnit, value: Any, frame: _Frame) -> ChainOutcome:
        """Invoke one ordinary rule, awaiting asynchronous results.

        A rule body that raises counts as a failure; ConfigurationError
        propagates since it reports a caller bug.
        """
        if unit.invoke is None:
            raise ConfigurationError(f"Rule unit '{unit.name}' has nothing to invoke")

        ctx = self.make_context(unit, value, frame)
        try:
            result = unit.invoke(ctx)
            if inspect.isawaitable(result):
                result = await result
        except ConfigurationError:
            raise
        except Exception as e:
            logger.warning(
                f"Rule '{unit.name}' raised while validating '{ctx.label}': {e}",
                exc_info=True,
            )
            return ChainOutcome.fail(ctx.t("validator.ruleError", error=str(e)))

        if result is True:
            return ChainOutcome.ok()
        if isinstance(result, str) and result:
            return ChainOutcome.fail(result)
        return ChainOutcome.fail(ctx.t("validator.invalid"))

    async def validate_nested(self, unit: RuleUnit, value: Any, frame: _Frame) -> ChainOutcome:
        """Validate ``value`` as an object against the unit's schema."""
        ctx = self.make_context(unit, value, frame)
        if frame.depth >= self.config.max_depth:
            return ChainOutcome.fail(ctx.t("validator.maxDepth", max_depth=self.config.max_depth))
        if not is_target(value):
            return ChainOutcome.fail(ctx.t("validator.target"))
        if unit.schema is None:
            raise ConfigurationError("ValidateNested unit has no schema")

        errors = await self.collect_errors(unit.schema, unit.chains, value, frame.descend())
        if not errors:
            return ChainOutcome.ok()
        summary = "; ".join(f"{e.field}: {e.message}" for e in errors)
        return ChainOutcome.fail(ctx.t("validator.validateNested", messages=summary), tuple(errors))

    async def collect_errors(
        self,
        schema: Schema,
        chains: tuple[RuleChain, ...],
        data: Any,
        frame: _Frame,
    ) -> list[FieldError]:
        """Run every field chain; errors relative to ``data``, in schema order."""
        names = schema.field_names
        if len(names) != len(chains):
            raise ConfigurationError(
                f"Schema {schema!r} has {len(names)} fields but {len(chains)} resolved chains"
            )

        if self.config.concurrent_fields and len(names) > 1:
            outcomes = await self._run_fields_concurrently(names, chains, data, frame)
        else:
            outcomes = []
            for field_name, chain in zip(names, chains, strict=True):
                value = read_field(data, field_name)
                outcomes.append(
                    await self.run_chain(chain, value, frame.for_field(field_name, data))
                )

        errors: list[FieldError] = []
        for field_name, outcome in zip(names, outcomes, strict=True):
            if outcome.passed:
                continue
            if outcome.nested_errors:
                errors.extend(
                    e.prefixed(field_name, frame.separator) for e in outcome.nested_errors
                )
            else:
                errors.append(FieldError(field=field_name, message=outcome.message or ""))
        return errors

    async def _run_fields_concurrently(
        self,
        names: list[str],
        chains: tuple[RuleChain, ...],
        data: Any,
        frame: _Frame,
    ) -> list[ChainOutcome]:
        outcomes: list[ChainOutcome | None] = [None] * len(names)
        raised: list[BaseException] = []

        async def run(index: int, field_name: str, chain: RuleChain) -> None:
            try:
                outcomes[index] = await self.run_chain(
                    chain, read_field(data, field_name), frame.for_field(field_name, data)
                )
            except Exception as e:
                raised.append(e)

        async with anyio.create_task_group() as tg:
            for index, (field_name, chain) in enumerate(zip(names, chains, strict=True)):
                tg.start_soon(run, index, field_name, chain)

        if raised:
            raise raised[0]
        return [o if o is not None else ChainOutcome.ok() for o in outcomes]

    def __repr__(self) -> str:
        return f"ValidationEngine(translate={self.translate!r})"

# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Core data model: rule functions, resolved rule units, rule context."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeAlias

from .i18n import MessageTranslator, Translator

if TYPE_CHECKING:
    from .schema import Schema

__all__ = (
    "RuleChain",
    "RuleContext",
    "RuleFunction",
    "RuleOutcome",
    "RuleUnit",
    "UnitKind",
)

RuleOutcome: TypeAlias = "bool | str"
RuleFunction: TypeAlias = "Callable[[RuleContext], bool | str | Awaitable[bool | str]]"


class UnitKind(str, Enum):
    """What the engine does with a resolved unit."""

    RULE = "rule"
    SENTINEL = "sentinel"
    ONE_OF = "one_of"
    ALL_OF = "all_of"
    ARRAY_OF = "array_of"
    NESTED = "nested"


@dataclass(frozen=True, slots=True)
class RuleUnit:
    """Resolved, invocable validation step.

    Attributes:
        name: Registry name (synthetic for inline functions)
        params: Ordered opaque parameters handed to the rule function
        invoke: Underlying rule function (None for sentinels/composites)
        kind: Dispatch kind
        chains: Sub-chains for composite units
        schema: Sub-schema for nested units
    """

    name: str
    params: tuple[Any, ...] = ()
    invoke: RuleFunction | None = None
    kind: UnitKind = UnitKind.RULE
    chains: tuple[RuleChain, ...] = ()
    schema: Schema | None = None

    @property
    def is_composite(self) -> bool:
        return self.kind in (UnitKind.ONE_OF, UnitKind.ALL_OF, UnitKind.ARRAY_OF)

    def __repr__(self) -> str:
        if self.chains:
            inner = ", ".join("[" + ", ".join(u.name for u in c) + "]" for c in self.chains)
            return f"RuleUnit({self.name}: {inner})"
        if self.params:
            return f"RuleUnit({self.name}{list(self.params)})"
        return f"RuleUnit({self.name})"


RuleChain: TypeAlias = tuple[RuleUnit, ...]


@dataclass(frozen=True, slots=True)
class RuleContext:
    """Bundle handed to every rule function.

    Built fresh per invocation by the engine. ``context`` is the caller's
    opaque object, threaded unchanged through nested validation. ``data``
    is the enclosing object during target validation (None otherwise).
    """

    value: Any
    params: tuple[Any, ...] = ()
    field_name: str | None = None
    rule_name: str = ""
    context: Any = None
    data: Any = None
    path: str = ""
    translate: Translator = field(default_factory=MessageTranslator)

    @property
    def label(self) -> str:
        """Name used for the field in messages."""
        return self.field_name or self.path or "value"

    def param(self, index: int, default: Any = None) -> Any:
        """Positional parameter or ``default`` when not supplied."""
        if index < len(self.params):
            return self.params[index]
        return default

    def message_params(self, **extra: Any) -> dict[str, Any]:
        params: dict[str, Any] = {
            "field": self.label,
            "fieldName": self.field_name,
            "path": self.path,
            "value": self.value,
            "rule": self.rule_name,
            "params": list(self.params),
        }
        for i, p in enumerate(self.params):
            params[f"param{i}"] = p
        params.update(extra)
        return params

    def t(self, key: str, **extra: Any) -> str:
        """Translate ``key`` with the standard interpolation params."""
        return self.translate(key, self.message_params(**extra))

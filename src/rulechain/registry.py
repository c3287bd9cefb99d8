# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Rule registry mapping rule names to rule functions.

RuleRegistry is an explicit object so tests and applications can build
isolated registries. A lazily created default registry (pre-populated
with the built-in rules) backs the module-level convenience API.

Registration is last-writer-wins: registering an existing name replaces
it, which is how consumers override built-in rules. The registry does no
locking; populate it at startup, before validation traffic begins, or
guard concurrent registration yourself.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from .errors import ConfigurationError
from .skip import SKIP_SENTINELS

if TYPE_CHECKING:
    from .types import RuleFunction

__all__ = ("RuleRegistry", "get_default_registry", "reset_default_registry")

logger = logging.getLogger(__name__)


class RuleRegistry:
    """Name → rule function mapping.

    Usage:
        registry = RuleRegistry()
        registry.register("Even", lambda ctx: ctx.value % 2 == 0 or "must be even")

        @registry.rule("Odd")
        def odd(ctx):
            return ctx.value % 2 == 1 or ctx.t("validator.invalid")

        registry.get("Even")   # → function
        registry.get("Nope")   # → None
    """

    def __init__(self, *, auto_register_builtins: bool = False):
        """Initialize registry.

        Args:
            auto_register_builtins: If True, register the built-in rules
                (MinLength, Email, ...) on creation.
        """
        self._rules: dict[str, RuleFunction] = {}

        if auto_register_builtins:
            from .rules import register_builtin_rules

            register_builtin_rules(self)

    def register(self, name: str, rule: RuleFunction) -> None:
        """Register rule under ``name``, replacing any existing entry.

        Raises:
            ConfigurationError: If name is empty/reserved or rule not callable
        """
        if not isinstance(name, str) or not name.strip():
            raise ConfigurationError(f"Rule name must be a non-empty string, got {name!r}")
        if name in SKIP_SENTINELS:
            raise ConfigurationError(
                f"'{name}' is a reserved skip sentinel and cannot be registered"
            )
        if not callable(rule):
            raise ConfigurationError(
                f"Rule '{name}' must be callable, got {type(rule).__name__}"
            )
        if name in self._rules and self._rules[name] is not rule:
            logger.debug(f"Overriding rule '{name}'")
        self._rules[name] = rule

    def rule(self, name: str | None = None) -> Callable[[RuleFunction], RuleFunction]:
        """Decorator form of ``register``; defaults to the function name."""

        def decorator(fn: RuleFunction) -> RuleFunction:
            self.register(name or fn.__name__, fn)
            return fn

        return decorator

    def get(self, name: str) -> RuleFunction | None:
        """Rule function for ``name`` or None when not registered."""
        return self._rules.get(name)

    def has(self, name: str) -> bool:
        return name in self._rules

    def unregister(self, name: str) -> bool:
        """Unregister rule. Returns True if removed."""
        return self._rules.pop(name, None) is not None

    def list_rules(self) -> dict[str, RuleFunction]:
        """Copy of all entries."""
        return dict(self._rules)

    def list_names(self) -> list[str]:
        return list(self._rules.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleRegistry(count={len(self)})"


_default_registry: RuleRegistry | None = None


def get_default_registry() -> RuleRegistry:
    """Process-wide registry with built-in rules, created on first use."""
    global _default_registry
    if _default_registry is None:
        _default_registry = RuleRegistry(auto_register_builtins=True)
    return _default_registry


def reset_default_registry() -> None:
    """Discard the default registry (next access rebuilds it)."""
    global _default_registry
    _default_registry = None

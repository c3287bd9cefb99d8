# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Testing utilities for rulechain and downstream projects.

Basic usage:
    from rulechain.testing import SpyRule, make_registry

    def test_short_circuit():
        spy = SpyRule()
        registry = make_registry(Spy=spy)
        ...
        assert spy.calls == 0

Property-based testing (requires hypothesis):
    from rulechain.testing import present_values

    @given(value=present_values())
    def test_required_accepts(value): ...
"""

from __future__ import annotations

from typing import Any

import anyio

from .registry import RuleRegistry
from .types import RuleContext, RuleFunction

__all__ = (
    "AsyncSpyRule",
    "SpyRule",
    "failing_rule",
    "make_registry",
    "missing_values",
    "present_values",
    "raising_rule",
)


class SpyRule:
    """Call-counting rule returning a fixed outcome.

    Example:
        >>> spy = SpyRule(result="nope")
        >>> spy(RuleContext(value=1))
        'nope'
        >>> spy.calls
        1
    """

    __test__ = False  # Tell pytest not to collect this as a test class

    def __init__(self, result: bool | str = True, name: str = "Spy"):
        self.result = result
        self.__name__ = name
        self.contexts: list[RuleContext] = []

    @property
    def calls(self) -> int:
        return len(self.contexts)

    @property
    def last(self) -> RuleContext | None:
        return self.contexts[-1] if self.contexts else None

    def __call__(self, ctx: RuleContext) -> bool | str:
        self.contexts.append(ctx)
        return self.result


class AsyncSpyRule(SpyRule):
    """Asynchronous SpyRule; optionally sleeps before answering."""

    def __init__(self, result: bool | str = True, name: str = "AsyncSpy", delay: float = 0.0):
        super().__init__(result, name)
        self.delay = delay

    async def __call__(self, ctx: RuleContext) -> bool | str:  # type: ignore[override]
        self.contexts.append(ctx)
        if self.delay:
            await anyio.sleep(self.delay)
        return self.result


def failing_rule(message: str = "failed", name: str = "Failing") -> RuleFunction:
    """Rule that always fails with ``message``."""

    def rule(ctx: RuleContext) -> str:
        return message

    rule.__name__ = name
    return rule


def raising_rule(error: Exception | None = None, name: str = "Raising") -> RuleFunction:
    """Rule whose body always raises ``error`` (RuntimeError by default)."""
    exc = error or RuntimeError("rule exploded")

    def rule(ctx: RuleContext) -> Any:
        raise exc

    rule.__name__ = name
    return rule


def make_registry(*, builtins: bool = True, **rules: RuleFunction) -> RuleRegistry:
    """Isolated registry (built-ins optional) with extra ``rules`` registered."""
    registry = RuleRegistry(auto_register_builtins=builtins)
    for name, rule in rules.items():
        registry.register(name, rule)
    return registry


# =============================================================================
# Hypothesis Strategies
# =============================================================================


def present_values():
    """Hypothesis strategy for values the Required sentinel accepts."""
    from hypothesis import strategies as st

    return st.one_of(
        st.integers(),
        st.floats(allow_nan=False),
        st.booleans(),
        st.text(min_size=1),
        st.lists(st.integers(), max_size=3),
        st.dictionaries(st.text(max_size=3), st.integers(), max_size=3),
    )


def missing_values():
    """Hypothesis strategy for values the Required sentinel rejects."""
    from hypothesis import strategies as st

    from ._sentinel import Undefined

    return st.sampled_from([None, Undefined, ""])

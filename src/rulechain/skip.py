# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Skip-condition evaluator for the four sentinel rules.

Trigger conditions (deliberately distinct):
    Required  fails on None, Undefined or ""  (0, False, [], {} are present)
    Empty     skips the rest of the chain on ""  only
    Nullable  skips the rest of the chain on None or Undefined
    Optional  skips the rest of the chain on Undefined only
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from ._sentinel import Undefined

__all__ = (
    "EMPTY",
    "NULLABLE",
    "OPTIONAL",
    "REQUIRED",
    "SKIP_SENTINELS",
    "SkipDecision",
    "evaluate_sentinel",
    "is_missing",
)

REQUIRED = "Required"
OPTIONAL = "Optional"
NULLABLE = "Nullable"
EMPTY = "Empty"

SKIP_SENTINELS: frozenset[str] = frozenset({REQUIRED, OPTIONAL, NULLABLE, EMPTY})


class SkipDecision(str, Enum):
    CONTINUE = "continue"
    SKIP = "skip"
    FAIL = "fail"


def is_missing(value: Any) -> bool:
    """Values the Required sentinel rejects."""
    if value is None or value is Undefined:
        return True
    return isinstance(value, str) and value == ""


def evaluate_sentinel(name: str, value: Any) -> SkipDecision:
    """Decide what a sentinel does with ``value``.

    Raises:
        ValueError: If ``name`` is not a sentinel
    """
    match name:
        case "Required":
            return SkipDecision.FAIL if is_missing(value) else SkipDecision.CONTINUE
        case "Empty":
            if isinstance(value, str) and value == "":
                return SkipDecision.SKIP
            return SkipDecision.CONTINUE
        case "Nullable":
            if value is None or value is Undefined:
                return SkipDecision.SKIP
            return SkipDecision.CONTINUE
        case "Optional":
            return SkipDecision.SKIP if value is Undefined else SkipDecision.CONTINUE
        case _:
            raise ValueError(f"Not a skip sentinel: {name!r}")

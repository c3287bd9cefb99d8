# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Array rules. Lists and tuples are arrays; strings and mappings are not."""

from __future__ import annotations

from typing import Any

from ..composites import is_array_like
from ..types import RuleContext
from ._utils import is_number, loose_equals, number_param, require_params

__all__ = ("RULES",)


def array(ctx: RuleContext) -> bool | str:
    return is_array_like(ctx.value) or ctx.t("validator.array")


def _sized_array_rule(key: str, predicate):
    def rule(ctx: RuleContext) -> bool | str:
        bound = number_param(ctx, 0)
        value = ctx.value
        if is_array_like(value) and predicate(len(value), bound):
            return True
        return ctx.t(key)

    return rule


array_min_length = _sized_array_rule("validator.arrayMinLength", lambda n, b: n >= b)
array_max_length = _sized_array_rule("validator.arrayMaxLength", lambda n, b: n <= b)
array_length = _sized_array_rule("validator.arrayLength", lambda n, b: n == b)


def array_contains(ctx: RuleContext) -> bool | str:
    expected = require_params(ctx, 1)
    value = ctx.value
    if is_array_like(value) and all(any(loose_equals(item, e) for item in value) for e in expected):
        return True
    return ctx.t("validator.arrayContains", expected=", ".join(map(str, expected)))


def _all_unique(items: list[Any] | tuple[Any, ...]) -> bool:
    try:
        return len(set(items)) == len(items)
    except TypeError:
        # unhashable items (dicts, lists)
        seen: list[Any] = []
        for item in items:
            if item in seen:
                return False
            seen.append(item)
        return True


def array_unique(ctx: RuleContext) -> bool | str:
    value = ctx.value
    return (is_array_like(value) and _all_unique(value)) or ctx.t("validator.arrayUnique")


def array_all_strings(ctx: RuleContext) -> bool | str:
    value = ctx.value
    if is_array_like(value) and all(isinstance(item, str) for item in value):
        return True
    return ctx.t("validator.arrayAllStrings")


def array_all_numbers(ctx: RuleContext) -> bool | str:
    """Every item is an int/float (numeric strings do not count)."""
    value = ctx.value
    if is_array_like(value) and all(
        isinstance(item, (int, float)) and is_number(item) for item in value
    ):
        return True
    return ctx.t("validator.arrayAllNumbers")


RULES = {
    "Array": array,
    "ArrayMinLength": array_min_length,
    "ArrayMaxLength": array_max_length,
    "ArrayLength": array_length,
    "ArrayContains": array_contains,
    "ArrayUnique": array_unique,
    "ArrayAllStrings": array_all_strings,
    "ArrayAllNumbers": array_all_numbers,
}

# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Equality, membership and cross-field rules."""

from __future__ import annotations

from .._sentinel import Undefined
from ..engine import read_field
from ..types import RuleContext
from ._utils import loose_equals, require_params

__all__ = ("RULES",)


def equals(ctx: RuleContext) -> bool | str:
    expected = require_params(ctx, 1)[0]
    return loose_equals(ctx.value, expected) or ctx.t("validator.equals", expected=expected)


def not_equals(ctx: RuleContext) -> bool | str:
    expected = require_params(ctx, 1)[0]
    return (not loose_equals(ctx.value, expected)) or ctx.t(
        "validator.notEquals", expected=expected
    )


def _choices(ctx: RuleContext) -> list:
    params = require_params(ctx, 1)
    # {"In": [["a", "b"]]} and {"In": ["a", "b"]} are both accepted
    if len(params) == 1 and isinstance(params[0], (list, tuple, set, frozenset)):
        return list(params[0])
    return list(params)


def in_(ctx: RuleContext) -> bool | str:
    choices = _choices(ctx)
    if any(loose_equals(ctx.value, c) for c in choices):
        return True
    return ctx.t("validator.in", choices=", ".join(map(str, choices)))


def not_in(ctx: RuleContext) -> bool | str:
    choices = _choices(ctx)
    if not any(loose_equals(ctx.value, c) for c in choices):
        return True
    return ctx.t("validator.notIn", choices=", ".join(map(str, choices)))


def same_as(ctx: RuleContext) -> bool | str:
    """SameAs[otherField]: equal to a sibling field of the validated object."""
    other = str(require_params(ctx, 1)[0])
    if ctx.data is None:
        return ctx.t("validator.sameAs", other=other)
    other_value = read_field(ctx.data, other)
    if other_value is not Undefined and ctx.value == other_value:
        return True
    return ctx.t("validator.sameAs", other=other)


def boolean(ctx: RuleContext) -> bool | str:
    return isinstance(ctx.value, bool) or ctx.t("validator.boolean")


RULES = {
    "Equals": equals,
    "NotEquals": not_equals,
    "In": in_,
    "NotIn": not_in,
    "SameAs": same_as,
    "Boolean": boolean,
}

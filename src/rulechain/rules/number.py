# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Numeric rules. Numeric strings count as numbers; booleans and NaN do not."""

from __future__ import annotations

import math

from ..errors import InvalidRuleParamsError
from ..types import RuleContext
from ._utils import number_param, to_number

__all__ = ("RULES",)


def _number(ctx: RuleContext) -> int | float | None:
    try:
        return to_number(ctx.value)
    except (TypeError, ValueError):
        return None


def number(ctx: RuleContext) -> bool | str:
    return _number(ctx) is not None or ctx.t("validator.number")


def integer(ctx: RuleContext) -> bool | str:
    value = _number(ctx)
    if isinstance(value, int) or (isinstance(value, float) and value.is_integer()):
        return True
    return ctx.t("validator.integer")


def _compare(key: str, predicate, arity: int = 1):
    def rule(ctx: RuleContext) -> bool | str:
        bounds = [number_param(ctx, i) for i in range(arity)]
        value = _number(ctx)
        if value is not None and predicate(value, *bounds):
            return True
        return ctx.t(key)

    return rule


minimum = _compare("validator.min", lambda v, n: v >= n)
maximum = _compare("validator.max", lambda v, n: v <= n)
between = _compare("validator.between", lambda v, lo, hi: lo <= v <= hi, arity=2)
greater_than = _compare("validator.greaterThan", lambda v, n: v > n)
less_than = _compare("validator.lessThan", lambda v, n: v < n)


def positive(ctx: RuleContext) -> bool | str:
    value = _number(ctx)
    return (value is not None and value > 0) or ctx.t("validator.positive")


def negative(ctx: RuleContext) -> bool | str:
    value = _number(ctx)
    return (value is not None and value < 0) or ctx.t("validator.negative")


def multiple_of(ctx: RuleContext) -> bool | str:
    step = number_param(ctx, 0)
    if step == 0:
        raise InvalidRuleParamsError(ctx.rule_name, "step must not be zero", ctx.params)
    value = _number(ctx)
    if isinstance(value, int) and isinstance(step, int):
        if value % step == 0:
            return True
    elif value is not None:
        # float operands: tolerate binary rounding (0.3 / 0.1)
        try:
            quotient = value / step
            if math.isfinite(quotient) and abs(quotient - round(quotient)) < 1e-9:
                return True
        except OverflowError:
            return ctx.t("validator.multipleOf")
    return ctx.t("validator.multipleOf")


RULES = {
    "Number": number,
    "Integer": integer,
    "Min": minimum,
    "Max": maximum,
    "Between": between,
    "GreaterThan": greater_than,
    "LessThan": less_than,
    "Positive": positive,
    "Negative": negative,
    "MultipleOf": multiple_of,
}

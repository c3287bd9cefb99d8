# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import math
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Any

from ..errors import InvalidRuleParamsError
from ..types import RuleContext

# Security limit: Maximum string length for number conversion.
# Prevents potential DoS from extremely long numeric strings.
MAX_NUMBER_STRING_LENGTH = 1000


def to_number(input_: Any, /) -> int | float:
    """Convert input to int/float.

    Numeric strings are accepted; booleans and NaN are not numbers.

    Raises:
        ValueError: If string is empty, too long, not numeric, or NaN
        TypeError: If input type is not convertible
    """
    # bool is an int subclass; check first
    if isinstance(input_, bool):
        raise TypeError("Booleans are not numbers")
    if isinstance(input_, int):
        return input_
    if isinstance(input_, (float, Decimal)):
        value = float(input_)
    elif isinstance(input_, str):
        input_ = input_.strip()
        if not input_:
            raise ValueError("Empty string cannot be converted to number")
        if len(input_) > MAX_NUMBER_STRING_LENGTH:
            msg = f"String length ({len(input_)}) exceeds maximum ({MAX_NUMBER_STRING_LENGTH})"
            raise ValueError(msg)
        try:
            return int(input_)
        except ValueError:
            pass
        try:
            value = float(input_)
        except ValueError as e:
            raise ValueError(f"Cannot convert '{input_}' to number") from e
    else:
        raise TypeError(f"Cannot convert {type(input_).__name__} to number")

    if math.isnan(value):
        raise ValueError("NaN is not a number")
    return value


def is_number(value: Any) -> bool:
    try:
        to_number(value)
    except (TypeError, ValueError):
        return False
    return True


def number_param(ctx: RuleContext, index: int) -> int | float:
    """Numeric rule parameter; malformed or missing params are caller bugs.

    Raises:
        InvalidRuleParamsError: If the parameter is missing or not numeric
    """
    if index >= len(ctx.params):
        raise InvalidRuleParamsError(
            ctx.rule_name, f"missing numeric parameter at position {index}", ctx.params
        )
    try:
        return to_number(ctx.params[index])
    except (TypeError, ValueError) as e:
        raise InvalidRuleParamsError(ctx.rule_name, str(e), ctx.params) from e


def require_params(ctx: RuleContext, minimum: int = 1) -> tuple[Any, ...]:
    """Rule params, requiring at least ``minimum`` of them."""
    if len(ctx.params) < minimum:
        raise InvalidRuleParamsError(
            ctx.rule_name, f"expected at least {minimum} parameter(s)", ctx.params
        )
    return ctx.params


def to_datetime(value: Any) -> datetime | None:
    """datetime from a datetime/date/ISO-8601 string, None if not a date."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def comparable(a: datetime, b: datetime) -> tuple[datetime, datetime]:
    """Align naive/aware datetimes (naive is taken as UTC)."""
    if (a.tzinfo is None) == (b.tzinfo is None):
        return a, b
    if a.tzinfo is None:
        a = a.replace(tzinfo=timezone.utc)
    if b.tzinfo is None:
        b = b.replace(tzinfo=timezone.utc)
    return a, b


def date_param(ctx: RuleContext, index: int) -> datetime:
    """Date rule parameter.

    Raises:
        InvalidRuleParamsError: If the parameter is missing or not a date
    """
    require_params(ctx, index + 1)
    parsed = to_datetime(ctx.params[index])
    if parsed is None:
        raise InvalidRuleParamsError(
            ctx.rule_name, f"parameter {ctx.params[index]!r} is not a date", ctx.params
        )
    return parsed


def loose_equals(value: Any, expected: Any) -> bool:
    """Equality that lets string params (``"In[a, 1]"``) match non-strings."""
    if value == expected:
        return True
    if isinstance(expected, str) and not isinstance(value, str):
        if isinstance(value, bool):
            return str(value).lower() == expected.lower()
        return str(value) == expected
    return False

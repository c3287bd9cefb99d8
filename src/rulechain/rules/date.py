# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Date rules over date/datetime objects or ISO-8601 strings.

Naive values are compared as UTC when the other side is timezone-aware.
Range bounds are inclusive.
"""

from __future__ import annotations

from datetime import datetime, timezone

from ..types import RuleContext
from ._utils import comparable, date_param, to_datetime

__all__ = ("RULES",)


def date(ctx: RuleContext) -> bool | str:
    return to_datetime(ctx.value) is not None or ctx.t("validator.date")


def date_after(ctx: RuleContext) -> bool | str:
    bound = date_param(ctx, 0)
    value = to_datetime(ctx.value)
    if value is not None:
        value, bound = comparable(value, bound)
        if value > bound:
            return True
    return ctx.t("validator.dateAfter")


def date_before(ctx: RuleContext) -> bool | str:
    bound = date_param(ctx, 0)
    value = to_datetime(ctx.value)
    if value is not None:
        value, bound = comparable(value, bound)
        if value < bound:
            return True
    return ctx.t("validator.dateBefore")


def date_between(ctx: RuleContext) -> bool | str:
    start, end = date_param(ctx, 0), date_param(ctx, 1)
    value = to_datetime(ctx.value)
    if value is not None:
        value, start = comparable(value, start)
        value, end = comparable(value, end)
        start, end = comparable(start, end)
        if start <= value <= end:
            return True
    return ctx.t("validator.dateBetween")


def _now_like(value: datetime) -> datetime:
    now = datetime.now(timezone.utc)
    return now if value.tzinfo is not None else now.replace(tzinfo=None)


def future_date(ctx: RuleContext) -> bool | str:
    value = to_datetime(ctx.value)
    if value is not None and value > _now_like(value):
        return True
    return ctx.t("validator.futureDate")


def past_date(ctx: RuleContext) -> bool | str:
    value = to_datetime(ctx.value)
    if value is not None and value < _now_like(value):
        return True
    return ctx.t("validator.pastDate")


RULES = {
    "Date": date,
    "DateAfter": date_after,
    "DateBefore": date_before,
    "DateBetween": date_between,
    "FutureDate": future_date,
    "PastDate": past_date,
}

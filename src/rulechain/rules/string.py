# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""String rules. Length rules accept anything supporting ``len()``."""

from __future__ import annotations

import re
from collections.abc import Sized
from functools import lru_cache

from ..errors import InvalidRuleParamsError
from ..types import RuleContext
from ._utils import number_param, require_params

__all__ = ("RULES",)


def string(ctx: RuleContext) -> bool | str:
    return isinstance(ctx.value, str) or ctx.t("validator.string")


def non_null_string(ctx: RuleContext) -> bool | str:
    value = ctx.value
    return (isinstance(value, str) and bool(value.strip())) or ctx.t("validator.nonNullString")


def min_length(ctx: RuleContext) -> bool | str:
    minimum = number_param(ctx, 0)
    value = ctx.value
    if isinstance(value, Sized) and len(value) >= minimum:
        return True
    return ctx.t("validator.minLength")


def max_length(ctx: RuleContext) -> bool | str:
    maximum = number_param(ctx, 0)
    value = ctx.value
    if isinstance(value, Sized) and len(value) <= maximum:
        return True
    return ctx.t("validator.maxLength")


def length(ctx: RuleContext) -> bool | str:
    """Length[n] exact, Length[min, max] inclusive range."""
    value = ctx.value
    if len(ctx.params) >= 2:
        lo, hi = number_param(ctx, 0), number_param(ctx, 1)
        if isinstance(value, Sized) and lo <= len(value) <= hi:
            return True
        return ctx.t("validator.lengthRange")
    exact = number_param(ctx, 0)
    if isinstance(value, Sized) and len(value) == exact:
        return True
    return ctx.t("validator.length")


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


def matches(ctx: RuleContext) -> bool | str:
    """Matches[pattern] or Matches[pattern, messageKeyOrText] (search semantics)."""
    pattern = require_params(ctx, 1)[0]
    if isinstance(pattern, re.Pattern):
        regex = pattern
    elif isinstance(pattern, str) and pattern:
        try:
            regex = _compile(pattern)
        except re.error as e:
            raise InvalidRuleParamsError(
                ctx.rule_name, f"invalid pattern: {e}", ctx.params
            ) from e
    else:
        raise InvalidRuleParamsError(
            ctx.rule_name, "pattern must be a non-empty string", ctx.params
        )

    if isinstance(ctx.value, str) and regex.search(ctx.value):
        return True
    custom = ctx.param(1)
    if isinstance(custom, str) and custom.strip():
        return ctx.translate(custom.strip(), ctx.message_params(pattern=regex.pattern))
    return ctx.t("validator.regex", pattern=regex.pattern)


def _affix_rule(key: str, test):
    def rule(ctx: RuleContext) -> bool | str:
        candidates = [str(p) for p in require_params(ctx, 1)]
        value = ctx.value
        if isinstance(value, str) and any(test(value, c) for c in candidates):
            return True
        return ctx.t(key, expected=", ".join(candidates))

    return rule


starts_with = _affix_rule("validator.startsWith", str.startswith)
ends_with = _affix_rule("validator.endsWith", str.endswith)
contains = _affix_rule("validator.contains", lambda v, c: c in v)


def alpha(ctx: RuleContext) -> bool | str:
    return (isinstance(ctx.value, str) and ctx.value.isalpha()) or ctx.t("validator.alpha")


def alpha_numeric(ctx: RuleContext) -> bool | str:
    value = ctx.value
    return (isinstance(value, str) and value.isalnum()) or ctx.t("validator.alphaNumeric")


def lowercase(ctx: RuleContext) -> bool | str:
    value = ctx.value
    return (isinstance(value, str) and value == value.lower()) or ctx.t("validator.lowercase")


def uppercase(ctx: RuleContext) -> bool | str:
    value = ctx.value
    return (isinstance(value, str) and value == value.upper()) or ctx.t("validator.uppercase")


RULES = {
    "String": string,
    "NonNullString": non_null_string,
    "MinLength": min_length,
    "MaxLength": max_length,
    "Length": length,
    "Matches": matches,
    "StartsWith": starts_with,
    "EndsWith": ends_with,
    "Contains": contains,
    "Alpha": alpha,
    "AlphaNumeric": alpha_numeric,
    "Lowercase": lowercase,
    "Uppercase": uppercase,
}

# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Built-in leaf rules.

Each rule is a plain function ``(RuleContext) -> True | str`` and is
registered by name; any of them can be overridden by registering the
same name again.

Groups:
- string: String, MinLength, MaxLength, Length, Matches, ...
- number: Number, Integer, Min, Max, Between, ...
- comparison: Equals, NotEquals, In, NotIn, SameAs, Boolean
- format: Email, Url, UUID, JSON, Base64, HexColor, CreditCard, IP, ...
- array: Array, ArrayMinLength, ArrayUnique, ArrayAllNumbers, ...
- date: Date, DateAfter, DateBefore, DateBetween, FutureDate, PastDate
- file: File, MaxFileSize, MinFileSize, FileExtension, MimeType, Image
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from . import array, comparison, date, file, format, number, string

if TYPE_CHECKING:
    from ..registry import RuleRegistry
    from ..types import RuleFunction

__all__ = ("BUILTIN_RULES", "register_builtin_rules")

BUILTIN_RULES: dict[str, RuleFunction] = {
    **string.RULES,
    **number.RULES,
    **comparison.RULES,
    **format.RULES,
    **array.RULES,
    **date.RULES,
    **file.RULES,
}


def register_builtin_rules(registry: RuleRegistry) -> None:
    """Register every built-in rule on ``registry``."""
    for name, rule in BUILTIN_RULES.items():
        registry.register(name, rule)

# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Absent-value sentinel.

``None`` is a present-but-null value. ``Undefined`` marks a value that
was never supplied (missing key, missing attribute, omitted argument).
"""

from __future__ import annotations

from typing import Any, Final, Self

__all__ = ("Undefined", "UndefinedType", "is_absent", "is_undefined")


class UndefinedType:
    """Singleton type for the ``Undefined`` sentinel."""

    __slots__ = ()
    _instance: UndefinedType | None = None

    def __new__(cls) -> Self:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Undefined"

    def __reduce__(self) -> str:
        return "Undefined"

    def __copy__(self) -> Self:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Self:
        return self


Undefined: Final = UndefinedType()


def is_undefined(value: Any) -> bool:
    """True only for the ``Undefined`` sentinel."""
    return value is Undefined


def is_absent(value: Any) -> bool:
    """True for ``None`` or ``Undefined``."""
    return value is None or value is Undefined

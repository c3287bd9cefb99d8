# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Result models returned by the public entry points."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .errors import ValidationError

__all__ = ("FieldError", "TargetResult", "ValidationResult")


class FieldError(BaseModel):
    """One failing field (dotted path for nested fields)."""

    model_config = ConfigDict(frozen=True)

    field: str
    message: str

    def prefixed(self, prefix: str, separator: str = ".") -> FieldError:
        """Same error re-rooted under ``prefix`` (``address`` + ``city``)."""
        if not prefix:
            return self
        if self.field.startswith("["):
            return FieldError(field=f"{prefix}{self.field}", message=self.message)
        return FieldError(field=f"{prefix}{separator}{self.field}", message=self.message)


class ValidationResult(BaseModel):
    """Outcome of single-value validation.

    Truthy iff valid.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    is_valid: bool
    message: str | None = None
    value: Any = None

    @classmethod
    def ok(cls, value: Any = None) -> ValidationResult:
        return cls(is_valid=True, value=value)

    @classmethod
    def fail(cls, message: str, value: Any = None) -> ValidationResult:
        return cls(is_valid=False, message=message, value=value)

    def raise_for_error(self) -> None:
        """Raise ValidationError when invalid."""
        if not self.is_valid:
            raise ValidationError(self.message or "Validation failed")

    def __bool__(self) -> bool:
        return self.is_valid


class TargetResult(BaseModel):
    """Outcome of object (target) validation.

    Attributes:
        is_valid: True iff ``errors`` is empty
        errors: Every failing field, in schema order
        data: Validated input echoed back (None on failure)
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    is_valid: bool
    errors: list[FieldError] = Field(default_factory=list)
    data: Any = None

    @classmethod
    def from_errors(cls, errors: list[FieldError], data: Any = None) -> TargetResult:
        if errors:
            return cls(is_valid=False, errors=errors, data=None)
        return cls(is_valid=True, errors=[], data=data)

    def errors_by_field(self) -> dict[str, list[str]]:
        grouped: dict[str, list[str]] = {}
        for error in self.errors:
            grouped.setdefault(error.field, []).append(error.message)
        return grouped

    def error_for(self, field: str) -> str | None:
        """First message for ``field`` or None."""
        for error in self.errors:
            if error.field == field:
                return error.message
        return None

    def raise_for_errors(self) -> None:
        """Raise ValidationError carrying every field error when invalid."""
        if self.is_valid:
            return
        summary = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        raise ValidationError(
            f"Validation failed for {len(self.errors)} field(s): {summary}",
            errors=self.errors,
        )

    def __bool__(self) -> bool:
        return self.is_valid

# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Exception hierarchy.

Validation failures are values (strings in results), never exceptions.
Exceptions are reserved for caller mistakes (ConfigurationError and
subclasses) and for the explicit ``raise_for_errors()`` escape hatch
(ValidationError).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .results import FieldError

__all__ = (
    "ConfigurationError",
    "InvalidRuleParamsError",
    "RuleChainError",
    "UnknownRuleError",
    "ValidationError",
)


class RuleChainError(Exception):
    """Base class for all rulechain exceptions."""


class ConfigurationError(RuleChainError):
    """Caller/programmer mistake in a rule specification or registration.

    Raised at resolution time where possible, before any value is inspected.
    Never collected into a result; aborts the whole validation call.
    """


class UnknownRuleError(ConfigurationError):
    """Rule name referenced in a chain is not registered."""

    def __init__(self, rule_name: str, available: list[str] | None = None):
        self.rule_name = rule_name
        self.available = available or []
        message = f"Rule '{rule_name}' is not registered"
        if self.available:
            message += f". Available: {sorted(self.available)}"
        super().__init__(message)


class InvalidRuleParamsError(ConfigurationError):
    """Rule parameters are malformed (e.g. not list-shaped)."""

    def __init__(self, rule_name: str, reason: str, params: Any = None):
        self.rule_name = rule_name
        self.reason = reason
        self.params = params
        super().__init__(f"Invalid parameters for rule '{rule_name}': {reason}")


class ValidationError(RuleChainError):
    """Validation failed and the caller asked for an exception.

    Only raised by ``TargetResult.raise_for_errors()`` and
    ``ValidationResult.raise_for_error()``.
    """

    def __init__(self, message: str, errors: list[FieldError] | None = None):
        self.errors = list(errors or [])
        super().__init__(message)

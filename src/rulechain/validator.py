# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Validator - public entry points over resolver + engine.

Flow:
    1. Resolver turns rule specifications (or a whole Schema) into RuleUnits
       against the validator's registry; mistakes raise ConfigurationError
       before any value is inspected.
    2. Engine runs the chain(s) with skip semantics.
    3. Outcome is wrapped in ValidationResult / TargetResult; failures are
       also recorded in ``validation_log``.

Usage:
    validator = Validator()

    result = await validator.validate("ab", [{"MinLength": [3]}])
    # → ValidationResult(is_valid=False, message="value must be at least 3 ...")

    schema = Schema({"email": ["Required", "Email"]})
    target = await validator.validate_target(schema, {"email": ""})
    # → TargetResult(is_valid=False, errors=[FieldError(field="email", ...)])
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from ._sentinel import Undefined
from .config import ValidatorConfig
from .engine import ROOT_FIELD, ValidationEngine, is_target, value_at
from .i18n import MessageTranslator, Translator
from .registry import RuleRegistry, get_default_registry
from .resolver import RuleResolver
from .results import FieldError, TargetResult, ValidationResult
from .schema import Schema
from .types import RuleFunction

__all__ = (
    "Validator",
    "get_rule",
    "has_rule",
    "register_rule",
    "validate",
    "validate_target",
)

logger = logging.getLogger(__name__)


class Validator:
    """Validation entry point bound to a registry, translator and config.

    Validators are cheap; build one per registry. Results carry no
    reference back to the validator.
    """

    def __init__(
        self,
        registry: RuleRegistry | None = None,
        translator: Translator | None = None,
        config: ValidatorConfig | None = None,
    ):
        """Initialize validator.

        Args:
            registry: Rule registry (uses the default registry if None)
            translator: Message translator (English catalogue if None)
            config: Engine configuration (defaults if None)
        """
        self.registry = registry if registry is not None else get_default_registry()
        self.config = config or ValidatorConfig()
        self.translator: Translator = translator or MessageTranslator()
        self.resolver = RuleResolver(self.registry)
        self.engine = ValidationEngine(self.translator, self.config)
        # Validation log for tracking failures across calls
        self.validation_log: list[dict[str, Any]] = []

    # === Registry management ===

    def register_rule(self, name: str, rule: RuleFunction) -> None:
        """Register (or override) a rule on this validator's registry."""
        self.registry.register(name, rule)

    def has_rule(self, name: str) -> bool:
        return self.registry.has(name)

    def get_rule(self, name: str) -> RuleFunction | None:
        return self.registry.get(name)

    # === Validation ===

    async def validate(
        self,
        value: Any = Undefined,
        rules: Any = None,
        *,
        context: Any = None,
        field_name: str | None = None,
    ) -> ValidationResult:
        """Validate a single value against a rule chain.

        Args:
            value: Value under test (Undefined when omitted)
            rules: Rule chain or a single rule specification
            context: Opaque caller context handed to every rule
            field_name: Field name used in messages

        Returns:
            ValidationResult (first failure message when invalid)

        Raises:
            ConfigurationError: If the rule specification is malformed
        """
        chain = self.resolver.resolve_chain(rules)
        frame = self.engine.root_frame(field_name=field_name, context=context)
        outcome = await self.engine.run_chain(chain, value, frame)

        if outcome.passed:
            return ValidationResult.ok(value)

        message = outcome.message or ""
        self.log_validation_error(field_name or "value", value, message)
        return ValidationResult.fail(message, value)

    async def validate_target(
        self,
        schema: Schema | Mapping[str, Any] | type[Any],
        data: Any,
        *,
        context: Any = None,
    ) -> TargetResult:
        """Validate every schema field of ``data`` and aggregate failures.

        Args:
            schema: Schema (or pydantic model class carrying rules)
            data: Mapping or object to validate
            context: Opaque caller context handed to every rule

        Returns:
            TargetResult with all failing fields in schema order

        Raises:
            ConfigurationError: If any rule specification is malformed
        """
        if isinstance(schema, Mapping):
            schema = Schema(schema)
        elif not isinstance(schema, Schema):
            schema = Schema.from_model(schema)
        chains = self.resolver.resolve_schema(schema)

        frame = self.engine.root_frame(context=context)
        if not is_target(data):
            message = self.translator("validator.target", {"field": ROOT_FIELD, "value": data})
            errors = [FieldError(field=ROOT_FIELD, message=message)]
        else:
            errors = await self.engine.collect_errors(schema, chains, data, frame)

        for error in errors:
            if error.field == ROOT_FIELD:
                value = data
            else:
                value = value_at(data, error.field, self.config.path_separator)
            self.log_validation_error(error.field, value, error.message)

        if errors:
            logger.debug(f"{schema!r}: {len(errors)} field(s) failed validation")
        return TargetResult.from_errors(errors, data if self.config.echo_data else None)

    # === Validation log ===

    def log_validation_error(self, field: str, value: Any, error: str) -> None:
        """Log a validation error with timestamp.

        Args:
            field: Field name (dotted path) that failed validation
            value: Value that failed validation
            error: Error message
        """
        if not self.config.log_failures:
            return
        log_entry = {
            "field": field,
            "value": value,
            "error": error,
            "timestamp": datetime.now().isoformat(),
        }
        self.validation_log.append(log_entry)
        limit = self.config.max_log_entries
        if limit is not None and len(self.validation_log) > limit:
            del self.validation_log[:-limit]

    def get_validation_summary(self) -> dict[str, Any]:
        """Get summary of validation log.

        Returns:
            Dict with total_errors, fields_with_errors, and error_entries
        """
        fields_with_errors = {entry["field"] for entry in self.validation_log if "field" in entry}

        return {
            "total_errors": len(self.validation_log),
            "fields_with_errors": sorted(fields_with_errors),
            "error_entries": self.validation_log,
        }

    def __repr__(self) -> str:
        return f"Validator(registry={self.registry!r}, config={self.config!r})"


# === Module-level API on the default registry ===


async def validate(
    value: Any = Undefined,
    rules: Any = None,
    *,
    context: Any = None,
    field_name: str | None = None,
    registry: RuleRegistry | None = None,
) -> ValidationResult:
    """Single-value validation with a throwaway Validator."""
    validator = Validator(registry=registry, config=ValidatorConfig(log_failures=False))
    return await validator.validate(value, rules, context=context, field_name=field_name)


async def validate_target(
    schema: Schema | Mapping[str, Any] | type[Any],
    data: Any,
    *,
    context: Any = None,
    registry: RuleRegistry | None = None,
) -> TargetResult:
    """Object validation with a throwaway Validator."""
    validator = Validator(registry=registry, config=ValidatorConfig(log_failures=False))
    return await validator.validate_target(schema, data, context=context)


def register_rule(name: str, rule: RuleFunction) -> None:
    """Register (or override) a rule on the default registry."""
    get_default_registry().register(name, rule)


def has_rule(name: str) -> bool:
    return get_default_registry().has(name)


def get_rule(name: str) -> RuleFunction | None:
    return get_default_registry().get(name)

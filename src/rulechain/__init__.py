# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""rulechain - composable, registry-driven value and object validation.

Core of the pipeline:
    rule specifications → RuleResolver → RuleUnits → ValidationEngine → results

Features:
- RuleRegistry: name → rule function (last writer wins, built-ins included)
- Rule specifications: "Email", "Length[3, 10]", {"MinLength": [3]}, inline functions
- Skip sentinels: Required, Optional, Nullable, Empty
- Composites: OneOf, AllOf, ArrayOf
- Target validation over a Schema with ValidateNested recursion

Usage:
    from rulechain import Schema, ValidateNested, validate, validate_target

    result = await validate("ab", [{"MinLength": [3]}])
    # → ValidationResult(is_valid=False, message="value must be at least 3 characters long")

    address = Schema({"city": ["Required"]})
    user = Schema({"email": ["Required", "Email"], "address": [ValidateNested(address)]})
    target = await validate_target(user, {"email": "", "address": {}})
    # → errors: email, address.city
"""

from ._sentinel import Undefined, UndefinedType, is_absent, is_undefined
from .composites import AllOf, ArrayOf, OneOf
from .config import ValidatorConfig
from .engine import ValidationEngine
from .errors import (
    ConfigurationError,
    InvalidRuleParamsError,
    RuleChainError,
    UnknownRuleError,
    ValidationError,
)
from .i18n import DEFAULT_MESSAGES, MessageTranslator, Translator
from .registry import RuleRegistry, get_default_registry, reset_default_registry
from .resolver import RuleResolver
from .results import FieldError, TargetResult, ValidationResult
from .schema import Schema, SchemaBuilder, ValidateNested
from .types import RuleChain, RuleContext, RuleFunction, RuleUnit, UnitKind
from .validator import (
    Validator,
    get_rule,
    has_rule,
    register_rule,
    validate,
    validate_target,
)

__all__ = (
    "DEFAULT_MESSAGES",
    "AllOf",
    "ArrayOf",
    "ConfigurationError",
    "FieldError",
    "InvalidRuleParamsError",
    "MessageTranslator",
    "OneOf",
    "RuleChain",
    "RuleChainError",
    "RuleContext",
    "RuleFunction",
    "RuleRegistry",
    "RuleResolver",
    "RuleUnit",
    "Schema",
    "SchemaBuilder",
    "TargetResult",
    "Translator",
    "Undefined",
    "UndefinedType",
    "UnitKind",
    "UnknownRuleError",
    "ValidateNested",
    "ValidationEngine",
    "ValidationError",
    "ValidationResult",
    "Validator",
    "ValidatorConfig",
    "get_default_registry",
    "get_rule",
    "has_rule",
    "is_absent",
    "is_undefined",
    "register_rule",
    "reset_default_registry",
    "validate",
    "validate_target",
)

# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Message translation collaborator.

The engine never builds user-facing text itself; every failure message
comes from a ``Translator``: ``(key, params) -> str``. ``MessageTranslator``
is the default, backed by an English catalogue that callers may override
per instance (or replace entirely with their own i18n layer).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

__all__ = ("DEFAULT_MESSAGES", "MessageTranslator", "Translator")


@runtime_checkable
class Translator(Protocol):
    """Callable turning a message key and interpolation params into text."""

    def __call__(self, key: str, params: Mapping[str, Any]) -> str: ...


DEFAULT_MESSAGES: dict[str, str] = {
    # engine
    "validator.invalid": "{field} is invalid",
    "validator.ruleError": "{field} could not be validated ({rule})",
    "validator.required": "{field} is required",
    "validator.oneOf": "{field} must satisfy at least one of the allowed rules: {messages}",
    "validator.arrayOf": "{field} item at index {index} is invalid: {message}",
    "validator.validateNested": "{field} contains invalid fields: {messages}",
    "validator.target": "{field} must be an object",
    "validator.maxDepth": "{field} is nested too deeply (max depth {max_depth})",
    # strings
    "validator.string": "{field} must be a string",
    "validator.nonNullString": "{field} must be a non-empty string",
    "validator.minLength": "{field} must be at least {param0} characters long",
    "validator.maxLength": "{field} must be at most {param0} characters long",
    "validator.length": "{field} must be exactly {param0} characters long",
    "validator.lengthRange": "{field} must be between {param0} and {param1} characters long",
    "validator.regex": "{field} does not match the required pattern {pattern}",
    "validator.startsWith": "{field} must start with {expected}",
    "validator.endsWith": "{field} must end with {expected}",
    "validator.contains": "{field} must contain {expected}",
    "validator.alpha": "{field} must contain only letters",
    "validator.alphaNumeric": "{field} must contain only letters and digits",
    "validator.lowercase": "{field} must be lowercase",
    "validator.uppercase": "{field} must be uppercase",
    # numbers
    "validator.number": "{field} must be a number",
    "validator.integer": "{field} must be an integer",
    "validator.min": "{field} must be greater than or equal to {param0}",
    "validator.max": "{field} must be less than or equal to {param0}",
    "validator.between": "{field} must be between {param0} and {param1}",
    "validator.greaterThan": "{field} must be greater than {param0}",
    "validator.lessThan": "{field} must be less than {param0}",
    "validator.positive": "{field} must be a positive number",
    "validator.negative": "{field} must be a negative number",
    "validator.multipleOf": "{field} must be a multiple of {param0}",
    # comparisons
    "validator.equals": "{field} must be equal to {expected}",
    "validator.notEquals": "{field} must not be equal to {expected}",
    "validator.in": "{field} must be one of: {choices}",
    "validator.notIn": "{field} must not be one of: {choices}",
    "validator.sameAs": "{field} must match {other}",
    "validator.boolean": "{field} must be a boolean",
    # formats
    "validator.email": "{field} must be a valid email address",
    "validator.phoneNumber": "{field} must be a valid phone number",
    "validator.emailOrPhoneNumber": "{field} must be a valid email address or phone number",
    "validator.url": "{field} must be a valid URL",
    "validator.uuid": "{field} must be a valid UUID",
    "validator.json": "{field} must be valid JSON",
    "validator.base64": "{field} must be a valid Base64 string",
    "validator.hexColor": "{field} must be a valid hexadecimal color",
    "validator.creditCard": "{field} must be a valid credit card number",
    "validator.ip": "{field} must be a valid IP address (version {version})",
    "validator.macAddress": "{field} must be a valid MAC address",
    "validator.fileName": "{field} must be a valid file name",
    # arrays
    "validator.array": "{field} must be an array",
    "validator.arrayMinLength": "{field} must contain at least {param0} items",
    "validator.arrayMaxLength": "{field} must contain at most {param0} items",
    "validator.arrayLength": "{field} must contain exactly {param0} items",
    "validator.arrayContains": "{field} must contain: {expected}",
    "validator.arrayUnique": "{field} must contain unique items",
    "validator.arrayAllStrings": "{field} must contain only strings",
    "validator.arrayAllNumbers": "{field} must contain only numbers",
    # dates
    "validator.date": "{field} must be a valid date",
    "validator.dateAfter": "{field} must be after {param0}",
    "validator.dateBefore": "{field} must be before {param0}",
    "validator.dateBetween": "{field} must be between {param0} and {param1}",
    "validator.futureDate": "{field} must be a date in the future",
    "validator.pastDate": "{field} must be a date in the past",
    # files
    "validator.file": "{field} must be a file",
    "validator.maxFileSize": "{field} must not exceed {param0} bytes",
    "validator.minFileSize": "{field} must be at least {param0} bytes",
    "validator.fileExtension": "{field} must have one of the extensions: {choices}",
    "validator.mimeType": "{field} must be of type: {choices}",
    "validator.image": "{field} must be an image",
}


class _KeepMissing(dict):
    """format_map helper leaving unknown placeholders untouched."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


class MessageTranslator:
    """Default catalogue-backed translator.

    Unknown keys fall back to the key itself; unknown placeholders in a
    template are left as-is.

    Usage:
        translate = MessageTranslator({"validator.required": "{field} est requis"})
        translate("validator.required", {"field": "email"})
        # → "email est requis"
    """

    def __init__(
        self,
        messages: Mapping[str, str] | None = None,
        *,
        base: Mapping[str, str] | None = None,
    ):
        """Initialize translator.

        Args:
            messages: Per-instance overrides layered on top of ``base``
            base: Base catalogue (defaults to DEFAULT_MESSAGES)
        """
        self.messages: dict[str, str] = dict(DEFAULT_MESSAGES if base is None else base)
        if messages:
            self.messages.update(messages)

    def __call__(self, key: str, params: Mapping[str, Any]) -> str:
        template = self.messages.get(key, key)
        try:
            return template.format_map(_KeepMissing(params))
        except (ValueError, IndexError, AttributeError):
            # malformed template (stray brace, attribute lookup); show it raw
            return template

    def __repr__(self) -> str:
        return f"MessageTranslator(keys={len(self.messages)})"

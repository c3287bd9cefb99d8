# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Format rules: email, phone numbers, URL, UUID, JSON, Base64, colors, cards, network ids.

All format rules fail on non-string values.
"""

from __future__ import annotations

import ipaddress
import re

import orjson
import phonenumbers
from email_validator import EmailNotValidError, validate_email
from phonenumbers import NumberParseException
from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..errors import InvalidRuleParamsError
from ..types import RuleContext

__all__ = ("RULES", "luhn_checksum_valid")

_URL_ADAPTER = TypeAdapter(AnyUrl)

_UUID = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.I,
)
_BASE64 = re.compile(r"^(?:[A-Za-z0-9+/]{4})*(?:[A-Za-z0-9+/]{2}==|[A-Za-z0-9+/]{3}=)?$")
_HEX_COLOR = re.compile(r"^#(?:[A-Fa-f0-9]{3}|[A-Fa-f0-9]{4}|[A-Fa-f0-9]{6}|[A-Fa-f0-9]{8})$")
_MAC = re.compile(
    r"^(?:[0-9A-Fa-f]{2}([:-]))(?:[0-9A-Fa-f]{2}\1){4}[0-9A-Fa-f]{2}$"
    r"|^[0-9A-Fa-f]{12}$"
)
_CARD = re.compile(r"^\d{13,19}$")

# forbidden characters \ / : * ? " < > |, leading dot, reserved device names
_FILENAME_CHARS = re.compile(r'^[^\\/:*?"<>|]+$')
_FILENAME_RESERVED = re.compile(r"^(nul|prn|con|lpt[0-9]|com[0-9])(\.|$)", re.I)


def _is_email(value: object) -> bool:
    if not isinstance(value, str) or not value.strip():
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def email(ctx: RuleContext) -> bool | str:
    return _is_email(ctx.value) or ctx.t("validator.email")


def _phone_region(ctx: RuleContext) -> str | None:
    """Optional region param (``PhoneNumber[FR]``); None means international format."""
    region = ctx.param(0)
    if region is None or (isinstance(region, str) and not region.strip()):
        return None
    region = str(region).strip().upper()
    if region not in phonenumbers.SUPPORTED_REGIONS:
        raise InvalidRuleParamsError(ctx.rule_name, f"unknown region {region!r}", ctx.params)
    return region


def _is_phone_number(value: object, region: str | None) -> bool:
    if not isinstance(value, str) or not value.strip():
        return False
    try:
        parsed = phonenumbers.parse(value, region)
    except NumberParseException:
        return False
    return phonenumbers.is_valid_number(parsed)


def phone_number(ctx: RuleContext) -> bool | str:
    """PhoneNumber or PhoneNumber[region]; without a region the number needs a +country prefix."""
    if _is_phone_number(ctx.value, _phone_region(ctx)):
        return True
    return ctx.t("validator.phoneNumber")


def email_or_phone_number(ctx: RuleContext) -> bool | str:
    value = ctx.value
    if _is_email(value) or _is_phone_number(value, _phone_region(ctx)):
        return True
    return ctx.t("validator.emailOrPhoneNumber")


def url(ctx: RuleContext) -> bool | str:
    if not isinstance(ctx.value, str):
        return ctx.t("validator.url")
    try:
        _URL_ADAPTER.validate_python(ctx.value)
    except PydanticValidationError:
        return ctx.t("validator.url")
    return True


def uuid(ctx: RuleContext) -> bool | str:
    value = ctx.value
    return (isinstance(value, str) and bool(_UUID.match(value))) or ctx.t("validator.uuid")


def json(ctx: RuleContext) -> bool | str:
    if not isinstance(ctx.value, (str, bytes)):
        return ctx.t("validator.json")
    try:
        orjson.loads(ctx.value)
    except orjson.JSONDecodeError:
        return ctx.t("validator.json")
    return True


def base64(ctx: RuleContext) -> bool | str:
    value = ctx.value
    if isinstance(value, str) and value and _BASE64.match(value):
        return True
    return ctx.t("validator.base64")


def hex_color(ctx: RuleContext) -> bool | str:
    value = ctx.value
    return (isinstance(value, str) and bool(_HEX_COLOR.match(value))) or ctx.t(
        "validator.hexColor"
    )


def luhn_checksum_valid(digits: str) -> bool:
    total = 0
    for position, char in enumerate(reversed(digits)):
        digit = int(char)
        if position % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


def credit_card(ctx: RuleContext) -> bool | str:
    if not isinstance(ctx.value, str):
        return ctx.t("validator.creditCard")
    cleaned = re.sub(r"[\s-]", "", ctx.value)
    if _CARD.match(cleaned) and luhn_checksum_valid(cleaned):
        return True
    return ctx.t("validator.creditCard")


def ip(ctx: RuleContext) -> bool | str:
    """IP[4], IP[6] or IP / IP[4/6] for either."""
    version = str(ctx.param(0, "4/6")).strip() or "4/6"
    allowed = {"4": {4}, "6": {6}, "4/6": {4, 6}}.get(version)
    if allowed is None:
        raise InvalidRuleParamsError(ctx.rule_name, f"unknown IP version {version!r}", ctx.params)
    if isinstance(ctx.value, str):
        try:
            if ipaddress.ip_address(ctx.value).version in allowed:
                return True
        except ValueError:
            pass
    return ctx.t("validator.ip", version=version)


def mac_address(ctx: RuleContext) -> bool | str:
    value = ctx.value
    return (isinstance(value, str) and bool(_MAC.match(value))) or ctx.t("validator.macAddress")


def file_name(ctx: RuleContext) -> bool | str:
    value = ctx.value
    if (
        isinstance(value, str)
        and value.strip()
        and _FILENAME_CHARS.match(value)
        and not value.startswith(".")
        and not _FILENAME_RESERVED.match(value)
    ):
        return True
    return ctx.t("validator.fileName")


RULES = {
    "Email": email,
    "PhoneNumber": phone_number,
    "EmailOrPhoneNumber": email_or_phone_number,
    "Url": url,
    "UUID": uuid,
    "JSON": json,
    "Base64": base64,
    "HexColor": hex_color,
    "CreditCard": credit_card,
    "IP": ip,
    "MACAddress": mac_address,
    "FileName": file_name,
}

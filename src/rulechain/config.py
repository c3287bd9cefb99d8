# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Validator configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

__all__ = ("ValidatorConfig",)


class ValidatorConfig(BaseModel):
    """Configuration for Validator.

    Attributes:
        concurrent_fields: Validate sibling fields of a target concurrently.
            Errors are still reported in schema order.
        max_depth: Maximum ValidateNested recursion depth.
        log_failures: Record failures in ``Validator.validation_log``.
        max_log_entries: Keep at most this many log entries (oldest dropped);
            None keeps every entry.
        path_separator: Joins nested field paths (``address.city``).
        echo_data: Echo the validated input in successful TargetResults.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    concurrent_fields: bool = Field(default=False)
    max_depth: int = Field(default=32, ge=1)
    log_failures: bool = Field(default=True)
    max_log_entries: int | None = Field(default=1000, ge=1)
    path_separator: str = Field(default=".", min_length=1)
    echo_data: bool = Field(default=True)

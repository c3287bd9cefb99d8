# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""File rules over upload-like objects or mappings.

A file exposes ``name`` (or ``filename``) and ``size``; the content type is
read from ``content_type``/``mimetype``/``type`` and otherwise guessed from
the name.
"""

from __future__ import annotations

import mimetypes
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..types import RuleContext
from ._utils import number_param, require_params

__all__ = ("RULES", "FileInfo", "file_info")


@dataclass(frozen=True, slots=True)
class FileInfo:
    name: str
    size: int
    content_type: str | None


def _lookup(value: Any, *keys: str) -> Any:
    for key in keys:
        found = value.get(key) if isinstance(value, Mapping) else getattr(value, key, None)
        if found is not None:
            return found
    return None


def file_info(value: Any) -> FileInfo | None:
    """FileInfo for a file-like value, None when it does not look like a file."""
    if value is None or isinstance(value, (str, bytes, int, float, list, tuple)):
        return None
    name = _lookup(value, "name", "filename")
    size = _lookup(value, "size")
    if not isinstance(name, str) or isinstance(size, bool) or not isinstance(size, int):
        return None
    content_type = _lookup(value, "content_type", "mimetype", "type")
    if not isinstance(content_type, str) or not content_type:
        content_type = mimetypes.guess_type(name)[0]
    return FileInfo(name=name, size=size, content_type=content_type)


def _mime_matches(content_type: str | None, pattern: str) -> bool:
    if content_type is None:
        return False
    content_type, pattern = content_type.lower(), pattern.strip().lower()
    if pattern.endswith("/*"):
        return content_type.startswith(pattern[:-1])
    return content_type == pattern


def file(ctx: RuleContext) -> bool | str:
    return file_info(ctx.value) is not None or ctx.t("validator.file")


def max_file_size(ctx: RuleContext) -> bool | str:
    limit = number_param(ctx, 0)
    info = file_info(ctx.value)
    return (info is not None and info.size <= limit) or ctx.t("validator.maxFileSize")


def min_file_size(ctx: RuleContext) -> bool | str:
    limit = number_param(ctx, 0)
    info = file_info(ctx.value)
    return (info is not None and info.size >= limit) or ctx.t("validator.minFileSize")


def file_extension(ctx: RuleContext) -> bool | str:
    extensions = [str(e).strip().lstrip(".").lower() for e in require_params(ctx, 1)]
    info = file_info(ctx.value)
    if info is not None and "." in info.name:
        if info.name.rsplit(".", 1)[1].lower() in extensions:
            return True
    return ctx.t("validator.fileExtension", choices=", ".join(extensions))


def mime_type(ctx: RuleContext) -> bool | str:
    patterns = [str(p) for p in require_params(ctx, 1)]
    info = file_info(ctx.value)
    if info is not None and any(_mime_matches(info.content_type, p) for p in patterns):
        return True
    return ctx.t("validator.mimeType", choices=", ".join(patterns))


def image(ctx: RuleContext) -> bool | str:
    info = file_info(ctx.value)
    return (info is not None and _mime_matches(info.content_type, "image/*")) or ctx.t(
        "validator.image"
    )


RULES = {
    "File": file,
    "MaxFileSize": max_file_size,
    "MinFileSize": min_file_size,
    "FileExtension": file_extension,
    "MimeType": mime_type,
    "Image": image,
}

# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Schema: ordered field → rule chain declaration for target validation.

A Schema keeps the raw rule specifications; the resolver resolves the
whole schema (nested schemas included) against a registry before any
value is inspected.

Usage:
    address = Schema({"city": ["Required", {"MinLength": [2]}]})

    user = (
        Schema.builder(name="User")
        .field("email", "Required", "Email")
        .field("address", ValidateNested(address))
        .build()
    )

    # From a pydantic model: rules live in json_schema_extra
    class Signup(BaseModel):
        email: str = Field(json_schema_extra={"rules": ["Required", "Email"]})

    Schema.from_model(Signup)
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Self

from .errors import ConfigurationError

__all__ = ("NestedSpec", "Schema", "SchemaBuilder", "ValidateNested")


def _as_rules(rules: Any) -> tuple[Any, ...]:
    if rules is None:
        return ()
    if isinstance(rules, Schema):
        return (NestedSpec(rules),)
    if isinstance(rules, (list, tuple)):
        return tuple(rules)
    return (rules,)


@dataclass(frozen=True, slots=True, init=False)
class Schema:
    """Immutable ordered mapping of field name → rule specifications.

    Declaration order is preserved and is the order errors are reported in.
    Fields absent from the schema are never validated.
    """

    fields: tuple[tuple[str, tuple[Any, ...]], ...]
    name: str | None

    def __init__(
        self,
        fields: Mapping[str, Any] | Iterable[tuple[str, Any]] = (),
        *,
        name: str | None = None,
    ):
        """Init with fields.

        Args:
            fields: Mapping or (name, rules) pairs. ``rules`` is a chain
                (list/tuple), a single specification, or a Schema (shorthand
                for ValidateNested(schema)).
            name: Optional schema name (for repr/debugging)

        Raises:
            ConfigurationError: If a field name is invalid or duplicated
        """
        pairs = fields.items() if isinstance(fields, Mapping) else fields
        normalized: list[tuple[str, tuple[Any, ...]]] = []
        seen: set[str] = set()
        for field_name, rules in pairs:
            if not isinstance(field_name, str) or not field_name:
                raise ConfigurationError(
                    f"Schema field names must be non-empty strings, got {field_name!r}"
                )
            if field_name in seen:
                raise ConfigurationError(f"Duplicate schema field '{field_name}'")
            seen.add(field_name)
            normalized.append((field_name, _as_rules(rules)))

        object.__setattr__(self, "fields", tuple(normalized))
        object.__setattr__(self, "name", name)

    @classmethod
    def builder(cls, name: str | None = None) -> SchemaBuilder:
        return SchemaBuilder(name=name)

    @classmethod
    def from_model(cls, model: type[Any], *, name: str | None = None) -> Self:
        """Build from a pydantic model class.

        Each field's ``json_schema_extra["rules"]`` becomes its chain;
        fields without rules are not part of the schema.

        Raises:
            ConfigurationError: If ``model`` is not a pydantic model class
        """
        model_fields = getattr(model, "model_fields", None)
        if not isinstance(model, type) or not isinstance(model_fields, dict):
            raise ConfigurationError(
                f"Schema.from_model expects a pydantic model class, got {model!r}"
            )

        pairs: list[tuple[str, Any]] = []
        for field_name, info in model_fields.items():
            extra = info.json_schema_extra
            if isinstance(extra, dict) and "rules" in extra:
                pairs.append((field_name, extra["rules"]))
        return cls(pairs, name=name or model.__name__)

    @property
    def field_names(self) -> list[str]:
        return [name for name, _ in self.fields]

    def get(self, field_name: str, default: Any = None) -> tuple[Any, ...] | Any:
        for name, rules in self.fields:
            if name == field_name:
                return rules
        return default

    def items(self) -> Iterator[tuple[str, tuple[Any, ...]]]:
        return iter(self.fields)

    def extend(
        self, fields: Mapping[str, Any] | Iterable[tuple[str, Any]], *, name: str | None = None
    ) -> Schema:
        """New schema with ``fields`` added (existing names are replaced in place)."""
        updates = dict(fields.items() if isinstance(fields, Mapping) else fields)
        merged: list[tuple[str, Any]] = []
        for field_name, rules in self.fields:
            merged.append((field_name, updates.pop(field_name, rules)))
        merged.extend(updates.items())
        return Schema(merged, name=name or self.name)

    def __contains__(self, field_name: object) -> bool:
        return any(name == field_name for name, _ in self.fields)

    def __iter__(self) -> Iterator[str]:
        return iter(self.field_names)

    def __len__(self) -> int:
        return len(self.fields)

    def __repr__(self) -> str:
        label = self.name or "Schema"
        return f"{label}(fields={self.field_names})"


class SchemaBuilder:
    """Fluent builder for Schema."""

    def __init__(self, name: str | None = None):
        self._name = name
        self._fields: dict[str, tuple[Any, ...]] = {}

    def field(self, field_name: str, *rules: Any) -> SchemaBuilder:
        """Declare ``field_name`` with a chain of rules.

        Raises:
            ConfigurationError: If the field was already declared
        """
        if field_name in self._fields:
            raise ConfigurationError(f"Field '{field_name}' already declared")
        if len(rules) == 1 and isinstance(rules[0], (list, tuple, Schema)):
            self._fields[field_name] = _as_rules(rules[0])
        else:
            self._fields[field_name] = rules
        return self

    def build(self) -> Schema:
        return Schema(self._fields, name=self._name)


@dataclass(frozen=True, slots=True)
class NestedSpec:
    """Unresolved ValidateNested marker."""

    schema: Schema

    @property
    def name(self) -> str:
        return "ValidateNested"


def ValidateNested(schema: Schema | Mapping[str, Any] | type[Any]) -> NestedSpec:
    """Validate the value as an object against ``schema``.

    Accepts a Schema, a field mapping, or a pydantic model class.

    Raises:
        ConfigurationError: If ``schema`` is none of the above
    """
    if isinstance(schema, Schema):
        return NestedSpec(schema)
    if isinstance(schema, Mapping):
        return NestedSpec(Schema(schema))
    if isinstance(schema, type) and hasattr(schema, "model_fields"):
        return NestedSpec(Schema.from_model(schema))
    raise ConfigurationError(
        f"ValidateNested requires a Schema, mapping or pydantic model, got {schema!r}"
    )

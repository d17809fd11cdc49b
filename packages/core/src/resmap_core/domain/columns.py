"""Column and resource description value types."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

_PYTHON_TYPES: dict[type, str] = {
    str: "text",
    int: "number",
    float: "number",
    bool: "boolean",
    dict: "object",
    list: "object",
}


class ColumnType(str, Enum):
    """Storage type of a declared field."""

    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"

    @classmethod
    def coerce(cls, value: Any) -> ColumnType:
        """Accept a ``ColumnType``, its value, or the matching Python type."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls(value.lower())
        if isinstance(value, type) and value in _PYTHON_TYPES:
            return cls(_PYTHON_TYPES[value])
        raise ValueError(f"Unsupported column type: {value!r}")

    def accepts(self, value: Any) -> bool:
        """Return ``True`` if ``value`` is a native value of this type."""
        if self is ColumnType.TEXT:
            return isinstance(value, str)
        if self is ColumnType.NUMBER:
            return isinstance(value, (int, float)) and not isinstance(value, bool)
        if self is ColumnType.BOOLEAN:
            return isinstance(value, bool)
        return isinstance(value, (dict, list))


class ColumnDescriptor(BaseModel):
    """
    Metadata for one declared field.

    Descriptors are immutable; :meth:`merge` returns a new validated
    descriptor so that repeated declarations of the same field accumulate.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    type: ColumnType = ColumnType.TEXT
    unique: bool = False
    not_null: bool = False
    primary: bool = False
    default_value: Any = None

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> ColumnType:
        return ColumnType.coerce(value)

    def merge(self, patch: dict[str, Any]) -> ColumnDescriptor:
        """Return a copy with ``patch`` applied; the name never changes."""
        data = self.model_dump()
        data.update(patch)
        data["name"] = self.name
        return type(self).model_validate(data)


class ResourceDescription(BaseModel):
    """Normalized ``{name, fields}`` view of a resource, primary key guaranteed."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    fields: tuple[ColumnDescriptor, ...]

    @property
    def primary(self) -> ColumnDescriptor:
        return next(f for f in self.fields if f.primary)

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def get(self, name: str) -> ColumnDescriptor | None:
        for column in self.fields:
            if column.name == name:
                return column
        return None

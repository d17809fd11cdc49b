"""Tests for ColumnType, ColumnDescriptor and ResourceDescription."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from resmap_core import ColumnDescriptor, ColumnType, ResourceDescription


class TestColumnType:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (ColumnType.NUMBER, ColumnType.NUMBER),
            ("text", ColumnType.TEXT),
            ("BOOLEAN", ColumnType.BOOLEAN),
            (str, ColumnType.TEXT),
            (int, ColumnType.NUMBER),
            (float, ColumnType.NUMBER),
            (bool, ColumnType.BOOLEAN),
            (dict, ColumnType.OBJECT),
            (list, ColumnType.OBJECT),
        ],
    )
    def test_coerce(self, value, expected) -> None:
        assert ColumnType.coerce(value) is expected

    def test_coerce_rejects_unknown_types(self) -> None:
        with pytest.raises(ValueError):
            ColumnType.coerce(bytes)

    def test_number_does_not_accept_booleans(self) -> None:
        assert ColumnType.NUMBER.accepts(3)
        assert ColumnType.NUMBER.accepts(2.5)
        assert not ColumnType.NUMBER.accepts(True)
        assert ColumnType.BOOLEAN.accepts(False)
        assert ColumnType.OBJECT.accepts({"a": 1})
        assert not ColumnType.TEXT.accepts(1)


class TestColumnDescriptor:
    def test_defaults(self) -> None:
        column = ColumnDescriptor(name="title")

        assert column.type is ColumnType.TEXT
        assert not column.unique
        assert not column.not_null
        assert not column.primary
        assert column.default_value is None

    def test_merge_keeps_unrelated_keys(self) -> None:
        column = ColumnDescriptor(name="email").merge({"unique": True})
        column = column.merge({"not_null": True})
        column = column.merge({"type": str})

        assert column.unique
        assert column.not_null
        assert column.type is ColumnType.TEXT

    def test_merge_never_renames(self) -> None:
        column = ColumnDescriptor(name="email").merge({"name": "other"})

        assert column.name == "email"

    def test_is_immutable(self) -> None:
        column = ColumnDescriptor(name="email")

        with pytest.raises(ValidationError):
            column.unique = True  # type: ignore[misc]

    def test_rejects_unknown_keys(self) -> None:
        with pytest.raises(ValidationError):
            ColumnDescriptor(name="email", indexed=True)  # type: ignore[call-arg]


class TestResourceDescription:
    def test_helpers(self) -> None:
        description = ResourceDescription(
            name="user",
            fields=(
                ColumnDescriptor(name="id", type=ColumnType.NUMBER, primary=True),
                ColumnDescriptor(name="name"),
            ),
        )

        assert description.primary.name == "id"
        assert description.field_names == ["id", "name"]
        assert description.get("name") == ColumnDescriptor(name="name")
        assert description.get("missing") is None

"""Build SQLAlchemy ``Table`` objects from resource descriptions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import Column, Integer, MetaData, Table, Text

from resmap_core.domain.columns import ColumnType

if TYPE_CHECKING:
    from resmap_core.domain.columns import ColumnDescriptor, ResourceDescription

SQL_TYPES: dict[ColumnType, Any] = {
    ColumnType.TEXT: Text,
    ColumnType.NUMBER: Integer,
    ColumnType.BOOLEAN: Integer,
    ColumnType.OBJECT: Text,
}


def build_column(column: ColumnDescriptor) -> Column[Any]:
    if column.primary:
        return Column(column.name, SQL_TYPES[column.type], primary_key=True)
    return Column(
        column.name,
        SQL_TYPES[column.type],
        unique=column.unique,
        nullable=not column.not_null,
    )


def build_table(description: ResourceDescription, metadata: MetaData) -> Table:
    """
    One column per field: NUMBER and BOOLEAN map to INTEGER, TEXT and
    OBJECT to TEXT; ``UNIQUE`` / ``NOT NULL`` follow the column flags and
    the primary column becomes the single-column primary key.
    """
    return Table(
        description.name,
        metadata,
        *(build_column(column) for column in description.fields),
        extend_existing=True,
    )

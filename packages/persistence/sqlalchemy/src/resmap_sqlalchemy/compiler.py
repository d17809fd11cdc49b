"""
Compile a query into SQLAlchemy filter clauses.

Filters are first resolved with :func:`resmap_query.prepare_filters`
(field validation and type coercion shared with in-memory evaluation),
then serialized with the driver's codec and handed to the operator
registry. Clauses are returned in declaration order for AND-combination.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from resmap_query.filtering import prepare_filters
from resmap_query.operators import QueryOperator

from .operators import DEFAULT_SQLA_REGISTRY

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement, Table

    from resmap_core.domain.columns import ResourceDescription
    from resmap_core.ports.query import IQuery
    from resmap_core.serialization import ColumnCodec

    from .strategy import SQLAlchemyOperatorRegistry


def build_filter_clauses(
    table: Table,
    description: ResourceDescription,
    query: IQuery | None,
    *,
    codec: ColumnCodec,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> list[ColumnElement[bool]]:
    """
    Build one boolean clause per recognised filter of ``query``.

    Args:
        table: The table built for ``description``.
        description: Normalized resource description.
        query: Query to compile; ``None`` yields no clauses.
        codec: Codec used to turn coerced values into bound parameters.
        registry: Optional custom operator registry.  Falls back to
            ``DEFAULT_SQLA_REGISTRY``.
    """
    reg = registry or DEFAULT_SQLA_REGISTRY
    clauses: list[ColumnElement[bool]] = []
    for column, operator, value in prepare_filters(description, query):
        bound: Any = value
        if operator is not QueryOperator.LIKE:
            bound = codec.serialize(column.type, value)
        clauses.append(reg.apply(operator, table.c[column.name], bound))
    return clauses

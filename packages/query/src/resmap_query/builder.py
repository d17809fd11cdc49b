"""
Fluent builder for filter queries.

Example::

    query = Query().where("age").gt(5).where("name").is_("John")
    query.serialize()
    # → [Filter("age", ">", 5), Filter("name", "=", "John")]

Filters are AND-combined in the order they were added.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, NamedTuple

from .operators import QueryOperator

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

logger = logging.getLogger(__name__)


class Filter(NamedTuple):
    """One ``(field, operator, value)`` condition."""

    field: str
    operator: QueryOperator
    value: Any


class Query:
    """
    Ordered list of filters over the fields of one resource.

    ``push`` accepts operator symbols (``">"``), fluent tokens (``"gt"``,
    ``"isNot"``) or :class:`QueryOperator` members. A token outside that
    set is dropped: it adds no constraint and leaves the query unchanged.
    """

    def __init__(self, filters: Iterable[tuple[str, Any, Any]] | None = None) -> None:
        self._filters: list[Filter] = []
        for field, operator, value in filters or ():
            self.push(field, operator, value)

    def push(self, field: str, operator: QueryOperator | str, value: Any) -> Query:
        """Append a filter and return ``self`` for chaining."""
        op = QueryOperator.parse(operator)
        if op is None:
            logger.warning(
                "Ignoring filter on %r: unrecognized operator %r", field, operator
            )
            return self
        self._filters.append(Filter(field, op, value))
        return self

    def where(self, field: str) -> Clause:
        """Start a condition on ``field``; finish it with an operator method."""
        return Clause(self, field)

    def serialize(self) -> list[Filter]:
        """Return the filters in declaration order."""
        return list(self._filters)

    to_list = serialize

    def __len__(self) -> int:
        return len(self._filters)

    def __iter__(self) -> Iterator[Filter]:
        return iter(list(self._filters))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Query):
            return NotImplemented
        return self._filters == other._filters

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        conditions = " AND ".join(
            f"{f.field} {f.operator.value} {f.value!r}" for f in self._filters
        )
        return f"Query({conditions})"


class Clause:
    """Pending condition on one field; each method appends it to the query."""

    __slots__ = ("_query", "_field")

    def __init__(self, query: Query, field: str) -> None:
        self._query = query
        self._field = field

    def is_(self, value: Any) -> Query:
        return self._query.push(self._field, QueryOperator.EQ, value)

    def is_not(self, value: Any) -> Query:
        return self._query.push(self._field, QueryOperator.NE, value)

    def is_like(self, value: Any) -> Query:
        return self._query.push(self._field, QueryOperator.LIKE, value)

    def gt(self, value: Any) -> Query:
        return self._query.push(self._field, QueryOperator.GT, value)

    def lt(self, value: Any) -> Query:
        return self._query.push(self._field, QueryOperator.LT, value)

    def gte(self, value: Any) -> Query:
        return self._query.push(self._field, QueryOperator.GE, value)

    def lte(self, value: Any) -> Query:
        return self._query.push(self._field, QueryOperator.LE, value)

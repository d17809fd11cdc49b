"""
Resolve a query against a resource description, and evaluate it in memory.

``prepare_filters`` is shared by every driver: it validates field names,
skips operators it does not recognise and coerces each filter value to
the declared type of its column, so that SQL translation and in-memory
evaluation compare the same values.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, NamedTuple, TypeVar

from resmap_core.primitives.exceptions import SerializationError
from resmap_core.serialization import ColumnCodec

from .exceptions import FieldNotFoundError, QueryError
from .operators import QueryOperator
from .operators_memory import build_default_registry

if TYPE_CHECKING:
    from collections.abc import Iterable

    from resmap_core.domain.columns import ColumnDescriptor, ResourceDescription
    from resmap_core.ports.query import IQuery

    from .evaluator import MemoryOperatorRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")

_NATIVE_CODEC = ColumnCodec()


class PreparedFilter(NamedTuple):
    column: ColumnDescriptor
    operator: QueryOperator
    value: Any


def coerce_value(
    column: ColumnDescriptor,
    operator: QueryOperator,
    value: Any,
    codec: ColumnCodec,
) -> Any:
    """Convert a filter value to the Python type its column holds."""
    if operator is QueryOperator.LIKE:
        return str(value)
    try:
        return codec.deserialize(column.type, value)
    except SerializationError as e:
        raise QueryError(
            f"Invalid value {value!r} for {column.type.value} field '{column.name}'"
        ) from e


def prepare_filters(
    description: ResourceDescription,
    query: IQuery | None,
    *,
    codec: ColumnCodec | None = None,
    coerce_primary: bool = True,
) -> list[PreparedFilter]:
    """
    Validate and coerce the filters of ``query`` in declaration order.

    With ``coerce_primary=False`` a primary-key value that cannot be
    converted to the primary column type is kept as given, for stores
    whose generated keys need not match that type.

    Raises:
        FieldNotFoundError: A filter names a field ``description`` lacks.
        QueryError: A value cannot be converted to its column's type.
    """
    if query is None:
        return []
    codec = codec or _NATIVE_CODEC
    prepared: list[PreparedFilter] = []
    for field, token, value in query.serialize():
        operator = QueryOperator.parse(token)
        if operator is None:
            logger.debug("Skipping filter on %r: unrecognized operator %r", field, token)
            continue
        column = description.get(field)
        if column is None:
            raise FieldNotFoundError(field, description.name, description.field_names)
        try:
            coerced = coerce_value(column, operator, value, codec)
        except QueryError:
            if coerce_primary or not column.primary:
                raise
            coerced = value
        prepared.append(PreparedFilter(column, operator, coerced))
    return prepared


class QueryMatcher:
    """
    Evaluates queries against instances of one resource.

    Usage::

        matcher = QueryMatcher(User.describe())
        adults = matcher.filter(users, Query().where("age").gte(18))
    """

    def __init__(
        self,
        description: ResourceDescription,
        *,
        registry: MemoryOperatorRegistry | None = None,
        codec: ColumnCodec | None = None,
        coerce_primary: bool = True,
    ) -> None:
        self.description = description
        self._registry = registry if registry is not None else build_default_registry()
        self._codec = codec or _NATIVE_CODEC
        self._coerce_primary = coerce_primary

    def prepare(self, query: IQuery | None) -> list[PreparedFilter]:
        return prepare_filters(
            self.description,
            query,
            codec=self._codec,
            coerce_primary=self._coerce_primary,
        )

    def _satisfies(self, candidate: Any, filters: list[PreparedFilter]) -> bool:
        for column, operator, value in filters:
            actual = getattr(candidate, column.name, None)
            if not self._registry.evaluate(operator, actual, value):
                return False
        return True

    def matches(self, candidate: Any, query: IQuery | None) -> bool:
        return self._satisfies(candidate, self.prepare(query))

    def filter(self, candidates: Iterable[T], query: IQuery | None) -> list[T]:
        """Return the candidates satisfying every filter, preserving order."""
        filters = self.prepare(query)
        return [c for c in candidates if self._satisfies(c, filters)]

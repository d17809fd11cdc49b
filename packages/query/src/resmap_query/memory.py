"""InMemoryDriver — dict-backed driver for unit tests and prototyping."""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any, TypeVar

from resmap_core.domain.columns import ColumnType
from resmap_core.ports.driver import ResourceDriver
from resmap_core.primitives.exceptions import PersistenceError, ResourceNotFoundError
from resmap_core.primitives.id_generator import SequentialIDGenerator, UUID4Generator
from resmap_core.serialization import ColumnCodec

from .filtering import QueryMatcher

if TYPE_CHECKING:
    from resmap_core.domain.columns import ResourceDescription
    from resmap_core.ports.query import IQuery
    from resmap_core.resource import Resource

R = TypeVar("R", bound="Resource")

logger = logging.getLogger(__name__)


class InMemoryDriver(ResourceDriver):
    """
    Stores rows as plain dicts keyed by primary-key value, per resource name.

    Missing numeric keys are assigned sequentially, missing text keys get a
    UUID. ``UNIQUE`` and ``NOT NULL`` flags are checked on save so that the
    behaviour matches the relational driver.
    """

    def __init__(self, codec: ColumnCodec | None = None) -> None:
        self._codec = codec or ColumnCodec()
        self._tables: dict[str, dict[Any, dict[str, Any]]] = {}
        self._sequences: dict[str, SequentialIDGenerator] = {}
        self._uuids = UUID4Generator()

    # -- helpers ---------------------------------------------------------------

    def _table(self, description: ResourceDescription) -> dict[Any, dict[str, Any]]:
        return self._tables.setdefault(description.name, {})

    def _key_of(self, description: ResourceDescription, instance: Any) -> Any:
        primary = description.primary
        key = getattr(instance, primary.name, None)
        if key is None:
            return None
        return self._codec.deserialize(primary.type, key)

    def _next_key(self, description: ResourceDescription) -> Any:
        if description.primary.type is ColumnType.NUMBER:
            sequence = self._sequences.setdefault(
                description.name, SequentialIDGenerator()
            )
            return sequence.next_id()
        return self._uuids.next_id()

    def _check_constraints(
        self,
        description: ResourceDescription,
        key: Any,
        row: dict[str, Any],
    ) -> None:
        table = self._table(description)
        for column in description.fields:
            value = row[column.name]
            if column.not_null and value is None:
                raise PersistenceError(
                    f"Cannot store item: NOT NULL constraint failed: "
                    f"{description.name}.{column.name}"
                )
            if column.unique and value is not None:
                for other_key, other in table.items():
                    if other_key != key and other.get(column.name) == value:
                        raise PersistenceError(
                            f"Cannot store item: UNIQUE constraint failed: "
                            f"{description.name}.{column.name}"
                        )

    def _load(self, resource: type[R], row: dict[str, Any]) -> R:
        description = resource.describe()
        data = {
            column.name: self._codec.deserialize(
                column.type,
                self._codec.resolve(column, copy.deepcopy(row.get(column.name))),
            )
            for column in description.fields
        }
        return resource(data)

    # -- contract --------------------------------------------------------------

    async def create(self, resource: type[Resource]) -> None:
        self._table(resource.describe())

    async def save(self, instance: Resource) -> Any:
        description = type(instance).describe()
        primary = description.primary
        key = self._key_of(description, instance)
        if key is None:
            key = self._next_key(description)
        elif primary.type is ColumnType.NUMBER and isinstance(key, int):
            self._sequences.setdefault(
                description.name, SequentialIDGenerator()
            ).advance_past(key)

        row = {
            column.name: self._codec.serialize(
                column.type,
                self._codec.resolve(column, getattr(instance, column.name, None)),
            )
            for column in description.fields
        }
        row[primary.name] = key
        self._check_constraints(description, key, row)

        self._table(description)[key] = copy.deepcopy(row)
        setattr(instance, primary.name, key)
        logger.debug("Stored %s key=%r", description.name, key)
        return key

    async def remove(self, instance: Resource) -> None:
        description = type(instance).describe()
        key = self._key_of(description, instance)
        self._table(description).pop(key, None)

    async def find(self, instance: R) -> R:
        resource = type(instance)
        description = resource.describe()
        key = self._key_of(description, instance)
        row = self._table(description).get(key)
        if row is None:
            raise ResourceNotFoundError(description.name, key)
        return self._load(resource, row)

    async def find_all(
        self, resource: type[R], query: IQuery | None = None
    ) -> list[R]:
        description = resource.describe()
        matcher = QueryMatcher(description, codec=self._codec)
        items = [self._load(resource, row) for row in self._table(description).values()]
        return matcher.filter(items, query)

    # -- test helpers ----------------------------------------------------------

    def count(self, resource: type[Resource]) -> int:
        return len(self._table(resource.describe()))

    def clear(self) -> None:
        self._tables.clear()
        self._sequences.clear()

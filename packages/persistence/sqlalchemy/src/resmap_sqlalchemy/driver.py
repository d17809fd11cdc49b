"""SQLiteDriver — embedded relational backend on SQLAlchemy async + aiosqlite."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

from sqlalchemy import MetaData, delete, insert, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from resmap_core.domain.columns import ColumnType
from resmap_core.ports.driver import ResourceDriver
from resmap_core.primitives.exceptions import (
    ConfigurationError,
    InvalidPrimaryKeyError,
    ResourceNotFoundError,
    SerializationError,
)
from resmap_query.exceptions import QueryError

from .codec import SQLiteCodec
from .compiler import build_filter_clauses
from .exceptions import SQLAlchemyPersistenceError
from .schema import build_table

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy import Table

    from resmap_core.domain.columns import ResourceDescription
    from resmap_core.ports.query import IQuery
    from resmap_core.resource import Resource
    from resmap_core.serialization import ColumnCodec

    from .strategy import SQLAlchemyOperatorRegistry

R = TypeVar("R", bound="Resource")

logger = logging.getLogger(__name__)

DEFAULT_DATABASE = "cloud.db"


def default_url() -> str:
    return f"sqlite+aiosqlite:///{Path.cwd() / DEFAULT_DATABASE}"


def _reason(error: Exception) -> str:
    orig = getattr(error, "orig", None)
    return str(orig) if orig is not None else str(error)


class SQLiteDriver(ResourceDriver):
    """
    Stores each resource in a table named after it.

    Supports two engine patterns:

    1. **Driver-owned engine**: ``SQLiteDriver("sqlite+aiosqlite:///app.db")``
       The driver creates the engine and :meth:`dispose` releases it.
    2. **Injected engine**: ``SQLiteDriver(engine=engine)``
       The caller keeps ownership; :meth:`dispose` leaves it alone.

    Values go through :class:`SQLiteCodec` (booleans as 0/1, structured
    objects as JSON text) on write and back on read.
    """

    def __init__(
        self,
        url: str | None = None,
        *,
        engine: AsyncEngine | None = None,
        echo: bool = False,
        codec: ColumnCodec | None = None,
        registry: SQLAlchemyOperatorRegistry | None = None,
    ) -> None:
        if url is not None and engine is not None:
            raise ConfigurationError("Pass either 'url' or 'engine', not both.")
        self._owns_engine = engine is None
        self._engine = engine or create_async_engine(url or default_url(), echo=echo)
        self._codec = codec or SQLiteCodec()
        self._registry = registry
        self._metadata = MetaData()
        self._tables: dict[str, Table] = {}

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    async def dispose(self) -> None:
        if self._owns_engine:
            await self._engine.dispose()

    # -- helpers ---------------------------------------------------------------

    def table_for(self, description: ResourceDescription) -> Table:
        table = self._tables.get(description.name)
        if table is None:
            table = build_table(description, self._metadata)
            self._tables[description.name] = table
        return table

    def _key(self, description: ResourceDescription, instance: Any) -> Any:
        primary = description.primary
        key = getattr(instance, primary.name, None)
        if key is None:
            return None
        return self._codec.deserialize(primary.type, key)

    def _row_values(
        self, description: ResourceDescription, instance: Any
    ) -> dict[str, Any]:
        return {
            column.name: self._codec.serialize(
                column.type,
                self._codec.resolve(column, getattr(instance, column.name, None)),
            )
            for column in description.fields
            if not column.primary
        }

    def _load(self, resource: type[R], row: Mapping[str, Any]) -> R:
        description = resource.describe()
        data = {
            column.name: self._codec.deserialize(
                column.type, self._codec.resolve(column, row.get(column.name))
            )
            for column in description.fields
        }
        return resource(data)

    # -- contract --------------------------------------------------------------

    async def create(self, resource: type[Resource]) -> None:
        description = resource.describe()
        if description.primary.type is not ColumnType.NUMBER:
            raise InvalidPrimaryKeyError()
        table = self.table_for(description)
        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(table.create, checkfirst=True)
        except SQLAlchemyError as e:
            raise SQLAlchemyPersistenceError(
                f'Cannot create table "{description.name}": {_reason(e)}'
            ) from e
        logger.info("Table %s ready", description.name)

    async def save(self, instance: Resource) -> Any:
        description = type(instance).describe()
        primary = description.primary
        table = self.table_for(description)
        try:
            key = self._key(description, instance)
            values = self._row_values(description, instance)
            async with self._engine.begin() as conn:
                if key is None:
                    result = await conn.execute(insert(table).values(values))
                    key = result.inserted_primary_key[0]
                else:
                    stmt = sqlite_insert(table).values({primary.name: key, **values})
                    if values:
                        stmt = stmt.on_conflict_do_update(
                            index_elements=[table.c[primary.name]], set_=values
                        )
                    else:
                        stmt = stmt.on_conflict_do_nothing(
                            index_elements=[table.c[primary.name]]
                        )
                    await conn.execute(stmt)
        except SerializationError as e:
            raise SQLAlchemyPersistenceError(f"Cannot store item: {e}") from e
        except SQLAlchemyError as e:
            raise SQLAlchemyPersistenceError(f"Cannot store item: {_reason(e)}") from e

        setattr(instance, primary.name, key)
        logger.debug("Stored %s %s=%r", description.name, primary.name, key)
        return key

    async def remove(self, instance: Resource) -> None:
        description = type(instance).describe()
        table = self.table_for(description)
        column = table.c[description.primary.name]
        try:
            key = self._key(description, instance)
            async with self._engine.begin() as conn:
                await conn.execute(delete(table).where(column == key))
        except SerializationError as e:
            raise SQLAlchemyPersistenceError(f"Unable to remove: {e}") from e
        except SQLAlchemyError as e:
            raise SQLAlchemyPersistenceError(f"Unable to remove: {_reason(e)}") from e
        logger.debug("Removed %s %r", description.name, key)

    async def find(self, instance: R) -> R:
        resource = type(instance)
        description = resource.describe()
        table = self.table_for(description)
        column = table.c[description.primary.name]
        try:
            key = self._key(description, instance)
            async with self._engine.connect() as conn:
                result = await conn.execute(select(table).where(column == key).limit(1))
                row = result.mappings().first()
        except SerializationError as e:
            raise SQLAlchemyPersistenceError(f"Unable to load: {e}") from e
        except SQLAlchemyError as e:
            raise SQLAlchemyPersistenceError(f"Unable to load: {_reason(e)}") from e

        if row is None:
            raise ResourceNotFoundError(description.name, key)
        try:
            return self._load(resource, row)
        except SerializationError as e:
            raise SQLAlchemyPersistenceError(f"Unable to load: {e}") from e

    async def find_all(
        self, resource: type[R], query: IQuery | None = None
    ) -> list[R]:
        description = resource.describe()
        table = self.table_for(description)
        try:
            clauses = build_filter_clauses(
                table,
                description,
                query,
                codec=self._codec,
                registry=self._registry,
            )
            stmt = select(table)
            if clauses:
                stmt = stmt.where(*clauses)
            async with self._engine.connect() as conn:
                rows = (await conn.execute(stmt)).mappings().all()
            items = [self._load(resource, row) for row in rows]
        except QueryError:
            raise
        except SerializationError as e:
            raise SQLAlchemyPersistenceError(f"Unable to load: {e}") from e
        except SQLAlchemyError as e:
            raise SQLAlchemyPersistenceError(f"Unable to load: {_reason(e)}") from e

        logger.debug(
            "Loaded %d %s row(s) with %d filter(s)", len(items), description.name, len(clauses)
        )
        return items

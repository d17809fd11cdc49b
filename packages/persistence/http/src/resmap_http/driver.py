"""StoreDriver: resources kept as JSON objects in a remote key-value store."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Any, TypeVar

import httpx

from resmap_core.domain.columns import ColumnType
from resmap_core.ports.driver import ResourceDriver
from resmap_core.primitives.exceptions import (
    ConfigurationError,
    ResourceNotFoundError,
    SerializationError,
)
from resmap_core.primitives.id_generator import UUID4Generator
from resmap_core.serialization import ColumnCodec
from resmap_query.filtering import QueryMatcher

from .exceptions import StorePersistenceError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from resmap_core.domain.columns import ColumnDescriptor, ResourceDescription
    from resmap_core.ports.query import IQuery
    from resmap_core.primitives.id_generator import IIDGenerator
    from resmap_core.resource import Resource

R = TypeVar("R", bound="Resource")

logger = logging.getLogger(__name__)

STORE_URL_ENV = "STORE_URL"


class StoreDriver(ResourceDriver):
    """
    Remote store laid out as ``<base>/<resource>/<id>``.

    ``GET <base>/<resource>`` answers with an object mapping every id to
    its stored object. Values are stored natively (booleans as booleans,
    structured objects as nested JSON). Primary keys are produced by
    ``id_generator``; keys of a NUMBER primary that read as numbers come
    back as numbers, any other key is returned unchanged.

    Args:
        base_url: Store root. Falls back to the ``STORE_URL`` environment
            variable.
        timeout: Per-request timeout in seconds.
        id_generator: Source of ids for instances saved without one.
        transport: Optional ``httpx`` transport (e.g. ``MockTransport``).
        headers: Extra headers sent with every request.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float = 10.0,
        id_generator: IIDGenerator | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        url = base_url or os.environ.get(STORE_URL_ENV)
        if not url:
            raise ConfigurationError(
                f"No store URL configured. Pass base_url or set {STORE_URL_ENV}."
            )
        self.base_url = url.rstrip("/")
        self.timeout = timeout
        self._ids = id_generator or UUID4Generator()
        self._transport = transport
        self._headers = {"Content-Type": "application/json", **(headers or {})}
        self._codec = ColumnCodec()

    # -- helpers ---------------------------------------------------------------

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            transport=self._transport,
            headers=self._headers,
        )

    def collection_url(self, name: str) -> str:
        return f"{self.base_url}/{name}"

    def item_url(self, name: str, key: Any) -> str:
        return f"{self.base_url}/{name}/{key}"

    def _encode(
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

    def _normalize_key(self, primary: ColumnDescriptor, key: Any) -> Any:
        """Read numeric-looking keys of a NUMBER primary as numbers; others stay opaque."""
        if primary.type is not ColumnType.NUMBER or key is None:
            return key
        try:
            return self._codec.deserialize(primary.type, key)
        except SerializationError:
            return key

    def _load(self, resource: type[R], key: Any, body: Mapping[str, Any]) -> R:
        description = resource.describe()
        data: dict[str, Any] = {}
        for column in description.fields:
            if column.primary:
                data[column.name] = self._normalize_key(column, key)
                continue
            data[column.name] = self._codec.deserialize(
                column.type, self._codec.resolve(column, body.get(column.name))
            )
        return resource(data)

    # -- contract --------------------------------------------------------------

    async def create(self, resource: type[Resource]) -> None:
        name = resource.describe().name
        url = self.item_url(name, 0)
        try:
            async with self._client() as client:
                response = await client.post(url, json={})
                response.raise_for_status()
                response = await client.delete(url)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise StorePersistenceError(f'Cannot create resource "{name}"') from e
        logger.info("Store resource %s ready", name)

    async def save(self, instance: Resource) -> Any:
        description = type(instance).describe()
        primary = description.primary
        key = getattr(instance, primary.name, None)
        if key is None:
            key = self._ids.next_id()
            setattr(instance, primary.name, key)

        try:
            body = self._encode(description, instance)
        except SerializationError as e:
            raise StorePersistenceError(f"Cannot store item: {e}") from e

        try:
            async with self._client() as client:
                response = await client.put(
                    self.item_url(description.name, key), json=body
                )
        except httpx.HTTPError as e:
            raise StorePersistenceError(f"Cannot store item: {e}") from e
        if response.is_error:
            raise StorePersistenceError(
                f"Cannot store item: HTTP {response.status_code}",
                status_code=response.status_code,
            )
        logger.debug("Stored %s %s=%r", description.name, primary.name, key)
        return key

    async def remove(self, instance: Resource) -> None:
        description = type(instance).describe()
        key = getattr(instance, description.primary.name, None)
        try:
            async with self._client() as client:
                response = await client.delete(self.item_url(description.name, key))
        except httpx.HTTPError as e:
            raise StorePersistenceError(f"Unable to remove: {e}") from e
        if response.is_error and response.status_code != httpx.codes.NOT_FOUND:
            raise StorePersistenceError(
                f"Unable to remove: HTTP {response.status_code}",
                status_code=response.status_code,
            )
        logger.debug("Removed %s %r", description.name, key)

    async def find(self, instance: R) -> R:
        resource = type(instance)
        description = resource.describe()
        key = getattr(instance, description.primary.name, None)
        try:
            async with self._client() as client:
                response = await client.get(self.item_url(description.name, key))
        except httpx.HTTPError as e:
            raise StorePersistenceError(f"Unable to load: {e}") from e
        if response.status_code == httpx.codes.NOT_FOUND:
            raise ResourceNotFoundError(description.name, key)
        if response.is_error:
            raise StorePersistenceError(
                f"Unable to load: HTTP {response.status_code}",
                status_code=response.status_code,
            )
        try:
            return self._load(resource, key, response.json() or {})
        except (ValueError, AttributeError, SerializationError) as e:
            raise StorePersistenceError(f"Unable to load: {e}") from e

    async def find_all(
        self, resource: type[R], query: IQuery | None = None
    ) -> list[R]:
        description = resource.describe()
        try:
            async with self._client() as client:
                response = await client.get(self.collection_url(description.name))
        except httpx.HTTPError as e:
            raise StorePersistenceError(f"Unable to load: {e}") from e
        if response.status_code == httpx.codes.NOT_FOUND:
            return []
        if response.is_error:
            raise StorePersistenceError(
                f"Unable to load: HTTP {response.status_code}",
                status_code=response.status_code,
            )
        try:
            stored = response.json() or {}
            items = [self._load(resource, key, body or {}) for key, body in stored.items()]
        except (ValueError, AttributeError, SerializationError) as e:
            raise StorePersistenceError(f"Unable to load: {e}") from e

        matcher = QueryMatcher(description, codec=self._codec, coerce_primary=False)
        matched = matcher.filter(items, query)
        logger.debug(
            "Loaded %d of %d %s item(s)", len(matched), len(items), description.name
        )
        return matched

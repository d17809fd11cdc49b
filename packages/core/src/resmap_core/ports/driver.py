"""ResourceDriver — the persistence contract every backend implements."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from ..resource import Resource
    from .query import IQuery

R = TypeVar("R", bound="Resource")


class ResourceDriver(ABC):
    """
    Backend implementation of create / save / remove / find / find_all.

    Every method receives resource classes or instances and obtains the
    normalized shape through ``describe()``. Implementations must:

    - make ``create`` idempotent;
    - make ``save`` an insert-or-replace by primary key, falling back to
      the column default and then to the type's zero value for missing
      fields, and return the stored primary-key value;
    - raise :class:`~resmap_core.primitives.exceptions.ResourceNotFoundError`
      from ``find`` when nothing is stored under the instance's key;
    - return an empty list from ``find_all`` when nothing matches.

    Backend failures are re-raised as
    :class:`~resmap_core.primitives.exceptions.PersistenceError` with a
    prefix naming the failed operation.
    """

    @abstractmethod
    async def create(self, resource: type[Resource]) -> None:
        """Provision storage for ``resource``; safe to call repeatedly."""
        ...

    @abstractmethod
    async def save(self, instance: Resource) -> Any:
        """Insert or replace ``instance`` and return its primary-key value."""
        ...

    @abstractmethod
    async def remove(self, instance: Resource) -> None:
        """Delete the record identified by the instance's primary key."""
        ...

    @abstractmethod
    async def find(self, instance: R) -> R:
        """Return a fresh instance loaded by the instance's primary key."""
        ...

    @abstractmethod
    async def find_all(
        self, resource: type[R], query: IQuery | None = None
    ) -> list[R]:
        """Return fresh instances of ``resource`` matching every filter of ``query``."""
        ...

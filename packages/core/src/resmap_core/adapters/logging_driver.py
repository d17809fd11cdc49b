"""LoggingDriver — decorator for any ResourceDriver that logs each operation."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any, TypeVar

from ..ports.driver import ResourceDriver

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from ..ports.query import IQuery
    from ..resource import Resource

R = TypeVar("R", bound="Resource")
T = TypeVar("T")

default_logger = logging.getLogger("resmap.driver")


class LoggingDriver(ResourceDriver):
    """
    Wraps an inner driver; logs start, duration and failures of every call.

    Pattern:
    - log "<op> <resource>" at INFO
    - delegate to the inner driver
    - log completion time, or the exception with ``logger.exception``
      before re-raising it unchanged
    """

    def __init__(
        self, inner: ResourceDriver, logger: logging.Logger | None = None
    ) -> None:
        self._inner = inner
        self._logger = logger or default_logger

    @property
    def inner(self) -> ResourceDriver:
        return self._inner

    async def _timed(self, op: str, target: str, call: Awaitable[T]) -> T:
        self._logger.info("%s %s", op, target)
        start = time.perf_counter()
        try:
            result = await call
        except Exception:
            elapsed = (time.perf_counter() - start) * 1000
            self._logger.exception("%s %s failed after %.2fms", op, target, elapsed)
            raise
        elapsed = (time.perf_counter() - start) * 1000
        self._logger.info("%s %s completed in %.2fms", op, target, elapsed)
        return result

    async def create(self, resource: type[Resource]) -> None:
        await self._timed("create", resource.__name__, self._inner.create(resource))

    async def save(self, instance: Resource) -> Any:
        return await self._timed(
            "save", type(instance).__name__, self._inner.save(instance)
        )

    async def remove(self, instance: Resource) -> None:
        await self._timed(
            "remove", type(instance).__name__, self._inner.remove(instance)
        )

    async def find(self, instance: R) -> R:
        return await self._timed(
            "find", type(instance).__name__, self._inner.find(instance)
        )

    async def find_all(
        self, resource: type[R], query: IQuery | None = None
    ) -> list[R]:
        filters = len(query.serialize()) if query is not None else 0
        return await self._timed(
            "find_all",
            f"{resource.__name__} ({filters} filters)",
            self._inner.find_all(resource, query),
        )

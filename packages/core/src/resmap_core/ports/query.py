"""IQuery — what a driver needs from a query object."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence


@runtime_checkable
class IQuery(Protocol):
    """
    Ordered, AND-combined list of ``(field, operator, value)`` filters.

    ``operator`` is one of the symbols ``=``, ``!=``, ``like``, ``>``,
    ``<``, ``>=``, ``<=``. Drivers translate the sequence returned by
    :meth:`serialize` in order.
    """

    def serialize(self) -> Sequence[tuple[str, str, Any]]: ...

"""Exceptions for the SQLAlchemy persistence layer."""

from __future__ import annotations

from resmap_core.primitives.exceptions import PersistenceError


class SQLAlchemyPersistenceError(PersistenceError):
    """Base exception for all SQLAlchemy-specific persistence errors."""


__all__: list[str] = [
    "SQLAlchemyPersistenceError",
]

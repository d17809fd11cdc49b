"""HTTP store persistence errors."""

from __future__ import annotations

from resmap_core.primitives.exceptions import PersistenceError


class StorePersistenceError(PersistenceError):
    """Raised when the remote key-JSON store rejects or fails a request."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)

"""resmap-http — driver for a remote key-JSON store over HTTP."""

from .driver import STORE_URL_ENV, StoreDriver
from .exceptions import StorePersistenceError

__all__ = ["STORE_URL_ENV", "StoreDriver", "StorePersistenceError"]

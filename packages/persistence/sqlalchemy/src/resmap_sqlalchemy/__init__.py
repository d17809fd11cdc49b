"""resmap-sqlalchemy — embedded relational driver (SQLite via aiosqlite)."""

from .codec import SQLiteCodec
from .compiler import build_filter_clauses
from .driver import SQLiteDriver
from .exceptions import SQLAlchemyPersistenceError
from .operators import DEFAULT_SQLA_REGISTRY, build_default_sqla_registry
from .schema import build_table
from .strategy import SQLAlchemyOperator, SQLAlchemyOperatorRegistry

__all__ = [
    "DEFAULT_SQLA_REGISTRY",
    "SQLAlchemyOperator",
    "SQLAlchemyOperatorRegistry",
    "SQLAlchemyPersistenceError",
    "SQLiteCodec",
    "SQLiteDriver",
    "build_default_sqla_registry",
    "build_filter_clauses",
    "build_table",
]

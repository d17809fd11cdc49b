"""resmap-core — resource declaration, description and the driver contract.

No backend dependencies; drivers live in ``resmap_sqlalchemy`` and
``resmap_http``, queries in ``resmap_query``.
"""

from __future__ import annotations

# ── Adapters ────────────────────────────────────────────────────
from .adapters import LoggingDriver

# ── Domain ───────────────────────────────────────────────────────
from .domain import (
    IMPLICIT_PRIMARY_KEY,
    REGISTRY,
    ColumnDescriptor,
    ColumnType,
    MetadataRegistry,
    Property,
    RawMetadata,
    ResourceDescription,
    declare,
    declare_field,
    declare_model_name,
    describe,
    get_raw_metadata,
    model,
    not_null,
    primary,
    unique,
)

# ── Ports ────────────────────────────────────────────────────────
from .ports import IQuery, ResourceDriver

# ── Primitives ───────────────────────────────────────────────────
from .primitives import (
    ConfigurationError,
    DriverNotConfiguredError,
    IIDGenerator,
    InfrastructureError,
    InvalidColumnError,
    InvalidPrimaryKeyError,
    MissingModelNameError,
    NotFoundError,
    PersistenceError,
    ResmapError,
    ResourceNotFoundError,
    SequentialIDGenerator,
    SerializationError,
    UUID4Generator,
)
from .resource import Resource
from .serialization import ZERO_VALUES, ColumnCodec

__all__ = [
    # Domain
    "IMPLICIT_PRIMARY_KEY",
    "REGISTRY",
    "ColumnDescriptor",
    "ColumnType",
    "MetadataRegistry",
    "Property",
    "RawMetadata",
    "ResourceDescription",
    "declare",
    "declare_field",
    "declare_model_name",
    "describe",
    "get_raw_metadata",
    "model",
    "not_null",
    "primary",
    "unique",
    # Resource / ports
    "IQuery",
    "Resource",
    "ResourceDriver",
    "LoggingDriver",
    # Serialization
    "ZERO_VALUES",
    "ColumnCodec",
    # Primitives
    "ConfigurationError",
    "DriverNotConfiguredError",
    "IIDGenerator",
    "InfrastructureError",
    "InvalidColumnError",
    "InvalidPrimaryKeyError",
    "MissingModelNameError",
    "NotFoundError",
    "PersistenceError",
    "ResmapError",
    "ResourceNotFoundError",
    "SequentialIDGenerator",
    "SerializationError",
    "UUID4Generator",
]

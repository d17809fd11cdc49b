"""Primitives: exceptions, ID generation."""

from __future__ import annotations

from .exceptions import (
    ConfigurationError,
    DriverNotConfiguredError,
    InfrastructureError,
    InvalidColumnError,
    InvalidPrimaryKeyError,
    MissingModelNameError,
    NotFoundError,
    PersistenceError,
    ResmapError,
    ResourceNotFoundError,
    SerializationError,
)
from .id_generator import IIDGenerator, SequentialIDGenerator, UUID4Generator

__all__ = [
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

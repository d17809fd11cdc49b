"""Domain: column types, the metadata registry and declaration helpers."""

from __future__ import annotations

from .columns import ColumnDescriptor, ColumnType, ResourceDescription
from .declarations import (
    Property,
    collect_properties,
    declare,
    model,
    not_null,
    primary,
    unique,
)
from .registry import (
    IMPLICIT_PRIMARY_KEY,
    REGISTRY,
    MetadataRegistry,
    RawMetadata,
    declare_field,
    declare_model_name,
    describe,
    get_raw_metadata,
)

__all__ = [
    "IMPLICIT_PRIMARY_KEY",
    "REGISTRY",
    "ColumnDescriptor",
    "ColumnType",
    "MetadataRegistry",
    "Property",
    "RawMetadata",
    "ResourceDescription",
    "collect_properties",
    "declare",
    "declare_field",
    "declare_model_name",
    "describe",
    "get_raw_metadata",
    "model",
    "not_null",
    "primary",
    "unique",
]

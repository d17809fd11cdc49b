"""Process-wide field registry and resource description.

Declarations accumulate per resource class in any order; :func:`describe`
turns the accumulated metadata into a normalized
:class:`~resmap_core.domain.columns.ResourceDescription` every time it is
called.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..primitives.exceptions import (
    InvalidColumnError,
    InvalidPrimaryKeyError,
    MissingModelNameError,
)
from .columns import ColumnDescriptor, ColumnType, ResourceDescription

logger = logging.getLogger(__name__)

IMPLICIT_PRIMARY_KEY = "id"


@dataclass
class RawMetadata:
    """Everything declared for one resource class, in declaration order."""

    model_name: str | None = None
    fields: dict[str, ColumnDescriptor] = field(default_factory=dict)

    def copy(self) -> RawMetadata:
        return RawMetadata(model_name=self.model_name, fields=dict(self.fields))


class MetadataRegistry:
    """
    Registry of :class:`RawMetadata` keyed by resource class.

    Lookups walk the class MRO, so a subclass without declarations of its
    own is described by its nearest declared ancestor. The first
    declaration on such a subclass copies the ancestor's entry before
    changing it; the ancestor is never mutated through a subclass.
    """

    def __init__(self) -> None:
        self._entries: dict[type, RawMetadata] = {}

    # -- lookup --------------------------------------------------------------

    def _lookup(self, resource: type) -> RawMetadata | None:
        for klass in resource.__mro__:
            entry = self._entries.get(klass)
            if entry is not None:
                return entry
        return None

    def _own_entry(self, resource: type) -> RawMetadata:
        entry = self._entries.get(resource)
        if entry is None:
            inherited = self._lookup(resource)
            entry = inherited.copy() if inherited is not None else RawMetadata()
            self._entries[resource] = entry
        return entry

    # -- declaration ---------------------------------------------------------

    def declare_field(
        self, resource: type, name: str, **patch: Any
    ) -> ColumnDescriptor:
        """Merge ``patch`` into the descriptor of ``name``, creating it if absent."""
        entry = self._own_entry(resource)
        current = entry.fields.get(name)
        try:
            if current is None:
                current = ColumnDescriptor(name=name)
            column = current.merge(patch)
        except (PydanticValidationError, ValueError) as e:
            raise InvalidColumnError(resource.__name__, name, str(e)) from e
        entry.fields[name] = column
        logger.debug("Declared field %s.%s: %s", resource.__name__, name, patch)
        return column

    def declare_model_name(self, resource: type, name: str) -> None:
        """Record the storage name of ``resource``."""
        self._own_entry(resource).model_name = name
        logger.debug("Declared model name %r for %s", name, resource.__name__)

    # -- inspection ----------------------------------------------------------

    def get_raw_metadata(self, resource: type) -> RawMetadata:
        """Return a copy of everything declared for ``resource``."""
        entry = self._lookup(resource)
        if entry is None:
            entry = self._own_entry(resource)
        return entry.copy()

    def describe(self, resource: type) -> ResourceDescription:
        """
        Build the normalized description of ``resource``.

        Raises:
            MissingModelNameError: No model name was ever declared.
            InvalidColumnError: A default value does not match its column type,
                or ``id`` was declared without being the primary key.
            InvalidPrimaryKeyError: More than one column is marked primary.
        """
        entry = self.get_raw_metadata(resource)
        if not entry.model_name:
            raise MissingModelNameError(resource)

        fields = list(entry.fields.values())
        for column in fields:
            if column.default_value is not None and not column.type.accepts(
                column.default_value
            ):
                raise InvalidColumnError(
                    entry.model_name,
                    column.name,
                    f"default {column.default_value!r} is not a {column.type.value} value",
                )

        primaries = [column.name for column in fields if column.primary]
        if len(primaries) > 1:
            raise InvalidPrimaryKeyError(
                f"Only one primary key is allowed on {entry.model_name}, "
                f"got: {', '.join(primaries)}"
            )
        if not primaries:
            if IMPLICIT_PRIMARY_KEY in entry.fields:
                raise InvalidColumnError(
                    entry.model_name,
                    IMPLICIT_PRIMARY_KEY,
                    "reserved for the implicit primary key; declare it primary",
                )
            fields.insert(
                0,
                ColumnDescriptor(
                    name=IMPLICIT_PRIMARY_KEY, type=ColumnType.NUMBER, primary=True
                ),
            )

        return ResourceDescription(name=entry.model_name, fields=tuple(fields))

    # -- cleanup -------------------------------------------------------------

    def forget(self, resource: type) -> None:
        """Drop the entry owned by ``resource`` (testing utility)."""
        self._entries.pop(resource, None)

    def clear(self) -> None:
        """Remove every entry (testing utility)."""
        self._entries.clear()


REGISTRY = MetadataRegistry()


def declare_field(resource: type, name: str, **patch: Any) -> ColumnDescriptor:
    return REGISTRY.declare_field(resource, name, **patch)


def declare_model_name(resource: type, name: str) -> None:
    REGISTRY.declare_model_name(resource, name)


def get_raw_metadata(resource: type) -> RawMetadata:
    return REGISTRY.get_raw_metadata(resource)


def describe(resource: type) -> ResourceDescription:
    return REGISTRY.describe(resource)

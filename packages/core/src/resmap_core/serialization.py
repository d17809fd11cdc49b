"""
Per-type value conversion between Python values and stored values.

``ColumnCodec`` is the native flavour used by JSON backends: numbers,
booleans and structured objects are stored as themselves. Relational
drivers subclass it and override the methods of the types their storage
cannot hold natively.

Missing-value policy: a value is missing when it is ``None`` (or the
attribute is absent). Missing values fall back to the column's declared
default, then to the zero value of its type.
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any

from .domain.columns import ColumnType
from .primitives.exceptions import SerializationError

if TYPE_CHECKING:
    from collections.abc import Callable

    from .domain.columns import ColumnDescriptor

ZERO_VALUES: dict[ColumnType, Any] = {
    ColumnType.TEXT: "",
    ColumnType.NUMBER: 0,
    ColumnType.BOOLEAN: False,
    ColumnType.OBJECT: None,
}

_TRUE_TEXT = frozenset({"1", "true"})
_FALSE_TEXT = frozenset({"0", "false", ""})


class ColumnCodec:
    """Serialize on write, deserialize on read, keyed by column type."""

    def __init__(self) -> None:
        self._pairs: dict[
            ColumnType, tuple[Callable[[Any], Any], Callable[[Any], Any]]
        ] = {
            ColumnType.TEXT: (self.serialize_text, self.deserialize_text),
            ColumnType.NUMBER: (self.serialize_number, self.deserialize_number),
            ColumnType.BOOLEAN: (self.serialize_boolean, self.deserialize_boolean),
            ColumnType.OBJECT: (self.serialize_object, self.deserialize_object),
        }

    # -- missing values ------------------------------------------------------

    @staticmethod
    def zero_value(column_type: ColumnType) -> Any:
        return ZERO_VALUES[column_type]

    def resolve(self, column: ColumnDescriptor, value: Any) -> Any:
        """Apply the missing-value policy for ``column``."""
        if value is not None:
            return value
        if column.default_value is not None:
            return copy.deepcopy(column.default_value)
        return self.zero_value(column.type)

    # -- dispatch ------------------------------------------------------------

    def serialize(self, column_type: ColumnType, value: Any) -> Any:
        if value is None:
            return None
        serializer, _ = self._pairs[column_type]
        return serializer(value)

    def deserialize(self, column_type: ColumnType, value: Any) -> Any:
        if value is None:
            return None
        _, deserializer = self._pairs[column_type]
        return deserializer(value)

    # -- text ----------------------------------------------------------------

    def serialize_text(self, value: Any) -> Any:
        return str(value)

    def deserialize_text(self, value: Any) -> Any:
        return str(value)

    # -- number --------------------------------------------------------------

    def serialize_number(self, value: Any) -> Any:
        return to_number(value)

    def deserialize_number(self, value: Any) -> Any:
        return to_number(value)

    # -- boolean -------------------------------------------------------------

    def serialize_boolean(self, value: Any) -> Any:
        return to_bool(value)

    def deserialize_boolean(self, value: Any) -> Any:
        return to_bool(value)

    # -- object --------------------------------------------------------------

    def serialize_object(self, value: Any) -> Any:
        return value

    def deserialize_object(self, value: Any) -> Any:
        return value


def to_number(value: Any) -> int | float:
    """Convert ``value`` to ``int`` where it is integral text, otherwise ``float``."""
    if isinstance(value, bool):
        raise SerializationError(f"Cannot use boolean {value!r} as a number")
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return float(text)
        except ValueError:
            pass
    raise SerializationError(f"Cannot convert {value!r} to a number")


def to_bool(value: Any) -> bool:
    """Convert ``value`` to ``bool``; only ``1`` / ``"true"`` mean true."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_TEXT:
            return True
        if text in _FALSE_TEXT:
            return False
    raise SerializationError(f"Cannot convert {value!r} to a boolean")

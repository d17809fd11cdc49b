"""Value codec for SQLite: booleans as 0/1, structured objects as JSON text."""

from __future__ import annotations

import json
from typing import Any

from resmap_core.primitives.exceptions import SerializationError
from resmap_core.serialization import ColumnCodec, to_bool


class SQLiteCodec(ColumnCodec):
    def serialize_boolean(self, value: Any) -> Any:
        return 1 if to_bool(value) else 0

    def serialize_object(self, value: Any) -> Any:
        try:
            return json.dumps(value)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Cannot encode {value!r} as JSON: {e}") from e

    def deserialize_object(self, value: Any) -> Any:
        if not isinstance(value, (str, bytes)):
            return value
        try:
            return json.loads(value)
        except ValueError as e:
            raise SerializationError(f"Cannot decode JSON column value: {e}") from e

import itertools
import uuid
from typing import Protocol


class IIDGenerator(Protocol):
    """
    Protocol for primary-key generation strategies.
    Used by drivers whose backend does not assign keys itself.
    """

    def next_id(self) -> object:
        """Generates the next unique identifier."""
        ...


class UUID4Generator(IIDGenerator):
    """
    Default ID generator using UUIDv4.
    Zero external dependencies.
    """

    def next_id(self) -> str:
        """Returns a string representation of a random UUIDv4."""
        return str(uuid.uuid4())


class SequentialIDGenerator(IIDGenerator):
    """Monotonic integer keys starting at ``start``; not shared between processes."""

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)

    def next_id(self) -> int:
        return next(self._counter)

    def advance_past(self, value: int) -> None:
        """Make sure the next generated key is greater than ``value``."""
        current = next(self._counter)
        self._counter = itertools.count(max(current, value + 1))

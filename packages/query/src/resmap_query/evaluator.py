"""
In-memory operator evaluation strategy.

Provides the MemoryOperator protocol and a registry that maps
QueryOperator → evaluation function. The default set lives in
``operators_memory``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .operators import QueryOperator


class MemoryOperator(ABC):
    """
    Strategy interface for in-memory operator evaluation.

    Each operator is an isolated class with a single ``evaluate`` method.
    """

    @property
    @abstractmethod
    def name(self) -> QueryOperator:
        """The operator this strategy handles."""
        ...

    @abstractmethod
    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        """
        Evaluate the operator against concrete values.

        Args:
            field_value: The value read from the candidate instance.
            condition_value: The (already coerced) value of the filter.

        Returns:
            True if the condition is satisfied.
        """
        ...


class MemoryOperatorRegistry:
    """
    Registry of MemoryOperator instances keyed by QueryOperator.

    Usage::

        registry = MemoryOperatorRegistry()
        registry.register(EqualOperator())

        result = registry.evaluate(QueryOperator.EQ, actual, expected)
    """

    def __init__(self) -> None:
        self._operators: dict[QueryOperator, MemoryOperator] = {}

    # -- registration --------------------------------------------------------

    def register(self, operator: MemoryOperator) -> None:
        self._operators[operator.name] = operator

    def register_all(self, *operators: MemoryOperator) -> None:
        for op in operators:
            self.register(op)

    def unregister(self, name: QueryOperator) -> None:
        self._operators.pop(name, None)

    # -- look-up -------------------------------------------------------------

    def get(self, name: QueryOperator) -> MemoryOperator | None:
        return self._operators.get(name)

    def has(self, name: QueryOperator) -> bool:
        return name in self._operators

    @property
    def supported_operators(self) -> set[QueryOperator]:
        return set(self._operators.keys())

    # -- evaluation shortcut -------------------------------------------------

    def evaluate(
        self, name: QueryOperator, field_value: Any, condition_value: Any
    ) -> bool:
        """
        Look up the operator and evaluate.

        An operator without a registered strategy places no constraint
        and evaluates to ``True``.
        """
        op = self.get(name)
        if op is None:
            return True
        return op.evaluate(field_value, condition_value)

"""In-memory implementations of the query operators: =, !=, like, >, <, >=, <=."""

from __future__ import annotations

import operator as op_module
from typing import TYPE_CHECKING, Any

from .evaluator import MemoryOperator, MemoryOperatorRegistry
from .operators import QueryOperator

if TYPE_CHECKING:
    from collections.abc import Callable


def _ordered(compare: Callable[[Any, Any], Any], left: Any, right: Any) -> bool:
    if left is None or right is None:
        return False
    try:
        return bool(compare(left, right))
    except TypeError:
        return False


class EqualOperator(MemoryOperator):
    @property
    def name(self) -> QueryOperator:
        return QueryOperator.EQ

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return bool(field_value == condition_value)


class NotEqualOperator(MemoryOperator):
    @property
    def name(self) -> QueryOperator:
        return QueryOperator.NE

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return bool(field_value != condition_value)


class LikeOperator(MemoryOperator):
    """Case-sensitive substring containment."""

    @property
    def name(self) -> QueryOperator:
        return QueryOperator.LIKE

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        return str(condition_value) in str(field_value)


class GreaterThanOperator(MemoryOperator):
    @property
    def name(self) -> QueryOperator:
        return QueryOperator.GT

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return _ordered(op_module.gt, field_value, condition_value)


class LessThanOperator(MemoryOperator):
    @property
    def name(self) -> QueryOperator:
        return QueryOperator.LT

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return _ordered(op_module.lt, field_value, condition_value)


class GreaterEqualOperator(MemoryOperator):
    @property
    def name(self) -> QueryOperator:
        return QueryOperator.GE

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return _ordered(op_module.ge, field_value, condition_value)


class LessEqualOperator(MemoryOperator):
    @property
    def name(self) -> QueryOperator:
        return QueryOperator.LE

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return _ordered(op_module.le, field_value, condition_value)


def build_default_registry() -> MemoryOperatorRegistry:
    """
    Create a registry with all built-in operators.

    Example:
        >>> registry = build_default_registry()
        >>> registry.evaluate(QueryOperator.EQ, "active", "active")
        True
    """
    registry = MemoryOperatorRegistry()
    registry.register_all(
        EqualOperator(),
        NotEqualOperator(),
        LikeOperator(),
        GreaterThanOperator(),
        LessThanOperator(),
        GreaterEqualOperator(),
        LessEqualOperator(),
    )
    return registry

"""
SQLAlchemy operator compilation strategy.

Provides the ``SQLAlchemyOperator`` protocol and a registry structured in
the same strategy pattern as the in-memory evaluator.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from sqlalchemy import true

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement

    from resmap_query.operators import QueryOperator


class SQLAlchemyOperator(ABC):
    """
    Strategy interface for compiling a query operator
    into a SQLAlchemy ``ColumnElement[bool]``.
    """

    @property
    @abstractmethod
    def name(self) -> QueryOperator:
        """The operator this strategy handles."""
        ...

    @abstractmethod
    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        """
        Build a SQLAlchemy filter clause.

        Args:
            column: A SQLAlchemy column.
            value: The filter value, already serialized for storage.

        Returns:
            A SQLAlchemy boolean expression.
        """
        ...


class SQLAlchemyOperatorRegistry:
    """
    Registry of ``SQLAlchemyOperator`` instances keyed by
    :class:`QueryOperator`.
    """

    def __init__(self) -> None:
        self._operators: dict[QueryOperator, SQLAlchemyOperator] = {}

    def register(self, operator: SQLAlchemyOperator) -> None:
        self._operators[operator.name] = operator

    def register_all(self, *operators: SQLAlchemyOperator) -> None:
        for op in operators:
            self.register(op)

    def unregister(self, name: QueryOperator) -> None:
        self._operators.pop(name, None)

    def get(self, name: QueryOperator) -> SQLAlchemyOperator | None:
        return self._operators.get(name)

    def has(self, name: QueryOperator) -> bool:
        return name in self._operators

    @property
    def supported_operators(self) -> set[QueryOperator]:
        return set(self._operators.keys())

    def apply(self, name: QueryOperator, column: Any, value: Any) -> ColumnElement[bool]:
        """
        Look up the operator and apply.

        An operator without a registered strategy compiles to ``TRUE``
        (no constraint), matching the in-memory registry.
        """
        op = self.get(name)
        if op is None:
            return true()
        return op.apply(column, value)

"""resmap-query — fluent filter queries and their in-memory evaluation."""

from .builder import Clause, Filter, Query
from .evaluator import MemoryOperator, MemoryOperatorRegistry
from .exceptions import FieldNotFoundError, QueryError
from .filtering import PreparedFilter, QueryMatcher, coerce_value, prepare_filters
from .memory import InMemoryDriver
from .operators import QueryOperator
from .operators_memory import build_default_registry

__all__ = [
    # Builder
    "Clause",
    "Filter",
    "Query",
    "QueryOperator",
    # Evaluation
    "MemoryOperator",
    "MemoryOperatorRegistry",
    "PreparedFilter",
    "QueryMatcher",
    "build_default_registry",
    "coerce_value",
    "prepare_filters",
    # Drivers
    "InMemoryDriver",
    # Exceptions
    "FieldNotFoundError",
    "QueryError",
]

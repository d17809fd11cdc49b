from __future__ import annotations

from enum import Enum
from typing import Any


class QueryOperator(str, Enum):
    """Supported filter operators; the value is the symbol drivers receive."""

    EQ = "="
    NE = "!="
    LIKE = "like"
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="

    @classmethod
    def parse(cls, token: Any) -> QueryOperator | None:
        """Map a symbol, fluent token or operator to an operator; ``None`` if unknown."""
        if isinstance(token, cls):
            return token
        if not isinstance(token, str):
            return None
        return _TOKENS.get(token) or _TOKENS.get(token.lower())


# Fluent tokens (and their snake-case spellings) accepted by Query.push.
_TOKENS: dict[str, QueryOperator] = {
    **{op.value: op for op in QueryOperator},
    "is": QueryOperator.EQ,
    "isNot": QueryOperator.NE,
    "is_not": QueryOperator.NE,
    "isLike": QueryOperator.LIKE,
    "is_like": QueryOperator.LIKE,
    "gt": QueryOperator.GT,
    "lt": QueryOperator.LT,
    "gte": QueryOperator.GE,
    "lte": QueryOperator.LE,
}

# capgains/domain/enums.py
from enum import Enum

from .errors import InvalidOperationKindError


class OperationKind(Enum):
    BUY = "buy"
    SELL = "sell"

    @classmethod
    def from_text(cls, value: str) -> "OperationKind":
        """Maps the textual operation type of an input record to its kind."""
        normalized = str(value).strip().lower()
        for kind in cls:
            if kind.value == normalized:
                return kind
        raise InvalidOperationKindError(value)

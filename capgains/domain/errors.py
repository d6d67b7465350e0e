# capgains/domain/errors.py
from typing import Any, Optional


class CapitalGainsError(Exception):
    """Base class for all errors raised while calculating capital gains."""


class InvalidQuantityError(CapitalGainsError, ValueError):
    def __init__(self, quantity: Any):
        self.quantity = quantity
        super().__init__(f"Invalid quantity: `{quantity}`. The quantity must be greater than 0.")


class InsufficientSharesError(CapitalGainsError, ValueError):
    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient shares available for sale. Requested: `{requested}`, Available: `{available}`"
        )


class InvalidOperationKindError(CapitalGainsError, ValueError):
    def __init__(self, kind: Any):
        self.kind = kind
        super().__init__(f"Invalid operation type: `{kind}`. Expected values: `buy`, `sell`.")


class OperationDecodeError(CapitalGainsError, ValueError):
    """Raised by the input parsers before any operation reaches a Position."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"Line {line_number}: {message}"
        super().__init__(message)

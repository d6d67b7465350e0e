# capgains/domain/__init__.py
from .enums import OperationKind
from .errors import (
    CapitalGainsError,
    InvalidQuantityError,
    InsufficientSharesError,
    InvalidOperationKindError,
    OperationDecodeError,
)
from .operations import Operation
from .position import Position, TaxPolicy

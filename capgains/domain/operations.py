# capgains/domain/operations.py
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .enums import OperationKind


@dataclass(frozen=True)
class Operation:
    kind: OperationKind
    unit_price: Decimal
    quantity: int
    asset_id: Optional[str] = None # Ticker; operations without one share a single position

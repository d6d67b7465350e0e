# capgains/parsers/raw_models.py
from typing import Optional, Any
from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field, field_validator

from capgains.domain.enums import OperationKind
from capgains.domain.operations import Operation
from capgains.utils.type_utils import safe_decimal


class RawOperationRecord(BaseModel):
    # Field aliases match the keys of the JSON input records
    model_config = ConfigDict(extra='ignore', populate_by_name=True, frozen=True)

    operation: str = Field(alias="operation") # "buy" or "sell"
    unit_cost: Decimal = Field(alias="unit-cost", ge=0)
    quantity: int = Field(alias="quantity") # Sign is checked by the Position, not here
    ticker: Optional[str] = Field(None, alias="ticker")

    @field_validator('unit_cost', mode='before')
    @classmethod
    def parse_unit_cost(cls, v: Any) -> Any:
        return safe_decimal(v, default=v)

    @field_validator('quantity', mode='before')
    @classmethod
    def reject_boolean_quantity(cls, v: Any) -> Any:
        # JSON true/false would otherwise pass as 1/0
        if isinstance(v, bool):
            raise ValueError(f"quantity must be an integer, got {v!r}")
        return v

    @field_validator('ticker', mode='before')
    @classmethod
    def normalize_ticker(cls, v: Any) -> Optional[str]:
        if v is None or str(v).strip() == "":
            return None
        return str(v).strip()

    def to_operation(self) -> Operation:
        return Operation(
            kind=OperationKind.from_text(self.operation),
            unit_price=self.unit_cost,
            quantity=self.quantity,
            asset_id=self.ticker,
        )

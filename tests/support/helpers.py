# tests/support/helpers.py
import io
import json
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from capgains.domain.enums import OperationKind
from capgains.domain.operations import Operation
from capgains.pipeline_runner import ProcessingOutput, run_capital_gains_pipeline


def buy(quantity: int, unit_price: str, ticker: Optional[str] = None) -> Operation:
    return Operation(OperationKind.BUY, Decimal(unit_price), quantity, ticker)


def sell(quantity: int, unit_price: str, ticker: Optional[str] = None) -> Operation:
    return Operation(OperationKind.SELL, Decimal(unit_price), quantity, ticker)


def operations_line(*records: Tuple[str, str, int], ticker: Optional[str] = None) -> str:
    """
    Builds one input line from (operation, unit_cost, quantity) tuples.
    unit_cost is written as a raw JSON number so it is decoded exactly as given.
    """
    parts = []
    for operation, unit_cost, quantity in records:
        ticker_part = f', "ticker": "{ticker}"' if ticker is not None else ""
        parts.append(f'{{"operation": "{operation}", "unit-cost": {unit_cost}, "quantity": {quantity}{ticker_part}}}')
    return "[" + ", ".join(parts) + "]"


def run_pipeline_on_text(text: str, **options: Any) -> Tuple[List[str], ProcessingOutput]:
    """Runs the pipeline over `text` and returns the written output lines and the run counters."""
    output_stream = io.StringIO()
    result = run_capital_gains_pipeline(io.StringIO(text), output_stream, **options)
    return output_stream.getvalue().splitlines(), result


def taxes_of(output_line: str) -> List[str]:
    records: List[Dict[str, str]] = json.loads(output_line)
    return [record["tax"] for record in records]

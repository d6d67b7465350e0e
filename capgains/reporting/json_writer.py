# capgains/reporting/json_writer.py
import json
from decimal import Decimal, Context, ROUND_HALF_EVEN, MAX_PREC
from typing import Iterable

import capgains.config as global_config

_COMPACT = (",", ":")
_EXACT = Context(prec=MAX_PREC, rounding=ROUND_HALF_EVEN)


def format_tax(value: Decimal, quantum: Decimal = global_config.OUTPUT_PRECISION_TAX) -> str:
    """Fixed-point text of a tax amount, e.g. '0.0' or '10000.0'."""
    return format(Decimal(value).quantize(quantum, rounding=ROUND_HALF_EVEN, context=_EXACT), "f")


def encode_tax_line(taxes: Iterable[Decimal]) -> str:
    return json.dumps([{"tax": format_tax(tax)} for tax in taxes], separators=_COMPACT)


def encode_error_line(error: Exception) -> str:
    return json.dumps({"error": str(error)}, separators=_COMPACT)

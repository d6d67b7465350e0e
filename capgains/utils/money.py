# capgains/utils/money.py
from decimal import Decimal, Context, ROUND_05UP, MAX_PREC
from typing import Optional

import capgains.config as global_config


class MoneyCalculator:
    """
    Fixed-point arithmetic for monetary amounts.

    Addition, subtraction and multiplication are exact whatever the size of
    the operands. Division and rounding always take an explicit quantum and
    rounding mode; only they ever round.
    """

    def __init__(self,
                 precision: int = global_config.INTERNAL_CALCULATION_PRECISION,
                 rounding: str = global_config.DECIMAL_ROUNDING_MODE):
        self.precision = precision
        self.ctx = Context(prec=MAX_PREC, rounding=rounding)

    def add(self, a: Decimal, b: Decimal) -> Decimal:
        return self.ctx.add(a, b)

    def subtract(self, a: Decimal, b: Decimal) -> Decimal:
        return self.ctx.subtract(a, b)

    def multiply(self, a: Decimal, b: Decimal) -> Decimal:
        return self.ctx.multiply(a, b)

    def divide(self, dividend: Decimal, divisor: Decimal, quantum: Decimal,
               rounding: Optional[str] = None) -> Decimal:
        dividend, divisor = Decimal(dividend), Decimal(divisor)
        # Enough digits for the integer part, every place of the quantum and two guard digits.
        integer_digits = max(dividend.adjusted() - divisor.adjusted() + 1, 1)
        places = max(-quantum.as_tuple().exponent, 0)
        prec = max(self.precision, integer_digits + places + 2)
        # ROUND_05UP never creates a false tie, so the final quantize rounds as if from the exact quotient.
        quotient = Context(prec=prec, rounding=ROUND_05UP).divide(dividend, divisor)
        return self.round(quotient, quantum, rounding)

    def round(self, value: Decimal, quantum: Decimal, rounding: Optional[str] = None) -> Decimal:
        return Decimal(value).quantize(quantum, rounding=rounding or self.ctx.rounding, context=self.ctx)

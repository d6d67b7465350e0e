# capgains/domain/position.py
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

import capgains.config as global_config
from capgains.utils.money import MoneyCalculator
from .errors import InvalidQuantityError, InsufficientSharesError

logger = logging.getLogger(__name__)

ZERO_TAX = Decimal("0.00")


@dataclass(frozen=True)
class TaxPolicy:
    """Flat-rate regime: gains of a sale above the exemption threshold are taxed at tax_rate."""
    tax_rate: Decimal = global_config.TAX_RATE
    exemption_threshold: Decimal = global_config.EXEMPTION_THRESHOLD

    def __post_init__(self):
        if not isinstance(self.tax_rate, Decimal) or not self.tax_rate.is_finite() or self.tax_rate < Decimal(0):
            raise ValueError(f"TaxPolicy tax_rate must be a non-negative finite Decimal: {self.tax_rate}")
        if not isinstance(self.exemption_threshold, Decimal) or not self.exemption_threshold.is_finite() or self.exemption_threshold < Decimal(0):
            raise ValueError(f"TaxPolicy exemption_threshold must be a non-negative finite Decimal: {self.exemption_threshold}")


class Position:
    """
    Holdings of a single asset under the weighted-average cost method.

    The average cost is recomputed on every buy and rounded half-even to
    AVERAGE_COST_PRECISION. Sales are valued against that rounded average;
    realized losses are carried forward and offset against later taxable
    gains. The state only changes through buy() and sell(), and a call that
    fails validation leaves it untouched.
    """

    def __init__(self,
                 policy: Optional[TaxPolicy] = None,
                 calculator: Optional[MoneyCalculator] = None):
        self.policy: TaxPolicy = policy or TaxPolicy()
        self.calc: MoneyCalculator = calculator or MoneyCalculator()

        self._total_shares: int = 0
        self._total_cost: Decimal = Decimal(0)
        self._average_cost: Decimal = Decimal(0)
        self._accumulated_loss: Decimal = Decimal(0)

    @property
    def total_shares(self) -> int:
        return self._total_shares

    @property
    def total_cost(self) -> Decimal:
        return self._total_cost

    @property
    def average_cost(self) -> Decimal:
        return self._average_cost

    @property
    def accumulated_loss(self) -> Decimal:
        return self._accumulated_loss

    def tax_rate(self) -> Decimal:
        return self.policy.tax_rate

    def exemption_threshold(self) -> Decimal:
        return self.policy.exemption_threshold

    def buy(self, quantity: int, unit_price: Decimal) -> None:
        if quantity <= 0:
            raise InvalidQuantityError(quantity)

        amount_paid = self.calc.multiply(unit_price, Decimal(quantity))

        self._total_cost = self.calc.add(self._total_cost, amount_paid)
        self._total_shares += quantity
        self._average_cost = self.calc.divide(
            self._total_cost, Decimal(self._total_shares), global_config.AVERAGE_COST_PRECISION
        )
        logger.debug(f"BUY {quantity} @ {unit_price}: shares={self._total_shares}, "
                     f"total_cost={self._total_cost}, average_cost={self._average_cost}")

    def sell(self, quantity: int, unit_price: Decimal) -> Decimal:
        if quantity <= 0:
            raise InvalidQuantityError(quantity)
        if quantity > self._total_shares:
            raise InsufficientSharesError(quantity, self._total_shares)

        sale_total = self.calc.multiply(unit_price, Decimal(quantity))
        cost_basis = self.calc.multiply(self._average_cost, Decimal(quantity))
        profit = self.calc.subtract(sale_total, cost_basis)

        tax = ZERO_TAX
        if profit < Decimal(0):
            self._accumulated_loss = self.calc.add(self._accumulated_loss, profit.copy_abs())
        elif sale_total > self.exemption_threshold():
            if self._accumulated_loss >= profit:
                self._accumulated_loss = self.calc.subtract(self._accumulated_loss, profit)
            else:
                taxable_profit = self.calc.subtract(profit, self._accumulated_loss)
                self._accumulated_loss = Decimal(0)
                tax = self.calc.round(self.calc.multiply(taxable_profit, self.tax_rate()),
                                      global_config.TAX_PRECISION)

        self._total_shares -= quantity
        # Re-derived from the rounded average so the two never drift apart.
        self._total_cost = self.calc.multiply(self._average_cost, Decimal(self._total_shares))

        logger.debug(f"SELL {quantity} @ {unit_price}: sale_total={sale_total}, profit={profit}, tax={tax}, "
                     f"shares={self._total_shares}, accumulated_loss={self._accumulated_loss}")
        return tax

    def __repr__(self) -> str:
        return (f"Position(total_shares={self._total_shares}, average_cost={self._average_cost}, "
                f"total_cost={self._total_cost}, accumulated_loss={self._accumulated_loss})")

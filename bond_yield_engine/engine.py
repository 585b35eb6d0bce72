from __future__ import annotations

import logging

import pandas as pd
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .bonds import (
    BondInput,
    current_yield,
    period_model,
    premium_discount,
    total_interest,
    validate_bond_input,
)
from .schedule import CashFlowEntry, generate_cash_flow_schedule, schedule_to_frame
from .ytm import solve_ytm

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BondCalculationResult:
    current_yield: float
    yield_to_maturity: float
    total_interest_earned: float
    premium_discount: str
    premium_discount_amount: float
    cash_flow_schedule: Tuple[CashFlowEntry, ...]

    def to_dict(self) -> Dict[str, Any]:
        """JSON wire shape (camelCase keys, ISO payment dates)."""
        return {
            "currentYield": self.current_yield,
            "yieldToMaturity": self.yield_to_maturity,
            "totalInterestEarned": self.total_interest_earned,
            "premiumDiscount": self.premium_discount,
            "premiumDiscountAmount": self.premium_discount_amount,
            "cashFlowSchedule": [
                {
                    "period": e.period,
                    "paymentDate": e.payment_date.strftime("%Y-%m-%d"),
                    "couponPayment": e.coupon_payment,
                    "cumulativeInterest": e.cumulative_interest,
                    "remainingPrincipal": e.remaining_principal,
                }
                for e in self.cash_flow_schedule
            ],
        }

    def schedule_frame(self) -> pd.DataFrame:
        return schedule_to_frame(self.cash_flow_schedule)


def calculate_bond(bond: BondInput, as_of: Optional[pd.Timestamp] = None) -> BondCalculationResult:
    """
    Full set of yield metrics and the payment schedule for one bond.

    Assumes a validated input. The period model is derived once and shared by
    the solver and the schedule generator.
    """
    model = period_model(bond)

    status, amount = premium_discount(bond)
    result = BondCalculationResult(
        current_yield=current_yield(bond),
        yield_to_maturity=solve_ytm(bond, model),
        total_interest_earned=total_interest(bond),
        premium_discount=status,
        premium_discount_amount=amount,
        cash_flow_schedule=tuple(generate_cash_flow_schedule(bond, as_of, model)),
    )

    logger.debug(
        "bond face=%s coupon=%s%% price=%s years=%s freq=%s -> cy=%.6f ytm=%.6f (%d periods)",
        bond.face_value,
        bond.annual_coupon_rate,
        bond.market_price,
        bond.years_to_maturity,
        bond.coupon_frequency,
        result.current_yield,
        result.yield_to_maturity,
        model.total_periods,
    )
    return result


class BondCalculator:
    """Validating front for calculate_bond, for callers holding unchecked input."""

    def validate(self, bond: BondInput) -> None:
        validate_bond_input(bond)

    def calculate(self, bond: BondInput, as_of: Optional[pd.Timestamp] = None) -> BondCalculationResult:
        self.validate(bond)
        return calculate_bond(bond, as_of)

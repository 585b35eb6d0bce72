from __future__ import annotations

import pandas as pd
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .bonds import BondInput, PeriodModel, period_model
from .utils import payment_dates, reference_date, round_currency


SCHEDULE_COLUMNS = [
    "period",
    "payment_date",
    "coupon_payment",
    "cumulative_interest",
    "remaining_principal",
]


@dataclass(frozen=True)
class CashFlowEntry:
    period: int
    payment_date: pd.Timestamp
    coupon_payment: float
    cumulative_interest: float
    remaining_principal: float


def generate_cash_flow_schedule(
    bond: BondInput,
    as_of: Optional[pd.Timestamp] = None,
    model: Optional[PeriodModel] = None,
) -> List[CashFlowEntry]:
    """
    One entry per coupon period, dated forward from the reference date.

    Coupons are rounded to cents first and the running total accumulates the
    rounded coupons. Principal stays at face until the final period, which
    reports 0 (bullet repayment).
    """
    if model is None:
        model = period_model(bond)

    as_of = reference_date(as_of)
    n = model.total_periods
    dates = payment_dates(as_of, n, bond.coupon_frequency)
    coupon = round_currency(model.coupon_per_period)

    schedule: List[CashFlowEntry] = []
    cumulative = 0.0
    for period, pay_date in enumerate(dates, start=1):
        cumulative += coupon
        schedule.append(
            CashFlowEntry(
                period=period,
                payment_date=pay_date,
                coupon_payment=coupon,
                cumulative_interest=round_currency(cumulative),
                remaining_principal=0.0 if period == n else float(bond.face_value),
            )
        )
    return schedule


def schedule_to_frame(schedule: Sequence[CashFlowEntry]) -> pd.DataFrame:
    """Schedule as a DataFrame, one row per period."""
    rows = [
        {
            "period": e.period,
            "payment_date": e.payment_date,
            "coupon_payment": e.coupon_payment,
            "cumulative_interest": e.cumulative_interest,
            "remaining_principal": e.remaining_principal,
        }
        for e in schedule
    ]
    return pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)

from __future__ import annotations

import math

import pandas as pd
from typing import List, Optional


SUPPORTED_FREQUENCIES = (1, 2)


def months_per_period(freq: int) -> int:
    """Calendar months between coupon dates (12 for annual, 6 for semi-annual)."""
    if freq <= 0:
        raise ValueError("freq must be positive")
    return int(12 / freq)


def total_periods(years: float, freq: int) -> int:
    """
    Number of coupon periods, rounded half-up.

    Fractional maturities land on the nearest whole period, with halves
    rounded away from zero (2.5 years annual -> 3 periods).
    """
    return int(math.floor(years * freq + 0.5))


def round_currency(amount: float) -> float:
    """Round a currency amount to cents, halves rounded up."""
    return math.floor(amount * 100.0 + 0.5) / 100.0


def reference_date(as_of: Optional[pd.Timestamp] = None) -> pd.Timestamp:
    """Calculation reference date at midnight; today when not given."""
    if as_of is None:
        return pd.Timestamp.today().normalize()
    return pd.Timestamp(as_of).normalize()


def payment_dates(as_of: pd.Timestamp, n_periods: int, freq: int) -> List[pd.Timestamp]:
    """
    Coupon payment dates stepped forward from the reference date.

    Period k pays on as_of + k * (12 / freq) months. Month-end overflow is
    clamped by DateOffset (Jan 31 + 1 month -> Feb 28/29).
    """
    as_of = pd.Timestamp(as_of)
    months = months_per_period(freq)
    return [as_of + pd.DateOffset(months=k * months) for k in range(1, n_periods + 1)]

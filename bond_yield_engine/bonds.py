from __future__ import annotations

import math
import numbers

import numpy as np
from dataclasses import dataclass
from typing import Tuple

from .utils import SUPPORTED_FREQUENCIES, months_per_period, total_periods


PAR_TOLERANCE = 0.01


@dataclass(frozen=True)
class BondInput:
    face_value: float
    annual_coupon_rate: float  # percent, e.g. 5.0 = 5%
    market_price: float
    years_to_maturity: float
    coupon_frequency: int = 2


@dataclass(frozen=True)
class PeriodModel:
    total_periods: int
    coupon_per_period: float
    months_per_period: int


class InvalidBondInput(ValueError):
    """Raised by the calling layer when a BondInput falls outside the engine's domain."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


def period_model(bond: BondInput) -> PeriodModel:
    """Derive the per-period view of a bond: period count and coupon per period."""
    freq = int(bond.coupon_frequency)
    return PeriodModel(
        total_periods=total_periods(bond.years_to_maturity, freq),
        coupon_per_period=bond.face_value * (bond.annual_coupon_rate / 100.0) / freq,
        months_per_period=months_per_period(freq),
    )


def annual_coupon(bond: BondInput) -> float:
    return bond.face_value * (bond.annual_coupon_rate / 100.0)


def current_yield(bond: BondInput) -> float:
    """Annual coupon over market price, as a decimal."""
    return annual_coupon(bond) / bond.market_price


def total_interest(bond: BondInput) -> float:
    """Straight-line coupon income to maturity; ignores period rounding."""
    return annual_coupon(bond) * bond.years_to_maturity


def premium_discount(bond: BondInput) -> Tuple[str, float]:
    """
    Classify the market price against face value.

    Returns (status, amount) where status is "premium", "discount" or "par"
    and amount is the non-negative price gap (0 at par).
    """
    diff = bond.market_price - bond.face_value
    if abs(diff) < PAR_TOLERANCE:
        return "par", 0.0
    if diff > 0:
        return "premium", diff
    return "discount", abs(diff)


def bond_price_and_derivative(
    rate: float,
    coupon: float,
    face: float,
    n_periods: int,
) -> Tuple[float, float]:
    """
    Price and dP/dr at a per-period rate r:
      P(r)  =  sum_t C/(1+r)^t + FV/(1+r)^n
      P'(r) = -sum_t t*C/(1+r)^(t+1) - n*FV/(1+r)^(n+1)

    Discount factors past float range become inf, so far-out terms vanish
    instead of raising.
    """
    t = np.arange(1, n_periods + 1, dtype=float)
    growth = np.float64(1.0 + rate)

    with np.errstate(over="ignore", under="ignore"):
        disc = growth ** t

        price = float(np.sum(coupon / disc))
        derivative = -float(np.sum(t * coupon / (disc * growth)))

        final_disc = np.power(growth, float(n_periods))
        price += float(face / final_disc)
        derivative -= float(n_periods * face / (final_disc * growth))
    return price, derivative


MESSAGES = {
    ("face_value", "number"): "Face value must be a number",
    ("face_value", "positive"): "Face value must be positive",
    ("annual_coupon_rate", "number"): "Coupon rate must be a number",
    ("annual_coupon_rate", "negative"): "Coupon rate cannot be negative",
    ("annual_coupon_rate", "max"): "Coupon rate cannot exceed 100%",
    ("market_price", "number"): "Market price must be a number",
    ("market_price", "positive"): "Market price must be positive",
    ("years_to_maturity", "number"): "Years to maturity must be a number",
    ("years_to_maturity", "positive"): "Years to maturity must be positive",
    ("years_to_maturity", "max"): "Years to maturity cannot exceed 100",
    ("coupon_frequency", "choice"): "Coupon frequency must be 1 (annual) or 2 (semi-annual)",
}


def _reject(field: str, rule: str) -> InvalidBondInput:
    return InvalidBondInput(field, MESSAGES[field, rule])


def _require_number(bond: BondInput, field: str) -> float:
    value = getattr(bond, field)
    if isinstance(value, bool) or not isinstance(value, numbers.Real) or not math.isfinite(value):
        raise _reject(field, "number")
    return float(value)


def validate_bond_input(bond: BondInput) -> None:
    """
    Reject input outside the engine's domain. Raises InvalidBondInput on the
    first offending field; the engine itself never validates.
    """
    face = _require_number(bond, "face_value")
    if face <= 0:
        raise _reject("face_value", "positive")

    rate = _require_number(bond, "annual_coupon_rate")
    if rate < 0:
        raise _reject("annual_coupon_rate", "negative")
    if rate > 100:
        raise _reject("annual_coupon_rate", "max")

    price = _require_number(bond, "market_price")
    if price <= 0:
        raise _reject("market_price", "positive")

    years = _require_number(bond, "years_to_maturity")
    if years <= 0:
        raise _reject("years_to_maturity", "positive")
    if years > 100:
        raise _reject("years_to_maturity", "max")

    freq = bond.coupon_frequency
    if isinstance(freq, bool) or freq not in SUPPORTED_FREQUENCIES:
        raise _reject("coupon_frequency", "choice")

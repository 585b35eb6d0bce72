"""
Yield to maturity by Newton-Raphson on the period pricing function.

The solver never raises: if it runs out of iterations it logs a warning and
returns its last guess.
"""
from __future__ import annotations

import logging

import numpy as np
from dataclasses import dataclass
from typing import Optional

from .bonds import BondInput, PeriodModel, bond_price_and_derivative, current_yield, period_model

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 100
TOLERANCE = 1e-10
RATE_FLOOR = 0.0001


@dataclass(frozen=True)
class YTMSolution:
    annual_yield: float
    period_yield: float
    iterations: int
    converged: bool
    price_error: float


def solve_ytm_detailed(
    bond: BondInput,
    model: Optional[PeriodModel] = None,
    max_iterations: int = MAX_ITERATIONS,
    tolerance: float = TOLERANCE,
) -> YTMSolution:
    """
    Solve P(r) = market_price for the per-period rate r, then annualise.

    Starts from the period-equivalent current yield. Any step that lands below
    zero (or is not a number) is reset to RATE_FLOOR; negative yields are out
    of model.
    """
    if model is None:
        model = period_model(bond)

    freq = bond.coupon_frequency
    guess = current_yield(bond) / freq
    diff = float("nan")
    converged = False
    iterations = 0

    for i in range(max_iterations):
        iterations = i + 1
        price, derivative = bond_price_and_derivative(
            guess, model.coupon_per_period, bond.face_value, model.total_periods
        )
        diff = price - bond.market_price

        if abs(diff) < tolerance:
            converged = True
            break

        if model.total_periods == 0:
            logger.warning(
                "YTM solver: flat price function at r=%.6g (periods=%d), returning last guess",
                guess,
                model.total_periods,
            )
            break

        # an underflowed derivative gives an infinite step, caught by the floor
        with np.errstate(divide="ignore", invalid="ignore"):
            guess = float(guess - np.divide(diff, derivative))
        if not guess >= 0:
            guess = RATE_FLOOR

    if not converged:
        logger.warning(
            "YTM solver did not converge after %d iterations (price error %.3g); returning last guess",
            iterations,
            diff,
        )
    else:
        logger.debug("YTM solver converged in %d iterations, r=%.10f", iterations, guess)

    return YTMSolution(
        annual_yield=guess * freq,
        period_yield=guess,
        iterations=iterations,
        converged=converged,
        price_error=diff,
    )


def solve_ytm(bond: BondInput, model: Optional[PeriodModel] = None) -> float:
    """Annualised YTM as a decimal (0.0585 = 5.85%)."""
    return solve_ytm_detailed(bond, model).annual_yield

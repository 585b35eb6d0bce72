"""Command line bond calculator.

Usage:
    python -m bond_yield_engine.cli --face-value 1000 --coupon-rate 5 --market-price 950 --years 10
    python -m bond_yield_engine.cli ... --frequency 1 --as-of 2026-01-15 --json
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

import pandas as pd

from .bonds import BondInput, InvalidBondInput
from .config import settings
from .engine import BondCalculationResult, BondCalculator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Bond yield and coupon schedule calculator")
    parser.add_argument("--face-value", type=float, required=True, help="Par amount repaid at maturity")
    parser.add_argument("--coupon-rate", type=float, required=True, help="Annual coupon rate in percent")
    parser.add_argument("--market-price", type=float, required=True, help="Current trading price")
    parser.add_argument("--years", type=float, required=True, help="Years to maturity")
    parser.add_argument("--frequency", type=int, choices=[1, 2], default=2, help="Coupons per year")
    parser.add_argument("--as-of", type=pd.Timestamp, default=None, help="Schedule reference date (YYYY-MM-DD)")
    parser.add_argument("--json", action="store_true", help="Emit the JSON wire format")
    return parser


def print_result(result: BondCalculationResult) -> None:
    print(f"\n{'=' * 60}")
    print("  Bond Yield Summary")
    print(f"{'=' * 60}")
    print(f"  Current yield:        {result.current_yield:.4%}")
    print(f"  Yield to maturity:    {result.yield_to_maturity:.4%}")
    print(f"  Total interest:       {result.total_interest_earned:,.2f}")
    print(f"  Price vs face:        {result.premium_discount} ({result.premium_discount_amount:,.2f})")
    print()

    frame = result.schedule_frame()
    frame["payment_date"] = frame["payment_date"].dt.strftime("%Y-%m-%d")
    print(frame.to_string(index=False))
    print()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=settings.log_level.upper())

    bond = BondInput(
        face_value=args.face_value,
        annual_coupon_rate=args.coupon_rate,
        market_price=args.market_price,
        years_to_maturity=args.years,
        coupon_frequency=args.frequency,
    )

    try:
        result = BondCalculator().calculate(bond, args.as_of)
    except InvalidBondInput as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print_result(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())

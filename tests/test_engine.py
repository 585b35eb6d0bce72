import pandas as pd
import pytest

from bond_yield_engine.bonds import BondInput, InvalidBondInput
from bond_yield_engine.engine import BondCalculationResult, BondCalculator, calculate_bond


@pytest.fixture(scope="module")
def as_of():
    return pd.Timestamp("2026-02-13")


@pytest.fixture(scope="module")
def discount_bond():
    return BondInput(
        face_value=1000.0,
        annual_coupon_rate=5.0,
        market_price=950.0,
        years_to_maturity=10,
        coupon_frequency=2,
    )


@pytest.fixture(scope="module")
def result(discount_bond, as_of):
    return calculate_bond(discount_bond, as_of)


def test_discount_bond_full_result(result):
    assert result.current_yield == pytest.approx(0.05263, abs=1e-5)
    assert abs(result.yield_to_maturity - 0.0566) < 1e-3
    assert result.total_interest_earned == pytest.approx(500.0)
    assert result.premium_discount == "discount"
    assert result.premium_discount_amount == pytest.approx(50.0)
    assert len(result.cash_flow_schedule) == 20
    assert all(e.coupon_payment == 25.0 for e in result.cash_flow_schedule)


def test_ytm_above_current_yield_for_discount_bond(result):
    """Pull to par adds return on top of coupon income."""
    assert result.yield_to_maturity > result.current_yield


def test_par_bond(as_of):
    res = calculate_bond(BondInput(1000.0, 5.0, 1000.0, 5, 1), as_of)
    assert res.yield_to_maturity == pytest.approx(0.05, abs=1e-9)
    assert res.current_yield == pytest.approx(0.05)
    assert res.premium_discount == "par"
    assert res.premium_discount_amount == 0.0
    assert len(res.cash_flow_schedule) == 5


def test_zero_coupon_bond(as_of):
    res = calculate_bond(BondInput(1000.0, 0.0, 700.0, 8, 2), as_of)
    assert res.total_interest_earned == 0.0
    assert res.current_yield == 0.0
    assert res.yield_to_maturity > 0.0
    assert res.cash_flow_schedule[-1].cumulative_interest == 0.0


@pytest.mark.parametrize("years, freq", [(1, 1), (1, 2), (7, 1), (15, 2), (30, 2)])
def test_schedule_length_equals_period_count(years, freq, as_of):
    res = calculate_bond(BondInput(1000.0, 4.0, 980.0, years, freq), as_of)
    assert len(res.cash_flow_schedule) == years * freq
    assert res.cash_flow_schedule[-1].remaining_principal == 0.0
    assert all(e.remaining_principal == 1000.0 for e in res.cash_flow_schedule[:-1])


def test_identical_inputs_give_identical_results(discount_bond, as_of):
    first = calculate_bond(discount_bond, as_of)
    second = calculate_bond(discount_bond, as_of)
    assert first == second


def test_metrics_do_not_depend_on_reference_date(discount_bond):
    a = calculate_bond(discount_bond, pd.Timestamp("2026-01-01"))
    b = calculate_bond(discount_bond)
    assert a.current_yield == b.current_yield
    assert a.yield_to_maturity == b.yield_to_maturity
    assert a.total_interest_earned == b.total_interest_earned
    assert (a.premium_discount, a.premium_discount_amount) == (b.premium_discount, b.premium_discount_amount)


def test_to_dict_wire_shape(result):
    payload = result.to_dict()
    assert set(payload) == {
        "currentYield",
        "yieldToMaturity",
        "totalInterestEarned",
        "premiumDiscount",
        "premiumDiscountAmount",
        "cashFlowSchedule",
    }
    first = payload["cashFlowSchedule"][0]
    assert first == {
        "period": 1,
        "paymentDate": "2026-08-13",
        "couponPayment": 25.0,
        "cumulativeInterest": 25.0,
        "remainingPrincipal": 1000.0,
    }
    assert payload["cashFlowSchedule"][-1]["paymentDate"] == "2036-02-13"
    assert payload["cashFlowSchedule"][-1]["remainingPrincipal"] == 0.0


def test_schedule_frame(result):
    frame = result.schedule_frame()
    assert isinstance(frame, pd.DataFrame)
    assert len(frame) == 20
    assert pd.api.types.is_datetime64_any_dtype(frame["payment_date"])
    assert frame["cumulative_interest"].iloc[-1] == pytest.approx(500.0)


def test_calculator_validates_before_calculating(as_of):
    calc = BondCalculator()
    with pytest.raises(InvalidBondInput, match="Coupon frequency"):
        calc.calculate(BondInput(1000.0, 5.0, 950.0, 10, 4), as_of)

    res = calc.calculate(BondInput(1000.0, 5.0, 950.0, 10, 2), as_of)
    assert isinstance(res, BondCalculationResult)


@pytest.mark.parametrize(
    "rate, price, freq",
    [(100.0, 0.01, 2), (0.0, 1e-6, 2), (100.0, 0.01, 1)],
)
def test_extreme_valid_inputs_produce_full_result(rate, price, freq, as_of):
    res = calculate_bond(BondInput(1000.0, rate, price, 100, freq), as_of)
    assert res.yield_to_maturity > 0.0
    assert res.yield_to_maturity < float("inf")
    assert len(res.cash_flow_schedule) == 100 * freq
    assert res.premium_discount == "discount"

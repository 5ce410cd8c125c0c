import numpy as np
import pytest

from bond_valuation_engine.curves import (
    YieldCurve,
    demo_curve,
    curve_qc_report,
    curve_from_shifted_rates,
    parallel_shift_bp,
    steepener_shift_bp,
)
from bond_valuation_engine.errors import InvalidInput


@pytest.fixture(scope="module")
def curve():
    return demo_curve()


def test_interpolate_midpoint_exact():
    c = YieldCurve(np.array([1.0, 3.0]), np.array([0.01, 0.02]))
    assert c.interpolate(2.0) == 0.015


def test_interpolate_flat_below_first_maturity(curve):
    for t in (0.0, 0.25, 0.5, 1.0):
        assert curve.interpolate(t) == curve.rates[0], "Short end should be flat at the first rate"


def test_interpolate_flat_above_last_maturity(curve):
    for t in (30.0, 30.5, 50.0, 100.0):
        assert curve.interpolate(t) == curve.rates[-1], "Long end should be flat at the last rate"


def test_interpolate_between_knots(curve):
    # 5Y 2.5% -> 10Y 3.0%
    assert curve.interpolate(7.5) == pytest.approx(0.0275, abs=1e-15)
    assert curve.rates[0] <= curve.interpolate(4.0) <= curve.rates[-1]


def test_interpolate_array_matches_scalar(curve):
    ts = np.array([0.5, 1.0, 1.5, 4.0, 12.0, 40.0])
    out = curve.interpolate(ts)
    assert isinstance(out, np.ndarray)
    assert out.shape == ts.shape
    expected = np.array([curve.interpolate(float(t)) for t in ts])
    assert np.array_equal(out, expected)


def test_scalar_interpolate_returns_float(curve):
    assert isinstance(curve.interpolate(3), float)


def test_single_point_curve_is_flat():
    c = YieldCurve(np.array([5.0]), np.array([0.04]))
    assert c.interpolate(0.1) == 0.04
    assert c.interpolate(5.0) == 0.04
    assert c.interpolate(25.0) == 0.04


def test_mismatched_lengths_rejected():
    with pytest.raises(InvalidInput):
        YieldCurve(np.array([1.0, 2.0, 3.0]), np.array([0.01, 0.02]))


@pytest.mark.parametrize(
    "maturities, rates",
    [
        ([], []),
        ([2.0, 1.0, 3.0], [0.01, 0.02, 0.03]),
        ([1.0, 1.0, 3.0], [0.01, 0.02, 0.03]),
        ([0.0, 1.0], [0.01, 0.02]),
        ([1.0, np.nan], [0.01, 0.02]),
    ],
)
def test_invalid_curves_rejected(maturities, rates):
    with pytest.raises(InvalidInput):
        YieldCurve(np.array(maturities, dtype=float), np.array(rates, dtype=float))


def test_invalid_input_is_value_error():
    with pytest.raises(ValueError):
        YieldCurve(np.array([1.0]), np.array([0.01, 0.02]))


def test_curve_is_immutable(curve):
    with pytest.raises(ValueError):
        curve.rates[0] = 0.5
    with pytest.raises(AttributeError):
        curve.rates = np.array([0.5])


def test_flat_curve():
    c = YieldCurve.flat(0.05)
    assert np.all(c.rates == 0.05)
    assert c.interpolate(7.3) == 0.05


def test_curve_qc_report_flags(curve):
    qc = curve_qc_report(curve)
    assert len(qc) == len(curve)
    assert qc["rate_non_negative"].all()
    assert qc["maturity_increasing"].all()
    assert np.allclose(qc["rate_bp"], curve.rates * 10000.0)


def test_parallel_shift_moves_every_point(curve):
    up = curve_from_shifted_rates(curve, parallel_shift_bp(25))
    assert np.allclose(up.rates - curve.rates, 0.0025)
    assert np.array_equal(up.maturities, curve.maturities)


def test_steepener_raises_long_end_and_lowers_short_end(curve):
    st = curve_from_shifted_rates(curve, steepener_shift_bp(25))
    assert st.rates[0] < curve.rates[0]
    assert st.rates[-1] > curve.rates[-1]

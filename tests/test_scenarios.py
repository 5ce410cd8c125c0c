import pytest

from bond_valuation_engine.bonds import Bond, price_bond
from bond_valuation_engine.curves import demo_curve
from bond_valuation_engine.scenarios import run_rate_scenarios, standard_rate_scenarios


@pytest.fixture(scope="module")
def curve():
    return demo_curve()


@pytest.fixture(scope="module")
def bond():
    return Bond(face_value=1000.0, coupon_rate=0.04, years_to_maturity=10, coupons_per_year=2)


@pytest.fixture(scope="module")
def table(curve, bond):
    return run_rate_scenarios(curve, bond).set_index("scenario")


def test_base_row_matches_static_price(table, curve, bond):
    assert table.loc["BASE", "price"] == price_bond(curve, bond)
    assert table.loc["BASE", "pnl"] == 0.0


def test_all_standard_scenarios_present(table, curve):
    assert set(standard_rate_scenarios(curve)).issubset(table.index)


def test_parallel_shifts_monotone(table):
    px = table["price"]
    assert px["PAR_-50bp"] > px["PAR_-25bp"] > px["BASE"] > px["PAR_+25bp"] > px["PAR_+50bp"]


def test_pnl_per_100_face_scaling(table, bond):
    assert abs(table.loc["PAR_+25bp", "pnl_per_100_face"] - 100.0 * table.loc["PAR_+25bp", "pnl"] / bond.face_value) < 1e-12

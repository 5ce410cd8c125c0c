from __future__ import annotations

import logging
import numbers

import numpy as np
import pandas as pd
from dataclasses import dataclass

from scipy.optimize import brentq

from .curves import YieldCurve
from .errors import InvalidInput

logger = logging.getLogger(__name__)


def _require_int(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidInput(f"{name} must be an integer")
    return int(value)


@dataclass(frozen=True)
class Bond:
    face_value: float
    coupon_rate: float          # annual, decimal; 0 for zero-coupon
    years_to_maturity: int
    coupons_per_year: int = 2

    def __post_init__(self):
        if not self.face_value > 0:
            raise InvalidInput("Face value must be positive")
        if not self.coupon_rate >= 0:
            raise InvalidInput("Coupon rate cannot be negative")
        years = _require_int("Years to maturity", self.years_to_maturity)
        if years <= 0:
            raise InvalidInput("Years to maturity must be positive")
        freq = _require_int("Coupons per year", self.coupons_per_year)
        if freq <= 0:
            raise InvalidInput("Coupons per year must be positive")

        object.__setattr__(self, "face_value", float(self.face_value))
        object.__setattr__(self, "coupon_rate", float(self.coupon_rate))
        object.__setattr__(self, "years_to_maturity", years)
        object.__setattr__(self, "coupons_per_year", freq)

    @property
    def is_zero_coupon(self) -> bool:
        return self.coupon_rate == 0.0 and self.coupons_per_year == 1

    @property
    def n_periods(self) -> int:
        return self.years_to_maturity * self.coupons_per_year

    @property
    def coupon_payment(self) -> float:
        return self.face_value * self.coupon_rate / self.coupons_per_year


def price_bond(curve: YieldCurve, bond: Bond) -> float:
    """
    Present value of the bond's cash flows discounted on `curve`.

    Discrete compounding at the coupon frequency. Each coupon i is discounted
    at the curve rate for t_i = i / freq; the face value at the rate for the
    final maturity. A zero-coupon bond is discounted annually.
    """
    T = bond.years_to_maturity

    if bond.is_zero_coupon:
        ytm = curve.interpolate(T)
        return bond.face_value / (1.0 + ytm) ** T

    freq = bond.coupons_per_year
    n = bond.n_periods

    periods = np.arange(1, n + 1)
    ytms = curve.interpolate(periods / float(freq))
    pv = float(np.sum(bond.coupon_payment / (1.0 + ytms / freq) ** periods))

    final_ytm = curve.interpolate(T)
    pv += bond.face_value / (1.0 + final_ytm / freq) ** n

    logger.debug("priced bond T=%d freq=%d coupon=%.6f -> %.6f", T, freq, bond.coupon_rate, pv)
    return pv


def cashflow_table(curve: YieldCurve, bond: Bond) -> pd.DataFrame:
    """
    One row per cash flow: coupons at t_i = i / freq, then the principal at
    maturity. Discounting matches price_bond, so the pv column sums to the price.
    """
    T = bond.years_to_maturity
    cols = ["period", "time", "kind", "cashflow", "rate", "discount_factor", "pv"]

    if bond.is_zero_coupon:
        rate = curve.interpolate(T)
        df = 1.0 / (1.0 + rate) ** T
        return pd.DataFrame([(1, float(T), "principal", bond.face_value, rate, df, bond.face_value * df)], columns=cols)

    freq = bond.coupons_per_year
    n = bond.n_periods

    periods = np.arange(1, n + 1)
    times = periods / float(freq)
    rates = curve.interpolate(times)
    dfs = 1.0 / (1.0 + rates / freq) ** periods

    coupons = pd.DataFrame(
        {
            "period": periods,
            "time": times,
            "kind": "coupon",
            "cashflow": bond.coupon_payment,
            "rate": rates,
            "discount_factor": dfs,
        }
    )
    coupons["pv"] = coupons["cashflow"] * coupons["discount_factor"]

    final_rate = curve.interpolate(T)
    final_df = 1.0 / (1.0 + final_rate / freq) ** n
    principal = pd.DataFrame([(n, float(T), "principal", bond.face_value, final_rate, final_df, bond.face_value * final_df)], columns=cols)

    return pd.concat([coupons[cols], principal], ignore_index=True)


def yield_to_maturity(bond: Bond, price: float, lower: float = -0.5, upper: float = 1.0) -> float:
    """
    Flat annual rate y such that pricing `bond` on a flat curve at y gives `price`.
    """
    if not price > 0:
        raise ValueError("Price must be positive.")

    def residual(y: float) -> float:
        flat = YieldCurve(np.array([1.0]), np.array([y]))
        return price_bond(flat, bond) - price

    fa, fb = residual(lower), residual(upper)
    if fa * fb > 0:
        raise ValueError("Root not bracketed, price outside the reachable range.")

    return float(brentq(residual, lower, upper, maxiter=300, xtol=1e-14))

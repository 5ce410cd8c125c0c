from __future__ import annotations

import logging

import numpy as np
import pandas as pd
from typing import NamedTuple, Optional, Tuple

from scipy import stats

from .bonds import Bond, price_bond
from .curves import YieldCurve
from .errors import InvalidInput

logger = logging.getLogger(__name__)

DEFAULT_SHOCK_STD = 0.005  # 50bp one-sigma shock per curve point


class SimulationResult(NamedTuple):
    mean: float
    std: float


def summarize_prices(prices: np.ndarray) -> SimulationResult:
    """Arithmetic mean and unbiased (N-1) standard deviation."""
    prices = np.asarray(prices, dtype=float)
    if prices.shape[0] < 2:
        raise ValueError("Need at least two prices for a sample standard deviation.")
    mean = float(np.mean(prices))
    std = float(np.sqrt(np.sum((prices - mean) ** 2) / (prices.shape[0] - 1)))
    return SimulationResult(mean, std)


def mean_confidence_interval(prices: np.ndarray, level: float = 0.95) -> Tuple[float, float]:
    """Student-t interval for the Monte Carlo mean price."""
    if not (0.0 < level < 1.0):
        raise ValueError("level must be in (0, 1)")
    mean, std = summarize_prices(prices)
    n = len(prices)
    half = float(stats.t.ppf(0.5 + level / 2.0, df=n - 1)) * std / np.sqrt(n)
    return mean - half, mean + half


def price_distribution(prices: np.ndarray) -> pd.Series:
    """count/mean/std/min/percentiles/max of simulated prices."""
    return pd.Series(np.asarray(prices, dtype=float), name="price").describe(percentiles=[0.01, 0.05, 0.5, 0.95, 0.99])


class BondValuationEngine:
    """
    Static and Monte Carlo valuation of one bond against a base curve.

    Each Monte Carlo trial re-prices the bond on a curve rebuilt at integer
    years 1..T from the base curve plus independent N(0, shock_std) shocks,
    floored at zero. The generator belongs to the engine: pass `seed` for
    reproducible runs, or `rng` to supply one.
    """

    def __init__(
        self,
        face_value: float,
        coupon_rate: float,
        years_to_maturity: int,
        coupons_per_year: int,
        curve: YieldCurve,
        n_simulations: int,
        shock_std: float = DEFAULT_SHOCK_STD,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.bond = Bond(face_value, coupon_rate, years_to_maturity, coupons_per_year)

        if isinstance(n_simulations, bool) or not isinstance(n_simulations, (int, np.integer)):
            raise InvalidInput("Number of simulations must be an integer")
        if n_simulations <= 0:
            raise InvalidInput("Number of simulations must be positive")
        if n_simulations < 2:
            raise InvalidInput("Number of simulations must be at least 2 for a standard deviation")
        if not shock_std >= 0:
            raise InvalidInput("Shock standard deviation cannot be negative")

        self.curve = curve
        self.n_simulations = int(n_simulations)
        self.shock_std = float(shock_std)
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    @property
    def is_zero_coupon(self) -> bool:
        return self.bond.is_zero_coupon

    def price(self, curve: YieldCurve) -> float:
        return price_bond(curve, self.bond)

    def static_price(self) -> float:
        return self.price(self.curve)

    def shift_curve(self) -> YieldCurve:
        years = np.arange(1, self.bond.years_to_maturity + 1, dtype=float)
        base = np.asarray(self.curve.interpolate(years), dtype=float)
        shocks = np.asarray(self.rng.normal(0.0, self.shock_std, size=len(years)), dtype=float)
        return YieldCurve(years, np.maximum(0.0, base + shocks))

    def simulate_prices(self) -> np.ndarray:
        logger.info(
            "running %d trials (T=%d, freq=%d, shock_std=%.4f)",
            self.n_simulations,
            self.bond.years_to_maturity,
            self.bond.coupons_per_year,
            self.shock_std,
        )
        prices = np.empty(self.n_simulations, dtype=float)
        for i in range(self.n_simulations):
            prices[i] = self.price(self.shift_curve())
        return prices

    def monte_carlo(self) -> SimulationResult:
        result = summarize_prices(self.simulate_prices())
        logger.info("monte carlo mean=%.6f std=%.6f", result.mean, result.std)
        return result

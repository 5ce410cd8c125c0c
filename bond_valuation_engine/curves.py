from __future__ import annotations

import numpy as np
import pandas as pd
from dataclasses import dataclass
from typing import Callable, Iterable, Union

from .errors import InvalidInput

ArrayLike = Union[float, Iterable[float], np.ndarray]

DEMO_MATURITIES = (1.0, 2.0, 3.0, 5.0, 10.0, 30.0)
DEMO_RATES = (0.01, 0.015, 0.02, 0.025, 0.03, 0.035)


@dataclass(frozen=True, eq=False)
class YieldCurve:
    """
    Term structure of annual rates on a grid of maturities (years).

    - Within the grid: linear interpolation in rate.
    - Below the first maturity: flat at the first rate.
    - Above the last maturity: flat at the last rate.
    """
    maturities: np.ndarray
    rates: np.ndarray

    def __post_init__(self):
        mats = np.array(self.maturities, dtype=float).reshape(-1)
        rts = np.array(self.rates, dtype=float).reshape(-1)

        if mats.shape[0] != rts.shape[0]:
            raise InvalidInput("Maturities and rates must have the same size")
        if mats.shape[0] == 0:
            raise InvalidInput("Yield curve needs at least one point")
        if not (np.all(np.isfinite(mats)) and np.all(np.isfinite(rts))):
            raise InvalidInput("Maturities and rates must be finite")
        if np.any(mats <= 0.0):
            raise InvalidInput("Maturities must be positive")
        if np.any(np.diff(mats) <= 0.0):
            raise InvalidInput("Maturities must be strictly increasing")

        mats.setflags(write=False)
        rts.setflags(write=False)
        object.__setattr__(self, "maturities", mats)
        object.__setattr__(self, "rates", rts)

    @classmethod
    def flat(cls, rate: float, maturities: Iterable[float] = DEMO_MATURITIES) -> "YieldCurve":
        mats = np.array(list(maturities), dtype=float)
        return cls(mats, np.full(len(mats), float(rate)))

    def __len__(self) -> int:
        return int(self.maturities.shape[0])

    def interpolate(self, t: ArrayLike):
        """Rate at time(s) t. Scalar in, float out; array in, array out."""
        x = np.asarray(t, dtype=float)
        mats, rts = self.maturities, self.rates
        n = len(mats)

        # first maturity >= t
        idx = np.searchsorted(mats, x, side="left")
        lo = np.clip(idx - 1, 0, n - 1)
        hi = np.clip(idx, 0, n - 1)

        t0, t1 = mats[lo], mats[hi]
        r0, r1 = rts[lo], rts[hi]

        # lo == hi only off the ends of the grid, where r1 - r0 == 0
        span = np.where(hi > lo, t1 - t0, 1.0)
        out = r0 + (r1 - r0) * (x - t0) / span

        if out.ndim == 0:
            return float(out)
        return out

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({"maturity": self.maturities, "rate": self.rates})


def demo_curve() -> YieldCurve:
    """Upward sloping demonstration curve, 1%..3.5% over 1Y..30Y."""
    return YieldCurve(np.array(DEMO_MATURITIES), np.array(DEMO_RATES))


def curve_from_frame(frame: pd.DataFrame) -> YieldCurve:
    missing = {"maturity", "rate"} - set(frame.columns)
    if missing:
        raise InvalidInput(f"Curve data missing columns: {sorted(missing)}")
    frame = frame.sort_values("maturity").reset_index(drop=True)
    return YieldCurve(frame["maturity"].to_numpy(dtype=float), frame["rate"].to_numpy(dtype=float))


def curve_qc_report(curve: YieldCurve) -> pd.DataFrame:
    out = curve.to_frame()
    out["rate_bp"] = out["rate"] * 10000.0
    out["rate_non_negative"] = out["rate"] >= 0.0
    out["maturity_increasing"] = np.r_[True, np.diff(curve.maturities) > 0.0]
    return out


def curve_from_shifted_rates(curve: YieldCurve, shift_func: Callable[[float], float]) -> YieldCurve:
    """Build a new curve by shifting each point's rate by shift_func(maturity) (decimal)."""
    shifts = np.array([shift_func(t) for t in curve.maturities], dtype=float)
    return YieldCurve(curve.maturities.copy(), curve.rates + shifts)


def parallel_shift_bp(bp: float):
    s = bp / 10000.0
    return lambda tau: s


def steepener_shift_bp(bp: float, pivot: float = 2.0, long: float = 10.0):
    A = bp / 10000.0

    def f(tau: float) -> float:
        if tau <= pivot:
            return -A
        if tau >= long:
            return +A
        w = (tau - pivot) / (long - pivot)
        return (1 - w) * (-A) + w * (+A)

    return f


def flattener_shift_bp(bp: float, pivot: float = 2.0, long: float = 10.0):
    A = bp / 10000.0

    def f(tau: float) -> float:
        if tau <= pivot:
            return +A
        if tau >= long:
            return -A
        w = (tau - pivot) / (long - pivot)
        return (1 - w) * (+A) + w * (-A)

    return f

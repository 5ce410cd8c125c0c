from __future__ import annotations

import pandas as pd

from .bonds import Bond, price_bond
from .curves import (
    YieldCurve,
    curve_from_shifted_rates,
    parallel_shift_bp,
    steepener_shift_bp,
    flattener_shift_bp,
)


def standard_rate_scenarios(curve: YieldCurve) -> dict:
    return {
        "PAR_-50bp": curve_from_shifted_rates(curve, parallel_shift_bp(-50)),
        "PAR_-25bp": curve_from_shifted_rates(curve, parallel_shift_bp(-25)),
        "PAR_+25bp": curve_from_shifted_rates(curve, parallel_shift_bp(+25)),
        "PAR_+50bp": curve_from_shifted_rates(curve, parallel_shift_bp(+50)),
        "STEEPENER_25bp": curve_from_shifted_rates(curve, steepener_shift_bp(25)),
        "FLATTENER_25bp": curve_from_shifted_rates(curve, flattener_shift_bp(25)),
    }


def run_rate_scenarios(curve: YieldCurve, bond: Bond) -> pd.DataFrame:
    """Deterministic re-pricing of `bond` under the standard curve shifts, with PnL against base."""
    base = price_bond(curve, bond)

    rows = [{"scenario": "BASE", "price": base, "pnl": 0.0}]
    for name, scurve in standard_rate_scenarios(curve).items():
        px = price_bond(scurve, bond)
        rows.append({"scenario": name, "price": px, "pnl": px - base})

    out = pd.DataFrame(rows)
    out["pnl_per_100_face"] = 100.0 * out["pnl"] / bond.face_value
    return out

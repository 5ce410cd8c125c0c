"""
Bond Valuation Engine

Modules:
- curves: yield curve object + linear interpolation + curve shifts
- bonds: bond terms + discounted cash-flow pricing + yield solve
- simulation: static / Monte Carlo valuation engine + sample statistics
- scenarios: deterministic rate scenario runner
- cli: command-line front end

Callers should import from this package.
"""
from .errors import InvalidInput
from .curves import YieldCurve, demo_curve
from .bonds import Bond, price_bond, cashflow_table, yield_to_maturity
from .simulation import BondValuationEngine, SimulationResult

__all__ = [
    "InvalidInput",
    "YieldCurve",
    "demo_curve",
    "Bond",
    "price_bond",
    "cashflow_table",
    "yield_to_maturity",
    "BondValuationEngine",
    "SimulationResult",
]

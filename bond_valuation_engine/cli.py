# bond_valuation_engine/cli.py
import argparse
import logging
import os
import sys
from typing import Callable, List, Optional

import pandas as pd

from .bonds import cashflow_table, yield_to_maturity
from .curves import YieldCurve, curve_from_frame, demo_curve
from .errors import InvalidInput
from .scenarios import run_rate_scenarios
from .simulation import DEFAULT_SHOCK_STD, BondValuationEngine, mean_confidence_interval, summarize_prices

logger = logging.getLogger(__name__)

# (argument dest, prompt, parser) in prompting order
PROMPTS = [
    ("face_value", "Enter bond face value: ", float),
    ("coupon_rate", "Enter annual coupon rate (as a decimal): ", float),
    ("years", "Enter years to maturity: ", int),
    ("coupons_per_year", "Enter coupons per year: ", int),
    ("simulations", "Enter number of Monte Carlo simulations: ", int),
]


# ---------- helpers ----------
def _load_curve(path: Optional[str]) -> YieldCurve:
    if path is None:
        return demo_curve()
    if not os.path.isfile(path):
        raise InvalidInput(f"curve file not found: {path}")
    try:
        frame = pd.read_csv(path)
    except OSError as e:
        raise InvalidInput(f"could not read curve file {path}: {e}") from e
    return curve_from_frame(frame)


def _fill_missing(args: argparse.Namespace, ask: Callable[[str], str]) -> None:
    for dest, prompt, parse in PROMPTS:
        if getattr(args, dest) is not None:
            continue
        try:
            raw = ask(prompt).strip()
        except EOFError:
            raise InvalidInput(f"no value given for {dest.replace('_', ' ')}")
        try:
            setattr(args, dest, parse(raw))
        except ValueError:
            raise InvalidInput(f"could not parse {dest.replace('_', ' ')}: {raw!r}")


# ---------- cli ----------
def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Static and Monte Carlo bond pricing against a yield curve")
    p.add_argument("--face-value", type=float, default=None, help="Bond face value")
    p.add_argument("--coupon-rate", type=float, default=None, help="Annual coupon rate as a decimal (0 for zero-coupon)")
    p.add_argument("--years", type=int, default=None, help="Whole years to maturity")
    p.add_argument("--coupons-per-year", type=int, default=None, help="Coupon payments per year")
    p.add_argument("--simulations", type=int, default=None, help="Number of Monte Carlo trials (>= 2)")
    p.add_argument("--curve", default=None, help="CSV with columns maturity,rate (default: demonstration curve)")
    p.add_argument("--seed", type=int, default=None, help="Seed for the Monte Carlo generator (default: OS entropy)")
    p.add_argument("--shock-std", type=float, default=DEFAULT_SHOCK_STD, help="Std dev of per-point rate shocks (default: 0.005)")
    p.add_argument("--cashflows", action="store_true", help="Print the discounted cash-flow table")
    p.add_argument("--scenarios", action="store_true", help="Print deterministic rate scenario prices")
    p.add_argument("--ytm", action="store_true", help="Print the flat yield that reproduces the static price")
    p.add_argument("--confidence", type=float, default=None, help="Print a confidence interval for the Monte Carlo mean, e.g. 0.95")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def run(args: argparse.Namespace, ask: Callable[[str], str] = input) -> None:
    _fill_missing(args, ask)
    curve = _load_curve(args.curve)

    engine = BondValuationEngine(
        args.face_value,
        args.coupon_rate,
        args.years,
        args.coupons_per_year,
        curve,
        args.simulations,
        shock_std=args.shock_std,
        seed=args.seed,
    )

    static_price = engine.static_price()
    prices = engine.simulate_prices()
    mc_price, mc_std = summarize_prices(prices)

    print("\nResults:")
    print(f"Static Bond Price: ${static_price:.2f}")
    print(f"Monte Carlo Bond Price: ${mc_price:.2f} ± ${mc_std:.2f}")
    if args.ytm:
        try:
            print(f"Yield to Maturity (flat): {yield_to_maturity(engine.bond, static_price):.4%}")
        except ValueError as e:
            logger.warning("yield solve failed: %s", e)
            print("Yield to Maturity (flat): n/a")

    if args.confidence is not None:
        lo, hi = mean_confidence_interval(prices, args.confidence)
        print(f"{args.confidence:.0%} CI for Monte Carlo mean: [${lo:.2f}, ${hi:.2f}]")

    if args.cashflows:
        print("\nCash flows:")
        print(cashflow_table(curve, engine.bond).round(6).to_string(index=False))

    if args.scenarios:
        print("\nRate scenarios:")
        print(run_rate_scenarios(curve, engine.bond).round(4).to_string(index=False))


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        run(args)
    except ValueError as e:
        logger.debug("aborting", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

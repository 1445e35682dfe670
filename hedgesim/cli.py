"""Command line entry point: simulate long and short delta hedgers of a call."""

from __future__ import annotations

import argparse
import random
from collections.abc import Sequence
from pathlib import Path

import matplotlib.pyplot as plt

from .database import DEFAULT_DATABASE_DIR
from .dynamics import BlackScholes
from .figures import plot_long_vs_short
from .market import AssetProcess, Broker, TraderProcess
from .mechanics import LongCallConstHedger, ShortCallConstHedger


def _positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {text!r}")
    return value


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="hedgesim",
        description="Simulate delta hedging of a written and an owned call option.",
    )
    parser.add_argument("--simulations", type=_positive_int, default=1000,
                        help="number of simulated paths (default: 1000)")
    parser.add_argument("--length", type=_positive_int, default=255,
                        help="steps per simulated path (default: 255)")
    parser.add_argument("--ticker", default="SPX", help="asset ticker (default: SPX)")
    parser.add_argument("--strike", type=float, default=6100.0,
                        help="option strike (default: 6100)")
    parser.add_argument("--maturity", type=_positive_int, default=200,
                        help="option maturity in steps (default: 200)")
    parser.add_argument("--database-dir", type=Path, default=DEFAULT_DATABASE_DIR,
                        help="directory holding the _<TICKER>.json price files")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for the price process random numbers")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the simulation, show the figures and wait for Enter."""
    args = _parse_args(argv)
    rng = random.Random(args.seed) if args.seed is not None else None

    broker = Broker(args.simulations, args.length)
    asset = AssetProcess(broker, BlackScholes(rng=rng), args.ticker, args.database_dir)
    long_hedger = TraderProcess(
        broker, LongCallConstHedger(asset, args.strike, args.maturity),
        "Bob", 0.0, args.database_dir,
    )
    short_hedger = TraderProcess(
        broker, ShortCallConstHedger(asset, args.strike, args.maturity),
        "Tom", 0.0, args.database_dir,
    )

    broker.open()

    figures = plot_long_vs_short(asset, long_hedger, short_hedger)
    plt.show(block=False)
    try:
        input("\n[Enter]")
    finally:
        for fig in figures:
            plt.close(fig)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
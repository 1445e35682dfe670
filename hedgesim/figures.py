"""Figures summarising simulated prices, portfolios and trader performance."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from .database import DEFAULT_DATABASE_DIR, ts_close
from .min_max_list import MinMaxList
from .plot_tools import (
    compare_ts_plot,
    histogram_plot,
    normal_distribution_qq,
    stem_plot,
    time_series_plot,
)
from .stats import arithmetic_mean, standard_deviation

_BLACK = "#000000"
_BLUE = "#0492C2"
_GREEN = "#2CA02C"

# Level of the strike line drawn on replicating-portfolio figures.
_STRIKE_LEVEL = 6100.0

# Simulation shown in detail when comparing long and short hedgers.
_SAMPLE_SIM_IDX = 999


def performance_histogram(sample: MinMaxList) -> Figure:
    """Histogram and normal Q-Q plot of final portfolio values.

    Slots of ``sample`` that were never filled count as zero.
    """
    values = [0.0 if value is None else value for value in sample.values]

    fig = plt.figure()

    ax1 = fig.add_subplot(2, 1, 1)
    ax1.grid(True)
    histogram_plot(ax1, values)
    ax1.set_xlabel("Value")
    ax1.set_ylabel("Frequency")

    ax2 = fig.add_subplot(2, 1, 2)
    ax2.grid(True)
    normal_distribution_qq(ax2, values, arithmetic_mean(values), standard_deviation(values))
    ax2.legend(loc="upper left", bbox_to_anchor=(0.1, 0.95))
    ax2.set_xlabel("Theoretical")
    ax2.set_ylabel("Sample")

    return fig


def performance_plot(
    portfolio_process: Sequence[float],
    price_process: Sequence[float],
    return_process: Sequence[float],
) -> Figure:
    """Asset price against a replicating portfolio, next to the asset's returns."""
    portfolio = list(portfolio_process)
    prices = list(price_process)
    returns = list(return_process)

    n = len(prices)
    x = [float(i) for i in range(n)]

    fig = plt.figure()

    ax1 = fig.add_subplot(1, 2, 1)
    ax1.grid(True)
    secondary = compare_ts_plot(ax1, x, prices, portfolio, None, None, _BLUE, None)
    ax1.plot(x, [_STRIKE_LEVEL] * n, color=_BLACK, linestyle=":", linewidth=2.0,
             label="Strike")
    ax1.set_ylabel("S(t)", color=_BLACK)
    secondary.set_ylabel("Π(t)", color=_BLUE)

    ax2 = fig.add_subplot(1, 2, 2)
    ax2.grid(True)
    stem_plot(ax2, [float(i) for i in range(len(returns))], returns, None, None)
    ax2.set_ylabel("% (bp)", color=_BLACK)

    return fig


def portfolio_process_figure(portfolio_process: Sequence[float]) -> Figure:
    """Line plot of one portfolio value path."""
    fig = plt.figure()
    ax = fig.add_subplot(1, 1, 1)
    time_series_plot(ax, list(portfolio_process))
    return fig


def volatility_visual(
    asset: Any,
    sim_idx: int,
    database_dir: str | Path = DEFAULT_DATABASE_DIR,
) -> Figure:
    """Recent real prices and returns followed by one simulated path."""
    simulated_price = list(asset.price_processes[sim_idx])
    simulated_returns = list(asset.return_processes[sim_idx])

    history = ts_close(asset.ticker, len(simulated_price), database_dir)
    price, log_return = history.price, history.log_return
    if not price:
        raise ValueError(f"not enough price history for ticker {asset.ticker!r}")

    x1 = [float(i) for i in range(len(price))]

    fig = plt.figure()

    ax1 = fig.add_subplot(2, 1, 1)
    ax1.grid(True)
    start = len(price) - 1
    x2 = [float(i) for i in range(start, start + len(simulated_price))]
    ax1.plot(x2, simulated_price, color=_GREEN)
    ax1.plot(x1, price, color=_BLACK)
    ax1.set_ylabel("S(t)", color=_BLACK)

    ax2 = fig.add_subplot(2, 1, 2)
    ax2.grid(True)
    x2 = [float(i) for i in range(len(price), len(price) - 1 + len(simulated_price))]
    stem_plot(ax2, x2, simulated_returns, _GREEN, None)
    stem_plot(ax2, x1, log_return, _BLACK, None)
    ax2.set_ylabel("% (bp)", color=_BLACK)

    return fig


def plot_long_vs_short(asset: Any, long: Any, short: Any) -> list[Figure]:
    """Performance figures of a long and a short hedger on the same asset.

    Returns the two performance histograms followed by the two portfolio
    figures for one sample simulation.
    """
    figures = [
        performance_histogram(long.performance),
        performance_histogram(short.performance),
    ]

    sim_idx = min(_SAMPLE_SIM_IDX, len(asset.price_processes) - 1)
    price = asset.price_processes[sim_idx]
    returns = asset.return_processes[sim_idx]

    figures.append(performance_plot(long.portfolio_processes[sim_idx], price, returns))
    figures.append(performance_plot(short.portfolio_processes[sim_idx], price, returns))
    return figures
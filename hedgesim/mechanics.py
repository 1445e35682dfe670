"""Trading strategies followed by simulated traders."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .bsm import black_scholes_call_delta
from .database import DEFAULT_DATABASE_DIR, ts_close
from .derivatives import European
from .stats import standard_deviation

_CONTRACT_SIZE = 100


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def hedge_due_diligence(log_returns: Sequence[float]) -> float:
    """Estimate the volatility used for delta hedging from percent log returns."""
    return standard_deviation(log_returns) / 100.0


def lurker_strategy(trader: Any, asset: Any) -> None:
    """Buy one unit at the start and sell it at the end of the simulation."""
    broker = trader.broker
    t = broker.time_idx
    if t == 0:
        broker.buy_order(trader, asset, 1)
    if t == broker.simulation_length:
        broker.sell_order(trader, asset, 1)


def _rebalance(trader: Any, asset: Any, target: int) -> None:
    broker = trader.broker
    change = target - trader.position(broker.sim_idx, asset)
    if change > 0:
        broker.buy_order(trader, asset, change)
    elif change < 0:
        broker.sell_order(trader, asset, -change)


def _target_hedge(trader: Any, asset: Any, strike: float, maturity: int, sigma: float) -> int | None:
    broker = trader.broker
    tau = maturity - broker.time_idx
    if tau <= 0:
        return None
    delta = black_scholes_call_delta(
        broker.spot_price(asset), strike, sigma, broker.interest(), float(tau)
    )
    return _round_half_away(delta * _CONTRACT_SIZE)


def long_call_hedge(trader: Any, asset: Any, strike: float, maturity: int, sigma: float) -> None:
    """Delta-hedge a written call: hold delta shares, write at t=0, unwind at maturity."""
    broker = trader.broker
    t = broker.time_idx

    target = _target_hedge(trader, asset, strike, maturity, sigma)
    if target is not None:
        _rebalance(trader, asset, target)

    if t == 0:
        broker.write_eu_option_on_autofill(European.CALL, asset, strike, maturity, trader)

    if t == maturity:
        held = trader.position(broker.sim_idx, asset)
        if held > 0:
            broker.sell_order(trader, asset, held)


def short_call_hedge(trader: Any, asset: Any, strike: float, maturity: int, sigma: float) -> None:
    """Delta-hedge an owned call: short delta shares, buy at t=0, cover at maturity."""
    broker = trader.broker
    t = broker.time_idx

    target = _target_hedge(trader, asset, strike, maturity, sigma)
    if target is not None:
        _rebalance(trader, asset, -target)

    if t == 0:
        broker.own_eu_option_on_autofill(European.CALL, asset, strike, maturity, trader)

    if t == maturity:
        held = trader.position(broker.sim_idx, asset)
        if held < 0:
            broker.buy_order(trader, asset, -held)


class Mechanics(ABC):
    """A trading pattern followed by a trader."""

    @abstractmethod
    def trade(self, trader: Any) -> None:
        """Trade at the broker's current simulation step."""

    def due_diligence(self, database_dir: str | Path = DEFAULT_DATABASE_DIR) -> None:
        """Fill unset parameters from historical data; nothing by default."""


@dataclass
class Lurker(Mechanics):
    """Buys one unit of the asset at the start and holds it."""

    asset: Any

    def trade(self, trader: Any) -> None:
        lurker_strategy(trader, self.asset)


@dataclass
class _CallHedger(Mechanics):
    asset: Any
    strike: float
    maturity: int
    implied_volatility: float | None = None

    def _hedge(self, trader: Any, sigma: float) -> None:
        raise NotImplementedError

    def trade(self, trader: Any) -> None:
        if self.implied_volatility is None:
            raise ValueError(
                "implied volatility is not set; call due_diligence() or provide it"
            )
        self._hedge(trader, self.implied_volatility)

    def due_diligence(self, database_dir: str | Path = DEFAULT_DATABASE_DIR) -> None:
        if self.implied_volatility is None:
            history = ts_close(self.asset.ticker, None, database_dir)
            self.implied_volatility = hedge_due_diligence(history.log_return)


@dataclass
class LongCallConstHedger(_CallHedger):
    """Writes a call and hedges it at every step."""

    def _hedge(self, trader: Any, sigma: float) -> None:
        long_call_hedge(trader, self.asset, self.strike, self.maturity, sigma)


@dataclass
class ShortCallConstHedger(_CallHedger):
    """Owns a call and hedges it at every step."""

    def _hedge(self, trader: Any, sigma: float) -> None:
        short_call_hedge(trader, self.asset, self.strike, self.maturity, sigma)
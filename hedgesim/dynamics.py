"""Price dynamics driving simulated assets."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .database import DEFAULT_DATABASE_DIR, ts_close
from .stats import arithmetic_mean, standard_deviation


def black_scholes_dy(mu: float, sigma: float, rng: random.Random | None = None) -> float:
    """Draw one log-price increment of a geometric Brownian motion."""
    gauss = rng.gauss if rng is not None else random.gauss
    dw = gauss(0.0, 1.0)
    drift = mu - 0.5 * sigma * sigma
    return drift + sigma * dw


def black_scholes_inference(log_returns: Sequence[float]) -> tuple[float, float]:
    """Estimate (mu, sigma) from log returns given in percent."""
    mu = arithmetic_mean(log_returns) / 100.0
    sigma = standard_deviation(log_returns) / 100.0
    return mu, sigma


class Dynamics(ABC):
    """A model of how an asset's price moves from one step to the next."""

    def inference(self, ticker: str, database_dir: str | Path = DEFAULT_DATABASE_DIR) -> float:
        """Fill unset parameters from history and return the starting price."""
        close = ts_close(ticker, None, database_dir)
        if not close.price:
            raise ValueError(f"not enough price history for ticker {ticker!r}")
        self._fit(close.log_return)
        return close.price[-1]

    def _fit(self, log_returns: Sequence[float]) -> None:
        """Set parameters from historical log returns; nothing by default."""

    @abstractmethod
    def dy(self) -> float:
        """Return a log-return increment: S(t+1) = S(t) * exp(dy)."""


@dataclass
class BlackScholes(Dynamics):
    """Constant drift ``mu`` and volatility ``sigma``."""

    mu: float | None = None
    sigma: float | None = None
    rng: random.Random | None = field(default=None, repr=False, compare=False)

    def _fit(self, log_returns: Sequence[float]) -> None:
        mu, sigma = black_scholes_inference(log_returns)
        if self.mu is None:
            self.mu = mu
        if self.sigma is None:
            self.sigma = sigma

    def dy(self) -> float:
        if self.mu is None or self.sigma is None:
            raise ValueError("BlackScholes parameters are not set; call inference() first")
        return black_scholes_dy(self.mu, self.sigma, self.rng)


@dataclass
class Binomial(Dynamics):
    """Constant up factor ``u`` and down factor ``d``."""

    u: float | None = None
    d: float | None = None

    def dy(self) -> float:
        return 0.0
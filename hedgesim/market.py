"""The simulated exchange: a broker running assets and traders through time."""

from __future__ import annotations

from pathlib import Path

from .database import DEFAULT_DATABASE_DIR
from .derivatives import European, EuropeanOption
from .dynamics import Dynamics
from .mechanics import Mechanics
from .min_max_list import MinMaxList

_CONTRACT_SIZE = 100


def _format_number(value: float) -> str:
    if value == value and value not in (float("inf"), float("-inf")) and float(value).is_integer():
        return str(int(value))
    return repr(value)


class Broker:
    """Runs the simulation and settles every trade and option contract.

    ``sim_idx`` and ``time_idx`` hold the simulation and the step that
    are currently being played.
    """

    def __init__(self, simulations_total: int, simulation_length: int) -> None:
        self.simulations_total = simulations_total
        self.simulation_length = simulation_length
        self.sim_idx = 0
        self.time_idx = 0
        self.all_assets: list[AssetProcess] = []
        self.all_traders: list[TraderProcess] = []
        self._european_options: list[EuropeanOption] = []

    def open(self) -> None:
        """Run every simulation: traders trade, then assets and portfolios move."""
        for sim_idx in range(self.simulations_total):
            self.sim_idx = sim_idx
            for time_idx in range(self.simulation_length):
                self.time_idx = time_idx
                self._exchange()
                self._next_day()
            self._next_sim()

    def _exchange(self) -> None:
        for trader in self.all_traders:
            trader.strategy.trade(trader)

    def _transfer_funds(self, trader: TraderProcess, asset: AssetProcess, volume: int) -> None:
        cost = self.spot_price(asset) * float(volume)
        trader.balances[self.sim_idx] -= cost

    def _transfer_ownership(self, trader: TraderProcess, asset: AssetProcess, volume: int) -> None:
        holdings = trader.ownerships[self.sim_idx]
        holdings[asset] = holdings.get(asset, 0) + volume

    def buy_order(self, trader: TraderProcess, asset: AssetProcess, volume: int) -> None:
        """Buy ``volume`` units of ``asset`` at the current spot price."""
        if volume <= 0:
            raise ValueError("BUY volume must be positive.")
        self._transfer_funds(trader, asset, volume)
        self._transfer_ownership(trader, asset, volume)

    def sell_order(self, trader: TraderProcess, asset: AssetProcess, volume: int) -> None:
        """Sell ``volume`` units of ``asset`` at the current spot price."""
        if volume <= 0:
            raise ValueError("SELL volume must be positive.")
        self._transfer_funds(trader, asset, -volume)
        self._transfer_ownership(trader, asset, -volume)

    def _next_day(self) -> None:
        sim_idx, time_idx = self.sim_idx, self.time_idx
        for asset in self.all_assets:
            asset.update(sim_idx, time_idx)
        for trader in self.all_traders:
            trader.update(sim_idx, time_idx)
        for option in self._european_options:
            option.exercise(sim_idx, time_idx)

    def _next_sim(self) -> None:
        sim_idx, time_idx = self.sim_idx, self.time_idx
        for trader in self.all_traders:
            trader.performance.append(trader.portfolio_processes[sim_idx][time_idx])
        self._european_options.clear()

    def spot_price(self, asset: AssetProcess) -> float:
        """Price of ``asset`` at the current simulation step."""
        return asset.price_processes[self.sim_idx][self.time_idx]

    def interest(self) -> float:
        """Risk-free interest rate; the market has none."""
        return 0.0

    def write_eu_option_on_autofill(
        self,
        option: European,
        underlying: AssetProcess,
        strike: float,
        maturity: int,
        writer: TraderProcess,
    ) -> None:
        """Let ``writer`` write a premium-free option with no counterparty."""
        self._european_options.append(
            EuropeanOption(
                0.0,
                self.sim_idx,
                option,
                underlying,
                _CONTRACT_SIZE,
                strike,
                maturity,
                writer=writer,
                owner=None,
            )
        )

    def own_eu_option_on_autofill(
        self,
        option: European,
        underlying: AssetProcess,
        strike: float,
        maturity: int,
        owner: TraderProcess,
    ) -> None:
        """Let ``owner`` hold a premium-free option with no counterparty."""
        self._european_options.append(
            EuropeanOption(
                0.0,
                self.sim_idx,
                option,
                underlying,
                _CONTRACT_SIZE,
                strike,
                maturity,
                writer=None,
                owner=owner,
            )
        )


class AssetProcess:
    """Simulated price paths of one asset, one path per simulation."""

    def __init__(
        self,
        broker: Broker,
        process: Dynamics,
        ticker: str,
        database_dir: str | Path = DEFAULT_DATABASE_DIR,
    ) -> None:
        self.broker = broker
        self.process = process
        self.ticker = ticker

        x0 = process.inference(ticker, database_dir)
        length = broker.simulation_length
        self.price_processes: list[list[float]] = [
            [x0] + [0.0] * length for _ in range(broker.simulations_total)
        ]
        self.return_processes: list[list[float]] = [
            [0.0] * length for _ in range(broker.simulations_total)
        ]
        broker.all_assets.append(self)

    def update(self, sim_idx: int, time_idx: int) -> None:
        """Move the price one step along the dynamics."""
        path = self.price_processes[sim_idx]
        dy = self.process.dy()
        path[time_idx + 1] = path[time_idx] * _exp(dy)
        self.return_processes[sim_idx][time_idx] = dy * 100.0


def _exp(value: float) -> float:
    import math

    return math.exp(value)


class TraderProcess:
    """A trader's cash, holdings and portfolio value in every simulation."""

    def __init__(
        self,
        broker: Broker,
        strategy: Mechanics,
        name: str,
        starting_balance: float = 0.0,
        database_dir: str | Path = DEFAULT_DATABASE_DIR,
    ) -> None:
        self.broker = broker
        self.strategy = strategy
        self.name = name

        strategy.due_diligence(database_dir)

        total = broker.simulations_total
        self.balances: list[float] = [starting_balance] * total
        self.ownerships: list[dict[AssetProcess, int]] = [{} for _ in range(total)]
        self.portfolio_processes: list[list[float]] = [
            [starting_balance] + [0.0] * broker.simulation_length for _ in range(total)
        ]
        self.performance = MinMaxList(total)
        broker.all_traders.append(self)

    def position(self, sim_idx: int, asset: AssetProcess) -> int:
        """Units of ``asset`` held in simulation ``sim_idx``."""
        return self.ownerships[sim_idx].get(asset, 0)

    def update(self, sim_idx: int, time_idx: int) -> None:
        """Value the portfolio at the prices of the next step."""
        equity = sum(
            asset.price_processes[sim_idx][time_idx + 1] * float(volume)
            for asset, volume in self.ownerships[sim_idx].items()
        )
        equity += self.balances[sim_idx]
        self.portfolio_processes[sim_idx][time_idx + 1] = equity

    def performance_tldr(self) -> str:
        """Print and return the worst and best final portfolio values."""
        low = self.performance.find_min()
        high = self.performance.find_max()
        if low is None or high is None:
            raise ValueError(f"trader {self.name!r} has no recorded performance")
        summary = f"min: {_format_number(low)}, max: {_format_number(high)}"
        print(summary)
        return summary
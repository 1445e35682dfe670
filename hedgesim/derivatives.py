"""European option contracts settled in cash against simulated assets."""

from __future__ import annotations

from enum import Enum
from typing import Any


class European(Enum):
    """Kind of European option."""

    CALL = "call"
    PUT = "put"

    def pay_off(self, spot: float, strike: float) -> float:
        """Return the pay-off per unit of underlying at expiry."""
        if self is European.CALL:
            return max(spot - strike, 0.0)
        return max(strike - spot, 0.0)


class EuropeanOption:
    """A European option between an optional writer and an optional owner.

    Either party may be missing, which lets a simulation fill one side of
    the contract automatically. Creating the contract moves the premium
    from the owner to the writer for the given simulation.
    """

    def __init__(
        self,
        premium: float,
        sim_idx: int,
        option: European,
        underlying: Any,
        num_underlying: int,
        strike: float,
        maturity: int,
        writer: Any = None,
        owner: Any = None,
    ) -> None:
        self.option = option
        self.num_underlying = num_underlying
        self.underlying = underlying
        self.strike = strike
        self.maturity = maturity
        self.writer = writer
        self.owner = owner

        amount = premium * num_underlying
        if owner is not None:
            owner.balances[sim_idx] -= amount
        if writer is not None:
            writer.balances[sim_idx] += amount

    def exercise(self, sim_idx: int, time_idx: int) -> None:
        """Settle the pay-off in cash if ``time_idx`` is the maturity."""
        if time_idx != self.maturity:
            return
        spot = self.underlying.price_processes[sim_idx][time_idx]
        amount = self.option.pay_off(spot, self.strike) * self.num_underlying
        if self.owner is not None:
            self.owner.balances[sim_idx] += amount
        if self.writer is not None:
            self.writer.balances[sim_idx] -= amount
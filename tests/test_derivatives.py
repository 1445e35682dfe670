from dataclasses import dataclass, field

import pytest

from hedgesim.derivatives import European, EuropeanOption


@dataclass
class Trader:
    balances: list = field(default_factory=lambda: [0.0, 0.0])


@dataclass
class Asset:
    price_processes: list


@pytest.mark.parametrize("spot,strike", [(110.0, 100.0), (90.0, 100.0), (100.0, 100.0), (6200.0, 6100.0)])
def test_payoff_parity(spot, strike):
    call = European.CALL.pay_off(spot, strike)
    put = European.PUT.pay_off(spot, strike)
    assert call >= 0.0 and put >= 0.0
    assert call - put == pytest.approx(spot - strike)


def test_out_of_the_money_call_pays_nothing():
    assert European.CALL.pay_off(6000.0, 6100.0) == 0.0


def test_in_the_money_call_pays_intrinsic():
    assert European.CALL.pay_off(6150.0, 6100.0) == pytest.approx(6150.0 - 6100.0)


def test_premium_moves_from_owner_to_writer():
    owner, writer = Trader(), Trader()
    asset = Asset([[100.0, 100.0]])
    EuropeanOption(2.5, 1, European.CALL, asset, 100, 100.0, 1, writer, owner)
    assert owner.balances[1] == pytest.approx(-2.5 * 100)
    assert writer.balances[1] == pytest.approx(2.5 * 100)
    assert owner.balances[0] == 0.0 and writer.balances[0] == 0.0


def test_exercise_at_maturity_settles_payoff():
    owner, writer = Trader(), Trader()
    asset = Asset([[100.0, 105.0, 120.0]])
    contract = EuropeanOption(0.0, 0, European.CALL, asset, 100, 110.0, 2, writer, owner)
    contract.exercise(0, 2)
    expected = European.CALL.pay_off(120.0, 110.0) * 100
    assert owner.balances[0] == pytest.approx(expected)
    assert writer.balances[0] == pytest.approx(-expected)


def test_exercise_before_maturity_does_nothing():
    owner, writer = Trader(), Trader()
    asset = Asset([[100.0, 150.0, 120.0]])
    contract = EuropeanOption(0.0, 0, European.CALL, asset, 100, 110.0, 2, writer, owner)
    contract.exercise(0, 1)
    assert owner.balances == [0.0, 0.0]
    assert writer.balances == [0.0, 0.0]


def test_exercise_with_writer_only():
    writer = Trader()
    asset = Asset([[100.0, 80.0]])
    contract = EuropeanOption(0.0, 0, European.PUT, asset, 10, 100.0, 1, writer=writer)
    contract.exercise(0, 1)
    assert writer.balances[0] == pytest.approx(-European.PUT.pay_off(80.0, 100.0) * 10)
    assert contract.owner is None
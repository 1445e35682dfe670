import json
import math

import pytest

from hedgesim.derivatives import European
from hedgesim.dynamics import BlackScholes
from hedgesim.market import AssetProcess, Broker, TraderProcess
from hedgesim.mechanics import Lurker, LongCallConstHedger, ShortCallConstHedger


@pytest.fixture
def database_dir(tmp_path):
    closes = [95.0, 90.0, 100.0]
    records = [
        {"dt": f"2024-01-0{i}", "o": c, "h": c, "l": c, "c": c, "v": 1000}
        for i, c in enumerate(closes, start=1)
    ]
    (tmp_path / "_SPX.json").write_text(json.dumps(records), encoding="utf-8")
    return tmp_path


def make_asset(broker, database_dir, mu=0.0, sigma=0.0):
    return AssetProcess(broker, BlackScholes(mu, sigma), "SPX", database_dir)


def test_broker_starts_at_origin():
    broker = Broker(3, 5)
    assert (broker.sim_idx, broker.time_idx) == (0, 0)
    assert broker.all_assets == [] and broker.all_traders == []
    assert broker.interest() == 0.0


def test_asset_paths_start_at_last_close(database_dir):
    broker = Broker(2, 4)
    asset = make_asset(broker, database_dir)
    assert broker.all_assets == [asset]
    assert len(asset.price_processes) == 2
    assert all(len(path) == 5 for path in asset.price_processes)
    assert all(len(path) == 4 for path in asset.return_processes)
    assert asset.price_processes[1][0] == 100.0
    asset.price_processes[0][1] = 7.0
    assert asset.price_processes[1][1] == 0.0


def test_asset_update_follows_drift(database_dir):
    broker = Broker(1, 2)
    asset = make_asset(broker, database_dir, mu=0.01, sigma=0.0)
    asset.update(0, 0)
    assert asset.price_processes[0][1] == pytest.approx(100.0 * math.exp(0.01))
    assert asset.return_processes[0][0] == pytest.approx(1.0)


def test_buy_and_sell_orders_move_cash_and_units(database_dir):
    broker = Broker(1, 3)
    asset = make_asset(broker, database_dir)
    trader = TraderProcess(broker, Lurker(asset), "Ann", 1000.0, database_dir)
    broker.buy_order(trader, asset, 3)
    assert trader.position(0, asset) == 3
    assert trader.balances[0] == 1000.0 - 3 * 100.0
    broker.sell_order(trader, asset, 5)
    assert trader.position(0, asset) == -2
    assert trader.balances[0] == 1000.0 + 2 * 100.0
    assert broker.spot_price(asset) == 100.0


@pytest.mark.parametrize("volume", [0, -1])
def test_orders_reject_non_positive_volume(database_dir, volume):
    broker = Broker(1, 3)
    asset = make_asset(broker, database_dir)
    trader = TraderProcess(broker, Lurker(asset), "Ann", 0.0, database_dir)
    with pytest.raises(ValueError):
        broker.buy_order(trader, asset, volume)
    with pytest.raises(ValueError):
        broker.sell_order(trader, asset, volume)


def test_trader_update_values_holdings_at_next_price(database_dir):
    broker = Broker(1, 3)
    asset = make_asset(broker, database_dir)
    trader = TraderProcess(broker, Lurker(asset), "Ann", 500.0, database_dir)
    broker.buy_order(trader, asset, 2)
    asset.price_processes[0][1] = 110.0
    trader.update(0, 0)
    assert trader.portfolio_processes[0][1] == pytest.approx(500.0 + 2 * 10.0)


def test_lurker_on_flat_market_keeps_its_value(database_dir):
    broker = Broker(4, 6)
    asset = make_asset(broker, database_dir)
    trader = TraderProcess(broker, Lurker(asset), "Ann", 1000.0, database_dir)
    broker.open()
    assert len(trader.performance) == 4
    assert trader.performance.find_min() == 1000.0
    assert trader.performance.find_max() == 1000.0
    assert all(trader.position(i, asset) == 1 for i in range(4))


def test_long_and_short_hedgers_mirror_each_other(database_dir):
    broker = Broker(2, 4)
    asset = make_asset(broker, database_dir)
    strike = 50.0
    long_trader = TraderProcess(
        broker, LongCallConstHedger(asset, strike, 2, 0.01), "Bob", 0.0, database_dir
    )
    short_trader = TraderProcess(
        broker, ShortCallConstHedger(asset, strike, 2, 0.01), "Tom", 0.0, database_dir
    )
    broker.open()
    payout = (100.0 - strike) * 100
    assert long_trader.performance.find_min() == pytest.approx(-payout)
    assert short_trader.performance.find_max() == pytest.approx(payout)
    for sim in range(2):
        assert long_trader.position(sim, asset) == 0
        assert short_trader.position(sim, asset) == 0
        assert long_trader.balances[sim] == pytest.approx(-short_trader.balances[sim])


def test_autofill_options_settle_at_maturity(database_dir):
    broker = Broker(1, 3)
    asset = make_asset(broker, database_dir)
    writer = TraderProcess(broker, Lurker(asset), "W", 0.0, database_dir)
    owner = TraderProcess(broker, Lurker(asset), "O", 0.0, database_dir)
    broker.write_eu_option_on_autofill(European.PUT, asset, 120.0, 0, writer)
    broker.own_eu_option_on_autofill(European.PUT, asset, 120.0, 0, owner)
    broker._next_day()
    assert owner.balances[0] == pytest.approx(20.0 * 100)
    assert writer.balances[0] == pytest.approx(-owner.balances[0])


def test_performance_tldr_reports_extremes(database_dir, capsys):
    broker = Broker(2, 2)
    asset = make_asset(broker, database_dir)
    trader = TraderProcess(broker, Lurker(asset), "Ann", 0.0, database_dir)
    trader.performance.append(-5.0)
    trader.performance.append(2.5)
    summary = trader.performance_tldr()
    assert summary == "min: -5, max: 2.5"
    assert capsys.readouterr().out.strip() == summary


def test_performance_tldr_without_results_raises(database_dir):
    broker = Broker(1, 2)
    asset = make_asset(broker, database_dir)
    trader = TraderProcess(broker, Lurker(asset), "Ann", 0.0, database_dir)
    with pytest.raises(ValueError):
        trader.performance_tldr()
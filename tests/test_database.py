import json
import math

import pytest

from hedgesim.database import OHLCV, parse_stock_data, ts_close

CLOSES = [100.0, 102.0, 101.0, 105.0, 104.5, 110.0]


def _write(directory, ticker, records):
    path = directory / f"_{ticker}.json"
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


def _records(closes):
    return [
        {"dt": f"2024-01-{i + 1:02d}", "o": c - 1, "h": c + 2, "l": c - 2, "c": c, "v": 1000 + i}
        for i, c in enumerate(closes)
    ]


@pytest.fixture
def db(tmp_path):
    _write(tmp_path, "SPX", _records(CLOSES))
    return tmp_path


def test_parse_stock_data_reads_fields(db):
    data = parse_stock_data("SPX", db)
    assert len(data) == len(CLOSES)
    first = data[0]
    assert first == OHLCV("2024-01-01", 99.0, 102.0, 98.0, 100.0, 1000)
    assert [rec.close for rec in data] == CLOSES


def test_ts_close_prices_skip_first(db):
    close = ts_close("SPX", None, db)
    assert close.price == CLOSES[1:]
    assert len(close.log_return) == len(close.price)


def test_ts_close_returns_reconstruct_prices(db):
    close = ts_close("SPX", None, db)
    previous = CLOSES[0]
    for price, lr in zip(close.price, close.log_return):
        assert previous * math.exp(lr / 100.0) == pytest.approx(price)
        previous = price


def test_ts_close_takes_latest_records(db):
    close = ts_close("SPX", 3, db)
    assert close.price == CLOSES[-2:]


def test_ts_close_n_data_larger_than_history(db):
    close = ts_close("SPX", 100, db)
    assert close.price == CLOSES[1:]


def test_ts_close_single_record(tmp_path):
    _write(tmp_path, "ONE", _records([50.0]))
    close = ts_close("ONE", 5, tmp_path)
    assert close.price == []
    assert close.log_return == []


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        ts_close("NOPE", None, tmp_path)


def test_malformed_record_raises(tmp_path):
    _write(tmp_path, "BAD", [{"dt": "2024-01-01", "o": 1.0}])
    with pytest.raises(ValueError):
        parse_stock_data("BAD", tmp_path)


def test_invalid_json_raises(tmp_path):
    (tmp_path / "_JUNK.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        parse_stock_data("JUNK", tmp_path)
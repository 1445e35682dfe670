"""Reading OHLCV price histories from the local JSON database."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_DATABASE_DIR = Path("../database")


@dataclass(frozen=True)
class OHLCV:
    """One open-high-low-close-volume record."""

    datetime: str
    open: float
    high: float
    low: float
    close: float
    volume: int

    @classmethod
    def from_json(cls, record: dict) -> OHLCV:
        try:
            return cls(
                datetime=str(record["dt"]),
                open=float(record["o"]),
                high=float(record["h"]),
                low=float(record["l"]),
                close=float(record["c"]),
                volume=int(record["v"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"malformed OHLCV record: {record!r}") from exc


@dataclass
class CloseData:
    """Close prices and their log returns in percent."""

    price: list[float] = field(default_factory=list)
    log_return: list[float] = field(default_factory=list)


def _data_path(ticker: str, database_dir: str | Path) -> Path:
    return Path(database_dir) / f"_{ticker}.json"


def parse_stock_data(ticker: str, database_dir: str | Path = DEFAULT_DATABASE_DIR) -> list[OHLCV]:
    """Return every OHLCV record stored for ``ticker``."""
    with _data_path(ticker, database_dir).open(encoding="utf-8") as handle:
        try:
            raw = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(f"invalid JSON for ticker {ticker!r}") from exc
    if not isinstance(raw, list):
        raise ValueError(f"expected a list of records for ticker {ticker!r}")
    return [OHLCV.from_json(record) for record in raw]


def ts_close(
    ticker: str,
    n_data: int | None = None,
    database_dir: str | Path = DEFAULT_DATABASE_DIR,
) -> CloseData:
    """Return close prices and percent log returns for ``ticker``.

    With ``n_data`` only the latest ``n_data`` records are used. Each
    price is paired with the return that led to it, so the first record
    contributes no entry.
    """
    data = parse_stock_data(ticker, database_dir)
    if n_data is not None and len(data) > 1:
        data = data[max(len(data) - n_data, 0):]

    result = CloseData()
    for previous, current in zip(data, data[1:]):
        change = math.log(current.close) - math.log(previous.close)
        result.log_return.append(100.0 * change)
        result.price.append(current.close)
    return result
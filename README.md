# hedgesim

A small Monte Carlo market simulator for studying the profit and loss of
delta-hedged European call options.

Prices follow geometric Brownian motion. The drift and volatility are
inferred from historical close prices kept in a local JSON database. A
broker steps every simulated path forward one day at a time. On each step
the traders registered with it run their strategies. European options are
settled in cash when they reach maturity.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Historical data

Each ticker's history is a JSON file named `_<TICKER>.json` in a database
directory. The default directory is `../database`, relative to the
working directory. The file holds a list of OHLCV records:

```json
[
  {"dt": "2024-01-02", "o": 4745.2, "h": 4754.3, "l": 4722.7, "c": 4742.8, "v": 3743050000},
  {"dt": "2024-01-03", "o": 4725.1, "h": 4729.3, "l": 4699.7, "c": 4704.8, "v": 3950760000}
]
```

`hedgesim.database.parse_stock_data` returns the records as `OHLCV`
objects. `hedgesim.database.ts_close` returns a `CloseData` with close
prices and log returns in percent. It can also keep only the latest
`n_data` records. Malformed files raise `ValueError`.

## Command line

```
hedgesim
```

This runs the default experiment: 1000 simulated paths of 255 days on
`SPX`. Two traders take part:

* "Bob", a `LongCallConstHedger`, writes a call with strike 6100 and
  maturity 200 and delta-hedges it every day;
* "Tom", a `ShortCallConstHedger`, holds the same call and hedges it the
  other way.

When the run finishes, matplotlib shows four figures. Two show each
trader's final portfolio values as a histogram with a normal Q-Q plot.
The other two show one sample path (simulation 999, or the last one when
there are fewer) with the underlying price, the hedging portfolio and the
daily returns. The program waits for Enter before it closes them.

Options:

```
--simulations N     number of simulated paths (default 1000)
--length N          steps per path (default 255)
--ticker NAME       asset ticker (default SPX)
--strike K          option strike (default 6100)
--maturity N        option maturity in steps (default 200)
--database-dir DIR  directory holding the _<TICKER>.json files (default ../database)
--seed N            seed for the price-process random numbers
```

## Library use

```python
from hedgesim.market import Broker, AssetProcess, TraderProcess
from hedgesim.dynamics import BlackScholes
from hedgesim.mechanics import LongCallConstHedger

broker = Broker(100, 255)
spx = AssetProcess(broker, BlackScholes(), "SPX", "path/to/database")
bob = TraderProcess(broker, LongCallConstHedger(spx, 6100.0, 200), "Bob", 0.0,
                    "path/to/database")

broker.open()
bob.performance_tldr()   # prints and returns "min: ..., max: ..."
```

Creating an `AssetProcess` fits any unset `BlackScholes` parameters from
the ticker's history and starts every path at the latest close. Creating a
`TraderProcess` calls the strategy's `due_diligence`, which estimates the
hedging volatility from history when it was not given.

Building blocks:

* `hedgesim.stats` – mean, sample standard deviation, and the normal PDF,
  CDF and inverse CDF (Acklam's approximation).
* `hedgesim.bsm` – Black–Scholes prices, deltas, gammas and the call theta.
* `hedgesim.min_max_list` – `MinMaxList`, a fixed-capacity list with O(1)
  access to its smallest and largest values.
* `hedgesim.dynamics` – the `BlackScholes` and `Binomial` price dynamics.
* `hedgesim.mechanics` – the `Lurker`, `LongCallConstHedger` and
  `ShortCallConstHedger` trading strategies.
* `hedgesim.derivatives` – the `European` pay-off types and
  `EuropeanOption` contracts.
* `hedgesim.market` – `Broker`, `AssetProcess` and `TraderProcess`.
* `hedgesim.plot_tools` and `hedgesim.figures` – matplotlib helpers and
  the ready-made figures.

## Limitations

* `Binomial` dynamics fits no parameters, and its increments are always
  zero, so prices under it stay flat.
* The risk-free rate (`Broker.interest`) is always zero.
* Options created through the broker's autofill methods carry no premium
  and have no counterparty. Only European calls and puts exist.
* Historical data is only read from local JSON files. Nothing is
  downloaded.
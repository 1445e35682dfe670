"""Monte Carlo simulation of delta-hedged European option positions."""

__version__ = "0.1.0"
"""Descriptive statistics and normal-distribution helpers."""

from __future__ import annotations

import math
from collections.abc import Sequence

_SQRT_2 = math.sqrt(2.0)

# Coefficients of the rational approximations to the inverse normal CDF.
_A = (-39.696830, 220.946098, -275.928510, 138.357751, -30.664798, 2.506628)
_B = (-54.476098, 161.585836, -155.698979, 66.801311, -13.280681)
_C = (-0.007784894002, -0.32239645, -2.400758, -2.549732, 4.374664, 2.938163)
_D = (0.007784695709, 0.32246712, 2.445134, 3.754408)

_P_LOW = 0.02425
_P_HIGH = 1.0 - _P_LOW


def arithmetic_mean(time_series: Sequence[float]) -> float:
    """Return the arithmetic sample mean, or NaN for an empty series."""
    if not time_series:
        return math.nan
    return sum(time_series) / len(time_series)


def standard_deviation(time_series: Sequence[float]) -> float:
    """Return the sample standard deviation (n - 1 in the denominator).

    A single observation gives NaN; an empty series is an error.
    """
    n = len(time_series)
    if n == 0:
        raise ValueError("standard deviation of an empty series is undefined")
    if n == 1:
        return math.nan
    mean = arithmetic_mean(time_series)
    sum_sq = sum((value - mean) ** 2 for value in time_series)
    return math.sqrt(sum_sq / (n - 1))


def normal_pdf(x: float, mean: float, stddev: float) -> float:
    """Probability density of a normal distribution at ``x``."""
    z = (x - mean) / stddev
    return (1.0 / (stddev * math.sqrt(2.0 * math.pi))) * math.exp(-0.5 * z * z)


def _standard_normal_cdf(x: float) -> float:
    return 0.5 * math.erfc(-x / _SQRT_2)


def normal_cdf(x: float, mean: float, stddev: float) -> float:
    """Standard normal CDF of ``x``, scaled by ``stddev`` and shifted by ``mean``."""
    return _standard_normal_cdf(x) * stddev + mean


def _polyval(coefficients: Sequence[float], x: float) -> float:
    result = 0.0
    for coefficient in coefficients:
        result = result * x + coefficient
    return result


def _acklam(p: float) -> float:
    if not 0.0 < p < 1.0:
        raise ValueError(f"probability must lie strictly between 0 and 1, got {p}")

    if p < _P_LOW:
        q = math.sqrt(-2.0 * math.log(p))
        return _polyval(_C, q) / _polyval(_D + (1.0,), q)

    if p > _P_HIGH:
        q = math.sqrt(-2.0 * math.log(1.0 - p))
        return -_polyval(_C, q) / _polyval(_D + (1.0,), q)

    q = p - 0.5
    r = q * q
    return _polyval(_A, r) * q / _polyval(_B + (1.0,), r)


def normal_inv_cdf(probability: float, mean: float, stddev: float) -> float:
    """Inverse normal CDF by Acklam's rational approximation."""
    return _acklam(probability) * stddev + mean
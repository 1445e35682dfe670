"""Black-Scholes-Merton prices and sensitivities of European options."""

from __future__ import annotations

import math

from .stats import normal_cdf, normal_pdf


def _d1(s0: float, strike: float, sigma: float, r: float, tau: float) -> float:
    return (math.log(s0 / strike) + (r + 0.5 * sigma * sigma) * tau) / (
        sigma * math.sqrt(tau)
    )


def _d2(s0: float, strike: float, sigma: float, r: float, tau: float) -> float:
    return (math.log(s0 / strike) + (r - 0.5 * sigma * sigma) * tau) / (
        sigma * math.sqrt(tau)
    )


def black_scholes_call_price(s0: float, strike: float, sigma: float, r: float, tau: float) -> float:
    """Price of a European call."""
    phi_1 = normal_cdf(_d1(s0, strike, sigma, r, tau), 0.0, 1.0)
    phi_2 = normal_cdf(_d2(s0, strike, sigma, r, tau), 0.0, 1.0)
    return s0 * phi_1 - strike * math.exp(-r * tau) * phi_2


def black_scholes_put_price(s0: float, strike: float, sigma: float, r: float, tau: float) -> float:
    """Price of a European put."""
    phi_1 = normal_cdf(-_d1(s0, strike, sigma, r, tau), 0.0, 1.0)
    phi_2 = normal_cdf(-_d2(s0, strike, sigma, r, tau), 0.0, 1.0)
    return strike * math.exp(-r * tau) * phi_2 - s0 * phi_1


def black_scholes_call_delta(s0: float, strike: float, sigma: float, r: float, tau: float) -> float:
    """Delta of a European call."""
    return normal_cdf(_d1(s0, strike, sigma, r, tau), 0.0, 1.0)


def black_scholes_put_delta(s0: float, strike: float, sigma: float, r: float, tau: float) -> float:
    """Delta of a European put."""
    return normal_cdf(_d1(s0, strike, sigma, r, tau), 0.0, 1.0) - 1.0


def _gamma(s0: float, strike: float, sigma: float, r: float, tau: float) -> float:
    return normal_pdf(_d1(s0, strike, sigma, r, tau), 0.0, 1.0) / (
        s0 * sigma * math.sqrt(tau)
    )


def black_scholes_call_gamma(s0: float, strike: float, sigma: float, r: float, tau: float) -> float:
    """Gamma of a European call."""
    return _gamma(s0, strike, sigma, r, tau)


def black_scholes_put_gamma(s0: float, strike: float, sigma: float, r: float, tau: float) -> float:
    """Gamma of a European put."""
    return _gamma(s0, strike, sigma, r, tau)


def black_scholes_call_theta(s0: float, strike: float, sigma: float, r: float, tau: float) -> float:
    """Theta term for a European call as used by the simulator."""
    d1 = _d1(s0, strike, sigma, r, tau)
    density_1 = normal_pdf(d1, 0.0, 1.0)
    phi_1 = normal_cdf(-d1, 0.0, 1.0)
    phi_2 = normal_cdf(-_d2(s0, strike, sigma, r, tau), 0.0, 1.0)
    return (
        s0 * density_1 * sigma / (2.0 * math.sqrt(tau))
        - r * strike * math.exp(-r * tau) * phi_2
        + s0 * phi_1
    )
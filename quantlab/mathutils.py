"""Normal distribution helpers and the Black-Scholes d1/d2 terms."""

from __future__ import annotations

import math

from .option import Option

_INV_SQRT_2PI = 1.0 / math.sqrt(2.0 * math.pi)

# 10-point Gauss-Legendre nodes and weights on [-1, 1].
_GL_NODES = (
    -0.9739065285, -0.8650633667, -0.6794095683, -0.4333953941, -0.1488743390,
    0.1488743390, 0.4333953941, 0.6794095683, 0.8650633667, 0.9739065285,
)
_GL_WEIGHTS = (
    0.0666713443, 0.1494513492, 0.2190863625, 0.2692667193, 0.2955242247,
    0.2955242247, 0.2692667193, 0.2190863625, 0.1494513492, 0.0666713443,
)


def _log(x: float) -> float:
    if x > 0:
        return math.log(x)
    if x == 0:
        return -math.inf
    return math.nan


def _sqrt(x: float) -> float:
    return math.sqrt(x) if x >= 0 else math.nan


def _div(numerator: float, denominator: float) -> float:
    try:
        return numerator / denominator
    except ZeroDivisionError:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def normal_pdf(x: float) -> float:
    """Standard normal density."""
    return _INV_SQRT_2PI * math.exp(-0.5 * x * x)


def normal_cdf(x: float) -> float:
    """Standard normal cumulative distribution."""
    return 0.5 * math.erfc(-x * math.sqrt(0.5))


def bivariate_normal_cdf(a: float, b: float, rho: float) -> float:
    """Bivariate standard normal CDF with correlation ``rho``."""
    if rho == 0.0:
        return normal_cdf(a) * normal_cdf(b)
    half = rho / 2.0
    total = 0.0
    for node, weight in zip(_GL_NODES, _GL_WEIGHTS):
        r = half * (1.0 + node)
        one_minus = 1.0 - r * r
        total += weight * math.exp(-(a * a - 2 * r * a * b + b * b) / (2.0 * one_minus)) / (
            2.0 * math.pi * math.sqrt(one_minus)
        )
    return normal_cdf(a) * normal_cdf(b) + half * total


def d1(opt: Option, spot: float | None = None, time: float | None = None) -> float:
    """The d1 term; spot and time default to the option's own."""
    spot = opt.underlying_price if spot is None else spot
    time = opt.time_to_expiry if time is None else time
    vol = opt.volatility
    numerator = _log(_div(spot, opt.strike)) + (opt.cost_of_carry + vol * vol / 2) * time
    return _div(numerator, vol * _sqrt(time))


def d2(opt: Option, time: float | None = None) -> float:
    """The d2 term: the option's own d1 less vol times root ``time``."""
    time = opt.time_to_expiry if time is None else time
    return d1(opt) - opt.volatility * _sqrt(time)
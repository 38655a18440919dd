"""Analytic Greeks and their Monte Carlo finite-difference counterparts."""

from __future__ import annotations

import math

import numpy as np

from .mathutils import d1, d2, normal_cdf, normal_pdf
from .option import TRADING_DAYS, Option, OptionsSide, UnderlyingType
from .simulation import simulate_price

_BUMP = 1.0


def _generators(rng) -> tuple[np.random.Generator, np.random.Generator]:
    """Generators for a base and a bumped run; a seed gives both the same draws."""
    if rng is None or isinstance(rng, np.random.Generator):
        gen = np.random.default_rng(rng)
        return gen, gen
    return np.random.default_rng(rng), np.random.default_rng(rng)


def _bumped_difference(opt: Option, steps, simulations, rng, **change) -> float:
    base_rng, bumped_rng = _generators(rng)
    base = simulate_price(opt, steps, simulations, base_rng)
    bumped = simulate_price(opt.with_changes(**change), steps, simulations, bumped_rng)
    return bumped - base


def carry_discount(opt: Option) -> float:
    """e^((b - r) T)."""
    return math.exp((opt.cost_of_carry - opt.risk_free_rate) * opt.time_to_expiry)


def discount(opt: Option) -> float:
    """e^(-r T)."""
    return math.exp(-opt.risk_free_rate * opt.time_to_expiry)


def delta(opt: Option) -> float:
    """Sensitivity of the price to the underlying."""
    n1 = normal_cdf(d1(opt))
    if opt.side is OptionsSide.CALL:
        return carry_discount(opt) * n1
    return carry_discount(opt) * (n1 - 1)


def simulate_delta(opt: Option, steps, simulations, rng=None) -> float:
    """Forward difference of simulated prices for a one-unit move of the underlying."""
    diff = _bumped_difference(
        opt, steps, simulations, rng, underlying_price=opt.underlying_price + _BUMP
    )
    return diff / _BUMP


def gamma(opt: Option) -> float:
    """Sensitivity of delta to the underlying; the same for calls and puts."""
    return (carry_discount(opt) * normal_pdf(d1(opt))) / (
        opt.underlying_price * opt.volatility * math.sqrt(opt.time_to_expiry)
    )


def simulate_gamma(opt: Option, steps, simulations, rng=None) -> float:
    """Forward difference of simulated deltas."""
    base_rng, bumped_rng = _generators(rng)
    if base_rng is not bumped_rng:
        base_rng = bumped_rng = rng
    base = simulate_delta(opt, steps, simulations, base_rng)
    bumped_opt = opt.with_changes(underlying_price=opt.underlying_price + _BUMP)
    bumped = simulate_delta(bumped_opt, steps, simulations, bumped_rng)
    return (bumped - base) / _BUMP


def theta(opt: Option) -> float:
    """Time decay per calendar day."""
    x1 = d1(opt)
    x2 = d2(opt)
    ebrt = carry_discount(opt)
    spot = opt.underlying_price
    r = opt.risk_free_rate

    decay = (-spot * ebrt * normal_pdf(x1) * opt.volatility) / (2 * math.sqrt(opt.time_to_expiry))
    carry = (opt.cost_of_carry - r) * spot * ebrt * normal_cdf(x1)
    if opt.side is OptionsSide.CALL:
        interest = r * opt.strike * discount(opt) * normal_cdf(x2)
        return (decay - carry - interest) / 365
    interest = r * opt.strike * discount(opt) * normal_cdf(-x2)
    return (decay + carry + interest) / 365


def simulate_theta(opt: Option, steps, simulations, rng=None) -> float:
    """Change in simulated price when one trading day passes."""
    return _bumped_difference(
        opt, steps, simulations, rng, time_to_expiry=opt.time_to_expiry - 1.0 / TRADING_DAYS
    )


def vega(opt: Option) -> float:
    """Price change per percentage point of volatility; the same for calls and puts."""
    return (
        opt.underlying_price
        * carry_discount(opt)
        * normal_pdf(d1(opt))
        * math.sqrt(opt.time_to_expiry)
    ) / 100


def simulate_vega(opt: Option, steps, simulations, rng=None) -> float:
    """Change in simulated price for a one-point rise in volatility."""
    return _bumped_difference(opt, steps, simulations, rng, volatility=opt.volatility + 0.01)


def rho(opt: Option, steps, simulations, rng=None) -> float:
    """Price change per percentage point of the risk-free rate.

    Options with zero cost of carry use a simulated price.
    """
    t = opt.time_to_expiry
    if opt.cost_of_carry == 0:
        return -t * simulate_price(opt, steps, simulations, rng) / 100
    x2 = d2(opt)
    if opt.side is OptionsSide.CALL:
        return t * opt.strike * discount(opt) * normal_cdf(x2) / 100
    return -t * opt.strike * discount(opt) * normal_cdf(-x2) / 100


def simulate_rho(opt: Option, steps, simulations, rng=None) -> float:
    """Change in simulated price for a one-point rise in the risk-free rate."""
    return _bumped_difference(
        opt, steps, simulations, rng, risk_free_rate=opt.risk_free_rate + 0.01
    )


def phi(opt: Option) -> float:
    """Price change per percentage point of the foreign rate (or dividend yield)."""
    t = opt.time_to_expiry
    spot = opt.underlying_price
    ebrt = carry_discount(opt)
    x1 = d1(opt)
    if opt.side is OptionsSide.CALL:
        return (-t * spot * ebrt * normal_cdf(x1)) / 100
    return (t * spot * ebrt * normal_cdf(-x1)) / 100


def simulate_phi(opt: Option, steps, simulations, rng=None) -> float:
    """Change in simulated price for a one-point rise in the foreign rate."""
    if opt.underlying_type is not UnderlyingType.FOREX:
        raise ValueError("cannot calculate phi for an underlying that is not forex")
    return _bumped_difference(
        opt, steps, simulations, rng, foreign_rate=opt.foreign_rate + 0.01
    )
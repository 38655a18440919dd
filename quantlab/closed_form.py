"""Closed-form option prices: Black-Scholes family, Roll-Geske-Whaley and Barone-Adesi-Whaley."""

from __future__ import annotations

import math

from .mathutils import _div, _log, _sqrt, bivariate_normal_cdf, d1, d2, normal_cdf
from .option import Option, OptionsSide, OptionsType

_TOLERANCE = 1e-5


def _resolve(opt: Option, spot: float | None, time: float | None) -> tuple[float, float]:
    return (
        opt.underlying_price if spot is None else spot,
        opt.time_to_expiry if time is None else time,
    )


def european_call(opt: Option, spot: float | None = None, time: float | None = None) -> float:
    """Generalised Black-Scholes call price."""
    spot, time = _resolve(opt, spot, time)
    x1 = d1(opt, spot, time)
    x2 = d2(opt, time)
    r = opt.risk_free_rate
    return (
        spot * math.exp((opt.cost_of_carry - r) * time) * normal_cdf(x1)
        - opt.strike * math.exp(-r * time) * normal_cdf(x2)
    )


def european_put(opt: Option, spot: float | None = None, time: float | None = None) -> float:
    """Generalised Black-Scholes put price."""
    spot, time = _resolve(opt, spot, time)
    x1 = d1(opt, spot, time)
    x2 = d2(opt, time)
    r = opt.risk_free_rate
    return (
        opt.strike * math.exp(-r * time) * normal_cdf(-x2)
        - spot * math.exp((opt.cost_of_carry - r) * time) * normal_cdf(-x1)
    )


def critical_price_call(opt: Option) -> float:
    """Price at which exercising the call just before the dividend equals holding it."""
    low, high = opt.strike, opt.strike * 5.0
    remaining = opt.time_to_expiry - opt.time_to_dividend
    while high - low > _TOLERANCE:
        mid = low + (high - low) / 2.0
        hold = european_call(opt, mid - opt.dividend, remaining)
        if mid - opt.strike > hold:
            high = mid
        else:
            low = mid
    return low + (high - low) / 2.0


def american_call(opt: Option) -> float:
    """Roll-Geske-Whaley price of an American call on a stock with one dividend."""
    r = opt.risk_free_rate
    vol = opt.volatility
    big_t = opt.time_to_expiry
    t_div = opt.time_to_dividend
    remaining = big_t - t_div
    spot_ex_div = opt.underlying_price - opt.dividend * math.exp(-r * t_div)

    # Early exercise is never worth it if the dividend is below the interest on the strike.
    if opt.dividend <= opt.strike * (1.0 - math.exp(-r * remaining)):
        return european_call(opt, spot_ex_div, big_t)

    s_star = critical_price_call(opt)
    rho = _sqrt(_div(t_div, big_t))
    drift = r + vol * vol / 2

    a1 = _div(_log(_div(spot_ex_div, opt.strike)) + drift * big_t, vol * _sqrt(big_t))
    a2 = a1 - vol * _sqrt(big_t)
    b1 = _div(_log(_div(spot_ex_div, s_star)) + drift * t_div, vol * _sqrt(t_div))
    b2 = b1 - vol * _sqrt(t_div)

    term1 = spot_ex_div * normal_cdf(b1)
    term2 = spot_ex_div * bivariate_normal_cdf(a1, -b1, -rho)
    term3 = opt.strike * math.exp(-r * big_t) * bivariate_normal_cdf(a2, -b2, -rho)
    term4 = (opt.strike - opt.dividend) * math.exp(-r * t_div) * normal_cdf(b2)
    return term1 + term2 - term3 - term4


def critical_price_put(opt: Option) -> float:
    """Price below which exercising the put beats holding it."""
    low, high = 1e-5, opt.strike
    remaining = opt.time_to_expiry - opt.time_to_dividend
    while high - low > _TOLERANCE:
        mid = low + (high - low) / 2.0
        hold = european_put(opt, mid - opt.dividend, remaining)
        if opt.strike - mid > hold:
            low = mid
        else:
            high = mid
    return low + (high - low) / 2.0


def american_put(opt: Option) -> float:
    """Barone-Adesi-Whaley approximation of an American put."""
    s_star = critical_price_put(opt)
    if opt.underlying_price <= s_star:
        return opt.strike - opt.underlying_price

    variance = opt.volatility * opt.volatility
    m = 2 * opt.risk_free_rate / variance
    n = 2 * opt.cost_of_carry / variance
    q = (-(n - 1) - math.sqrt((n - 1) ** 2 + 4 * m)) / 2
    at_critical = european_put(opt, s_star, opt.time_to_expiry)
    a = (opt.strike - s_star - at_critical) / s_star**q
    return european_put(opt) + a * opt.underlying_price**q


def closed_form_price(opt: Option) -> float:
    """Price an option with the closed form that fits its type and side."""
    plain = opt.option_type is OptionsType.EUROPEAN or (
        opt.option_type is OptionsType.AMERICAN and opt.dividend == 0
    )
    if opt.side is OptionsSide.CALL:
        if plain:
            return european_call(opt)
        if opt.option_type is OptionsType.AMERICAN:
            return american_call(opt)
        return 0.0
    if plain:
        return european_put(opt)
    return american_put(opt)
"""Monte Carlo pricing of options under geometric Brownian motion."""

from __future__ import annotations

import math

import numpy as np

from .mathutils import _sqrt, d2, normal_cdf
from .option import Option, OptionsSide, OptionsType

RandomSource = "np.random.Generator | int | None"

_vector_cdf = np.vectorize(normal_cdf, otypes=[float])


def _generator(rng) -> np.random.Generator:
    return np.random.default_rng(rng)


def _check_counts(steps: int, simulations: int) -> tuple[int, int]:
    steps, simulations = int(steps), int(simulations)
    if steps < 1:
        raise ValueError("steps must be at least 1")
    if simulations < 1:
        raise ValueError("simulations must be at least 1")
    return steps, simulations


def _clip_low(values: np.ndarray) -> np.ndarray:
    """max(0, x) where a NaN counts as not positive."""
    return np.where(values > 0, values, 0.0)


def _clip_high(values: np.ndarray) -> np.ndarray:
    """max(x, 0) where a NaN is kept."""
    return np.where(values < 0, 0.0, values)


def _step(prices: np.ndarray, opt: Option, dt: float, gen: np.random.Generator) -> np.ndarray:
    vol = opt.volatility
    z = gen.standard_normal(prices.shape)
    drift = (opt.risk_free_rate - 0.5 * vol * vol) * dt
    return prices * np.exp(drift + vol * _sqrt(dt) * z)


def _european_values(opt: Option, side: OptionsSide, spots: np.ndarray, time: float) -> np.ndarray:
    """Black-Scholes values for many spots at once, with the option's own d2."""
    vol = opt.volatility
    r = opt.risk_free_rate
    with np.errstate(all="ignore"):
        x1 = (np.log(spots / opt.strike) + (opt.cost_of_carry + vol * vol / 2) * time) / (
            vol * np.sqrt(time)
        )
        x2 = d2(opt, time)
        carry = math.exp((opt.cost_of_carry - r) * time)
        disc = math.exp(-r * time)
        if side is OptionsSide.CALL:
            return spots * carry * _vector_cdf(x1) - opt.strike * disc * normal_cdf(x2)
        return opt.strike * disc * normal_cdf(-x2) - spots * carry * _vector_cdf(-x1)


def simulate_european(
    opt: Option,
    side: OptionsSide,
    steps: int,
    simulations: int,
    spot: float | None = None,
    time: float | None = None,
    rng=None,
) -> float:
    """Discounted mean payoff of a European option at expiry."""
    steps, simulations = _check_counts(steps, simulations)
    gen = _generator(rng)
    spot = opt.underlying_price if spot is None else spot
    time = opt.time_to_expiry if time is None else time
    dt = time / steps

    prices = np.full(simulations, float(spot))
    for _ in range(steps):
        prices = _step(prices, opt, dt, gen)

    if side is OptionsSide.CALL:
        payoff = _clip_high(prices - opt.strike)
    else:
        payoff = _clip_high(opt.strike - prices)
    return float(math.exp(-opt.risk_free_rate * time) * (payoff.sum() / simulations))


def simulate_american(
    opt: Option, side: OptionsSide, steps: int, simulations: int, rng=None
) -> float:
    """American option on a stock with one dividend, exercisable just before it."""
    steps, simulations = _check_counts(steps, simulations)
    gen = _generator(rng)
    expiry = opt.time_to_expiry
    t_div = opt.time_to_dividend
    dt = expiry / steps

    # A dividend after expiry can never be captured.
    if t_div > expiry:
        return simulate_european(opt, side, steps, simulations, opt.underlying_price, expiry, gen)

    prices = np.full(simulations, float(opt.underlying_price))
    for _ in range(int(t_div / dt)):
        prices = _step(prices, opt, dt, gen)

    r = opt.risk_free_rate
    strike = opt.strike
    remaining = expiry - t_div
    to_dividend = math.exp(-r * t_div)

    with np.errstate(all="ignore"):
        current = _european_values(opt, side, prices, remaining)
        held = _clip_low(_european_values(opt, side, prices - opt.dividend, remaining)) * to_dividend
        if side is OptionsSide.PUT:
            intrinsic = _clip_low(strike - prices)
            time_value = current - intrinsic
            # Exercise when the time value is below the interest the payoff would earn.
            exercise = time_value < intrinsic * math.exp(r * remaining) - intrinsic
            exercised = _clip_low((strike - prices) * to_dividend)
        else:
            intrinsic = _clip_low(prices - strike)
            time_value = current - intrinsic
            exercise = (opt.dividend > time_value) & (prices > strike)
            exercised = _clip_low((prices - strike) * to_dividend)
        total = np.where(exercise, exercised, held).sum()
    return float(total / simulations)


def simulate_asian(
    opt: Option, side: OptionsSide, steps: int, simulations: int, rng=None
) -> float:
    """Arithmetic-average Asian option, averaging over every step."""
    steps, simulations = _check_counts(steps, simulations)
    gen = _generator(rng)
    dt = opt.time_to_expiry / steps

    prices = np.full(simulations, float(opt.underlying_price))
    running = np.zeros(simulations)
    for _ in range(steps):
        prices = _step(prices, opt, dt, gen)
        running += prices
    average = running / steps

    if side is OptionsSide.CALL:
        payoff = _clip_low(average - opt.strike)
    else:
        payoff = _clip_low(opt.strike - average)
    return float(math.exp(-opt.risk_free_rate * opt.time_to_expiry) * (payoff.sum() / simulations))


def simulate_bermuda(
    opt: Option, side: OptionsSide, steps: int, simulations: int, rng=None
) -> float:
    """Bermudan option exercisable at the option's exercise times (in years)."""
    steps, simulations = _check_counts(steps, simulations)
    gen = _generator(rng)
    expiry = opt.time_to_expiry
    dt = expiry / steps
    r = opt.risk_free_rate
    strike = opt.strike
    exercise_times = opt.exercise_times

    prices = np.full(simulations, float(opt.underlying_price))
    alive = np.ones(simulations, dtype=bool)
    total = 0.0
    k = 0

    for j in range(steps):
        prices = _step(prices, opt, dt, gen)
        if k < len(exercise_times) and j * dt < exercise_times[k] and (j + 1) * dt >= exercise_times[k]:
            t_exercise = exercise_times[k]
            k += 1
            # A European value stands in for the continuation value.
            with np.errstate(all="ignore"):
                current = _european_values(opt, side, prices, expiry - t_exercise)
                if side is OptionsSide.PUT:
                    intrinsic = _clip_low(strike - prices)
                    time_value = current - intrinsic
                    now = alive & (
                        time_value < intrinsic * math.exp(r * (expiry - t_exercise)) - intrinsic
                    )
                    value = _clip_high(strike - prices) * math.exp(-r * t_exercise)
                else:
                    intrinsic = _clip_low(prices - strike)
                    time_value = current - intrinsic
                    now = alive & (opt.dividend > time_value)
                    value = _clip_high(prices - strike) * math.exp(-r * t_exercise)
            total += float(value[now].sum())
            alive &= ~now

    final = prices[alive]
    if side is OptionsSide.PUT:
        payoff = _clip_low(strike - final)
    else:
        payoff = _clip_low(final - strike)
    total += float((payoff * math.exp(-r * expiry)).sum())
    return total / simulations


def simulate_price(opt: Option, steps: int, simulations: int, rng=None) -> float:
    """Monte Carlo price for the option's type and side."""
    kind = opt.option_type
    side = opt.side
    if kind is OptionsType.EUROPEAN or (kind is OptionsType.AMERICAN and opt.dividend == 0):
        return simulate_european(
            opt, side, steps, simulations, opt.underlying_price, opt.time_to_expiry, rng
        )
    if kind is OptionsType.AMERICAN:
        return simulate_american(opt, side, steps, simulations, rng)
    if kind is OptionsType.ASIAN:
        return simulate_asian(opt, side, steps, simulations, rng)
    if kind is OptionsType.BERMUDA:
        return simulate_bermuda(opt, side, steps, simulations, rng)
    return 0.0
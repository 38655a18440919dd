"""Command-line demonstration of the option pricers and Greeks."""

from __future__ import annotations

import argparse
from typing import Iterator

import numpy as np

from .closed_form import closed_form_price
from .greeks import (
    delta,
    gamma,
    phi,
    rho,
    simulate_delta,
    simulate_gamma,
    simulate_phi,
    simulate_rho,
    simulate_theta,
    simulate_vega,
    theta,
    vega,
)
from .option import Option, OptionsSide, OptionsType, UnderlyingType
from .simulation import simulate_price

_CALL = OptionsSide.CALL
_PUT = OptionsSide.PUT
_EUR = OptionsType.EUROPEAN
_AM = OptionsType.AMERICAN
_STOCK = UnderlyingType.STOCK


def demo_options() -> dict[str, Option]:
    """The sample contracts the demonstration prices, keyed by name."""
    return {
        "eur_call": Option(252, 0.20, 0.05, 100.0, 100.0, _EUR, _CALL, _STOCK),
        "eur_put": Option(252, 0.20, 0.05, 100.0, 100.0, _EUR, _PUT, _STOCK),
        "eur_call_otm": Option(252, 0.20, 0.05, 100.0, 150.0, _EUR, _CALL, _STOCK),
        "eur_call_itm": Option(252, 0.20, 0.05, 100.0, 50.0, _EUR, _CALL, _STOCK),
        "am_call_no_div": Option(252, 0.20, 0.05, 100.0, 100.0, _AM, _CALL, _STOCK),
        "am_call_div": Option(
            252, 0.20, 0.05, 100.0, 100.0, _AM, _CALL, _STOCK, dividend=3.0, dividend_days=30
        ),
        "am_put": Option(252, 0.20, 0.05, 90.0, 100.0, _AM, _PUT, _STOCK),
        "futures_call": Option(
            252, 0.20, 0.05, 100.0, 100.0, _EUR, _CALL,
            UnderlyingType.FUTURES_WITH_FUTURES_SETTLEMENT,
        ),
        "fx_call": Option(
            252, 0.08, 0.05, 1.10, 1.10, _EUR, _CALL, UnderlyingType.FOREX, foreign_rate=0.03
        ),
        "fx_put": Option(
            252, 0.08, 0.05, 1.10, 1.10, _EUR, _PUT, UnderlyingType.FOREX, foreign_rate=0.03
        ),
        "asian_call": Option(252, 0.20, 0.05, 100.0, 100.0, OptionsType.ASIAN, _CALL, _STOCK),
        "asian_put": Option(252, 0.20, 0.05, 100.0, 100.0, OptionsType.ASIAN, _PUT, _STOCK),
        "bermuda_call": Option(
            252, 0.20, 0.05, 100.0, 100.0, OptionsType.BERMUDA, _CALL, _STOCK,
            dividend=3.0, dividend_days=30,
        ),
        "bermuda_put": Option(
            252, 0.20, 0.05, 100.0, 100.0, OptionsType.BERMUDA, _PUT, _STOCK,
            dividend=3.0, dividend_days=30,
        ),
    }


def _report(steps: int, simulations: int, gen: np.random.Generator) -> Iterator[str]:
    o = demo_options()

    def mc(opt: Option) -> float:
        return simulate_price(opt, steps, simulations, gen)

    closed = [
        ("Eur Call ATM:        ", "eur_call"),
        ("Eur Put ATM:         ", "eur_put"),
        ("Eur Call OTM:        ", "eur_call_otm"),
        ("Eur Call ITM:        ", "eur_call_itm"),
        ("Amer Call (no div):  ", "am_call_no_div"),
        ("Amer Call (div):     ", "am_call_div"),
        ("Amer Put ITM:        ", "am_put"),
        ("Futures/Futures Call:", "futures_call"),
        ("Forex Call ATM:      ", "fx_call"),
    ]
    for label, name in closed:
        yield f"{label}{closed_form_price(o[name]):.4f}"

    yield ""
    yield "--- Monte Carlo ---"
    simulated = [
        ("MC Eur Call ATM:         ", "eur_call"),
        ("MC Eur Put ATM:          ", "eur_put"),
        ("MC Eur Call OTM:         ", "eur_call_otm"),
        ("MC Eur Call ITM:         ", "eur_call_itm"),
        ("MC Amer Call (no div):   ", "am_call_no_div"),
        ("MC Amer Call (div):      ", "am_call_div"),
        ("MC Amer Put ITM:         ", "am_put"),
        ("MC Asian Call ATM:       ", "asian_call"),
        ("MC Asian Put ATM:        ", "asian_put"),
        ("MC Bermuda Call ATM:     ", "bermuda_call"),
        ("MC Bermuda Put ATM:      ", "bermuda_put"),
    ]
    for label, name in simulated:
        yield f"{label}{mc(o[name]):.4f}"

    yield ""
    yield "--- Greeks ---"
    yield f"Delta Eur Call ATM:      {delta(o['eur_call']):.4f}  (~0.637)"
    yield f"Delta Eur Put ATM:       {delta(o['eur_put']):.4f}  (~-0.363)"
    yield f"Delta Eur Call ITM:      {delta(o['eur_call_itm']):.4f}  (~0.9999)"
    yield f"Delta Eur Call OTM:      {delta(o['eur_call_otm']):.4f}  (~0.047)"
    yield f"Gamma Eur Call ATM:      {gamma(o['eur_call']):.4f}  (~0.019)"
    yield f"Gamma Eur Call ITM:      {gamma(o['eur_call_itm']):.4f}  (~0.000)"
    yield f"Theta Eur Call ATM:      {theta(o['eur_call']):.4f}  (~-0.0176)"
    yield f"Theta Eur Put ATM:       {theta(o['eur_put']):.4f}  (~-0.0045)"
    yield f"Vega Eur Call ATM:       {vega(o['eur_call']):.4f}  (~0.375)"
    yield f"Vega Eur Put ATM:        {vega(o['eur_put']):.4f}  (~0.375)"
    yield f"Vega Eur Call OTM:       {vega(o['eur_call_otm']):.4f}  (~0.097)"
    yield f"Rho Eur Call ATM:        {rho(o['eur_call'], steps, simulations, gen):.4f}  (~0.532)"
    yield f"Rho Eur Put ATM:         {rho(o['eur_put'], steps, simulations, gen):.4f}  (~-0.419)"
    yield (
        f"Rho Futures/Fut Call:    "
        f"{rho(o['futures_call'], steps, simulations, gen):.4f}  (~-0.078)"
    )

    yield ""
    yield "--- Simulated Greeks (Monte Carlo) ---"

    def pair(label: str, simulated_value: float, analytic_value: float) -> str:
        return f"{label}{simulated_value:.4f}  (analytic ~{analytic_value:.4f})"

    args = (steps, simulations, gen)
    for label, name in [
        ("Sim Delta Eur Call ATM:  ", "eur_call"),
        ("Sim Delta Eur Put ATM:   ", "eur_put"),
        ("Sim Delta Eur Call ITM:  ", "eur_call_itm"),
        ("Sim Delta Eur Call OTM:  ", "eur_call_otm"),
    ]:
        yield pair(label, simulate_delta(o[name], *args), delta(o[name]))
    for label, name in [
        ("Sim Gamma Eur Call ATM:  ", "eur_call"),
        ("Sim Gamma Eur Put ATM:   ", "eur_put"),
        ("Sim Gamma Eur Call ITM:  ", "eur_call_itm"),
    ]:
        yield pair(label, simulate_gamma(o[name], *args), gamma(o[name]))
    for label, name in [
        ("Sim Theta Eur Call ATM:  ", "eur_call"),
        ("Sim Theta Eur Put ATM:   ", "eur_put"),
    ]:
        yield pair(label, simulate_theta(o[name], *args), theta(o[name]))
    for label, name in [
        ("Sim Vega Eur Call ATM:   ", "eur_call"),
        ("Sim Vega Eur Put ATM:    ", "eur_put"),
        ("Sim Vega Eur Call OTM:   ", "eur_call_otm"),
    ]:
        yield pair(label, simulate_vega(o[name], *args), vega(o[name]))
    for label, name in [
        ("Sim Rho Eur Call ATM:    ", "eur_call"),
        ("Sim Rho Eur Put ATM:     ", "eur_put"),
        ("Sim Rho Futures/Fut Call:", "futures_call"),
    ]:
        yield pair(label, simulate_rho(o[name], *args), rho(o[name], *args))
    for label, name in [
        ("Sim Phi Forex Call ATM:  ", "fx_call"),
        ("Sim Phi Forex Put ATM:   ", "fx_put"),
    ]:
        yield pair(label, simulate_phi(o[name], *args), phi(o[name]))


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from exc
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value}")
    return value


def main(argv: list[str] | None = None) -> int:
    """Print closed-form prices, Monte Carlo prices and Greeks for the sample contracts."""
    parser = argparse.ArgumentParser(description="Option pricing demonstration.")
    parser.add_argument("--steps", type=_positive_int, default=252,
                        help="time steps per simulated path")
    parser.add_argument("--simulations", type=_positive_int, default=100_000,
                        help="number of simulated paths")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for reproducible simulations")
    args = parser.parse_args(argv)
    gen = np.random.default_rng(args.seed)
    for line in _report(args.steps, args.simulations, gen):
        print(line)
    return 0
import math

import pytest

from quantlab.cli import demo_options, main
from quantlab.closed_form import closed_form_price
from quantlab.greeks import delta, vega
from quantlab.option import OptionsSide, OptionsType, UnderlyingType

SMALL = ["--steps", "4", "--simulations", "200", "--seed", "7"]


def _run(capsys, argv):
    code = main(argv)
    out = capsys.readouterr().out
    return code, out


def _values(out):
    values = {}
    for line in out.splitlines():
        if ":" not in line or line.startswith("---"):
            continue
        label, rest = line.split(":", 1)
        values[label.strip()] = rest.split()[0]
    return values


@pytest.fixture(scope="module")
def report():
    import io
    from contextlib import redirect_stdout

    buffer = io.StringIO()
    with redirect_stdout(buffer):
        code = main(SMALL)
    return code, buffer.getvalue()


def test_demo_options_contracts():
    opts = demo_options()
    eur_call = opts["eur_call"]
    assert eur_call.strike == 100.0
    assert eur_call.time_to_expiry == 1.0
    assert eur_call.side is OptionsSide.CALL
    assert opts["eur_call_otm"].strike == 150.0
    assert opts["eur_call_itm"].strike == 50.0
    assert opts["am_put"].underlying_price == 90.0


def test_demo_options_dividend_and_types():
    opts = demo_options()
    am_div = opts["am_call_div"]
    assert am_div.dividend == 3.0
    assert am_div.time_to_dividend == pytest.approx(30 / 252)
    assert am_div.option_type is OptionsType.AMERICAN
    assert opts["bermuda_put"].option_type is OptionsType.BERMUDA
    assert opts["bermuda_put"].exercise_times == ()
    assert opts["asian_call"].option_type is OptionsType.ASIAN


def test_demo_options_underlyings():
    opts = demo_options()
    fut = opts["futures_call"]
    assert fut.underlying_type is UnderlyingType.FUTURES_WITH_FUTURES_SETTLEMENT
    assert fut.risk_free_rate == 0.0
    assert fut.cost_of_carry == 0.0
    fx = opts["fx_call"]
    assert fx.foreign_rate == 0.03
    assert fx.cost_of_carry == pytest.approx(0.05 - 0.03)


def test_main_returns_zero_and_prints_sections(report):
    code, out = report
    assert code == 0
    assert "--- Monte Carlo ---" in out
    assert "--- Greeks ---" in out
    assert "--- Simulated Greeks (Monte Carlo) ---" in out


def test_closed_form_lines_match_pricer(report):
    _, out = report
    values = _values(out)
    opts = demo_options()
    assert values["Eur Call ATM"] == f"{closed_form_price(opts['eur_call']):.4f}"
    assert values["Eur Put ATM"] == f"{closed_form_price(opts['eur_put']):.4f}"
    assert values["Futures/Futures Call"] == f"{closed_form_price(opts['futures_call']):.4f}"
    assert values["Forex Call ATM"] == f"{closed_form_price(opts['fx_call']):.4f}"


def test_analytic_greek_lines(report):
    _, out = report
    values = _values(out)
    opts = demo_options()
    assert values["Delta Eur Call ATM"] == f"{delta(opts['eur_call']):.4f}"
    assert values["Vega Eur Put ATM"] == f"{vega(opts['eur_put']):.4f}"
    assert abs(float(values["Delta Eur Call ATM"]) - 0.637) < 0.001
    assert abs(float(values["Delta Eur Put ATM"]) + 0.363) < 0.001


def test_all_values_are_finite_numbers(report):
    _, out = report
    values = _values(out)
    assert len(values) == 9 + 11 + 14 + 17
    assert all(math.isfinite(float(v)) for v in values.values())


def test_same_seed_same_output(report, capsys):
    _, first = report
    _, second = _run(capsys, SMALL)
    assert first == second


def test_rejects_non_positive_steps(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--steps", "0"])
    assert excinfo.value.code == 2


def test_rejects_non_integer_simulations(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--simulations", "many"])
    assert excinfo.value.code == 2
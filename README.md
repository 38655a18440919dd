# quantlab

Pricing and Greeks for options on stocks, futures and currencies, and a small price-time priority limit order book.

## Installation

```
pip install .
pip install ".[test]"   # with the test dependencies
```

## Options

### Describing a contract

`quantlab.option.Option` describes a contract. Its arguments are:

- `days`: trading days to expiry. The option stores this in years, as `time_to_expiry = days / 252`.
- `volatility`
- `rate`
- `underlying_price`
- `strike`
- `option_type`: an `OptionsType` (`AMERICAN`, `EUROPEAN`, `ASIAN` or `BERMUDA`).
- `side`: an `OptionsSide` (`CALL` or `PUT`).
- `underlying_type`: an `UnderlyingType`.

It also takes these keyword arguments:

- `dividend` and `dividend_days`: one discrete dividend.
- `foreign_rate`
- `exercise_times`: Bermudan exercise times, in years.

The cost of carry (`cost_of_carry`) is fixed when the option is created. It depends on the underlying type:

- `UnderlyingType.STOCK`: the carry equals the risk-free rate.
- `UnderlyingType.FUTURES_WITH_FUTURES_SETTLEMENT`: the carry is zero and the risk-free rate is set to zero.
- `UnderlyingType.FUTURES_WITH_STOCK_SETTLEMENT`: the carry is zero.
- `UnderlyingType.FOREX`: the carry is the rate minus `foreign_rate`. Leaving out `foreign_rate` raises `ValueError`.

If you pass `foreign_rate`, the carry is always `rate - foreign_rate`, whatever the underlying type.

Other members of `Option`:

- `opt.foreign_rate` raises `ValueError` for an option that is not forex.
- `opt.with_changes(**kwargs)` returns a modified copy. It does not recompute the carry.
- `Option.from_market_price(...)` records a known option price with the volatility left unset.

### Closed form

`quantlab.closed_form.closed_form_price(opt)` picks the formula from the option's type and side:

- European options use generalised Black-Scholes (`european_call`, `european_put`).
- American options without a dividend are priced as European.
- American calls with a dividend use Roll-Geske-Whaley (`american_call`). The critical price comes from `critical_price_call`.
- American puts with a dividend use a Barone-Adesi-Whaley style approximation (`american_put`, `critical_price_put`).
- Asian and Bermudan puts also go through `american_put`.
- Asian and Bermudan calls get `0.0`. Use the simulation for those.

`quantlab.mathutils` provides the helpers these formulas use:

- `normal_pdf`
- `normal_cdf`
- `bivariate_normal_cdf` (10-point Gauss-Legendre)
- `d1`
- `d2`

### Monte Carlo

`quantlab.simulation.simulate_price(opt, steps, simulations, rng=None)` simulates geometric Brownian motion paths. It sends the option to one of these pricers:

- `simulate_european`
- `simulate_american`: early exercise just before the dividend.
- `simulate_asian`: arithmetic average over every step.
- `simulate_bermuda`: exercise at `exercise_times`.

`rng` may be any of these:

- a `numpy.random.Generator`
- an integer seed
- `None`

Fewer than one step or one simulation raises `ValueError`.

### Greeks

`quantlab.greeks` provides analytic Greeks:

- `delta`
- `gamma`
- `theta` (per calendar day)
- `vega` (per volatility point)
- `rho`
- `phi`

`rho` takes simulation arguments. It falls back to a simulated price when the cost of carry is zero.

Each Greek has a `simulate_*` counterpart that bumps an input and differences Monte Carlo prices. Given an integer seed, the base run and the bumped run use the same random draws. `simulate_phi` raises `ValueError` for non-forex options.

### Demonstration

```
quantlab-options [--steps N] [--simulations N] [--seed SEED]
```

This command prints closed-form prices, Monte Carlo prices, analytic Greeks and simulated Greeks for a set of sample contracts. `quantlab.cli.demo_options()` returns those contracts. The defaults are 252 steps and 100000 paths, so a full run takes a while.

## Order book

`quantlab.orderbook.OrderBook` matches orders by best price first, then by arrival. Its methods:

- `add_order(order)` returns the list of `Trade`s the order causes. A duplicate order id is ignored.
- `cancel_order(order_id)` removes an order. Unknown ids are ignored.
- `modify_order(modify)` cancels the order and re-adds it with the `OrderModify`'s price, quantity and side, keeping its type. The order loses its time priority.
- `level_infos()` returns an `OrderBookLevelInfos` of `LevelInfo`s, best price first on each side.

`len(book)` counts the resting orders, and `order_id in book` tests for one.

Order types, from `quantlab.orders.OrderType`:

- `GOOD_TILL_CANCEL` rests until it fills or is cancelled.
- `FILL_AND_KILL` is only accepted if it can match at once. Any rest left at the front of the book after matching is cancelled.
- `FILL_OR_KILL` is only accepted if the book holds enough quantity at acceptable prices.
- `MARKET` orders (`Order.market(...)`) become good-till-cancel at the worst opposite price. They are dropped if the opposite side is empty.
- `GOOD_FOR_DAY` rests like good-till-cancel.

Try it with:

```
quantlab-orderbook
```

This adds one order, cancels it, and prints the book size after each step.

## What it does not do

- No implied-volatility solver. `Option.from_market_price` only records the price.
- Good-for-day orders are never expired at the end of a day.
- The order book lives in memory only. It has no persistence, network interface or market data feed.

## Tests

```
pytest
```
import dataclasses

import pytest

from quantlab.orders import (
    INVALID_PRICE,
    LevelInfo,
    Order,
    OrderBookLevelInfos,
    OrderModify,
    OrderType,
    Side,
    Trade,
    TradeInfo,
)


def make_order(quantity=10):
    return Order(OrderType.GOOD_TILL_CANCEL, 1, Side.BUY, 100, quantity)


def test_new_order_has_full_remaining_quantity():
    order = make_order(10)
    assert order.remaining_quantity == 10
    assert order.initial_quantity == 10
    assert order.filled_quantity == 0
    assert order.is_filled is False


def test_partial_fill_updates_quantities():
    order = make_order(10)
    order.fill(4)
    assert order.remaining_quantity == 6
    assert order.filled_quantity == 4
    assert order.is_filled is False


def test_complete_fill_marks_filled():
    order = make_order(10)
    order.fill(3)
    order.fill(7)
    assert order.is_filled is True
    assert order.filled_quantity == order.initial_quantity


def test_overfill_raises_and_leaves_order_unchanged():
    order = make_order(5)
    with pytest.raises(ValueError, match="remaining quantity"):
        order.fill(6)
    assert order.remaining_quantity == 5


def test_market_order_has_no_price():
    order = Order.market(7, Side.SELL, 3)
    assert order.order_type is OrderType.MARKET
    assert order.price is INVALID_PRICE
    assert order.order_id == 7
    assert order.side is Side.SELL
    assert order.remaining_quantity == 3


def test_market_to_good_till_cancel_sets_price_and_type():
    order = Order.market(7, Side.BUY, 3)
    order.market_to_good_till_cancel(101)
    assert order.order_type is OrderType.GOOD_TILL_CANCEL
    assert order.price == 101


def test_market_to_good_till_cancel_rejects_non_market():
    order = make_order()
    with pytest.raises(ValueError):
        order.market_to_good_till_cancel(99)
    assert order.price == 100


def test_order_modify_builds_order_of_given_type():
    modify = OrderModify(4, 105, 8, Side.SELL)
    order = modify.to_order(OrderType.FILL_AND_KILL)
    assert order.order_type is OrderType.FILL_AND_KILL
    assert (order.order_id, order.side, order.price) == (4, Side.SELL, 105)
    assert order.remaining_quantity == 8


def test_trade_and_level_infos_hold_values():
    trade = Trade(TradeInfo(1, 100, 5), TradeInfo(2, 99, 5))
    assert trade.bid.order_id == 1
    assert trade.ask.price == 99
    infos = OrderBookLevelInfos((LevelInfo(100, 5),), ())
    assert infos.bids[0] == LevelInfo(100, 5)
    assert infos.asks == ()


def test_trade_info_is_immutable():
    info = TradeInfo(1, 100, 5)
    with pytest.raises(dataclasses.FrozenInstanceError):
        info.quantity = 6  # type: ignore[misc]
    assert info.quantity == 5
    assert info == TradeInfo(1, 100, 5)
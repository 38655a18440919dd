import pytest

from quantlab.orderbook import OrderBook, main
from quantlab.orders import LevelInfo, Order, OrderModify, OrderType, Side

GTC = OrderType.GOOD_TILL_CANCEL


@pytest.fixture
def book():
    return OrderBook()


def test_add_and_cancel_changes_size(book):
    book.add_order(Order(GTC, 1, Side.BUY, 100, 10))
    assert len(book) == 1
    assert 1 in book
    book.cancel_order(1)
    assert len(book) == 0
    assert 1 not in book


def test_duplicate_id_is_ignored(book):
    book.add_order(Order(GTC, 1, Side.BUY, 100, 10))
    assert book.add_order(Order(GTC, 1, Side.SELL, 90, 10)) == []
    assert len(book) == 1


def test_cancel_unknown_is_noop(book):
    book.add_order(Order(GTC, 1, Side.BUY, 100, 10))
    book.cancel_order(42)
    assert len(book) == 1


def test_crossing_orders_trade(book):
    book.add_order(Order(GTC, 1, Side.SELL, 99, 10))
    trades = book.add_order(Order(GTC, 2, Side.BUY, 100, 10))
    assert len(trades) == 1
    trade = trades[0]
    assert (trade.bid.order_id, trade.bid.price, trade.bid.quantity) == (2, 100, 10)
    assert (trade.ask.order_id, trade.ask.price, trade.ask.quantity) == (1, 99, 10)
    assert len(book) == 0


def test_non_crossing_orders_rest(book):
    book.add_order(Order(GTC, 1, Side.SELL, 101, 10))
    assert book.add_order(Order(GTC, 2, Side.BUY, 100, 10)) == []
    assert len(book) == 2


def test_partial_fill_leaves_remainder(book):
    book.add_order(Order(GTC, 1, Side.SELL, 100, 4))
    trades = book.add_order(Order(GTC, 2, Side.BUY, 100, 10))
    assert sum(t.bid.quantity for t in trades) == 4
    infos = book.level_infos()
    assert infos.bids == (LevelInfo(100, 6),)
    assert infos.asks == ()


def test_time_priority_within_level(book):
    book.add_order(Order(GTC, 1, Side.BUY, 100, 5))
    book.add_order(Order(GTC, 2, Side.BUY, 100, 5))
    trades = book.add_order(Order(GTC, 3, Side.SELL, 100, 5))
    assert [t.bid.order_id for t in trades] == [1]
    assert 2 in book and 1 not in book


def test_level_infos_order_best_first(book):
    book.add_order(Order(GTC, 1, Side.BUY, 98, 1))
    book.add_order(Order(GTC, 2, Side.BUY, 99, 2))
    book.add_order(Order(GTC, 3, Side.BUY, 99, 3))
    book.add_order(Order(GTC, 4, Side.SELL, 102, 4))
    book.add_order(Order(GTC, 5, Side.SELL, 101, 5))
    infos = book.level_infos()
    assert [level.price for level in infos.bids] == [99, 98]
    assert infos.bids[0].quantity == 2 + 3
    assert [level.price for level in infos.asks] == [101, 102]


def test_fill_and_kill_without_match_is_rejected(book):
    book.add_order(Order(GTC, 1, Side.SELL, 105, 5))
    trades = book.add_order(Order(OrderType.FILL_AND_KILL, 2, Side.BUY, 100, 5))
    assert trades == []
    assert 2 not in book


def test_fill_and_kill_remainder_is_cancelled(book):
    book.add_order(Order(GTC, 1, Side.SELL, 100, 3))
    trades = book.add_order(Order(OrderType.FILL_AND_KILL, 2, Side.BUY, 100, 5))
    assert sum(t.ask.quantity for t in trades) == 3
    assert len(book) == 0


def test_fill_or_kill_insufficient_is_rejected(book):
    book.add_order(Order(GTC, 1, Side.SELL, 100, 3))
    book.add_order(Order(GTC, 2, Side.SELL, 101, 3))
    trades = book.add_order(Order(OrderType.FILL_OR_KILL, 3, Side.BUY, 100, 5))
    assert trades == []
    assert len(book) == 2


def test_fill_or_kill_sufficient_fills_completely(book):
    book.add_order(Order(GTC, 1, Side.SELL, 100, 3))
    book.add_order(Order(GTC, 2, Side.SELL, 101, 3))
    trades = book.add_order(Order(OrderType.FILL_OR_KILL, 3, Side.BUY, 101, 5))
    assert sum(t.bid.quantity for t in trades) == 5
    assert 3 not in book
    assert book.level_infos().asks == (LevelInfo(101, 1),)


def test_market_order_without_liquidity_is_rejected(book):
    assert book.add_order(Order.market(1, Side.BUY, 5)) == []
    assert len(book) == 0


def test_market_buy_sweeps_to_worst_ask(book):
    book.add_order(Order(GTC, 1, Side.SELL, 100, 5))
    book.add_order(Order(GTC, 2, Side.SELL, 101, 5))
    market = Order.market(3, Side.BUY, 7)
    trades = book.add_order(market)
    assert [t.ask.price for t in trades] == [100, 101]
    assert sum(t.bid.quantity for t in trades) == 7
    assert market.order_type is GTC
    assert market.price == 101
    assert book.level_infos().asks == (LevelInfo(101, 3),)


def test_market_sell_uses_worst_bid(book):
    book.add_order(Order(GTC, 1, Side.BUY, 100, 2))
    book.add_order(Order(GTC, 2, Side.BUY, 99, 2))
    market = Order.market(3, Side.SELL, 10)
    trades = book.add_order(market)
    assert sum(t.ask.quantity for t in trades) == 4
    assert market.price == 99
    assert book.level_infos().asks == (LevelInfo(99, 6),)


def test_modify_order_can_cause_trade(book):
    book.add_order(Order(GTC, 1, Side.SELL, 102, 5))
    book.add_order(Order(GTC, 2, Side.BUY, 100, 5))
    trades = book.modify_order(OrderModify(2, 102, 5, Side.BUY))
    assert len(trades) == 1
    assert trades[0].bid.price == 102
    assert len(book) == 0


def test_modify_unknown_order_returns_nothing(book):
    assert book.modify_order(OrderModify(9, 100, 1, Side.BUY)) == []
    assert len(book) == 0


def test_main_prints_sizes(capsys):
    assert main([]) == 0
    assert capsys.readouterr().out.split() == ["1", "0"]
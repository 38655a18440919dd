"""A price-time priority limit order book."""

from __future__ import annotations

import argparse
from bisect import bisect_left, insort
from typing import Iterator

from .orders import (
    LevelInfo,
    Order,
    OrderBookLevelInfos,
    OrderModify,
    OrderType,
    Side,
    Trade,
    TradeInfo,
)


def _front(level: dict[int, Order]) -> Order:
    return next(iter(level.values()))


class _BookSide:
    """Price levels of one side; each level keeps its orders in arrival order."""

    def __init__(self, descending: bool) -> None:
        self._descending = descending
        self._levels: dict[int, dict[int, Order]] = {}
        self._prices: list[int] = []  # ascending

    def __bool__(self) -> bool:
        return bool(self._levels)

    def best_price(self) -> int:
        return self._prices[-1] if self._descending else self._prices[0]

    def worst_price(self) -> int:
        return self._prices[0] if self._descending else self._prices[-1]

    def level(self, price: int) -> dict[int, Order]:
        return self._levels[price]

    def levels(self) -> Iterator[tuple[int, dict[int, Order]]]:
        prices = reversed(self._prices) if self._descending else iter(self._prices)
        for price in prices:
            yield price, self._levels[price]

    def add(self, order: Order) -> None:
        level = self._levels.get(order.price)
        if level is None:
            level = self._levels[order.price] = {}
            insort(self._prices, order.price)
        level[order.order_id] = order

    def remove(self, order: Order) -> None:
        level = self._levels[order.price]
        del level[order.order_id]
        if not level:
            del self._levels[order.price]
            del self._prices[bisect_left(self._prices, order.price)]


class OrderBook:
    """Bids and asks matched by best price first, then by arrival."""

    def __init__(self) -> None:
        self._bids = _BookSide(descending=True)
        self._asks = _BookSide(descending=False)
        self._orders: dict[int, Order] = {}

    def __len__(self) -> int:
        return len(self._orders)

    def __contains__(self, order_id: object) -> bool:
        return order_id in self._orders

    def _side(self, side: Side) -> _BookSide:
        return self._bids if side is Side.BUY else self._asks

    def _can_match(self, side: Side, price: int) -> bool:
        if side is Side.BUY:
            return bool(self._asks) and price >= self._asks.best_price()
        return bool(self._bids) and price <= self._bids.best_price()

    def _can_match_fully(self, side: Side, price: int, quantity: int) -> bool:
        available = 0
        opposite = self._asks if side is Side.BUY else self._bids
        for level_price, level in opposite.levels():
            if (side is Side.BUY and level_price > price) or (
                side is Side.SELL and level_price < price
            ):
                break
            available += sum(order.remaining_quantity for order in level.values())
            if available >= quantity:
                return True
        return False

    def _match(self) -> list[Trade]:
        trades: list[Trade] = []
        while self._bids and self._asks:
            bid_price = self._bids.best_price()
            ask_price = self._asks.best_price()
            if bid_price < ask_price:
                break
            bid_level = self._bids.level(bid_price)
            ask_level = self._asks.level(ask_price)
            while bid_level and ask_level:
                bid = _front(bid_level)
                ask = _front(ask_level)
                quantity = min(bid.remaining_quantity, ask.remaining_quantity)
                bid.fill(quantity)
                ask.fill(quantity)
                if bid.is_filled:
                    self._bids.remove(bid)
                    del self._orders[bid.order_id]
                if ask.is_filled:
                    self._asks.remove(ask)
                    del self._orders[ask.order_id]
                trades.append(
                    Trade(
                        TradeInfo(bid.order_id, bid.price, quantity),
                        TradeInfo(ask.order_id, ask.price, quantity),
                    )
                )

        for book_side in (self._bids, self._asks):
            if book_side:
                front = _front(book_side.level(book_side.best_price()))
                if front.order_type is OrderType.FILL_AND_KILL:
                    self.cancel_order(front.order_id)
        return trades

    def add_order(self, order: Order) -> list[Trade]:
        """Place an order and return the trades it causes."""
        if order.order_id in self._orders:
            return []

        if order.order_type is OrderType.MARKET:
            if order.side is Side.BUY and self._asks:
                order.market_to_good_till_cancel(self._asks.worst_price())
            elif order.side is Side.SELL and self._bids:
                order.market_to_good_till_cancel(self._bids.worst_price())
            else:
                return []

        if order.order_type is OrderType.FILL_OR_KILL and not self._can_match_fully(
            order.side, order.price, order.remaining_quantity
        ):
            return []
        if order.order_type is OrderType.FILL_AND_KILL and not self._can_match(
            order.side, order.price
        ):
            return []

        self._side(order.side).add(order)
        self._orders[order.order_id] = order
        return self._match()

    def cancel_order(self, order_id: int) -> None:
        """Remove an order; unknown ids are ignored."""
        order = self._orders.pop(order_id, None)
        if order is not None:
            self._side(order.side).remove(order)

    def modify_order(self, modify: OrderModify) -> list[Trade]:
        """Replace an order, keeping its type; it loses its time priority."""
        existing = self._orders.get(modify.order_id)
        if existing is None:
            return []
        order_type = existing.order_type
        self.cancel_order(modify.order_id)
        return self.add_order(modify.to_order(order_type))

    def level_infos(self) -> OrderBookLevelInfos:
        """Remaining quantity per price level, best price first on each side."""

        def summarise(book_side: _BookSide) -> tuple[LevelInfo, ...]:
            return tuple(
                LevelInfo(price, sum(order.remaining_quantity for order in level.values()))
                for price, level in book_side.levels()
            )

        return OrderBookLevelInfos(summarise(self._bids), summarise(self._asks))


def main(argv: list[str] | None = None) -> int:
    """Place and cancel one order, printing the book size after each step."""
    parser = argparse.ArgumentParser(description="Order book demonstration.")
    parser.parse_args(argv)
    book = OrderBook()
    order_id = 1
    book.add_order(Order(OrderType.GOOD_TILL_CANCEL, order_id, Side.BUY, 100, 10))
    print(len(book))
    book.cancel_order(order_id)
    print(len(book))
    return 0
"""Orders, trades and price-level summaries used by the order book."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# Market orders carry no price until they are converted to a resting order.
INVALID_PRICE = None


class OrderType(Enum):
    """Lifetime and fill policy of an order."""

    GOOD_TILL_CANCEL = "good_till_cancel"
    FILL_AND_KILL = "fill_and_kill"
    FILL_OR_KILL = "fill_or_kill"
    GOOD_FOR_DAY = "good_for_day"
    MARKET = "market"


class Side(Enum):
    """Which side of the book an order sits on."""

    BUY = "buy"
    SELL = "sell"


@dataclass(eq=False)
class Order:
    """An order with a fixed initial quantity and a shrinking remainder."""

    order_type: OrderType
    order_id: int
    side: Side
    price: int | None
    initial_quantity: int
    remaining_quantity: int = field(init=False)

    def __post_init__(self) -> None:
        self.remaining_quantity = self.initial_quantity

    @classmethod
    def market(cls, order_id: int, side: Side, quantity: int) -> "Order":
        """A market order, which has no price of its own."""
        return cls(OrderType.MARKET, order_id, side, INVALID_PRICE, quantity)

    @property
    def filled_quantity(self) -> int:
        """Quantity filled so far."""
        return self.initial_quantity - self.remaining_quantity

    @property
    def is_filled(self) -> bool:
        """True once nothing remains to be filled."""
        return self.remaining_quantity == 0

    def fill(self, quantity: int) -> None:
        """Fill part of the order."""
        if quantity > self.remaining_quantity:
            raise ValueError(
                f"Order {self.order_id} cannot be filled for more than its remaining quantity"
            )
        self.remaining_quantity -= quantity

    def market_to_good_till_cancel(self, price: int) -> None:
        """Turn a market order into a good-till-cancel order at ``price``."""
        if self.order_type is not OrderType.MARKET:
            raise ValueError("only market orders can be converted to good-till-cancel")
        self.order_type = OrderType.GOOD_TILL_CANCEL
        self.price = price


@dataclass(frozen=True)
class OrderModify:
    """A request to replace an existing order's price, quantity and side."""

    order_id: int
    price: int
    quantity: int
    side: Side

    def to_order(self, order_type: OrderType) -> Order:
        """A fresh order of ``order_type`` carrying this request's values."""
        return Order(order_type, self.order_id, self.side, self.price, self.quantity)


@dataclass(frozen=True)
class TradeInfo:
    """One side of a trade."""

    order_id: int
    price: int
    quantity: int


@dataclass(frozen=True)
class Trade:
    """A match between a bid and an ask."""

    bid: TradeInfo
    ask: TradeInfo


@dataclass(frozen=True)
class LevelInfo:
    """Total remaining quantity resting at one price."""

    price: int
    quantity: int


@dataclass(frozen=True)
class OrderBookLevelInfos:
    """Price levels of both sides, best price first."""

    bids: tuple[LevelInfo, ...]
    asks: tuple[LevelInfo, ...]
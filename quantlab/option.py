"""Option contracts and the enumerations that describe them."""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

TRADING_DAYS = 252


class OptionsType(Enum):
    """Exercise style of an option."""

    AMERICAN = "american"
    EUROPEAN = "european"
    ASIAN = "asian"
    BERMUDA = "bermuda"


class OptionsSide(Enum):
    """Whether the option is a call or a put."""

    CALL = "call"
    PUT = "put"


class UnderlyingType(Enum):
    """Kind of asset the option is written on."""

    STOCK = "stock"
    FUTURES_WITH_FUTURES_SETTLEMENT = "futures_with_futures_settlement"
    FUTURES_WITH_STOCK_SETTLEMENT = "futures_with_stock_settlement"
    FOREX = "forex"


_CHANGEABLE = frozenset(
    {
        "time_to_expiry",
        "volatility",
        "risk_free_rate",
        "foreign_rate",
        "underlying_price",
        "strike",
        "cost_of_carry",
        "exercise_times",
        "option_type",
        "side",
        "underlying_type",
    }
)


@dataclass(init=False)
class Option:
    """An option contract; times are held in years of 252 trading days.

    ``cost_of_carry`` (b) is fixed when the option is created and is not
    recomputed when rates change afterwards.
    """

    time_to_expiry: float
    volatility: float
    risk_free_rate: float
    underlying_price: float
    strike: float
    option_type: OptionsType
    side: OptionsSide
    underlying_type: UnderlyingType
    cost_of_carry: float
    dividend: float = 0.0
    time_to_dividend: float = 0.0
    exercise_times: tuple[float, ...] = ()
    option_price: float | None = None
    _foreign_rate: float | None = field(default=None, repr=False)

    def __init__(
        self,
        days: float,
        volatility: float,
        rate: float,
        underlying_price: float,
        strike: float,
        option_type: OptionsType,
        side: OptionsSide,
        underlying_type: UnderlyingType,
        *,
        dividend: float = 0.0,
        dividend_days: float = 0.0,
        foreign_rate: float | None = None,
        exercise_times: Iterable[float] = (),
    ) -> None:
        self.time_to_expiry = days / TRADING_DAYS
        self.volatility = volatility
        self.risk_free_rate = rate
        self.underlying_price = underlying_price
        self.strike = strike
        self.option_type = option_type
        self.side = side
        self.underlying_type = underlying_type
        self.dividend = float(dividend)
        self.time_to_dividend = dividend_days / TRADING_DAYS
        self.exercise_times = tuple(exercise_times)
        self.option_price = None
        self._foreign_rate = foreign_rate
        if foreign_rate is not None:
            self.cost_of_carry = rate - foreign_rate
        else:
            self.cost_of_carry = self._default_carry()

    def _default_carry(self) -> float:
        kind = self.underlying_type
        if kind is UnderlyingType.FOREX:
            raise ValueError("a foreign interest rate is required for forex options")
        if kind is UnderlyingType.FUTURES_WITH_FUTURES_SETTLEMENT:
            self.risk_free_rate = 0.0
            return 0.0
        if kind is UnderlyingType.FUTURES_WITH_STOCK_SETTLEMENT:
            return 0.0
        if kind is UnderlyingType.STOCK:
            return self.risk_free_rate
        raise ValueError(f"invalid underlying type: {kind!r}")

    @classmethod
    def from_market_price(
        cls,
        option_price: float,
        days: int,
        rate: float,
        underlying_price: float,
        strike: float,
        option_type: OptionsType,
        side: OptionsSide,
        underlying_type: UnderlyingType,
    ) -> "Option":
        """Build an option whose price is known and whose volatility is not."""
        opt = cls.__new__(cls)
        # Whole trading years: the day count is an integer here.
        opt.time_to_expiry = float(int(days) // TRADING_DAYS)
        opt.volatility = -100.0
        opt.risk_free_rate = rate
        opt.underlying_price = underlying_price
        opt.strike = strike
        opt.option_type = option_type
        opt.side = side
        opt.underlying_type = underlying_type
        opt.cost_of_carry = math.nan
        opt.dividend = 0.0
        opt.time_to_dividend = 0.0
        opt.exercise_times = ()
        opt.option_price = option_price
        opt._foreign_rate = None
        return opt

    @property
    def foreign_rate(self) -> float | None:
        """Foreign interest rate; only defined for forex options."""
        if self.underlying_type is not UnderlyingType.FOREX:
            raise ValueError(
                "cannot get foreign interest rate for an option that is not forex"
            )
        return self._foreign_rate

    def with_changes(self, **kwargs) -> "Option":
        """Return a copy with the given attributes replaced."""
        unknown = set(kwargs) - _CHANGEABLE
        if unknown:
            raise TypeError(f"cannot change: {', '.join(sorted(unknown))}")
        changed = copy.copy(self)
        for name, value in kwargs.items():
            if name == "foreign_rate":
                changed._foreign_rate = value
            elif name == "exercise_times":
                changed.exercise_times = tuple(value)
            else:
                setattr(changed, name, value)
        return changed
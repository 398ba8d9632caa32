"""
Trading Models
Orders, market parameters and tickers shared across the client
"""

from dataclasses import dataclass
from enum import Enum


class OrderAction(Enum):
    BUY = "buy"
    SELL = "sell"

    @property
    def opposite(self) -> 'OrderAction':
        return OrderAction.SELL if self is OrderAction.BUY else OrderAction.BUY


@dataclass(frozen=True)
class Order:
    """Caller order, always expressed as coin priced in the reference currency"""
    coin: str
    action: OrderAction
    price: float
    amount: float


@dataclass(frozen=True)
class MarketParams:
    """
    Exchange limits for one coin's market against the reference currency

    reverted is True when the exchange lists the market as 'btc_coin'
    instead of 'coin_btc'.
    """
    coin: str
    reference: str
    decimal_places: int
    min_price: float
    max_price: float
    fee: float
    min_amount: float
    reverted: bool = False

    @property
    def pair(self) -> str:
        if self.reverted:
            return f"{self.reference}_{self.coin}"
        return f"{self.coin}_{self.reference}"

    def format(self, value: float) -> str:
        """Fixed-point string with the market's decimal precision"""
        return f"{value:.{self.decimal_places}f}"


@dataclass(frozen=True)
class Ticker:
    """Prices of a coin in the reference currency"""
    coin: str
    buy_price: float
    sell_price: float
    last_price: float

    @property
    def mid_price(self) -> float:
        return (self.buy_price + self.sell_price) / 2


@dataclass(frozen=True)
class TrackedOrder:
    """Order accepted by the exchange and awaiting fill within one batch"""
    id: int
    coin: str

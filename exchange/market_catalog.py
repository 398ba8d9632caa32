"""
Market Catalog
Per-coin market parameters and tickers against the reference currency
"""

from typing import Dict, List, Optional

from core.models import MarketParams, Ticker
from .errors import UnknownMarket


class MarketCatalog:
    """
    Lazily loaded cache of market metadata and ticker snapshots

    Markets quoted as 'btc_coin' are flagged as reverted and their ticker
    prices are inverted, so every ticker reads as coin priced in btc. A zero
    quote on a reverted market stays 0.0, meaning the side has no price.
    Both caches live for the lifetime of the catalog unless invalidated.
    """

    def __init__(self, config, logger, channel):
        """
        Args:
            config: Configuration object
            logger: Logger instance
            channel: TradeChannel used for public data
        """
        self.config = config
        self.logger = logger
        self.channel = channel
        self.reference = config.REFERENCE_CURRENCY

        self._params: Optional[Dict[str, MarketParams]] = None
        self._tickers: Optional[Dict[str, Ticker]] = None

    # ===== Cache control =====

    @property
    def markets_loaded(self) -> bool:
        return self._params is not None

    @property
    def tickers_loaded(self) -> bool:
        return self._tickers is not None

    def invalidate(self):
        """Drop both caches; the next lookup refetches"""
        self._params = None
        self._tickers = None

    def _split_pair(self, pair_name: str):
        """
        Map a pair name to (coin, reverted), or None for pairs that do not
        trade against the reference currency
        """
        base, sep, quote = pair_name.partition('_')
        if not sep:
            return None
        if base == self.reference:
            return quote, True
        if quote == self.reference:
            return base, False
        return None

    def refresh_markets(self):
        """Fetch the public market listing and rebuild market parameters"""
        listing = self.channel.public_get('info').child('pairs')

        params: Dict[str, MarketParams] = {}
        for pair_name, data in listing.items():
            split = self._split_pair(pair_name)
            if split is None:
                continue
            coin, reverted = split
            params[coin] = MarketParams(
                coin=coin,
                reference=self.reference,
                decimal_places=data.require('decimal_places', int),
                min_price=data.require('min_price', float),
                max_price=data.require('max_price', float),
                fee=data.require('fee', float),
                min_amount=data.require('min_amount', float),
                reverted=reverted,
            )

        self._params = params
        self.logger.market_data(
            "Markets loaded",
            markets=len(params),
            reverted=sum(1 for p in params.values() if p.reverted)
        )

    def refresh_tickers(self):
        """Fetch one combined ticker snapshot for every known market"""
        markets = self.markets()
        tickers: Dict[str, Ticker] = {}

        if markets:
            pairs = "-".join(p.pair for p in markets.values())
            snapshot = self.channel.public_get(f"ticker/{pairs}")

            for pair_name, data in snapshot.items():
                split = self._split_pair(pair_name)
                if split is None:
                    continue
                coin, reverted = split
                buy = data.require('buy', float)
                sell = data.require('sell', float)
                last = data.require('last', float)
                if reverted:
                    buy, sell, last = (_invert(buy), _invert(sell), _invert(last))
                tickers[coin] = Ticker(coin=coin, buy_price=buy, sell_price=sell, last_price=last)

        self._tickers = tickers
        self.logger.market_data("Tickers loaded", tickers=len(tickers))

    # ===== Lookups =====

    def markets(self) -> Dict[str, MarketParams]:
        if self._params is None:
            self.refresh_markets()
        return self._params

    def tickers(self) -> Dict[str, Ticker]:
        if self._tickers is None:
            self.refresh_tickers()
        return self._tickers

    def coins(self) -> List[str]:
        return list(self.markets())

    def params_for(self, coin: str) -> MarketParams:
        """
        Market parameters for coin

        Raises:
            UnknownMarket: coin has no market against the reference currency
        """
        try:
            return self.markets()[coin]
        except KeyError:
            raise UnknownMarket(coin) from None

    def ticker_for(self, coin: str) -> Ticker:
        """
        Ticker for coin in reference currency terms

        Raises:
            UnknownMarket: coin has no ticker against the reference currency
        """
        try:
            return self.tickers()[coin]
        except KeyError:
            raise UnknownMarket(coin) from None


def _invert(value: float) -> float:
    # 0.0 marks a missing quote
    return 1.0 / value if value else 0.0

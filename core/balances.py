"""
Balance Book
Account balances and their value in the reference currency
"""

from typing import Dict, Optional

from exchange.errors import MalformedResponse, UnknownCoin


class BalanceBook:
    """
    Lazily loaded account balances

    Only balances above BALANCE_THRESHOLD are kept, and interest-token
    pseudo balances (names ending with TOKEN_SUFFIX) are skipped. The cache is
    filled on first access and kept until invalidated.
    """

    def __init__(self, config, logger, channel, catalog):
        self.config = config
        self.logger = logger
        self.channel = channel
        self.catalog = catalog
        self.threshold = config.BALANCE_THRESHOLD
        self.token_suffix = config.TOKEN_SUFFIX
        self.reference = config.REFERENCE_CURRENCY

        self._balances: Optional[Dict[str, float]] = None

    @property
    def loaded(self) -> bool:
        return self._balances is not None

    def invalidate(self):
        self._balances = None

    def is_token(self, name: str) -> bool:
        return bool(self.token_suffix) and name.endswith(self.token_suffix)

    def refresh(self):
        """Reload funds from the account info call"""
        funds = self.channel.call({'method': 'getInfo'}).child('return.funds')

        balances: Dict[str, float] = {}
        for coin, value in funds.items():
            if self.is_token(coin):
                continue
            try:
                amount = float(value.data)
            except (TypeError, ValueError) as e:
                raise MalformedResponse(value.path, str(e)) from e
            if amount > self.threshold:
                balances[coin] = amount

        self._balances = balances
        self.logger.balances_loaded(len(balances))

    def all(self) -> Dict[str, float]:
        if self._balances is None:
            self.refresh()
        return self._balances

    def balance(self, coin: str) -> float:
        """
        Cached balance of coin

        Raises:
            UnknownCoin: coin is not among the material balances
        """
        try:
            return self.all()[coin]
        except KeyError:
            raise UnknownCoin(coin) from None

    def non_zero(self) -> Dict[str, float]:
        return {coin: amount for coin, amount in self.all().items() if amount != 0.0}

    def non_zero_in_reference(self) -> Dict[str, float]:
        """
        Non-zero balances valued in the reference currency at the ticker
        mid price. Coins without a reference market are skipped.
        """
        tickers = self.catalog.tickers()
        valued: Dict[str, float] = {}

        for coin, amount in self.non_zero().items():
            if coin == self.reference:
                valued[coin] = amount
            elif coin in tickers:
                valued[coin] = amount * tickers[coin].mid_price
            else:
                self.logger.warning(f"No {self.reference} market for balance", coin=coin)

        return valued

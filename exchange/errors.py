"""
Exchange Errors
Exception hierarchy for transport, exchange and catalog failures
"""

from typing import Optional


class WexError(Exception):
    """Base class for all client errors"""


class TransportError(WexError):
    """Connection, TLS or HTTP-level failure. Never retried by the client."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class ExchangeError(WexError):
    """Error reported by the exchange in the response 'error' field"""

    def __init__(self, message: str, method: str = ''):
        super().__init__(f"{method}: {message}" if method else message)
        self.message = message
        self.method = method


class UnknownMarket(WexError, KeyError):
    """Coin has no market against the reference currency"""

    def __init__(self, coin: str):
        super().__init__(f"Unknown market: {coin}")
        self.coin = coin

    def __str__(self):
        return self.args[0]


class UnknownCoin(WexError, KeyError):
    """Coin is not present in the account balances"""

    def __init__(self, coin: str):
        super().__init__(f"Invalid coin: {coin}")
        self.coin = coin

    def __str__(self):
        return self.args[0]


class MalformedResponse(WexError):
    """Response is missing a mandatory field or has the wrong shape"""

    def __init__(self, path: str, detail: str = ''):
        message = f"Malformed response: missing or invalid '{path}'"
        if detail:
            message += f" ({detail})"
        super().__init__(message)
        self.path = path

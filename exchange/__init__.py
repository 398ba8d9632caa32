"""
Exchange Module
Transport, request signing and market data for the WEX trading API

The full client lives in exchange.wex_client.
"""

from .errors import (
    WexError, TransportError, ExchangeError, UnknownMarket, UnknownCoin, MalformedResponse
)
from .response import ResponseTree
from .signer import RequestSigner
from .api_manager import APIManager
from .channel import TradeChannel
from .market_catalog import MarketCatalog
from .base_client import BaseExchangeClient

__all__ = [
    'WexError', 'TransportError', 'ExchangeError', 'UnknownMarket', 'UnknownCoin',
    'MalformedResponse', 'ResponseTree', 'RequestSigner', 'APIManager', 'TradeChannel',
    'MarketCatalog', 'BaseExchangeClient'
]

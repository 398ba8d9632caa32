"""
WEX Exchange Client
Trading client for the WEX private and public APIs
"""

from typing import Dict, List, Optional, Sequence

from bot_logging import AuditLog
from core.balances import BalanceBook
from core.execution import BatchExecutor
from core.models import Order, Ticker
from core.order_lifecycle import OrderLifecycle
from .api_manager import APIManager
from .base_client import BaseExchangeClient
from .channel import TradeChannel
from .market_catalog import MarketCatalog
from .signer import RequestSigner


class WexExchangeClient(BaseExchangeClient):
    """
    WEX trading client

    Owns the nonce, the market catalog and the balance cache for its
    lifetime. Authenticated calls share one nonce counter, so calls on one
    instance must be serialized by the caller.
    """

    def __init__(self, config, logger, transport=None, audit_log: Optional[AuditLog] = None,
                 require_credentials: bool = False, clock=None, sleep=None):
        """
        Initialize WEX client

        Args:
            config: Configuration object
            logger: Logger instance
            transport: HTTP transport; defaults to an APIManager
            audit_log: Order audit trail; defaults to AUDIT_LOG_PATH
            require_credentials: Refuse to start without an API key and secret
            clock: Monotonic clock for batch deadlines
            sleep: Sleep function between batch polls
        """
        if require_credentials and not config.has_credentials():
            raise ValueError("WEX_API_KEY and WEX_API_SECRET are required for trading")

        self.config = config
        self.logger = logger
        self.transport = transport or APIManager(config, logger)
        self.audit = audit_log or AuditLog(config.AUDIT_LOG_PATH)

        self.signer = RequestSigner(config.WEX_API_SECRET)
        self.channel = TradeChannel(config, logger, self.transport, self.signer)
        self.catalog = MarketCatalog(config, logger, self.channel)
        self.lifecycle = OrderLifecycle(config, logger, self.channel, self.catalog, self.audit)
        self.balances = BalanceBook(config, logger, self.channel, self.catalog)

        executor_args = {}
        if clock is not None:
            executor_args['clock'] = clock
        if sleep is not None:
            executor_args['sleep'] = sleep
        self.executor = BatchExecutor(config, logger, self.lifecycle, self.audit, **executor_args)

        self.logger.system(
            f"WEX client initialized: {config.WEX_HOST}",
            audit_log=self.audit.path or 'disabled'
        )

    # ===== Market data =====

    def info(self, coin: str) -> Ticker:
        return self.catalog.ticker_for(coin)

    def refresh_markets(self):
        """Reload market parameters and tickers"""
        self.catalog.refresh_markets()
        self.catalog.refresh_tickers()

    # ===== Balances =====

    def balance(self, coin: str) -> float:
        return self.balances.balance(coin)

    def non_zero_balances(self) -> Dict[str, float]:
        return self.balances.non_zero()

    def non_zero_balances_in_btc(self) -> Dict[str, float]:
        return self.balances.non_zero_in_reference()

    def refresh_balances(self):
        self.balances.refresh()

    # ===== Orders =====

    def execute(self, orders: Sequence[Order], timeout_minutes: int, stop_event=None) -> bool:
        return self.executor.execute(orders, timeout_minutes, stop_event=stop_event)

    def create_order(self, order: Order) -> int:
        return self.lifecycle.create_order(order)

    def delete_order(self, order_id: int):
        self.lifecycle.cancel_order(order_id)

    def check_order(self, order_id: int, coin: str) -> bool:
        return self.lifecycle.check_order(order_id, coin)

    def cancel_current_orders(self) -> int:
        return self.lifecycle.cancel_current_orders()

    def get_current_orders(self, coin: Optional[str] = None) -> List[int]:
        return self.lifecycle.list_open_orders(coin)

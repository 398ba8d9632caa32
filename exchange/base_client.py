"""
Base Exchange Client
Abstract base class defining the trading interface of the client
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

from core.models import Order, Ticker


class BaseExchangeClient(ABC):
    """
    Abstract base class for exchange clients
    Defines the interface callers trade against
    """

    @abstractmethod
    def balance(self, coin: str) -> float:
        """
        Get balance of a single coin

        Args:
            coin: Coin name (e.g., 'ltc')

        Returns:
            Balance amount
        """
        pass

    @abstractmethod
    def info(self, coin: str) -> Ticker:
        """
        Get current prices of a coin in the reference currency

        Args:
            coin: Coin name

        Returns:
            Ticker with buy, sell and last prices
        """
        pass

    @abstractmethod
    def non_zero_balances(self) -> Dict[str, float]:
        """Get all non-zero balances"""
        pass

    @abstractmethod
    def non_zero_balances_in_btc(self) -> Dict[str, float]:
        """Get all non-zero balances valued in the reference currency"""
        pass

    @abstractmethod
    def execute(self, orders: Sequence[Order], timeout_minutes: int) -> bool:
        """
        Place a batch of orders and wait for them to fill

        Args:
            orders: Orders to place
            timeout_minutes: Deadline for the whole batch

        Returns:
            True if any order had to be cancelled at the deadline
        """
        pass

    @abstractmethod
    def create_order(self, order: Order) -> int:
        """
        Place a single order

        Returns:
            Exchange order id
        """
        pass

    @abstractmethod
    def delete_order(self, order_id: int):
        """Cancel a single order"""
        pass

    @abstractmethod
    def check_order(self, order_id: int, coin: str) -> bool:
        """
        Check whether an order has filled

        Returns:
            True once the order is no longer open
        """
        pass

    @abstractmethod
    def cancel_current_orders(self):
        """Cancel every open order on the account"""
        pass

    @abstractmethod
    def get_current_orders(self, coin: Optional[str] = None) -> List[int]:
        """
        List open order ids

        Args:
            coin: Optional coin filter
        """
        pass

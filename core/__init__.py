"""
Core trading modules
Order lifecycle, batch execution and balances
"""

from .models import Order, OrderAction, MarketParams, Ticker, TrackedOrder
from .order_lifecycle import OrderLifecycle
from .execution import BatchExecutor
from .balances import BalanceBook

__all__ = [
    'Order', 'OrderAction', 'MarketParams', 'Ticker', 'TrackedOrder',
    'OrderLifecycle', 'BatchExecutor', 'BalanceBook'
]

"""
Order Lifecycle
Create, poll and cancel single orders on the private trading API
"""

from typing import List, Optional

from exchange.errors import ExchangeError, WexError
from .models import Order

# Returned by the listing methods when nothing is open
NO_ORDERS_ERROR = "no orders"

# Cancel errors meaning the order already left the book
ALREADY_CLOSED_ERRORS = ("bad status", "invalid order", "order not found")

OPEN_STATUS = 0


class OrderLifecycle:
    """
    Single-order operations

    Orders are always given as coin priced in the reference currency. For
    reverted markets the side is flipped, the rate inverted and the amount
    converted to reference-currency notional before sending.
    """

    def __init__(self, config, logger, channel, catalog, audit_log):
        """
        Args:
            config: Configuration object
            logger: Logger instance
            channel: TradeChannel for signed calls
            catalog: MarketCatalog for market normalization
            audit_log: AuditLog receiving order events
        """
        self.config = config
        self.logger = logger
        self.channel = channel
        self.catalog = catalog
        self.audit = audit_log

    def order_params(self, order: Order):
        """
        Trade parameters for order, normalized to the exchange's pair direction

        Raises:
            ValueError: price or amount is not positive
        """
        if order.price <= 0 or order.amount <= 0:
            raise ValueError(f"Price and amount must be positive: {order}")
        market = self.catalog.params_for(order.coin)

        action = order.action
        rate = order.price
        amount = order.amount
        if market.reverted:
            action = action.opposite
            rate = 1.0 / order.price
            amount = order.amount * order.price

        return {
            'method': 'Trade',
            'pair': market.pair,
            'type': action.value,
            'rate': market.format(rate),
            'amount': market.format(amount),
        }

    def create_order(self, order: Order) -> int:
        """
        Place order

        Returns:
            Exchange order id

        Raises:
            ExchangeError: exchange rejected the order
            MalformedResponse: accepted order has no id
        """
        params = self.order_params(order)
        response = self.channel.post(params)

        if response.error:
            self.audit.create(order.action.value, order.coin, order.price, order.amount,
                              error=response.error)
            self.logger.error(
                f"Order rejected: {order.action.value} {order.coin}",
                error=response.error,
                pair=params['pair']
            )
            raise ExchangeError(response.error, 'Trade')

        order_id = response.require('return.order_id', int)
        self.audit.create(order.action.value, order.coin, order.price, order.amount,
                          order_id=order_id)
        self.logger.order_created(
            order.coin, order.action.value, order.price, order.amount, order_id,
            pair=params['pair']
        )
        return order_id

    def check_order(self, order_id: int, coin: str) -> bool:
        """
        Poll an order

        Returns:
            True once the order has left the open-orders set. An id of 0 is
            never polled and is never filled.
        """
        if not order_id:
            return False

        response = self.channel.call({
            'method': 'OrderInfo',
            'order_id': str(order_id),
        })

        filled = True
        for _, record in response.child('return').items():
            if record.require('status', int) == OPEN_STATUS:
                filled = False
                break

        self.logger.order_checked(order_id, coin, filled)
        if filled:
            self.audit.check(order_id, coin)
        return filled

    def cancel_order(self, order_id: int):
        """
        Cancel an order

        An order the exchange reports as already closed is treated as
        cancelled. Any other error is raised.
        """
        response = self.channel.post({
            'method': 'CancelOrder',
            'order_id': str(order_id),
        })
        self.audit.delete(order_id, response.error)

        if not response.error:
            self.logger.order_cancelled(order_id)
            return

        if response.error.lower() in ALREADY_CLOSED_ERRORS:
            self.logger.order_cancelled(order_id, note=f"already closed ({response.error})")
            return

        self.logger.error(f"Cancel failed for order {order_id}", error=response.error)
        raise ExchangeError(response.error, 'CancelOrder')

    def list_open_orders(self, coin: Optional[str] = None) -> List[int]:
        """
        Ids of open orders, globally or for one coin's market

        'no orders' is an empty result, not a failure.
        """
        if coin is None:
            params = {'method': 'ActiveOrders'}
        else:
            params = {
                'method': 'returnOpenOrders',
                'pair': self.catalog.params_for(coin).pair,
            }

        response = self.channel.post(params)
        if response.error:
            if response.error == NO_ORDERS_ERROR:
                return []
            self.logger.error("Listing open orders failed", error=response.error)
            raise ExchangeError(response.error, params['method'])

        return [int(order_id) for order_id in response.child('return').keys()]

    def cancel_current_orders(self) -> int:
        """
        Cancel every open order on the account

        Cancellation is best effort: a failed cancel is logged and the
        remaining orders are still cancelled.

        Returns:
            Number of orders cancelled
        """
        cancelled = 0
        for order_id in self.list_open_orders():
            try:
                self.cancel_order(order_id)
            except WexError as e:
                self.logger.error(f"Could not cancel order {order_id}", error=str(e))
                continue
            cancelled += 1
        return cancelled


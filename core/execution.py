"""
Batch Executor
Places a set of orders and waits for them under one shared deadline
"""

import time
from typing import Callable, List, Optional, Sequence

from exchange.errors import WexError
from .models import Order, TrackedOrder


class BatchExecutor:
    """
    Drives OrderLifecycle over a batch of orders

    All orders are created up front. The tracked set is then polled every
    poll_interval seconds until it is empty or the deadline has passed;
    whatever is still tracked at that point is cancelled.

    A failed order creation aborts the batch with orders already placed left
    open. Handling such partial batches is up to the caller.
    """

    def __init__(self, config, logger, lifecycle, audit_log,
                 clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep):
        """
        Args:
            config: Configuration object
            logger: Logger instance
            lifecycle: OrderLifecycle for single-order calls
            audit_log: AuditLog receiving the batch summary
            clock: Monotonic seconds source
            sleep: Blocking sleep
        """
        self.config = config
        self.logger = logger
        self.lifecycle = lifecycle
        self.audit = audit_log
        self.clock = clock
        self.sleep = sleep
        self.poll_interval = config.ORDER_POLL_INTERVAL

    def create_all(self, orders: Sequence[Order]) -> List[TrackedOrder]:
        """
        Create every order sequentially. The first failure propagates.

        An order id of 0 means the trade filled completely on creation; such
        orders are recorded as filled and never tracked.
        """
        tracked = []
        for order in orders:
            order_id = self.lifecycle.create_order(order)
            if not order_id:
                self.logger.order_checked(order_id, order.coin, True)
                self.audit.check(order_id, order.coin)
                continue
            tracked.append(TrackedOrder(order_id, order.coin))
        return tracked

    def _is_filled(self, order: TrackedOrder) -> bool:
        try:
            return self.lifecycle.check_order(order.id, order.coin)
        except WexError as e:
            # Unknown status keeps the order tracked until the deadline
            self.logger.error(
                f"Could not check order {order.id}",
                coin=order.coin,
                error=str(e)
            )
            return False

    def poll(self, tracked: List[TrackedOrder]) -> List[TrackedOrder]:
        """Evaluate every tracked order, then return those still open"""
        filled = [self._is_filled(o) for o in tracked]
        return [o for o, done in zip(tracked, filled) if not done]

    def cancel_all(self, tracked: List[TrackedOrder]):
        """Best-effort cancellation; one failure does not stop the rest"""
        for order in tracked:
            try:
                self.lifecycle.cancel_order(order.id)
            except WexError as e:
                self.logger.error(
                    f"Could not cancel order {order.id}",
                    coin=order.coin,
                    error=str(e)
                )

    def execute(self, orders: Sequence[Order], timeout_minutes: int,
                stop_event=None) -> bool:
        """
        Execute a batch of orders

        Args:
            orders: Orders to place
            timeout_minutes: Time allowed for all orders to fill
            stop_event: Optional threading.Event; when set the batch stops
                at the next poll as if the deadline had passed

        Returns:
            True if any order was still open at the deadline and had to be
            cancelled, False when the whole batch filled in time
        """
        tracked = self.create_all(orders)
        self.logger.system("Batch created", orders=len(tracked), timeout_minutes=timeout_minutes)

        deadline = timeout_minutes * 60
        start = self.clock()

        try:
            while True:
                tracked = self.poll(tracked)
                elapsed = self.clock() - start

                if not tracked:
                    break
                if elapsed >= deadline or _is_set(stop_event):
                    break
                self.sleep(self.poll_interval)
        except BaseException:
            self.cancel_all(tracked)
            raise

        unfilled = len(tracked)
        if tracked:
            self.cancel_all(tracked)

        self.audit.done(len(orders), unfilled)
        self.logger.batch_finished(len(orders), unfilled, self.clock() - start)
        return unfilled > 0


def _is_set(event: Optional[object]) -> bool:
    return event is not None and event.is_set()

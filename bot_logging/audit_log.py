"""
Audit Log
Appends human-readable order events to a plain text file
"""

from datetime import datetime
from typing import Any, Dict, Optional


class AuditLog:
    """
    File-based audit trail of order events

    Each event is written as a block:

        ****Mon Oct 19 13:54:02 2026****
        Create order:
        Action: buy
        ...

    A missing path disables the audit trail entirely.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path or ''

    @property
    def enabled(self) -> bool:
        return bool(self.path)

    def _write(self, title: str, fields: Optional[Dict[str, Any]] = None):
        if not self.enabled:
            return

        lines = [f"****{datetime.now().ctime()}****", title]
        for label, value in (fields or {}).items():
            lines.append(f"{label}: {value}")

        with open(self.path, 'a', encoding='utf-8') as fout:
            fout.write("\n".join(lines) + "\n")

    def create(self, action: str, coin: str, rate: float, amount: float,
               order_id: int = 0, error: str = ''):
        """Record an order placement attempt"""
        self._write("Create order:", {
            'Action': action,
            'Currency': coin,
            'Rate': rate,
            'Amount': amount,
            'Result': f"error [{error}]" if error else order_id,
        })

    def delete(self, order_id: int, error: str = ''):
        """Record an order cancellation"""
        fields = {'Error': error} if error else None
        self._write(f"Delete order {order_id}", fields)

    def check(self, order_id: int, coin: str):
        """Record that an order left the open-orders set"""
        self._write(f"Order {order_id} for {coin} is executed")

    def done(self, total: int, unfilled: int):
        """Record the end of a batch execution"""
        self._write("Batch done:", {'Orders': total, 'Unfilled': unfilled})

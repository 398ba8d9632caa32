"""
Utility Helper Functions
Common utility functions used across the application
"""

from datetime import datetime
from typing import Dict, Optional

from core.models import Order, OrderAction


def parse_order(spec: str) -> Order:
    """
    Parse an order given as 'side:coin:price:amount'

    Example: 'buy:ltc:0.0125:2' buys 2 ltc at 0.0125 btc each.
    """
    parts = spec.split(':')
    if len(parts) != 4:
        raise ValueError(f"Order must look like side:coin:price:amount, got '{spec}'")

    side, coin, price, amount = parts
    try:
        action = OrderAction(side.strip().lower())
    except ValueError:
        raise ValueError(f"Unknown order side '{side}' (expected buy or sell)") from None

    order = Order(coin.strip().lower(), action, float(price), float(amount))
    if order.price <= 0 or order.amount <= 0:
        raise ValueError(f"Price and amount must be positive in '{spec}'")
    return order


def format_timestamp(dt: Optional[datetime] = None) -> str:
    """Format datetime for display"""
    if dt is None:
        dt = datetime.now()
    return dt.strftime('%Y-%m-%d %H:%M:%S')


def format_balances(balances: Dict[str, float], unit: str = '') -> str:
    """One 'coin: amount' line per balance, largest first"""
    lines = []
    for coin, amount in sorted(balances.items(), key=lambda kv: kv[1], reverse=True):
        suffix = f" {unit}" if unit else ''
        lines.append(f"{coin:>6}: {amount:.8f}{suffix}")
    return "\n".join(lines)


def format_duration(seconds: float) -> str:
    """Format duration in human-readable format"""
    if seconds < 60:
        return f"{int(seconds)}s"
    elif seconds < 3600:
        return f"{int(seconds/60)}m"
    else:
        return f"{seconds/3600:.1f}h"

#!/usr/bin/env python3
"""
WEX Trader - Command line client
Balances, tickers and batch order execution on the WEX exchange

Usage:
    python main.py balances [--btc]
    python main.py ticker ltc
    python main.py open-orders [--coin ltc]
    python main.py cancel-all
    python main.py execute --order buy:ltc:0.0125:2 --order sell:usd:0.00016:50 --timeout 10
"""

import sys
import signal
import argparse
import threading
import time

from config import Config
from bot_logging import Logger
from exchange import WexError
from exchange.wex_client import WexExchangeClient
from utils.helpers import format_balances, format_duration, format_timestamp, parse_order

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_UNFILLED = 2


def cmd_balances(client, args) -> int:
    if args.btc:
        balances = client.non_zero_balances_in_btc()
        unit = client.config.REFERENCE_CURRENCY
    else:
        balances = client.non_zero_balances()
        unit = ''

    if not balances:
        print("No balances above threshold")
        return EXIT_OK

    print(format_balances(balances, unit))
    if args.btc:
        print(f"{'total':>6}: {sum(balances.values()):.8f} {unit}")
    return EXIT_OK


def cmd_ticker(client, args) -> int:
    ticker = client.info(args.coin.lower())
    print(f"{ticker.coin}: buy={ticker.buy_price:.8f} sell={ticker.sell_price:.8f} "
          f"last={ticker.last_price:.8f}")
    return EXIT_OK


def cmd_open_orders(client, args) -> int:
    order_ids = client.get_current_orders(args.coin.lower() if args.coin else None)
    if not order_ids:
        print("No open orders")
    for order_id in order_ids:
        print(order_id)
    return EXIT_OK


def cmd_cancel_all(client, args) -> int:
    count = client.cancel_current_orders()
    print(f"Cancelled {count} order(s)")
    return EXIT_OK


def cmd_execute(client, args) -> int:
    orders = [parse_order(spec) for spec in args.order]
    timeout = args.timeout if args.timeout is not None else client.config.ORDER_TIMEOUT_MINUTES

    # SIGTERM stops the batch at the next poll; open orders are then cancelled
    stop_event = threading.Event()
    signal.signal(signal.SIGTERM, lambda signum, frame: stop_event.set())

    print(f"[{format_timestamp()}] Executing {len(orders)} order(s), timeout {timeout} min")
    started = time.monotonic()
    unfilled = client.execute(orders, timeout, stop_event=stop_event)
    elapsed = format_duration(time.monotonic() - started)

    if unfilled:
        print(f"[{format_timestamp()}] Not all orders filled after {elapsed}; remaining orders cancelled")
        return EXIT_UNFILLED

    print(f"[{format_timestamp()}] All orders filled in {elapsed}")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='WEX trading client')
    parser.add_argument('--env-file', type=str, default=None,
                        help='Path to .env file (default: ./.env)')
    subparsers = parser.add_subparsers(dest='command', required=True)

    balances = subparsers.add_parser('balances', help='Show non-zero balances')
    balances.add_argument('--btc', action='store_true',
                          help='Value balances in the reference currency')
    balances.set_defaults(handler=cmd_balances, private=True)

    ticker = subparsers.add_parser('ticker', help='Show prices of a coin')
    ticker.add_argument('coin', type=str)
    ticker.set_defaults(handler=cmd_ticker, private=False)

    open_orders = subparsers.add_parser('open-orders', help='List open order ids')
    open_orders.add_argument('--coin', type=str, default=None)
    open_orders.set_defaults(handler=cmd_open_orders, private=True)

    cancel_all = subparsers.add_parser('cancel-all', help='Cancel every open order')
    cancel_all.set_defaults(handler=cmd_cancel_all, private=True)

    execute = subparsers.add_parser('execute', help='Place orders and wait for them to fill')
    execute.add_argument('--order', action='append', required=True,
                         help='side:coin:price:amount, repeatable')
    execute.add_argument('--timeout', type=int, default=None,
                         help='Minutes to wait before cancelling (default: ORDER_TIMEOUT_MINUTES)')
    execute.set_defaults(handler=cmd_execute, private=True)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = Config(args.env_file)
        logger = Logger(config)
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_ERROR

    try:
        client = WexExchangeClient(config, logger, require_credentials=args.private)
        return args.handler(client, args)
    except (WexError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())

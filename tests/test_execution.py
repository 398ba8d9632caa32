import threading

import pytest

from core.models import Order, OrderAction
from exchange.errors import ExchangeError


LTC_BUY = Order('ltc', OrderAction.BUY, 0.0125, 2)
USD_SELL = Order('usd', OrderAction.SELL, 0.00016, 50)


def trade_ids(*order_ids):
    return [{"success": 1, "return": {"order_id": order_id}} for order_id in order_ids]


def status_by_id(statuses):
    """OrderInfo reply reading the status of each order from a dict"""
    def reply(params):
        order_id = params['order_id']
        return {"success": 1, "return": {order_id: {"status": statuses[order_id]}}}
    return reply


def test_batch_filled_before_first_poll(client, transport, clock):
    transport.reply('Trade', *trade_ids(1, 2))
    transport.reply('OrderInfo', status_by_id({'1': 1, '2': 1}))

    unfilled = client.execute([LTC_BUY, USD_SELL], timeout_minutes=5)

    assert unfilled is False
    assert transport.calls('CancelOrder') == []
    assert clock.sleeps == []
    assert len(transport.calls('OrderInfo')) == 2


def test_unfilled_order_with_zero_timeout_is_cancelled_once(client, transport, clock):
    transport.reply('Trade', *trade_ids(77))
    transport.reply('OrderInfo', status_by_id({'77': 0}))
    transport.reply('CancelOrder', {"success": 1, "return": {"order_id": 77}})

    unfilled = client.execute([LTC_BUY], timeout_minutes=0)

    assert unfilled is True
    assert [c['order_id'] for c in transport.calls('CancelOrder')] == ['77']
    assert clock.sleeps == []


def test_orders_filling_over_several_polls(client, transport, clock):
    statuses = {'1': 0, '2': 0}
    transport.reply('Trade', *trade_ids(1, 2))
    transport.reply('OrderInfo', status_by_id(statuses))

    def fill_on_sleep(seconds):
        clock.sleep(seconds)
        # order 1 fills after the first wait, order 2 after the second
        statuses['1' if len(clock.sleeps) == 1 else '2'] = 1

    client.executor.sleep = fill_on_sleep

    unfilled = client.execute([LTC_BUY, USD_SELL], timeout_minutes=5)

    assert unfilled is False
    assert clock.sleeps == [30, 30]
    polled = [c['order_id'] for c in transport.calls('OrderInfo')]
    assert polled == ['1', '2', '1', '2', '2']
    assert transport.calls('CancelOrder') == []


def test_deadline_measured_from_loop_entry(client, transport, clock):
    transport.reply('Trade', *trade_ids(5))
    transport.reply('OrderInfo', status_by_id({'5': 0}))
    transport.reply('CancelOrder', {"success": 1, "return": {}})

    unfilled = client.execute([LTC_BUY], timeout_minutes=1)

    assert unfilled is True
    # polls at t=0, 30 and 60; the deadline is reached on the third
    assert clock.sleeps == [30, 30]
    assert len(transport.calls('OrderInfo')) == 3
    assert len(transport.calls('CancelOrder')) == 1


def test_cancel_failure_does_not_stop_other_cancels(client, transport):
    transport.reply('Trade', *trade_ids(1, 2, 3))
    transport.reply('OrderInfo', status_by_id({'1': 0, '2': 0, '3': 0}))
    transport.reply(
        'CancelOrder',
        {"success": 0, "error": "api key dont have trade permission"},
        {"success": 1, "return": {}},
    )

    unfilled = client.execute([LTC_BUY, USD_SELL, LTC_BUY], timeout_minutes=0)

    assert unfilled is True
    assert [c['order_id'] for c in transport.calls('CancelOrder')] == ['1', '2', '3']


def test_only_unfilled_orders_are_cancelled(client, transport):
    transport.reply('Trade', *trade_ids(1, 2))
    transport.reply('OrderInfo', status_by_id({'1': 1, '2': 0}))
    transport.reply('CancelOrder', {"success": 1, "return": {}})

    assert client.execute([LTC_BUY, USD_SELL], timeout_minutes=0) is True
    assert [c['order_id'] for c in transport.calls('CancelOrder')] == ['2']


def test_creation_failure_aborts_batch(client, transport):
    transport.reply('Trade', {"success": 1, "return": {"order_id": 1}},
                    {"success": 0, "error": "It is not enough USD in the account for sale."})

    with pytest.raises(ExchangeError):
        client.execute([LTC_BUY, USD_SELL], timeout_minutes=5)

    assert len(transport.calls('Trade')) == 2
    assert transport.calls('OrderInfo') == []
    assert transport.calls('CancelOrder') == []


def test_poll_error_keeps_order_tracked_until_deadline(client, transport, clock):
    transport.reply('Trade', *trade_ids(9))
    transport.reply('OrderInfo', {"success": 0, "error": "invalid nonce parameter"})
    transport.reply('CancelOrder', {"success": 1, "return": {}})

    assert client.execute([LTC_BUY], timeout_minutes=0) is True
    assert [c['order_id'] for c in transport.calls('CancelOrder')] == ['9']


def test_stop_event_ends_batch_at_next_poll(client, transport, clock):
    transport.reply('Trade', *trade_ids(4))
    transport.reply('OrderInfo', status_by_id({'4': 0}))
    transport.reply('CancelOrder', {"success": 1, "return": {}})
    stop = threading.Event()
    stop.set()

    assert client.execute([LTC_BUY], timeout_minutes=60, stop_event=stop) is True
    assert clock.sleeps == []
    assert len(transport.calls('CancelOrder')) == 1


def test_interrupted_wait_still_cancels(client, transport, clock):
    transport.reply('Trade', *trade_ids(6))
    transport.reply('OrderInfo', status_by_id({'6': 0}))
    transport.reply('CancelOrder', {"success": 1, "return": {}})

    def interrupted(seconds):
        raise KeyboardInterrupt

    client.executor.sleep = interrupted

    with pytest.raises(KeyboardInterrupt):
        client.execute([LTC_BUY], timeout_minutes=10)

    assert [c['order_id'] for c in transport.calls('CancelOrder')] == ['6']


def test_audit_log_records_batch(config, logger, transport, clock, tmp_path):
    from bot_logging import AuditLog
    from exchange.wex_client import WexExchangeClient

    path = tmp_path / 'orders.log'
    client = WexExchangeClient(config, logger, transport=transport, audit_log=AuditLog(str(path)),
                               clock=clock, sleep=clock.sleep)
    transport.reply('Trade', *trade_ids(21))
    transport.reply('OrderInfo', status_by_id({'21': 1}))

    client.execute([LTC_BUY], timeout_minutes=1)

    text = path.read_text()
    assert "Create order:" in text
    assert "Result: 21" in text
    assert "Order 21 for ltc is executed" in text
    assert "Batch done:" in text


def test_instantly_filled_order_is_not_tracked(client, transport, clock):
    transport.reply('Trade', {"success": 1, "return": {"received": 2, "remains": 0, "order_id": 0}})

    unfilled = client.execute([LTC_BUY], timeout_minutes=5)

    assert unfilled is False
    assert clock.sleeps == []
    assert transport.calls('OrderInfo') == []
    assert transport.calls('CancelOrder') == []


def test_instant_fill_alongside_open_order(client, transport, clock):
    transport.reply('Trade', *trade_ids(0, 8))
    transport.reply('OrderInfo', status_by_id({'8': 0}))
    transport.reply('CancelOrder', {"success": 1, "return": {}})

    assert client.execute([LTC_BUY, USD_SELL], timeout_minutes=0) is True
    assert [c['order_id'] for c in transport.calls('OrderInfo')] == ['8']
    assert [c['order_id'] for c in transport.calls('CancelOrder')] == ['8']

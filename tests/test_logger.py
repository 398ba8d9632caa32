import logging

from bot_logging import LogCategory


def test_category_messages_carry_context(logger, caplog):
    with caplog.at_level(logging.DEBUG, logger='wex_trader'):
        logger.order_created('ltc', 'buy', 0.0125, 2, 101, pair='ltc_btc')

    assert "Order Created: buy ltc | price=0.0125 | amount=2 | order_id=101 | pair=ltc_btc" in caplog.text


def test_disabled_category_is_silent(logger, caplog):
    logger.disable_category(LogCategory.ORDER_LIFECYCLE)

    with caplog.at_level(logging.DEBUG, logger='wex_trader'):
        logger.order_cancelled(5)

    assert "Order Cancelled" not in caplog.text
    assert not logger.is_enabled(LogCategory.ORDER_LIFECYCLE)


def test_error_traces_cannot_be_disabled(logger, caplog):
    logger.disable_category(LogCategory.ERROR_TRACES)

    with caplog.at_level(logging.DEBUG, logger='wex_trader'):
        logger.error("Cancel failed", error="boom")

    assert logger.is_enabled(LogCategory.ERROR_TRACES)
    assert "Cancel failed | error=boom" in caplog.text

"""
Dynamic Logging System
Category-based logging with zero-overhead when disabled
"""

import logging
import logging.handlers
import os
from datetime import datetime
from enum import Enum
from typing import Dict, Optional
from pathlib import Path


class LogCategory(Enum):
    """Log categories that can be independently enabled/disabled"""
    API_CALLS = "api_calls"
    ORDER_LIFECYCLE = "order_lifecycle"
    MARKET_DATA = "market_data"
    BALANCES = "balances"
    SYSTEM_EVENTS = "system_events"
    ERROR_TRACES = "error_traces"


class Logger:
    """
    Dynamic logging system with category-based control
    Zero overhead when categories are disabled
    """

    def __init__(self, config):
        """
        Initialize logger with configuration

        Args:
            config: Configuration object
        """
        self.config = config
        self._loggers: Dict[str, logging.Logger] = {}
        self._category_states: Dict[LogCategory, bool] = {}

        self._setup_logging()
        self._load_category_states()

    def _setup_logging(self):
        """Setup logging infrastructure"""

        if self.config.LOG_OUTPUT in ['file', 'both']:
            os.makedirs(self.config.LOG_FILE_PATH, exist_ok=True)

        log_level = getattr(logging, self.config.LOG_LEVEL, logging.INFO)

        main_logger = logging.getLogger('wex_trader')
        main_logger.setLevel(log_level)
        main_logger.handlers = []  # Clear existing handlers

        detailed_formatter = logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        simple_formatter = logging.Formatter(
            '%(asctime)s | %(levelname)s | %(message)s',
            datefmt='%H:%M:%S'
        )

        if self.config.LOG_OUTPUT in ['console', 'both']:
            console_handler = logging.StreamHandler()
            console_handler.setLevel(log_level)
            console_handler.setFormatter(simple_formatter)
            main_logger.addHandler(console_handler)

        if self.config.LOG_OUTPUT in ['file', 'both']:
            log_file = Path(self.config.LOG_FILE_PATH) / f"wex_trader_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=self.config.LOG_FILE_MAX_SIZE * 1024 * 1024,  # MB to bytes
                backupCount=self.config.LOG_FILE_BACKUP_COUNT
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(detailed_formatter)
            main_logger.addHandler(file_handler)

        self._loggers['main'] = main_logger

        # Category loggers inherit handlers from the main logger
        for category in LogCategory:
            cat_logger = logging.getLogger(f'wex_trader.{category.value}')
            cat_logger.setLevel(log_level)
            cat_logger.propagate = True
            self._loggers[category.value] = cat_logger

    def _load_category_states(self):
        """Load category enable/disable states from configuration"""
        self._category_states = {
            LogCategory.API_CALLS: self.config.LOG_API_CALLS,
            LogCategory.ORDER_LIFECYCLE: self.config.LOG_ORDER_LIFECYCLE,
            LogCategory.MARKET_DATA: self.config.LOG_MARKET_DATA,
            LogCategory.BALANCES: self.config.LOG_BALANCES,
            LogCategory.SYSTEM_EVENTS: self.config.LOG_SYSTEM_EVENTS,
            LogCategory.ERROR_TRACES: True,  # Always enabled
        }

    def is_enabled(self, category: LogCategory) -> bool:
        """Check if a log category is enabled"""
        return self._category_states.get(category, False)

    def enable_category(self, category: LogCategory):
        """Enable a log category"""
        self._category_states[category] = True
        self.system(f"Enabled logging category: {category.value}")

    def disable_category(self, category: LogCategory):
        """Disable a log category (except ERROR_TRACES)"""
        if category == LogCategory.ERROR_TRACES:
            self.warning("Cannot disable ERROR_TRACES category")
            return

        self._category_states[category] = False
        self.system(f"Disabled logging category: {category.value}")

    def get_category_status(self) -> Dict[str, bool]:
        """Get status of all log categories"""
        return {cat.value: enabled for cat, enabled in self._category_states.items()}

    def _log(self, category: LogCategory, level: int, message: str, **kwargs):
        """
        Internal logging method with category check

        Args:
            category: Log category
            level: Logging level
            message: Log message
            **kwargs: Additional context
        """
        if not self._category_states.get(category, False):
            return

        logger = self._loggers.get(category.value, self._loggers['main'])

        if kwargs:
            context_str = " | ".join([f"{k}={v}" for k, v in kwargs.items()])
            message = f"{message} | {context_str}"

        logger.log(level, message)

    # ===== Category-specific logging methods =====

    def api_call(self, method: str, url: str, status: Optional[int] = None, duration: Optional[float] = None, **kwargs):
        """Log API call details"""
        self._log(
            LogCategory.API_CALLS,
            logging.INFO,
            f"API Call: {method} {url}",
            status=status,
            duration_ms=f"{duration*1000:.2f}" if duration else None,
            **kwargs
        )

    def order_created(self, coin: str, side: str, price: float, amount: float, order_id: int, **kwargs):
        """Log an order accepted by the exchange"""
        self._log(
            LogCategory.ORDER_LIFECYCLE,
            logging.INFO,
            f"Order Created: {side} {coin}",
            price=price,
            amount=amount,
            order_id=order_id,
            **kwargs
        )

    def order_checked(self, order_id: int, coin: str, filled: bool):
        """Log an order status poll"""
        self._log(
            LogCategory.ORDER_LIFECYCLE,
            logging.DEBUG if not filled else logging.INFO,
            f"Order {'Filled' if filled else 'Open'}: {coin}",
            order_id=order_id
        )

    def order_cancelled(self, order_id: int, **kwargs):
        """Log an order cancellation"""
        self._log(
            LogCategory.ORDER_LIFECYCLE,
            logging.WARNING,
            f"Order Cancelled: {order_id}",
            **kwargs
        )

    def batch_finished(self, total: int, unfilled: int, elapsed: float):
        """Log the outcome of a batch execution"""
        self._log(
            LogCategory.ORDER_LIFECYCLE,
            logging.INFO if not unfilled else logging.WARNING,
            "Batch Finished",
            total=total,
            unfilled=unfilled,
            elapsed=f"{elapsed:.1f}s"
        )

    def market_data(self, message: str, **kwargs):
        """Log market catalog and ticker updates"""
        self._log(
            LogCategory.MARKET_DATA,
            logging.INFO,
            message,
            **kwargs
        )

    def balances_loaded(self, count: int, **kwargs):
        """Log balance refresh"""
        self._log(
            LogCategory.BALANCES,
            logging.INFO,
            "Balances Loaded",
            count=count,
            **kwargs
        )

    def system(self, message: str, **kwargs):
        """Log system event"""
        self._log(
            LogCategory.SYSTEM_EVENTS,
            logging.INFO,
            message,
            **kwargs
        )

    def error(self, message: str, exc_info: bool = False, **kwargs):
        """Log error (always enabled)"""
        self._log(
            LogCategory.ERROR_TRACES,
            logging.ERROR,
            message,
            **kwargs
        )

        if exc_info:
            self._loggers.get('main', logging.getLogger('wex_trader')).exception(message)

    # ===== Standard logging methods =====

    def debug(self, message: str, **kwargs):
        """Debug level log"""
        logger = self._loggers.get('main', logging.getLogger('wex_trader'))
        logger.debug(f"{message} | {kwargs}" if kwargs else message)

    def info(self, message: str, **kwargs):
        """Info level log"""
        logger = self._loggers.get('main', logging.getLogger('wex_trader'))
        logger.info(f"{message} | {kwargs}" if kwargs else message)

    def warning(self, message: str, **kwargs):
        """Warning level log"""
        logger = self._loggers.get('main', logging.getLogger('wex_trader'))
        logger.warning(f"{message} | {kwargs}" if kwargs else message)

    def critical(self, message: str, **kwargs):
        """Critical level log"""
        logger = self._loggers.get('main', logging.getLogger('wex_trader'))
        logger.critical(f"{message} | {kwargs}" if kwargs else message)

"""
Configuration Management
Loads and validates environment variables and configuration settings
"""

import os
from typing import Optional
from dotenv import load_dotenv


class Config:
    """
    Centralized configuration management for the WEX trading client
    Loads settings from environment variables with validation
    """

    def __init__(self, env_file: Optional[str] = None):
        """
        Initialize configuration from environment variables

        Args:
            env_file: Path to .env file (optional)
        """
        # Load environment variables
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        self._load_configuration()
        self._validate_configuration()

    def _load_configuration(self):
        """Load all configuration values from environment variables"""

        # ===== Exchange Credentials =====
        self.WEX_API_KEY = os.getenv('WEX_API_KEY', '')
        self.WEX_API_SECRET = os.getenv('WEX_API_SECRET', '')

        # ===== Exchange Endpoints =====
        self.WEX_HOST = os.getenv('WEX_HOST', 'wex.nz')
        self.WEX_BASE_URL = f"https://{self.WEX_HOST}"
        self.WEX_PUBLIC_API_PATH = os.getenv('WEX_PUBLIC_API_PATH', '/api/3')
        self.WEX_TRADE_API_PATH = os.getenv('WEX_TRADE_API_PATH', '/tapi')
        self.API_TIMEOUT = int(os.getenv('API_TIMEOUT', '10'))

        # ===== Trading Configuration =====
        self.REFERENCE_CURRENCY = os.getenv('REFERENCE_CURRENCY', 'btc').lower()
        self.BALANCE_THRESHOLD = float(os.getenv('BALANCE_THRESHOLD', '0.001'))
        self.TOKEN_SUFFIX = os.getenv('TOKEN_SUFFIX', 'et')
        self.ORDER_POLL_INTERVAL = int(os.getenv('ORDER_POLL_INTERVAL', '30'))
        self.ORDER_TIMEOUT_MINUTES = int(os.getenv('ORDER_TIMEOUT_MINUTES', '10'))

        # ===== Audit Log =====
        self.AUDIT_LOG_PATH = os.getenv('AUDIT_LOG_PATH', '')

        # ===== Logging Configuration =====
        self.LOG_API_CALLS = self._str_to_bool(os.getenv('LOG_API_CALLS', 'true'))
        self.LOG_ORDER_LIFECYCLE = self._str_to_bool(os.getenv('LOG_ORDER_LIFECYCLE', 'true'))
        self.LOG_MARKET_DATA = self._str_to_bool(os.getenv('LOG_MARKET_DATA', 'true'))
        self.LOG_BALANCES = self._str_to_bool(os.getenv('LOG_BALANCES', 'true'))
        self.LOG_SYSTEM_EVENTS = self._str_to_bool(os.getenv('LOG_SYSTEM_EVENTS', 'true'))
        self.LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
        self.LOG_OUTPUT = os.getenv('LOG_OUTPUT', 'console')
        self.LOG_FILE_PATH = os.getenv('LOG_FILE_PATH', './logs')
        self.LOG_FILE_MAX_SIZE = int(os.getenv('LOG_FILE_MAX_SIZE', '10'))
        self.LOG_FILE_BACKUP_COUNT = int(os.getenv('LOG_FILE_BACKUP_COUNT', '5'))

    def _validate_configuration(self):
        """Validate critical configuration values"""

        if not self.REFERENCE_CURRENCY:
            raise ValueError("REFERENCE_CURRENCY must not be empty")

        # Validate numeric ranges
        if self.API_TIMEOUT <= 0:
            raise ValueError("API_TIMEOUT must be positive")

        if self.ORDER_POLL_INTERVAL <= 0:
            raise ValueError("ORDER_POLL_INTERVAL must be positive")

        if self.ORDER_TIMEOUT_MINUTES < 0:
            raise ValueError("ORDER_TIMEOUT_MINUTES must not be negative")

        if self.BALANCE_THRESHOLD < 0:
            raise ValueError("BALANCE_THRESHOLD must not be negative")

        # Validate log settings
        if self.LOG_LEVEL not in ['DEBUG', 'INFO', 'WARNING', 'ERROR']:
            raise ValueError("LOG_LEVEL must be DEBUG, INFO, WARNING, or ERROR")

        if self.LOG_OUTPUT not in ['console', 'file', 'both']:
            raise ValueError("LOG_OUTPUT must be 'console', 'file', or 'both'")

        if self.LOG_OUTPUT in ['file', 'both']:
            os.makedirs(self.LOG_FILE_PATH, exist_ok=True)

    @staticmethod
    def _str_to_bool(value: str) -> bool:
        """Convert string to boolean"""
        return value.lower() in ('true', '1', 'yes', 'on')

    def has_credentials(self) -> bool:
        """Check if both API key and secret are configured"""
        return bool(self.WEX_API_KEY and self.WEX_API_SECRET)

    def __repr__(self) -> str:
        """String representation of configuration"""
        return (
            f"Config(host={self.WEX_HOST}, "
            f"reference={self.REFERENCE_CURRENCY}, "
            f"credentials={'yes' if self.has_credentials() else 'no'})"
        )

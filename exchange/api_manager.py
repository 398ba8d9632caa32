"""
API Manager
Handles HTTP communication with the exchange host
"""

import time
import requests
from typing import Dict, Any, Optional
from datetime import datetime, timedelta

from .errors import TransportError


class APIManager:
    """
    API Request Manager
    Performs GET/POST requests against the exchange host and returns raw bodies.
    Failures are raised as TransportError; nothing is retried here.
    """

    def __init__(self, config, logger, session: Optional[requests.Session] = None):
        """
        Initialize API Manager

        Args:
            config: Configuration object
            logger: Logger instance
            session: Optional pre-built requests session
        """
        self.config = config
        self.logger = logger
        self.base_url = config.WEX_BASE_URL

        self.session = session or requests.Session()
        self.session.headers.update({'User-Agent': 'WexTrader/1.0'})

        # Error tracking
        self.error_counts: Dict[str, int] = {}
        self.last_error_reset = datetime.now()

        self.logger.system("API Manager initialized", host=self.base_url)

    def _record_error(self, path: str):
        """Record an API error"""
        now = datetime.now()

        # Reset error counts every hour
        if now - self.last_error_reset > timedelta(hours=1):
            self.error_counts = {}
            self.last_error_reset = now

        self.error_counts[path] = self.error_counts.get(path, 0) + 1

    def _request(self, method: str, path: str, headers: Optional[Dict[str, str]] = None,
                 body: Optional[str] = None) -> str:
        """
        Make an API request

        Args:
            method: HTTP method (GET, POST)
            path: Path relative to the exchange host
            headers: Extra request headers
            body: Raw request body (for POST)

        Returns:
            Response body text
        """
        url = f"{self.base_url}{path}"
        start_time = time.time()

        try:
            if method == 'GET':
                response = self.session.get(
                    url,
                    headers=headers,
                    timeout=self.config.API_TIMEOUT
                )
            elif method == 'POST':
                response = self.session.post(
                    url,
                    headers=headers,
                    data=body,
                    timeout=self.config.API_TIMEOUT
                )
            else:
                raise ValueError(f"Unsupported HTTP method: {method}")

        except requests.exceptions.Timeout as e:
            self._record_error(path)
            self.logger.error(f"Request timeout: {method} {path}")
            raise TransportError(f"Timeout on {method} {path}") from e

        except requests.exceptions.RequestException as e:
            self._record_error(path)
            self.logger.error(f"Connection error: {method} {path}", error=str(e))
            raise TransportError(f"{method} {path} failed: {e}") from e

        duration = time.time() - start_time

        self.logger.api_call(
            method=method,
            url=path,
            status=response.status_code,
            duration=duration
        )

        if response.status_code != 200:
            self._record_error(path)
            self.logger.error(
                f"API request failed with status {response.status_code}",
                path=path,
                response=response.text[:200]
            )
            raise TransportError(
                f"{method} {path} returned HTTP {response.status_code}",
                status=response.status_code
            )

        return response.text

    def get(self, path: str) -> str:
        """Public GET request"""
        return self._request('GET', path)

    def post(self, path: str, headers: Dict[str, str], body: str) -> str:
        """Form-encoded POST request"""
        return self._request('POST', path, headers=headers, body=body)

    def get_error_statistics(self) -> Dict[str, Any]:
        """Get API error statistics"""
        return {
            'total_errors': sum(self.error_counts.values()),
            'errors_by_endpoint': dict(self.error_counts),
            'last_reset': self.last_error_reset.isoformat()
        }

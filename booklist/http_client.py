# booklist/http_client.py
"""
HTTP client with rate limiting, bounded timeouts and retry logic.
"""

import logging
import time
from typing import Dict, Optional, Tuple

import requests


def is_retryable(status_code: int) -> bool:
    """Server errors may go away on their own, client errors won't"""
    return status_code >= 500


class RateLimiter:
    """Keeps consecutive requests at least ``1 / calls_per_second`` apart"""

    def __init__(self, calls_per_second: float = 1.0):
        self.interval = 1.0 / calls_per_second
        self.next_slot = 0.0

    def wait(self):
        now = time.monotonic()
        if now < self.next_slot:
            time.sleep(self.next_slot - now)
            now = self.next_slot
        self.next_slot = now + self.interval


class HTTPClient:
    """
    Shared HTTP client for cover downloads and catalog queries.

    Every request carries a timeout. Timeouts, connection errors and
    server errors (5xx) are retried with exponential backoff; client
    errors (4xx) are final.
    """

    def __init__(self, rate_limit: float = 1.0, max_retries: int = 2, timeout: float = 10.0):
        self.rate_limiter = RateLimiter(rate_limit)
        self.max_retries = max(1, max_retries)
        self.timeout = timeout
        self.session = requests.Session()
        self.logger = logging.getLogger(self.__class__.__name__)

    def get(
        self,
        url: str,
        params: Optional[Dict] = None,
        headers: Optional[Dict] = None
    ) -> Tuple[bool, int, Optional[requests.Response]]:
        return self.request("GET", url, params=params, headers=headers)

    def post(
        self,
        url: str,
        data: bytes,
        headers: Optional[Dict] = None
    ) -> Tuple[bool, int, Optional[requests.Response]]:
        return self.request("POST", url, data=data, headers=headers)

    def request(self, method: str, url: str, **kwargs) -> Tuple[bool, int, Optional[requests.Response]]:
        """
        Make an HTTP request with retries and exponential backoff.

        Returns:
            (success: bool, status_code: int, response: Optional[Response])
        """
        response = None

        for attempt in range(self.max_retries):
            self.rate_limiter.wait()

            try:
                response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            except requests.exceptions.RequestException as e:
                # Timeouts and connection errors
                self.logger.warning(f"{method} {url} failed on attempt {attempt + 1}: {e}")
                response = None
            else:
                status = response.status_code
                if status != 200:
                    self.logger.warning(f"{method} {url} returned {status} on attempt {attempt + 1}")
                if not is_retryable(status):
                    return status == 200, status, response

            if attempt < self.max_retries - 1:
                self._backoff_sleep(attempt)

        if response is None:
            return False, 0, None
        return False, response.status_code, response

    def close(self) -> None:
        self.session.close()

    def _backoff_sleep(self, attempt: int) -> None:
        """Sleep with exponential backoff"""
        sleep_time = 2 ** attempt  # 1s, 2s, 4s, ...
        self.logger.info(f"Backing off for {sleep_time}s")
        time.sleep(sleep_time)

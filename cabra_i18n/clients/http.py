"""HTTP client for fetching translation bundles and font stylesheets.

Wraps a pooled ``requests.Session``. The blocking calls are exposed both
directly and as coroutines that run the request in a worker thread, so the
asyncio event loop never blocks on the network.

Usage:
    from cabra_i18n.clients.http import HttpClient

    client = HttpClient(timeout=10)
    bundle = await client.fetch_json("https://example.org/locales/ar.json")
"""

import asyncio
from typing import Any, Dict, Optional

import requests

from cabra_i18n.logging import get_module_logger

logger = get_module_logger()


class HttpFetchError(Exception):
    """Raised when a resource cannot be fetched.

    Attributes:
        url: URL that failed.
        status_code: HTTP status, when a response was received.
    """

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class HttpClient:
    """Small GET-only HTTP client.

    Attributes:
        timeout: Default timeout in seconds
        session: Requests session with connection pooling
    """

    def __init__(self, timeout: float = 10, session: Optional[requests.Session] = None) -> None:
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": "cabra-i18n/0.4"})

    def get(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> requests.Response:
        """Send a GET request and return the 2xx response.

        Raises:
            HttpFetchError: On timeouts, connection errors and non-2xx status.
        """
        timeout = timeout or self.timeout
        log = logger.bind(url=url)
        log.debug("http_request")

        try:
            response = self._session.get(url, headers=headers, timeout=timeout)
        except requests.Timeout as e:
            log.error("http_timeout", timeout=timeout)
            raise HttpFetchError(url, f"Request timeout after {timeout}s") from e
        except requests.ConnectionError as e:
            log.error("http_connection_error", error=str(e))
            raise HttpFetchError(url, f"Connection error: {e}") from e
        except requests.RequestException as e:
            log.error("http_request_failed", error=str(e))
            raise HttpFetchError(url, f"Request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            log.warning("http_error_status", status_code=response.status_code)
            raise HttpFetchError(
                url,
                f"HTTP {response.status_code}",
                status_code=response.status_code,
            )

        log.debug("http_success", status_code=response.status_code)
        return response

    def get_text(self, url: str, timeout: Optional[float] = None) -> str:
        return self.get(url, timeout=timeout).text

    def get_json(self, url: str, timeout: Optional[float] = None) -> Any:
        """GET a URL and decode its JSON body.

        Raises:
            HttpFetchError: On transport errors or an invalid JSON body.
        """
        response = self.get(url, headers={"Accept": "application/json"}, timeout=timeout)
        try:
            return response.json()
        except ValueError as e:
            logger.warning("non_json_response", url=url, content=response.text[:200])
            raise HttpFetchError(url, f"Invalid JSON: {e}") from e

    async def fetch_text(self, url: str, timeout: Optional[float] = None) -> str:
        return await asyncio.to_thread(self.get_text, url, timeout)

    async def fetch_json(self, url: str, timeout: Optional[float] = None) -> Any:
        return await asyncio.to_thread(self.get_json, url, timeout)

    def close(self) -> None:
        self._session.close()

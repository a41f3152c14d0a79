# ABOUTME: HTTP client abstraction for the search API and the cover image host.
# ABOUTME: Provides rate limiting, retry with backoff, and injectable transport for testing.

import logging
import time
from typing import Any, Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)

USER_AGENT = "bookledger/0.1.0"
DEFAULT_TIMEOUT = 30.0
_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


class FetchError(Exception):
    """Raised when an HTTP request to an external service fails."""


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for the HTTP GET operations the collaborators need."""

    def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]: ...

    def get_bytes(
        self, url: str, params: dict[str, str] | None = None
    ) -> tuple[bytes, str | None]: ...


class BookledgerHttpClient:
    """HTTP client with rate limiting and retry.

    Wraps httpx.Client with configurable request intervals and retry logic
    for transient failures (429, 5xx).
    """

    def __init__(
        self,
        *,
        min_request_interval: float = 0.1,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        client_kwargs: dict[str, Any] = {
            "headers": {"User-Agent": USER_AGENT},
            "timeout": timeout,
            "follow_redirects": True,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.Client(**client_kwargs)
        self._min_interval = min_request_interval
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._last_request_time: float = 0.0

    def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        """Send a GET request and return the parsed JSON body.

        Raises:
            FetchError: On non-retryable HTTP errors, exhausted retries,
                or a body that is not JSON.
        """
        response = self._request(url, params)
        try:
            return response.json()
        except ValueError as exc:
            raise FetchError(f"Invalid JSON from {url}: {exc}") from exc

    def get_bytes(
        self, url: str, params: dict[str, str] | None = None
    ) -> tuple[bytes, str | None]:
        """Send a GET request and return the raw body with its content type."""
        response = self._request(url, params)
        content_type = response.headers.get("content-type")
        if content_type:
            content_type = content_type.split(";", 1)[0].strip().lower()
        return response.content, content_type or None

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "BookledgerHttpClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(self, url: str, params: dict[str, str] | None) -> httpx.Response:
        self._rate_limit()

        attempts = 1 + self._max_retries
        last_status = 0
        for attempt in range(attempts):
            try:
                response = self._client.get(url, params=params)
                last_status = response.status_code
            except httpx.HTTPError as exc:
                raise FetchError(f"Request failed: {url}: {exc}") from exc

            if response.status_code == 200:
                return response

            if response.status_code not in _RETRYABLE_STATUS_CODES:
                raise FetchError(f"HTTP {response.status_code} from {url}")

            if attempt < attempts - 1:
                delay = self._retry_delay * (2**attempt)
                logger.warning(
                    "HTTP %d from %s, retrying in %.1fs (attempt %d/%d)",
                    response.status_code,
                    url,
                    delay,
                    attempt + 1,
                    self._max_retries,
                )
                time.sleep(delay)

        raise FetchError(f"HTTP {last_status} from {url} after {attempts} attempts")

    def _rate_limit(self) -> None:
        """Sleep if needed to maintain minimum interval between requests."""
        if self._min_interval <= 0:
            return
        now = time.monotonic()
        elapsed = now - self._last_request_time
        if elapsed < self._min_interval and self._last_request_time > 0:
            time.sleep(self._min_interval - elapsed)
        self._last_request_time = time.monotonic()

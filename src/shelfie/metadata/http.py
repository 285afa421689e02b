# ABOUTME: HTTP client abstraction for catalog and search provider API calls.
# ABOUTME: Provides per-call timeouts, 5xx retry with backoff, and injectable transport for testing.

import logging
import time
from typing import Any, Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 8.0


class MetadataFetchError(Exception):
    """Raised when an HTTP request to an upstream catalog or provider fails."""


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for the HTTP operations the adapters and providers need."""

    def get(
        self,
        url: str,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any: ...

    def get_text(self, url: str, params: dict[str, str] | None = None) -> str: ...

    def post(self, url: str, json: Any, headers: dict[str, str] | None = None) -> Any: ...

    def head(self, url: str) -> int: ...


def _is_retryable(status_code: int) -> bool:
    return 500 <= status_code < 600


class ShelfieHttpClient:
    """HTTP client with rate limiting and retry for upstream API calls.

    Wraps httpx.Client. Only 5xx responses are retried, with the delay
    doubling on each attempt. Timeouts, transport errors, 4xx responses and
    undecodable bodies fail immediately with MetadataFetchError.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        min_request_interval: float = 0.1,
        max_retries: int = 2,
        retry_delay: float = 0.5,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        client_kwargs: dict[str, Any] = {
            "headers": {"User-Agent": "shelfie/0.1.0"},
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

    def get(
        self,
        url: str,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Send a GET request and return the parsed JSON body.

        Raises:
            MetadataFetchError: On non-retryable errors, exhausted retries,
                or a body that is not valid JSON.
        """
        response = self._send("GET", url, params=params, headers=headers)
        return self._json(response, url)

    def get_text(self, url: str, params: dict[str, str] | None = None) -> str:
        """Send a GET request and return the raw body text (XML endpoints)."""
        return self._send("GET", url, params=params).text

    def post(self, url: str, json: Any, headers: dict[str, str] | None = None) -> Any:
        """Send a JSON POST request and return the parsed JSON body."""
        response = self._send("POST", url, json=json, headers=headers)
        return self._json(response, url)

    def head(self, url: str) -> int:
        """Send a HEAD request and return its final status code.

        Unlike the other verbs, client errors are returned rather than raised,
        since HEAD is used to probe whether a resource exists.
        """
        return self._send("HEAD", url, raise_for_status=False).status_code

    def close(self) -> None:
        self._client.close()

    def _send(
        self, method: str, url: str, *, raise_for_status: bool = True, **kwargs: Any
    ) -> httpx.Response:
        self._throttle()

        attempt = 0
        while True:
            try:
                response = self._client.request(method, url, **kwargs)
            except httpx.HTTPError as exc:
                raise MetadataFetchError(f"Request failed: {url}: {exc}") from exc

            if response.is_success:
                return response
            if not _is_retryable(response.status_code) or attempt >= self._max_retries:
                break

            delay = self._retry_delay * (2**attempt)
            attempt += 1
            logger.warning(
                "%s %s answered %d, retry %d of %d in %.1fs",
                method,
                url,
                response.status_code,
                attempt,
                self._max_retries,
                delay,
            )
            time.sleep(delay)

        if not raise_for_status:
            return response
        if attempt:
            raise MetadataFetchError(
                f"HTTP {response.status_code} from {url} after {attempt + 1} attempts"
            )
        raise MetadataFetchError(f"HTTP {response.status_code} from {url}")

    @staticmethod
    def _json(response: httpx.Response, url: str) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise MetadataFetchError(f"Malformed JSON from {url}: {exc}") from exc

    def _throttle(self) -> None:
        """Keep at least min_request_interval between consecutive requests."""
        if self._min_interval > 0 and self._last_request_time:
            wait = self._min_interval - (time.monotonic() - self._last_request_time)
            if wait > 0:
                time.sleep(wait)
        self._last_request_time = time.monotonic()

from typing import Any, Dict, Optional

import httpx
from loguru import logger
from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from nhl_player_db.config.settings import AppSettings, settings as default_settings

# Statuses worth another attempt when retries are enabled
RETRYABLE_STATUS_CODES = {408, 429, 500, 502, 503, 504}


class ScraperError(Exception):
    """Custom exception for scraper-related errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(ScraperError):
    """Exception raised for rate limit errors (429)."""

    pass


class PayloadError(ScraperError):
    """Exception raised when a response body is not the JSON we expect."""

    pass


class _RetryableStatus(ScraperError):
    pass


class BaseScraper:
    """Owns the HTTP client and the request/error policy shared by scrapers."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        config: Optional[AppSettings] = None,
    ):
        self.config = config or default_settings
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(self.config.request_timeout),
            follow_redirects=True,
            limits=httpx.Limits(max_keepalive_connections=2),
            headers={"User-Agent": self.config.user_agent},
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _send(
        self, method: str, url: str, params: Optional[Dict[str, Any]] = None
    ) -> httpx.Response:
        logger.debug(f"Making request: {method} {url}")
        try:
            response = await self.client.request(method, url, params=params)
        except httpx.TimeoutException as e:
            raise ScraperError(f"Timed out requesting {url}: {e!r}") from e
        except httpx.RequestError as e:
            raise ScraperError(f"Request error for {url}: {e!r}") from e

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            logger.warning(f"Rate limit hit (429) at {url}. Retry-After: {retry_after}")
            raise RateLimitError(f"Rate limited at {url}", status_code=429)

        if response.is_success:
            logger.debug(f"Request successful: {response.status_code} for {url}")
            return response

        message = f"HTTP {response.status_code} for {url}"
        if response.status_code in RETRYABLE_STATUS_CODES:
            raise _RetryableStatus(message, status_code=response.status_code)
        raise ScraperError(message, status_code=response.status_code)

    async def _make_request(
        self, method: str, url: str, params: Optional[Dict[str, Any]] = None
    ) -> httpx.Response:
        """Makes an HTTP request, retrying up to ``max_attempts`` in total.

        With the default of one attempt nothing is retried. Every failure
        surfaces as a ScraperError (or subclass).
        """
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.config.max_attempts),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            retry=retry_if_exception_type((_RetryableStatus, RateLimitError)),
            reraise=False,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    return await self._send(method, url, params=params)
        except RetryError as e:
            cause = e.last_attempt.exception()
            if self.config.max_attempts > 1:
                logger.error(
                    f"Max retries exceeded for request to {url}. Last exception: {cause}"
                )
            if isinstance(cause, RateLimitError):
                raise cause
            if isinstance(cause, ScraperError):
                raise ScraperError(str(cause), status_code=cause.status_code) from cause
            raise ScraperError(f"Failed request to {url}") from cause
        raise ScraperError(f"No attempt made for {url}")

    async def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        response = await self._make_request("GET", url, params=params)
        try:
            return response.json()
        except ValueError as e:
            logger.debug(f"Raw response content: {response.text[:200]}")
            raise PayloadError(f"Malformed JSON from {url}: {e}") from e

    async def close(self):
        """Closes the underlying HTTP client."""
        await self.client.aclose()
        logger.debug("Closed HTTP client")

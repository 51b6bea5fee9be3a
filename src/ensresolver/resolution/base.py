"""HTTP client management, retry policy, and rate limiting for upstream services."""

from __future__ import annotations

import asyncio
import logging
import time
from abc import ABC
from collections.abc import Awaitable, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, ClassVar

import httpx

from ensresolver.core.exceptions import RateLimitError, UpstreamServiceError
from ensresolver.core.types import UpstreamName

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry with exponential backoff for transient upstream failures."""

    retries: int = 3
    backoff: float = 0.5
    max_backoff: float = 30.0
    retry_statuses: frozenset[int] = field(
        default_factory=lambda: frozenset({429, 500, 502, 503, 504})
    )

    def delay(self, attempt: int, retry_after: float | None = None) -> float:
        """Seconds to wait before retry number ``attempt`` (0-indexed)."""
        if retry_after is not None:
            return min(max(retry_after, 0.0), self.max_backoff)
        return min(self.backoff * (2**attempt), self.max_backoff)


class AsyncRateLimiter:
    """
    Minimum-interval gate shared by every caller.

    Each ``acquire`` waits until ``min_interval`` seconds have passed since the
    previous dispatch, then records its own dispatch time. The check and the
    update happen under one lock, so concurrent callers queue up and are
    released one interval apart.
    """

    def __init__(
        self,
        requests_per_second: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        if requests_per_second <= 0:
            raise ValueError("requests_per_second must be positive")
        self._min_interval = 1.0 / requests_per_second
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._last_dispatch: float | None = None

    @property
    def min_interval(self) -> float:
        return self._min_interval

    @property
    def last_dispatch(self) -> float | None:
        return self._last_dispatch

    async def acquire(self) -> None:
        """Suspend until a dispatch is permitted."""
        async with self._lock:
            if self._last_dispatch is not None:
                wait_time = self._last_dispatch + self._min_interval - self._clock()
                if wait_time > 0:
                    await self._sleep(wait_time)
            self._last_dispatch = self._clock()


def _parse_retry_after(response: httpx.Response) -> float | None:
    value = response.headers.get("Retry-After")
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


class HTTPServiceClient(ABC):
    """
    Base class for JSON-over-HTTP upstream clients.

    Provides:
    - HTTP client management with connection pooling
    - Per-call timeout from configuration
    - Retry with backoff on transport errors and retryable statuses
    - Consistent error wrapping into UpstreamServiceError
    """

    SOURCE_NAME: ClassVar[UpstreamName]

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        retry: RetryPolicy | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self.retry = retry or RetryPolicy()
        self._sleep = sleep
        self._client: httpx.AsyncClient | None = None

    @property
    def source_name(self) -> UpstreamName:
        return self.SOURCE_NAME

    @asynccontextmanager
    async def _get_client(self) -> AsyncIterator[httpx.AsyncClient]:
        """Get or create HTTP client with proper lifecycle."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                headers=self._get_default_headers(),
                follow_redirects=True,
            )

        try:
            yield self._client
        except httpx.HTTPError as e:
            raise UpstreamServiceError(
                message=f"HTTP error: {e}",
                source=self.source_name.value,
            ) from e

    def _get_default_headers(self) -> dict[str, str]:
        """Get default headers for requests. Override to add auth."""
        return {
            "User-Agent": "ensresolver/0.1",
            "Accept": "application/json",
        }

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def _make_request(
        self,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Make an HTTP request, retrying transient failures."""
        attempt = 0

        async with self._get_client() as client:
            while True:
                try:
                    response = await client.request(method, url, **kwargs)
                except httpx.TransportError as e:
                    if attempt >= self.retry.retries:
                        raise
                    wait_time = self.retry.delay(attempt)
                    logger.warning(
                        f"{self.source_name} transport error ({e!r}), "
                        f"retry {attempt + 1}/{self.retry.retries} in {wait_time:.2f}s"
                    )
                    attempt += 1
                    await self._sleep(wait_time)
                    continue

                if response.status_code not in self.retry.retry_statuses:
                    return response

                retry_after = _parse_retry_after(response)
                if attempt >= self.retry.retries:
                    if response.status_code == 429:
                        raise RateLimitError(
                            message="Rate limit exceeded",
                            source=self.source_name.value,
                            retry_after=retry_after,
                        )
                    return response

                wait_time = self.retry.delay(attempt, retry_after)
                logger.warning(
                    f"{self.source_name} returned {response.status_code}, "
                    f"retry {attempt + 1}/{self.retry.retries} in {wait_time:.2f}s"
                )
                attempt += 1
                await self._sleep(wait_time)

    async def __aenter__(self) -> HTTPServiceClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

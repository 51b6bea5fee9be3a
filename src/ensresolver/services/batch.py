"""Chunked concurrent resolution of many names."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Iterator, Sequence
from dataclasses import dataclass

from ensresolver.core.exceptions import ENSResolverError
from ensresolver.core.models import (
    BatchResolutionResult,
    BatchSummary,
    PerformanceMetrics,
    ResolutionResult,
)

logger = logging.getLogger(__name__)

ResolveFn = Callable[[str], Awaitable[ResolutionResult | None]]


@dataclass(frozen=True)
class _Failure:
    name: str
    reason: str


def chunked(names: Sequence[str], size: int) -> Iterator[Sequence[str]]:
    """Consecutive slices of ``names`` of at most ``size`` items."""
    if size < 1:
        raise ValueError("size must be at least 1")
    for offset in range(0, len(names), size):
        yield names[offset : offset + size]


def failure_message(name: str, error: BaseException) -> str:
    reason = error.message if isinstance(error, ENSResolverError) else str(error)
    return f"Failed to resolve {name}: {reason or type(error).__name__}"


class BatchCoordinator:
    """
    Resolve names chunk by chunk.

    Chunks run strictly one after another; every name inside a chunk is
    resolved concurrently, so at most ``batch_size`` resolutions are in flight.
    A failing name becomes an entry in ``summary.errors`` and never aborts the
    batch. Cancellation is not captured.
    """

    def __init__(
        self,
        resolve: ResolveFn,
        batch_size: int = 100,
        *,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self._resolve = resolve
        self.batch_size = batch_size
        self._timer = timer

    async def run(self, names: Sequence[str]) -> BatchResolutionResult:
        """
        Resolve every name and aggregate the outcomes.

        Args:
            names: Names to resolve, in the order results should be reported

        Returns:
            Successful outcomes in input order (``None`` for names that are not
            contracts), a success/failure summary and batch timing
        """
        names = list(names)
        start = self._timer()

        results: list[ResolutionResult | None] = []
        errors: list[str] = []

        for index, chunk in enumerate(chunked(names, self.batch_size)):
            logger.debug(f"Resolving chunk {index + 1} ({len(chunk)} names)")
            outcomes = await asyncio.gather(*(self._capture(name) for name in chunk))

            for outcome in outcomes:
                if isinstance(outcome, _Failure):
                    errors.append(outcome.reason)
                else:
                    results.append(outcome)

        elapsed_ms = (self._timer() - start) * 1000
        total = len(names)

        summary = BatchSummary(
            total=total,
            successful=len(results),
            failed=len(errors),
            errors=errors,
        )
        performance = PerformanceMetrics(
            total_time_ms=elapsed_ms if total else 0.0,
            average_time_ms=elapsed_ms / total if total else 0.0,
            requests_per_second=(total / elapsed_ms) * 1000 if total and elapsed_ms > 0 else 0.0,
        )

        logger.info(
            f"Batch resolved {summary.successful}/{summary.total} names "
            f"in {performance.total_time_ms:.0f}ms ({summary.failed} failed)"
        )

        return BatchResolutionResult(results=results, summary=summary, performance=performance)

    async def _capture(self, name: str) -> ResolutionResult | None | _Failure:
        try:
            return await self._resolve(name)
        except Exception as e:
            return _Failure(name=name, reason=failure_message(name, e))

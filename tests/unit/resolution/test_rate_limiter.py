"""Tests for the dispatch rate limiter."""

from __future__ import annotations

import asyncio
import time

import pytest

from ensresolver.resolution.base import AsyncRateLimiter

# Float slack for interval comparisons
EPSILON = 1e-9


@pytest.fixture
def limiter(fake_clock) -> AsyncRateLimiter:
    """Create a 10 rps limiter on the fake clock."""
    return AsyncRateLimiter(10.0, clock=fake_clock, sleep=fake_clock.sleep)


class TestAsyncRateLimiter:
    """Tests for minimum-interval dispatch spacing."""

    def test_min_interval(self, limiter: AsyncRateLimiter):
        """10 requests per second should mean 100ms between dispatches."""
        assert limiter.min_interval == pytest.approx(0.1)

    def test_rejects_non_positive_rate(self):
        """A zero rate has no meaningful interval."""
        with pytest.raises(ValueError):
            AsyncRateLimiter(0)

    async def test_first_acquire_does_not_wait(self, limiter: AsyncRateLimiter, fake_clock):
        """The first dispatch should go through immediately."""
        await limiter.acquire()

        assert fake_clock.sleeps == []
        assert limiter.last_dispatch == fake_clock.now

    async def test_back_to_back_acquires_are_spaced(self, limiter: AsyncRateLimiter, fake_clock):
        """Consecutive dispatches should be at least one interval apart."""
        dispatches = []
        for _ in range(4):
            await limiter.acquire()
            dispatches.append(limiter.last_dispatch)

        gaps = [b - a for a, b in zip(dispatches, dispatches[1:])]
        assert all(gap >= 0.1 - EPSILON for gap in gaps)

    async def test_no_wait_after_interval_elapsed(self, limiter: AsyncRateLimiter, fake_clock):
        """A caller arriving after the interval should not sleep."""
        await limiter.acquire()
        fake_clock.advance(0.5)

        await limiter.acquire()

        assert fake_clock.sleeps == []

    async def test_partial_wait(self, limiter: AsyncRateLimiter, fake_clock):
        """A caller arriving mid-interval should wait only the remainder."""
        await limiter.acquire()
        fake_clock.advance(0.04)

        await limiter.acquire()

        assert fake_clock.sleeps == [pytest.approx(0.06)]

    async def test_concurrent_callers_are_serialized(self, limiter: AsyncRateLimiter):
        """Concurrent callers should each be spaced by the interval."""
        dispatches: list[float] = []

        async def caller() -> None:
            await limiter.acquire()
            dispatches.append(limiter.last_dispatch)

        await asyncio.gather(*(caller() for _ in range(5)))

        assert len(dispatches) == 5
        ordered = sorted(dispatches)
        gaps = [b - a for a, b in zip(ordered, ordered[1:])]
        assert all(gap >= 0.1 - EPSILON for gap in gaps)

    async def test_real_clock_spacing(self):
        """With the real clock, three dispatches at 10 rps take at least 200ms."""
        limiter = AsyncRateLimiter(10.0)

        start = time.monotonic()
        for _ in range(3):
            await limiter.acquire()
        elapsed = time.monotonic() - start

        assert elapsed >= 0.19

"""Running counters for resolution requests."""

from __future__ import annotations

import threading

from ensresolver.core.models import RunningMetrics


class MetricsRecorder:
    """
    Process-lifetime counters for the resolver.

    ``requests`` counts every call (hits included), ``hits``/``misses`` count
    cache lookups, and ``total_time_ms`` accumulates latency of successful
    resolutions only. When disabled every ``record_*`` call is a no-op.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._lock = threading.Lock()
        self._requests = 0
        self._hits = 0
        self._misses = 0
        self._errors = 0
        self._total_time_ms = 0.0

    def record_request(self) -> None:
        if not self.enabled:
            return
        with self._lock:
            self._requests += 1

    def record_hit(self) -> None:
        if not self.enabled:
            return
        with self._lock:
            self._hits += 1

    def record_miss(self) -> None:
        if not self.enabled:
            return
        with self._lock:
            self._misses += 1

    def record_error(self) -> None:
        if not self.enabled:
            return
        with self._lock:
            self._errors += 1

    def record_latency(self, duration_ms: float) -> None:
        if not self.enabled:
            return
        with self._lock:
            self._total_time_ms += duration_ms

    def snapshot(self) -> RunningMetrics:
        """Current counters with derived hit rate and mean latency."""
        with self._lock:
            lookups = self._hits + self._misses
            return RunningMetrics(
                requests=self._requests,
                hits=self._hits,
                misses=self._misses,
                errors=self._errors,
                total_time_ms=self._total_time_ms,
                cache_hit_rate=self._hits / lookups if lookups else 0.0,
                average_request_time_ms=(
                    self._total_time_ms / self._requests if self._requests else 0.0
                ),
            )

    def reset(self) -> None:
        """Zero every counter."""
        with self._lock:
            self._requests = 0
            self._hits = 0
            self._misses = 0
            self._errors = 0
            self._total_time_ms = 0.0

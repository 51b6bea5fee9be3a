"""In-memory result cache with LRU eviction."""

from __future__ import annotations

import logging
import time
from collections import OrderedDict
from collections.abc import Callable

from ensresolver.core.models import CacheEntry, CacheStats, ResolutionResult

logger = logging.getLogger(__name__)


class ResultCache:
    """
    In-memory map from resolution key to the last result written for it.

    Entries carry their wall-clock write time. Freshness is judged by the
    caller against its own expiry; ``get`` returns whatever is stored. The map
    is bounded by ``max_entries`` and evicts the least recently used key.
    """

    def __init__(
        self,
        max_age: int,
        max_entries: int = 10_000,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize the cache.

        Args:
            max_age: Expiry in seconds reported by ``stats`` (not enforced here).
            max_entries: Capacity before LRU eviction.
            clock: Wall-clock source for entry timestamps.
        """
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._max_age = max_age
        self._max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()

    def get(self, key: str) -> CacheEntry | None:
        """Get the stored entry for a key, refreshing its recency."""
        entry = self._entries.get(key)
        if entry is not None:
            self._entries.move_to_end(key)
        return entry

    def set(self, key: str, result: ResolutionResult) -> CacheEntry:
        """Store a result stamped with the current time."""
        entry = CacheEntry(result=result, timestamp=self._clock())
        self._entries[key] = entry
        self._entries.move_to_end(key)

        while len(self._entries) > self._max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"Evicted least recently used cache entry: {evicted}")

        return entry

    def delete(self, key: str) -> bool:
        """Remove a key, returning whether it was present."""
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()

    def stats(self) -> CacheStats:
        """Current size and configured limits."""
        return CacheStats(
            size=len(self._entries),
            max_age=self._max_age,
            max_entries=self._max_entries,
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

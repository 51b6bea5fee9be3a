"""Resolution service orchestrating the index → chain → cache flow."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from ensresolver.cache.keys import CacheKeys
from ensresolver.cache.store import ResultCache
from ensresolver.config import ResolverSettings
from ensresolver.core.exceptions import ValidationError
from ensresolver.core.models import (
    BatchResolutionResult,
    CacheStats,
    ResolutionResult,
    ResolutionTimestamps,
    RunningMetrics,
    utcnow,
)
from ensresolver.core.types import EventType
from ensresolver.resolution.base import AsyncRateLimiter
from ensresolver.services.batch import BatchCoordinator
from ensresolver.services.events import (
    BatchCompleteEvent,
    CacheClearedEvent,
    CacheHitEvent,
    EventBus,
    EventHandler,
    ResolutionCompleteEvent,
    ResolutionErrorEvent,
)
from ensresolver.services.metrics import MetricsRecorder

if TYPE_CHECKING:
    from ensresolver.resolution.chain import ChainClient
    from ensresolver.resolution.explorer import ExplorerClient
    from ensresolver.resolution.index import SubgraphIndexClient

logger = logging.getLogger(__name__)


class ContractResolutionService:
    """
    Resolve ENS names to contract addresses with metadata.

    Orchestrates the full resolution flow:
    1. Count the request and wait for rate-limit permission
    2. Return a fresh cached result if there is one
    3. Look the domain up in the subgraph index
    4. Probe the resolver contract
    5. Resolve the name on chain and confirm the address holds bytecode
    6. Read contract metadata and verification status
    7. Cache, record metrics and publish events

    A name that is not indexed, has no resolver, does not resolve or resolves
    to an account without code yields ``None``. Upstream failures propagate.
    """

    def __init__(
        self,
        index: SubgraphIndexClient,
        chain: ChainClient,
        *,
        settings: ResolverSettings | None = None,
        cache: ResultCache | None = None,
        rate_limiter: AsyncRateLimiter | None = None,
        metrics: MetricsRecorder | None = None,
        events: EventBus | None = None,
        explorer: ExplorerClient | None = None,
        clock: Callable[[], float] = time.time,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize the resolution service.

        Args:
            index: Subgraph client for domain lookups
            chain: Node client for ENS resolution and contract probes
            settings: Resolver settings (defaults loaded from environment)
            cache: Result cache (built from settings if omitted)
            rate_limiter: Shared dispatch gate (built from settings if omitted)
            metrics: Running counters (built from settings if omitted)
            events: Event bus (built from settings if omitted)
            explorer: Optional block explorer for source verification
            clock: Wall clock used for cache freshness
            timer: Monotonic clock used for latency
        """
        self._settings = settings or ResolverSettings()
        self._index = index
        self._chain = chain
        self._explorer = explorer
        self._clock = clock
        self._timer = timer

        self._cache = cache or ResultCache(
            max_age=self._settings.cache_expiry,
            max_entries=self._settings.cache_max_entries,
            clock=clock,
        )
        self._rate_limiter = rate_limiter or AsyncRateLimiter(
            self._settings.rate_limit.requests_per_second
        )
        self._metrics = metrics or MetricsRecorder(enabled=self._settings.enable_metrics)
        self._events = events or EventBus(enabled=self._settings.enable_metrics)
        self._batch = BatchCoordinator(
            self.resolve_contract,
            batch_size=self._settings.batch_size,
            timer=timer,
        )

    @property
    def settings(self) -> ResolverSettings:
        return self._settings

    @property
    def events(self) -> EventBus:
        return self._events

    async def resolve_contract(self, name: str) -> ResolutionResult | None:
        """
        Resolve one ENS name to a contract.

        Args:
            name: ENS name, passed to the index service as given

        Returns:
            The resolution result, or ``None`` if the name is not a contract

        Raises:
            ValidationError: If the name is empty
            ResolutionError: If an upstream service fails
        """
        if not name or not name.strip():
            raise ValidationError("ENS name must not be empty")

        start = self._timer()

        try:
            self._metrics.record_request()
            await self._rate_limiter.acquire()

            cache_key = CacheKeys.contract(name)
            if self._settings.enable_caching:
                entry = self._cache.get(cache_key)
                if entry is not None and entry.age(self._clock()) < self._settings.cache_expiry:
                    logger.debug(f"Cache hit for {name}")
                    self._metrics.record_hit()
                    self._events.emit(CacheHitEvent(ens_name=name))
                    return entry.result

            self._metrics.record_miss()

            result = await self._resolve_uncached(name)
            if result is None:
                return None

            if self._settings.enable_caching:
                self._cache.set(cache_key, result)

            duration_ms = (self._timer() - start) * 1000
            self._metrics.record_latency(duration_ms)
            self._events.emit(
                ResolutionCompleteEvent(ens_name=name, result=result, duration_ms=duration_ms)
            )
            logger.info(f"Resolved {name} to {result.contract_address} in {duration_ms:.0f}ms")

            return result

        except Exception as e:
            self._metrics.record_error()
            self._events.emit(ResolutionErrorEvent(ens_name=name, error=str(e)))
            logger.warning(f"Resolution failed for {name}: {e}")
            raise

    async def _resolve_uncached(self, name: str) -> ResolutionResult | None:
        domain = await self._index.query_domain(name)
        if domain is None or not domain.has_resolver:
            logger.debug(f"{name} has no indexed resolver")
            return None

        resolver_info = await self._chain.get_resolver_capabilities(domain.resolver_address)

        address = await self._chain.resolve_address(name)
        if address is None:
            logger.debug(f"{name} does not resolve to an address")
            return None

        if not await self._chain.is_contract(address):
            logger.debug(f"{name} resolves to {address}, which has no code")
            return None

        metadata = await self._chain.get_contract_metadata(address)
        is_verified = await self._is_verified(address)

        now = utcnow()
        return ResolutionResult(
            contract_address=address,
            ens_name=name,
            resolver_address=domain.resolver_address,
            network=self._settings.network.value,
            is_verified=is_verified,
            metadata=metadata,
            resolver_info=resolver_info,
            timestamps=ResolutionTimestamps(resolved_at=now, last_verified=now),
        )

    async def _is_verified(self, address: str) -> bool:
        # Without an explorer backend every contract is reported as verified
        if self._explorer is None:
            return True
        return await self._explorer.is_verified(address)

    async def resolve_contracts_batch(self, names: Sequence[str]) -> BatchResolutionResult:
        """
        Resolve many names in chunks of ``batch_size``.

        Individual failures are collected in ``summary.errors``; the batch
        itself only fails on cancellation.
        """
        result = await self._batch.run(names)
        self._events.emit(BatchCompleteEvent(batch=result))
        return result

    async def resolve_resolver_domains(
        self,
        resolver_address: str,
        *,
        first: int = 100,
        skip: int = 0,
    ) -> BatchResolutionResult:
        """List one page of a resolver's domains and batch-resolve their names."""
        domains = await self._index.list_domains(resolver_address, first=first, skip=skip)
        names = [domain.name for domain in domains if domain.name]
        logger.info(f"Resolver {resolver_address} has {len(names)} named domains in this page")
        return await self.resolve_contracts_batch(names)

    def get_metrics(self) -> RunningMetrics:
        return self._metrics.snapshot()

    def clear_cache(self) -> None:
        """Drop every cached result."""
        self._cache.clear()
        self._events.emit(CacheClearedEvent())
        logger.info("Result cache cleared")

    def get_cache_stats(self) -> CacheStats:
        return self._cache.stats()

    def subscribe(self, event_type: EventType, handler: EventHandler) -> Callable[[], None]:
        """Register an event handler; returns a callable that unsubscribes it."""
        return self._events.subscribe(event_type, handler)

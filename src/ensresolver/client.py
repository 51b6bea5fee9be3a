"""Main library client for standalone usage."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from ensresolver.config import ResolverSettings
from ensresolver.core.exceptions import ConfigurationError
from ensresolver.core.models import (
    BatchResolutionResult,
    CacheStats,
    ResolutionResult,
    RunningMetrics,
)
from ensresolver.core.types import EventType
from ensresolver.resolution.base import RetryPolicy
from ensresolver.resolution.chain import ChainClient
from ensresolver.resolution.explorer import ExplorerClient
from ensresolver.resolution.index import SubgraphIndexClient
from ensresolver.services.events import EventHandler
from ensresolver.services.resolution import ContractResolutionService

logger = logging.getLogger(__name__)


class ENSContractClient:
    """
    Main client for the ensresolver library.

    Builds the subgraph, node and (optional) explorer clients from settings and
    exposes the resolution operations without requiring the web server.

    Usage:
        async with ENSContractClient() as client:
            # Resolve a single name
            result = await client.resolve_contract("uniswap.eth")

            # Resolve many names, isolating failures
            batch = await client.resolve_contracts_batch(["ens.eth", "dai.eth"])

    Settings are loaded from environment variables or can be passed explicitly.
    """

    def __init__(
        self,
        settings: ResolverSettings | None = None,
        *,
        chain: ChainClient | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            settings: Resolver settings. If not provided, loaded from environment.
            chain: Pre-built node client (otherwise built from ``node_url``).
        """
        self._settings = settings or ResolverSettings()
        self._injected_chain = chain
        self._index: SubgraphIndexClient | None = None
        self._chain: ChainClient | None = None
        self._explorer: ExplorerClient | None = None
        self._service: ContractResolutionService | None = None

    async def __aenter__(self) -> ENSContractClient:
        """Initialize resources on context entry."""
        await self._initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Clean up resources on context exit."""
        await self.close()

    async def _initialize(self) -> None:
        """Build upstream clients and the resolution service."""
        settings = self._settings
        retry = RetryPolicy(retries=settings.retries, backoff=settings.retry_backoff)

        self._index = SubgraphIndexClient(
            settings.index_service_url,
            timeout=settings.timeout,
            retry=retry,
        )
        self._chain = self._injected_chain or ChainClient.from_url(
            settings.node_url,
            timeout=settings.timeout,
        )

        if settings.explorer_url:
            self._explorer = ExplorerClient(
                settings.explorer_url,
                settings.explorer_api_key,
                timeout=settings.timeout,
                retry=retry,
            )
            logger.info("Block explorer verification enabled")

        self._service = ContractResolutionService(
            self._index,
            self._chain,
            settings=settings,
            explorer=self._explorer,
        )

    async def close(self) -> None:
        """Close all resources."""
        if self._index:
            await self._index.close()
            self._index = None

        if self._explorer:
            await self._explorer.close()
            self._explorer = None

        # An injected node client belongs to the caller
        if self._chain and self._chain is not self._injected_chain:
            await self._chain.close()
        self._chain = None

        self._service = None

    @property
    def service(self) -> ContractResolutionService:
        """The underlying resolution service."""
        if self._service is None:
            raise ConfigurationError(
                "Client not initialized. Use 'async with ENSContractClient() as client:'"
            )
        return self._service

    @property
    def settings(self) -> ResolverSettings:
        return self._settings

    async def resolve_contract(self, name: str) -> ResolutionResult | None:
        """Resolve one ENS name; ``None`` if it does not point at a contract."""
        return await self.service.resolve_contract(name)

    async def resolve_contracts_batch(self, names: Sequence[str]) -> BatchResolutionResult:
        """Resolve many ENS names with per-name failure isolation."""
        return await self.service.resolve_contracts_batch(names)

    async def resolve_resolver_domains(
        self,
        resolver_address: str,
        *,
        first: int = 100,
        skip: int = 0,
    ) -> BatchResolutionResult:
        """Resolve one page of the domains pointing at a resolver."""
        return await self.service.resolve_resolver_domains(
            resolver_address, first=first, skip=skip
        )

    async def node_block_number(self) -> int:
        """Latest block seen by the node; raises ChainReadError if unreachable."""
        if self._chain is None:
            raise ConfigurationError(
                "Client not initialized. Use 'async with ENSContractClient() as client:'"
            )
        return await self._chain.block_number()

    def get_metrics(self) -> RunningMetrics:
        return self.service.get_metrics()

    def clear_cache(self) -> None:
        self.service.clear_cache()

    def get_cache_stats(self) -> CacheStats:
        return self.service.get_cache_stats()

    def subscribe(self, event_type: EventType, handler: EventHandler) -> Callable[[], None]:
        return self.service.subscribe(event_type, handler)


# Convenience function for one-off resolutions
async def resolve_contract(
    name: str,
    *,
    settings: ResolverSettings | None = None,
) -> ResolutionResult | None:
    """
    Resolve a contract (convenience function).

    For multiple resolutions, use ENSContractClient so the cache and rate
    limiter are shared.
    """
    async with ENSContractClient(settings) as client:
        return await client.resolve_contract(name)

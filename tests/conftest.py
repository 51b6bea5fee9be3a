"""Shared test fixtures for all tests."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from ensresolver.config import RateLimitSettings, ResolverSettings
from ensresolver.core.models import (
    AuditInfo,
    ContractMetadata,
    DomainInfo,
    ResolutionResult,
    ResolutionTimestamps,
    ResolverCapabilities,
)

# ============================================================================
# Test Data Constants
# ============================================================================


SUBGRAPH_URL = "https://api.thegraph.com/subgraphs/name/ensdomains/ens"
EXPLORER_URL = "https://api.etherscan.io/api"

# Uniswap governance token, a contract
TOKEN_ADDRESS = "0x1f9840a85d5aF5bf1D1762F925BDADdC4201F984"
# Subgraph ids are lowercase
RESOLVER_ADDRESS = "0x231b0ee14048e9dccd1d247744d114a4eb5e8e63"
# Externally owned account, no code
EOA_ADDRESS = "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"

DOMAIN_ID = "0x2d0c2ba4f0b3ed3e0ab6f1b8b7a4c4e0e7c0c1d3a5c6ec4c8f3d2a1b0c9d8e7f"


# ============================================================================
# Clock Fixtures
# ============================================================================


class FakeClock:
    """Manually advanced clock whose ``sleep`` moves time forward instantly."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    """Create a fake clock starting at t=1000s."""
    return FakeClock()


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_domain() -> DomainInfo:
    """Create a sample indexed domain with a resolver."""
    return DomainInfo(
        id=DOMAIN_ID,
        name="uniswap.eth",
        resolver_address=RESOLVER_ADDRESS,
        resolved_address=TOKEN_ADDRESS.lower(),
    )


@pytest.fixture
def sample_capabilities() -> ResolverCapabilities:
    """Create sample resolver capabilities."""
    return ResolverCapabilities(
        address=RESOLVER_ADDRESS,
        resolver_type="PublicResolver",
        version="3",
        supports_wildcards=True,
    )


@pytest.fixture
def sample_metadata() -> ContractMetadata:
    """Create sample token metadata."""
    return ContractMetadata(
        name="Uniswap",
        symbol="UNI",
        decimals=18,
        total_supply=1_000_000_000 * 10**18,
        description="ERC-20 token with symbol UNI",
        tags=["erc20", "token"],
        audit=AuditInfo(),
    )


@pytest.fixture
def sample_result(
    sample_capabilities: ResolverCapabilities,
    sample_metadata: ContractMetadata,
) -> ResolutionResult:
    """Create a fully populated resolution result."""
    stamp = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)
    return ResolutionResult(
        contract_address=TOKEN_ADDRESS,
        ens_name="uniswap.eth",
        resolver_address=RESOLVER_ADDRESS,
        network="mainnet",
        is_verified=True,
        metadata=sample_metadata,
        resolver_info=sample_capabilities,
        timestamps=ResolutionTimestamps(resolved_at=stamp, last_verified=stamp),
    )


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture
def mock_settings() -> ResolverSettings:
    """Create settings for testing (fast rate limit, no retry delay)."""
    return ResolverSettings(
        index_service_url=SUBGRAPH_URL,
        node_url="http://localhost:8545",
        timeout=5.0,
        retries=2,
        retry_backoff=0.0,
        enable_caching=True,
        cache_expiry=3600,
        batch_size=100,
        enable_metrics=True,
        rate_limit=RateLimitSettings(requests_per_second=100.0),
    )


@pytest.fixture
def mock_settings_no_cache(mock_settings: ResolverSettings) -> ResolverSettings:
    """Create settings with caching disabled."""
    return mock_settings.model_copy(update={"enable_caching": False})

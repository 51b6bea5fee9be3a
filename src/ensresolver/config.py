"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ensresolver.core.types import Network


class RateLimitSettings(BaseModel):
    """Outbound request shaping."""

    requests_per_second: float = Field(
        default=10.0,
        gt=0.0,
        le=100.0,
        description="Minimum spacing between dispatches is 1 / requests_per_second",
    )

    @property
    def min_interval(self) -> float:
        """Minimum seconds between two dispatches."""
        return 1.0 / self.requests_per_second


class ResolverSettings(BaseSettings):
    """Resolver configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="ENSRESOLVER_",
        env_nested_delimiter="__",
    )

    # Upstreams
    index_service_url: str = Field(
        default="https://api.thegraph.com/subgraphs/name/ensdomains/ens",
        description="ENS subgraph GraphQL endpoint",
    )
    node_url: str = Field(
        default="http://localhost:8545",
        description="Ethereum JSON-RPC endpoint",
    )
    network: Network = Field(
        default=Network.MAINNET,
        description="Network identifier stamped on resolution results",
    )

    # Block explorer (optional)
    explorer_url: str | None = Field(
        default=None,
        description="Etherscan-compatible API base URL used for source verification",
    )
    explorer_api_key: str | None = Field(
        default=None,
        description="Block explorer API key",
    )

    # Network call behaviour
    timeout: float = Field(
        default=30.0,
        ge=1.0,
        le=120.0,
        description="Per-call deadline in seconds",
    )
    retries: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Retry attempts for transient index/explorer failures",
    )
    retry_backoff: float = Field(
        default=0.5,
        ge=0.0,
        description="Base delay in seconds for exponential retry backoff",
    )

    # Caching
    enable_caching: bool = Field(default=True, description="Cache resolution results")
    cache_expiry: int = Field(
        default=3600,
        ge=1,
        le=86400,
        description="Seconds before a cached result is considered stale",
    )
    cache_max_entries: int = Field(
        default=10_000,
        ge=1,
        description="Maximum cached results before least-recently-used eviction",
    )

    # Batching
    batch_size: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Names resolved concurrently per batch chunk",
    )

    # Observability
    enable_metrics: bool = Field(
        default=True,
        description="Record running metrics and publish lifecycle events",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)


@lru_cache
def get_settings() -> ResolverSettings:
    """Get cached settings instance."""
    return ResolverSettings()

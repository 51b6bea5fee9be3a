"""Domain models for contract resolution."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


class DomainInfo(BaseModel):
    """Domain record returned by the indexed-data service for a single name."""

    id: str = Field(..., description="Namehash of the domain")
    name: str | None = Field(default=None, description="Domain name as indexed")
    resolver_address: str | None = Field(default=None, description="Resolver contract address")
    resolved_address: str | None = Field(
        default=None, description="Address last set on the resolver, if indexed"
    )

    @property
    def has_resolver(self) -> bool:
        return bool(self.resolver_address)


class DomainRecord(BaseModel):
    """Domain listed by resolver-scoped index queries."""

    id: str
    name: str | None = None
    created_at: datetime | None = None
    resolver_address: str | None = None
    owner: str | None = None
    address: str | None = None
    texts: list[str] = Field(default_factory=list)


class ResolverCapabilities(BaseModel):
    """Introspection results for a resolver contract."""

    model_config = ConfigDict(frozen=True)

    address: str = Field(..., description="Resolver contract address")
    resolver_type: str = Field(default="Unknown", description="Declared resolver type")
    version: str = Field(default="Unknown", description="Declared resolver version")
    supports_wildcards: bool = Field(
        default=False, description="Implements the ENSIP-10 wildcard interface"
    )


class AuditInfo(BaseModel):
    """Audit information for a contract."""

    model_config = ConfigDict(frozen=True)

    status: str = "Unknown"
    firms: list[str] = Field(default_factory=list)


class ContractMetadata(BaseModel):
    """Token-style metadata read from a contract."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="Unknown Contract")
    symbol: str = Field(default="UNKNOWN")
    decimals: int = Field(default=0, ge=0)
    total_supply: int = Field(default=0, ge=0)
    description: str = Field(default="Contract metadata unavailable")
    tags: list[str] = Field(default_factory=list)
    audit: AuditInfo = Field(default_factory=AuditInfo)


class ResolutionTimestamps(BaseModel):
    """When a result was produced and last verified."""

    model_config = ConfigDict(frozen=True)

    resolved_at: datetime = Field(default_factory=utcnow)
    last_verified: datetime = Field(default_factory=utcnow)


class ResolutionResult(BaseModel):
    """A name that resolved to a contract, with everything learned about it."""

    model_config = ConfigDict(frozen=True)

    contract_address: str = Field(..., description="Resolved contract address")
    ens_name: str = Field(..., description="Name that was resolved")
    resolver_address: str = Field(..., description="Resolver that answered for the name")
    network: str = Field(default="mainnet")
    is_verified: bool = Field(default=False, description="Source verified on a block explorer")
    metadata: ContractMetadata = Field(default_factory=ContractMetadata)
    resolver_info: ResolverCapabilities
    timestamps: ResolutionTimestamps = Field(default_factory=ResolutionTimestamps)


class CacheEntry(BaseModel):
    """A cached resolution result and its wall-clock write time."""

    model_config = ConfigDict(frozen=True)

    result: ResolutionResult
    timestamp: float

    def age(self, now: float) -> float:
        """Seconds elapsed since the entry was written."""
        return now - self.timestamp


class CacheStats(BaseModel):
    """Snapshot of cache occupancy."""

    size: int
    max_age: int
    max_entries: int


class BatchSummary(BaseModel):
    """Success/failure accounting for a batch."""

    total: int = 0
    successful: int = 0
    failed: int = 0
    errors: list[str] = Field(default_factory=list)


class PerformanceMetrics(BaseModel):
    """Timing for a whole batch."""

    total_time_ms: float = 0.0
    average_time_ms: float = 0.0
    requests_per_second: float = 0.0


class BatchResolutionResult(BaseModel):
    """Outcome of resolving many names."""

    results: list[ResolutionResult | None] = Field(default_factory=list)
    summary: BatchSummary = Field(default_factory=BatchSummary)
    performance: PerformanceMetrics = Field(default_factory=PerformanceMetrics)


class RunningMetrics(BaseModel):
    """Process-lifetime counters with derived rates."""

    requests: int = 0
    hits: int = 0
    misses: int = 0
    errors: int = 0
    total_time_ms: float = 0.0
    cache_hit_rate: float = 0.0
    average_request_time_ms: float = 0.0

"""Response schemas for API endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from ensresolver.api.schemas.base import APIBaseSchema


# Contract result schemas
class ResolverInfoResponse(APIBaseSchema):
    """Resolver contract capabilities."""

    address: str
    resolver_type: str
    version: str
    supports_wildcards: bool


class AuditResponse(APIBaseSchema):
    """Audit information for a contract."""

    status: str
    firms: list[str] = Field(default_factory=list)


class ContractMetadataResponse(APIBaseSchema):
    """Token-style contract metadata."""

    name: str
    symbol: str
    decimals: int
    total_supply: str = Field(description="Decimal string; values exceed JSON number range")
    description: str
    tags: list[str] = Field(default_factory=list)
    audit: AuditResponse


class TimestampsResponse(APIBaseSchema):
    """Resolution timestamps."""

    resolved_at: datetime
    last_verified: datetime


class ContractResponse(APIBaseSchema):
    """A name resolved to a contract."""

    contract_address: str
    ens_name: str
    resolver_address: str
    network: str
    is_verified: bool
    metadata: ContractMetadataResponse
    resolver_info: ResolverInfoResponse
    timestamps: TimestampsResponse


class ResolveContractResponse(APIBaseSchema):
    """Response for single-name resolution."""

    found: bool
    result: ContractResponse | None = None
    duration_ms: float


# Batch schemas
class BatchSummaryResponse(APIBaseSchema):
    """Success/failure accounting for a batch."""

    total: int
    successful: int
    failed: int
    errors: list[str] = Field(default_factory=list)


class PerformanceResponse(APIBaseSchema):
    """Batch timing."""

    total_time_ms: float
    average_time_ms: float
    requests_per_second: float


class ResolveBatchResponse(APIBaseSchema):
    """Response for batch resolution."""

    results: list[ContractResponse | None]
    summary: BatchSummaryResponse
    performance: PerformanceResponse


# Operational schemas
class MetricsResponse(APIBaseSchema):
    """Running resolver metrics."""

    requests: int
    hits: int
    misses: int
    errors: int
    total_time_ms: float
    cache_hit_rate: float
    average_request_time_ms: float


class CacheStatsResponse(APIBaseSchema):
    """Result cache occupancy."""

    size: int
    max_age: int
    max_entries: int


class HealthResponse(APIBaseSchema):
    """Health check response."""

    status: Literal["healthy", "degraded", "unhealthy"]
    version: str
    services: dict[str, Literal["up", "down", "unknown"]]

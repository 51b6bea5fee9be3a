"""API schema definitions."""

from ensresolver.api.schemas.base import (
    APIBaseSchema,
    APIError,
    ErrorDetail,
)
from ensresolver.api.schemas.requests import (
    ResolveBatchRequest,
    ResolveContractRequest,
    ResolveResolverDomainsRequest,
)
from ensresolver.api.schemas.responses import (
    AuditResponse,
    BatchSummaryResponse,
    CacheStatsResponse,
    ContractMetadataResponse,
    ContractResponse,
    HealthResponse,
    MetricsResponse,
    PerformanceResponse,
    ResolveBatchResponse,
    ResolveContractResponse,
    ResolverInfoResponse,
    TimestampsResponse,
)

__all__ = [
    # Base
    "APIBaseSchema",
    "APIError",
    "ErrorDetail",
    # Requests
    "ResolveBatchRequest",
    "ResolveContractRequest",
    "ResolveResolverDomainsRequest",
    # Responses
    "AuditResponse",
    "BatchSummaryResponse",
    "CacheStatsResponse",
    "ContractMetadataResponse",
    "ContractResponse",
    "HealthResponse",
    "MetricsResponse",
    "PerformanceResponse",
    "ResolveBatchResponse",
    "ResolveContractResponse",
    "ResolverInfoResponse",
    "TimestampsResponse",
]

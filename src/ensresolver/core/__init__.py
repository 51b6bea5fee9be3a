"""Core types, models, and exceptions."""

from .exceptions import (
    ChainReadError,
    ConfigurationError,
    ENSResolverError,
    RateLimitError,
    ResolutionError,
    UpstreamServiceError,
    ValidationError,
)
from .models import (
    AuditInfo,
    BatchResolutionResult,
    BatchSummary,
    CacheEntry,
    CacheStats,
    ContractMetadata,
    DomainInfo,
    DomainRecord,
    PerformanceMetrics,
    ResolutionResult,
    ResolutionTimestamps,
    ResolverCapabilities,
    RunningMetrics,
)
from .types import EventType, Network, ProbeStatus, UpstreamName

__all__ = [
    # Types
    "EventType",
    "Network",
    "ProbeStatus",
    "UpstreamName",
    # Models
    "AuditInfo",
    "BatchResolutionResult",
    "BatchSummary",
    "CacheEntry",
    "CacheStats",
    "ContractMetadata",
    "DomainInfo",
    "DomainRecord",
    "PerformanceMetrics",
    "ResolutionResult",
    "ResolutionTimestamps",
    "ResolverCapabilities",
    "RunningMetrics",
    # Exceptions
    "ChainReadError",
    "ConfigurationError",
    "ENSResolverError",
    "RateLimitError",
    "ResolutionError",
    "UpstreamServiceError",
    "ValidationError",
]

"""Core enums and type definitions."""

from enum import StrEnum


class Network(StrEnum):
    """Networks a resolution result can be stamped with."""

    MAINNET = "mainnet"
    SEPOLIA = "sepolia"
    HOLESKY = "holesky"
    POLYGON = "polygon"
    ARBITRUM = "arbitrum"
    OPTIMISM = "optimism"


class UpstreamName(StrEnum):
    """External services the resolver talks to."""

    SUBGRAPH = "subgraph"
    NODE = "node"
    EXPLORER = "explorer"


class EventType(StrEnum):
    """Lifecycle events published by the resolution service."""

    CACHE_HIT = "cacheHit"
    RESOLUTION_COMPLETE = "resolutionComplete"
    RESOLUTION_ERROR = "resolutionError"
    BATCH_COMPLETE = "batchComplete"
    CACHE_CLEARED = "cacheCleared"


class ProbeStatus(StrEnum):
    """Outcome of a single on-chain probe call."""

    OK = "ok"
    FAILED = "failed"
    TIMEOUT = "timeout"

"""Upstream access layer: subgraph index, chain node, block explorer."""

from ensresolver.resolution.base import AsyncRateLimiter, HTTPServiceClient, RetryPolicy
from ensresolver.resolution.chain import ChainClient
from ensresolver.resolution.explorer import ExplorerClient
from ensresolver.resolution.index import SubgraphIndexClient
from ensresolver.resolution.probes import ProbeResult

__all__ = [
    # Base
    "AsyncRateLimiter",
    "HTTPServiceClient",
    "RetryPolicy",
    # Upstreams
    "ChainClient",
    "ExplorerClient",
    "SubgraphIndexClient",
    # Probes
    "ProbeResult",
]

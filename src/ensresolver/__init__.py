"""ensresolver - Resolve ENS names to on-chain contracts and their metadata."""

from ensresolver.client import ENSContractClient, resolve_contract
from ensresolver.config import ResolverSettings
from ensresolver.core.models import (
    BatchResolutionResult,
    ContractMetadata,
    ResolutionResult,
    ResolverCapabilities,
    RunningMetrics,
)
from ensresolver.core.types import EventType, Network
from ensresolver.services.resolution import ContractResolutionService

__version__ = "0.1.0"
__all__ = [
    # Client
    "ENSContractClient",
    "resolve_contract",
    # Service
    "ContractResolutionService",
    "ResolverSettings",
    # Types
    "EventType",
    "Network",
    # Models
    "BatchResolutionResult",
    "ContractMetadata",
    "ResolutionResult",
    "ResolverCapabilities",
    "RunningMetrics",
    # Version
    "__version__",
]

"""Service layer for resolution orchestration."""

from ensresolver.services.batch import BatchCoordinator
from ensresolver.services.events import EventBus
from ensresolver.services.metrics import MetricsRecorder
from ensresolver.services.resolution import ContractResolutionService

__all__ = [
    "BatchCoordinator",
    "ContractResolutionService",
    "EventBus",
    "MetricsRecorder",
]

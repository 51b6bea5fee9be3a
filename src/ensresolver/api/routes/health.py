"""Health check endpoints."""

from __future__ import annotations

import logging
from typing import Literal

from fastapi import APIRouter, Request

from ensresolver import __version__
from ensresolver.api.schemas import HealthResponse
from ensresolver.core.exceptions import ChainReadError
from ensresolver.core.types import UpstreamName

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    operation_id="getHealth",
    summary="Health check",
    description="Check the health status of the API and its blockchain node.",
)
async def health_check(request: Request) -> HealthResponse:
    """Check API health status."""
    services: dict[str, Literal["up", "down", "unknown"]] = {}
    overall_status: Literal["healthy", "degraded", "unhealthy"] = "healthy"

    client = getattr(request.app.state, "contract_client", None)
    if client is None:
        services["resolver"] = "down"
        services[UpstreamName.NODE.value] = "unknown"
        overall_status = "unhealthy"
    else:
        services["resolver"] = "up"

        # Check node
        try:
            await client.node_block_number()
            services[UpstreamName.NODE.value] = "up"
        except ChainReadError as e:
            logger.warning(f"Node health check failed: {e.message}")
            services[UpstreamName.NODE.value] = "down"
            overall_status = "degraded"

    return HealthResponse(
        status=overall_status,
        version=__version__,
        services=services,
    )


@router.get(
    "/ready",
    operation_id="getReady",
    summary="Readiness check",
    description="Check if the API is ready to serve traffic.",
)
async def readiness_check(request: Request) -> dict[str, bool]:
    """Check if API is ready to serve traffic."""
    client = getattr(request.app.state, "contract_client", None)
    return {"ready": client is not None}

"""API route modules."""

from ensresolver.api.routes.health import router as health_router
from ensresolver.api.routes.resolve import router as resolve_router

__all__ = [
    "health_router",
    "resolve_router",
]

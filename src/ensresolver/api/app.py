"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ensresolver import __version__
from ensresolver.api.routes import health_router, resolve_router
from ensresolver.api.schemas import APIError, ErrorDetail
from ensresolver.client import ENSContractClient
from ensresolver.config import ResolverSettings, get_settings
from ensresolver.core.exceptions import (
    ConfigurationError,
    ENSResolverError,
    ResolutionError,
    UpstreamServiceError,
    ValidationError,
)
from ensresolver.core.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan manager.

    Builds the resolver client unless one was injected into ``create_app``.
    """
    owned_client: ENSContractClient | None = None

    if getattr(app.state, "contract_client", None) is None:
        settings = app.state.settings or get_settings()
        configure_logging(settings.log_level)

        logger.info("Initializing resolver client...")
        owned_client = ENSContractClient(settings)
        await owned_client.__aenter__()
        app.state.contract_client = owned_client

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")

    if owned_client is not None:
        await owned_client.close()
        app.state.contract_client = None

    logger.info("Application shutdown complete")


def _error_response(status_code: int, code: str, exc: ENSResolverError) -> JSONResponse:
    body = APIError(
        error=ErrorDetail(
            code=code,
            message=exc.message,
            source=getattr(exc, "source", None),
            details=exc.details or None,
        )
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


async def _validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return _error_response(400, "invalid_request", exc)


async def _resolution_error_handler(request: Request, exc: ResolutionError) -> JSONResponse:
    if isinstance(exc, UpstreamServiceError):
        logger.warning(f"Upstream {exc.source} failed for {request.url.path}: {exc.message}")
    return _error_response(502, "upstream_failure", exc)


async def _configuration_error_handler(
    request: Request, exc: ConfigurationError
) -> JSONResponse:
    return _error_response(503, "unavailable", exc)


def create_app(
    *,
    settings: ResolverSettings | None = None,
    client: ENSContractClient | None = None,
    title: str = "ENS Contract Resolver API",
    description: str = "Resolve ENS names to contract addresses and metadata",
    cors_origins: list[str] | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Resolver settings used when the lifespan builds the client
        client: An already-entered client to serve requests with (not closed on shutdown)
        title: API title for OpenAPI docs
        description: API description for OpenAPI docs
        cors_origins: List of allowed CORS origins

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=title,
        description=description,
        version=__version__,
        lifespan=lifespan,
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.state.settings = settings
    app.state.contract_client = client

    # Configure CORS
    if cors_origins is None:
        cors_origins = ["http://localhost:3000"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ValidationError, _validation_error_handler)
    app.add_exception_handler(ResolutionError, _resolution_error_handler)
    app.add_exception_handler(ConfigurationError, _configuration_error_handler)

    # Register routes
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(resolve_router, prefix="/api/v1")

    return app


# For uvicorn direct execution
app = create_app()

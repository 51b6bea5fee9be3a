"""Resolution endpoints."""

from __future__ import annotations

import time

from fastapi import APIRouter, Response, status

from ensresolver.api.dependencies import ContractClient
from ensresolver.api.schemas import (
    AuditResponse,
    BatchSummaryResponse,
    CacheStatsResponse,
    ContractMetadataResponse,
    ContractResponse,
    MetricsResponse,
    PerformanceResponse,
    ResolveBatchRequest,
    ResolveBatchResponse,
    ResolveContractRequest,
    ResolveContractResponse,
    ResolverInfoResponse,
    ResolveResolverDomainsRequest,
    TimestampsResponse,
)
from ensresolver.core.models import BatchResolutionResult, ResolutionResult

router = APIRouter(prefix="/resolve", tags=["resolve"])


def _convert_result_to_response(result: ResolutionResult) -> ContractResponse:
    """Convert domain ResolutionResult to API response."""
    metadata = result.metadata
    info = result.resolver_info

    return ContractResponse(
        contract_address=result.contract_address,
        ens_name=result.ens_name,
        resolver_address=result.resolver_address,
        network=result.network,
        is_verified=result.is_verified,
        metadata=ContractMetadataResponse(
            name=metadata.name,
            symbol=metadata.symbol,
            decimals=metadata.decimals,
            total_supply=str(metadata.total_supply),
            description=metadata.description,
            tags=metadata.tags,
            audit=AuditResponse(status=metadata.audit.status, firms=metadata.audit.firms),
        ),
        resolver_info=ResolverInfoResponse(
            address=info.address,
            resolver_type=info.resolver_type,
            version=info.version,
            supports_wildcards=info.supports_wildcards,
        ),
        timestamps=TimestampsResponse(
            resolved_at=result.timestamps.resolved_at,
            last_verified=result.timestamps.last_verified,
        ),
    )


def _convert_batch_to_response(batch: BatchResolutionResult) -> ResolveBatchResponse:
    """Convert domain BatchResolutionResult to API response."""
    return ResolveBatchResponse(
        results=[
            _convert_result_to_response(r) if r is not None else None for r in batch.results
        ],
        summary=BatchSummaryResponse.model_validate(batch.summary),
        performance=PerformanceResponse.model_validate(batch.performance),
    )


@router.post(
    "/contract",
    response_model=ResolveContractResponse,
    operation_id="resolveContract",
    summary="Resolve an ENS name to a contract",
    description="Resolve an ENS name to its contract address, resolver details and metadata.",
)
async def resolve_contract(
    request: ResolveContractRequest,
    client: ContractClient,
) -> ResolveContractResponse:
    """Resolve a single ENS name."""
    start_time = time.monotonic()

    result = await client.resolve_contract(request.name)

    return ResolveContractResponse(
        found=result is not None,
        result=_convert_result_to_response(result) if result is not None else None,
        duration_ms=(time.monotonic() - start_time) * 1000,
    )


@router.post(
    "/batch",
    response_model=ResolveBatchResponse,
    operation_id="resolveBatch",
    summary="Resolve many ENS names",
    description="Resolve names in chunks; individual failures are reported in the summary.",
)
async def resolve_batch(
    request: ResolveBatchRequest,
    client: ContractClient,
) -> ResolveBatchResponse:
    """Resolve a batch of ENS names."""
    batch = await client.resolve_contracts_batch(request.names)
    return _convert_batch_to_response(batch)


@router.post(
    "/resolver",
    response_model=ResolveBatchResponse,
    operation_id="resolveResolverDomains",
    summary="Resolve a resolver's domains",
    description="List one page of domains using a resolver and resolve each of them.",
)
async def resolve_resolver_domains(
    request: ResolveResolverDomainsRequest,
    client: ContractClient,
) -> ResolveBatchResponse:
    """Resolve the domains pointing at a resolver contract."""
    batch = await client.resolve_resolver_domains(
        request.resolver_address,
        first=request.first,
        skip=request.skip,
    )
    return _convert_batch_to_response(batch)


@router.get(
    "/metrics",
    response_model=MetricsResponse,
    operation_id="getResolverMetrics",
    summary="Resolver metrics",
    description="Running request, cache and latency counters.",
)
async def get_metrics(client: ContractClient) -> MetricsResponse:
    """Return running resolver metrics."""
    return MetricsResponse.model_validate(client.get_metrics())


@router.get(
    "/cache",
    response_model=CacheStatsResponse,
    operation_id="getCacheStats",
    summary="Cache statistics",
    description="Number of cached results and the configured limits.",
)
async def get_cache_stats(client: ContractClient) -> CacheStatsResponse:
    """Return result cache statistics."""
    return CacheStatsResponse.model_validate(client.get_cache_stats())


@router.delete(
    "/cache",
    status_code=status.HTTP_204_NO_CONTENT,
    operation_id="clearCache",
    summary="Clear the cache",
    description="Drop every cached resolution result.",
)
async def clear_cache(client: ContractClient) -> Response:
    """Clear the result cache."""
    client.clear_cache()
    return Response(status_code=status.HTTP_204_NO_CONTENT)

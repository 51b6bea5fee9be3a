"""Unit test fixtures with HTTP and node mocking."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
import respx
from httpx import Response

from ensresolver.core.models import ContractMetadata, ResolverCapabilities
from ensresolver.resolution.chain import ChainClient
from ensresolver.resolution.index import SubgraphIndexClient

# ============================================================================
# HTTP Mocking Fixtures
# ============================================================================


@pytest.fixture
def respx_mock():
    """Provide a respx mock router for HTTP mocking.

    Use this when you need fine-grained control over mocked responses.
    The mock is automatically started and stopped by respx.
    """
    with respx.mock(assert_all_called=False) as router:
        yield router


# ============================================================================
# Mock Response Helpers
# ============================================================================


def mock_json_response(data: dict[str, Any], status_code: int = 200) -> Response:
    """Create a mock JSON response."""
    return Response(
        status_code=status_code,
        json=data,
        headers={"Content-Type": "application/json"},
    )


def mock_rate_limit_response(retry_after: int = 1) -> Response:
    """Create a mock 429 rate limit response."""
    return Response(
        status_code=429,
        json={"error": "Rate limit exceeded"},
        headers={
            "Content-Type": "application/json",
            "Retry-After": str(retry_after),
        },
    )


@pytest.fixture
def mock_responses():
    """Provide helper functions for creating mock responses."""
    return {
        "json": mock_json_response,
        "rate_limit": mock_rate_limit_response,
    }


# ============================================================================
# Subgraph Response Fixtures
# ============================================================================


@pytest.fixture
def subgraph_domain_response() -> dict[str, Any]:
    """Sample subgraph response for a domain with a resolver."""
    return {
        "data": {
            "domains": [
                {
                    "id": "0x2d0c2ba4f0b3ed3e0ab6f1b8b7a4c4e0e7c0c1d3a5c6ec4c8f3d2a1b0c9d8e7f",
                    "name": "uniswap.eth",
                    "resolver": {"id": "0x231b0ee14048e9dccd1d247744d114a4eb5e8e63"},
                    "resolvedAddress": {"id": "0x1f9840a85d5af5bf1d1762f925bdaddc4201f984"},
                }
            ]
        }
    }


@pytest.fixture
def subgraph_empty_response() -> dict[str, Any]:
    """Sample subgraph response with no matching domain."""
    return {"data": {"domains": []}}


@pytest.fixture
def subgraph_listing_response() -> dict[str, Any]:
    """Sample subgraph response for a resolver-scoped domain listing."""
    return {
        "data": {
            "domains": [
                {
                    "id": "0xaaa",
                    "name": "uniswap.eth",
                    "createdAt": "1580515200",
                    "resolver": {
                        "id": "0x231b0ee14048e9dccd1d247744d114a4eb5e8e63",
                        "addr": {"id": "0x1f9840a85d5af5bf1d1762f925bdaddc4201f984"},
                        "texts": ["url", "avatar"],
                    },
                    "owner": {"id": "0x1a9c8182c09f50c8318d769245bea52c32be35bc"},
                },
                {
                    "id": "0xbbb",
                    "name": None,
                    "createdAt": "1580515300",
                    "resolver": {
                        "id": "0x231b0ee14048e9dccd1d247744d114a4eb5e8e63",
                        "addr": None,
                        "texts": None,
                    },
                    "owner": None,
                },
            ]
        }
    }


# ============================================================================
# Upstream Client Mocks
# ============================================================================


@pytest.fixture
def mock_index() -> MagicMock:
    """Create a subgraph client mock; configure ``query_domain`` per test."""
    index = MagicMock(spec=SubgraphIndexClient)
    index.query_domain = AsyncMock(return_value=None)
    index.list_domains = AsyncMock(return_value=[])
    return index


@pytest.fixture
def mock_chain(
    sample_capabilities: ResolverCapabilities,
    sample_metadata: ContractMetadata,
) -> MagicMock:
    """Create a chain client mock that resolves every name to a token contract."""
    chain = MagicMock(spec=ChainClient)
    chain.get_resolver_capabilities = AsyncMock(return_value=sample_capabilities)
    chain.resolve_address = AsyncMock(return_value="0x1f9840a85d5aF5bf1D1762F925BDADdC4201F984")
    chain.is_contract = AsyncMock(return_value=True)
    chain.get_contract_metadata = AsyncMock(return_value=sample_metadata)
    chain.block_number = AsyncMock(return_value=19_000_000)
    chain.close = AsyncMock()
    return chain

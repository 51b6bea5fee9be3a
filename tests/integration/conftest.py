"""Integration test fixtures: the real app and client over mocked upstreams."""

from __future__ import annotations

import json
from typing import Any, AsyncIterator
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import respx
from httpx import ASGITransport, AsyncClient, Response

from ensresolver.api.app import create_app
from ensresolver.client import ENSContractClient
from ensresolver.config import ResolverSettings
from ensresolver.core.models import ContractMetadata, ResolverCapabilities
from ensresolver.resolution.chain import ChainClient

SUBGRAPH_URL = "https://api.thegraph.com/subgraphs/name/ensdomains/ens"
TOKEN_ADDRESS = "0x1f9840a85d5aF5bf1D1762F925BDADdC4201F984"
RESOLVER_ADDRESS = "0x231b0ee14048e9dccd1d247744d114a4eb5e8e63"

# Names the fake subgraph knows, all using the same resolver
INDEXED_NAMES = {"uniswap.eth", "v3.uniswap.eth", "ens.eth"}
# Name whose lookup the fake subgraph rejects
BROKEN_NAME = "broken.eth"


# ============================================================================
# Upstream Fixtures
# ============================================================================


def _domain(name: str) -> dict[str, Any]:
    return {
        "id": "0x" + name.encode().hex(),
        "name": name,
        "resolver": {"id": RESOLVER_ADDRESS},
        "resolvedAddress": {"id": TOKEN_ADDRESS.lower()},
    }


def _subgraph_handler(request: httpx.Request) -> Response:
    """Answer domain lookups and resolver listings like the ENS subgraph."""
    variables = json.loads(request.content)["variables"]

    if "name" in variables:
        name = variables["name"]
        if name == BROKEN_NAME:
            return Response(400, json={"error": "bad request"})
        domains = [_domain(name)] if name in INDEXED_NAMES else []
        return Response(200, json={"data": {"domains": domains}})

    records = [
        {
            "id": f"0x{i:064x}",
            "name": name,
            "createdAt": "1580515200",
            "resolver": {"id": RESOLVER_ADDRESS, "addr": None, "texts": None},
            "owner": None,
        }
        for i, name in enumerate(sorted(INDEXED_NAMES))
    ]
    skip = variables.get("skip", 0)
    first = variables.get("first", 100)
    return Response(200, json={"data": {"domains": records[skip : skip + first]}})


@pytest.fixture
def subgraph_mock():
    """Route subgraph traffic to an in-process fake."""
    with respx.mock(assert_all_called=False) as router:
        router.post(SUBGRAPH_URL).mock(side_effect=_subgraph_handler)
        yield router


@pytest.fixture
def node_chain(
    sample_capabilities: ResolverCapabilities,
    sample_metadata: ContractMetadata,
) -> MagicMock:
    """Node client stand-in: every name resolves to a token contract."""
    chain = MagicMock(spec=ChainClient)
    chain.get_resolver_capabilities = AsyncMock(return_value=sample_capabilities)
    chain.resolve_address = AsyncMock(return_value=TOKEN_ADDRESS)
    chain.is_contract = AsyncMock(return_value=True)
    chain.get_contract_metadata = AsyncMock(return_value=sample_metadata)
    chain.block_number = AsyncMock(return_value=19_000_000)
    chain.close = AsyncMock()
    return chain


@pytest.fixture
async def contract_client(
    mock_settings: ResolverSettings,
    node_chain: MagicMock,
    subgraph_mock,
) -> AsyncIterator[ENSContractClient]:
    """Entered library client wired to the fake subgraph and node."""
    async with ENSContractClient(mock_settings, chain=node_chain) as client:
        yield client


# ============================================================================
# FastAPI Test Client Fixtures
# ============================================================================


@pytest.fixture
def test_app(contract_client: ENSContractClient, mock_settings: ResolverSettings):
    """Create the application around an injected client."""
    return create_app(settings=mock_settings, client=contract_client)


@pytest.fixture
async def test_client(test_app) -> AsyncIterator[AsyncClient]:
    """Create async HTTP test client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
async def unwired_client() -> AsyncIterator[AsyncClient]:
    """HTTP client for an app whose resolver client was never started."""
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as an integration test over mocked upstreams",
    )

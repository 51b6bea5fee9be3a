"""Tests for the library client wiring."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from ensresolver.client import ENSContractClient
from ensresolver.config import ResolverSettings
from ensresolver.core.exceptions import ConfigurationError

EXPLORER_URL = "https://api.etherscan.io/api"


class TestENSContractClient:
    """Tests for client lifecycle."""

    def test_service_requires_context(self, mock_settings: ResolverSettings):
        """Using the client before entering it should be a configuration error."""
        client = ENSContractClient(mock_settings)

        with pytest.raises(ConfigurationError):
            client.get_metrics()

    async def test_node_check_requires_context(self, mock_settings: ResolverSettings):
        client = ENSContractClient(mock_settings)

        with pytest.raises(ConfigurationError):
            await client.node_block_number()

    async def test_injected_chain_is_used_and_not_closed(
        self, mock_settings: ResolverSettings, mock_chain: MagicMock
    ):
        """An injected node client belongs to the caller."""
        async with ENSContractClient(mock_settings, chain=mock_chain) as client:
            assert await client.node_block_number() == 19_000_000

        mock_chain.close.assert_not_awaited()
        with pytest.raises(ConfigurationError):
            client.get_metrics()

    async def test_explorer_built_when_configured(
        self, mock_settings: ResolverSettings, mock_chain: MagicMock
    ):
        settings = mock_settings.model_copy(
            update={"explorer_url": EXPLORER_URL, "explorer_api_key": "key"}
        )

        async with ENSContractClient(settings, chain=mock_chain) as client:
            assert client._explorer is not None
            assert client._explorer.base_url == EXPLORER_URL

    async def test_no_explorer_by_default(
        self, mock_settings: ResolverSettings, mock_chain: MagicMock
    ):
        async with ENSContractClient(mock_settings, chain=mock_chain) as client:
            assert client._explorer is None

    async def test_fresh_client_has_empty_cache(
        self, mock_settings: ResolverSettings, mock_chain: MagicMock
    ):
        async with ENSContractClient(mock_settings, chain=mock_chain) as client:
            stats = client.get_cache_stats()

        assert stats.size == 0
        assert stats.max_age == mock_settings.cache_expiry

"""FastAPI dependency injection."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from ensresolver.client import ENSContractClient
from ensresolver.core.exceptions import ConfigurationError


async def get_contract_client(request: Request) -> ENSContractClient:
    """Get the resolver client from app state."""
    client = getattr(request.app.state, "contract_client", None)
    if client is None:
        raise ConfigurationError("Resolver client is not available")
    return client


# Type aliases for cleaner dependency injection
ContractClient = Annotated[ENSContractClient, Depends(get_contract_client)]

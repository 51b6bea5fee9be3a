"""Request schemas for API endpoints."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from ensresolver.api.schemas.base import APIBaseSchema


class ResolveContractRequest(APIBaseSchema):
    """Request to resolve a single ENS name."""

    name: Annotated[
        str,
        Field(
            min_length=1,
            max_length=255,
            description="ENS name to resolve, e.g. uniswap.eth",
        ),
    ]


class ResolveBatchRequest(APIBaseSchema):
    """Request to resolve many ENS names."""

    names: Annotated[
        list[Annotated[str, Field(min_length=1, max_length=255)]],
        Field(
            min_length=1,
            max_length=10_000,
            description="ENS names to resolve; results keep this order",
        ),
    ]


class ResolveResolverDomainsRequest(APIBaseSchema):
    """Request to resolve one page of the domains using a resolver."""

    resolver_address: Annotated[
        str,
        Field(
            pattern=r"^0x[0-9a-fA-F]{40}$",
            description="Resolver contract address",
        ),
    ]

    first: Annotated[
        int,
        Field(default=100, ge=1, le=1000, description="Page size"),
    ]

    skip: Annotated[
        int,
        Field(default=0, ge=0, description="Domains to skip"),
    ]

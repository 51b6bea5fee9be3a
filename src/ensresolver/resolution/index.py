"""ENS subgraph (GraphQL) client."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, ClassVar

import httpx

from ensresolver.core.exceptions import UpstreamServiceError
from ensresolver.core.models import DomainInfo, DomainRecord
from ensresolver.core.types import UpstreamName
from ensresolver.resolution.base import HTTPServiceClient

logger = logging.getLogger(__name__)

DOMAIN_QUERY = """
query GetDomain($name: String!) {
  domains(where: { name: $name }) {
    id
    name
    resolver {
      id
    }
    resolvedAddress {
      id
    }
  }
}
"""

_DOMAIN_LIST_FIELDS = """
    id
    name
    createdAt
    resolver {
      id
      addr {
        id
      }
      texts
    }
    owner {
      id
    }
"""

DOMAINS_WITH_RESOLVERS_QUERY = (
    """
query DomainsWithResolvers($first: Int!, $skip: Int!) {
  domains(first: $first, skip: $skip, where: { resolver_not: null }) {"""
    + _DOMAIN_LIST_FIELDS
    + """  }
}
"""
)

DOMAINS_BY_RESOLVER_QUERY = (
    """
query DomainsByResolver($resolver: String!, $first: Int!, $skip: Int!) {
  domains(where: { resolver: $resolver }, first: $first, skip: $skip) {"""
    + _DOMAIN_LIST_FIELDS
    + """  }
}
"""
)


class SubgraphIndexClient(HTTPServiceClient):
    """
    Indexed-data lookups against the ENS subgraph.

    Every call is a single GraphQL POST to the configured endpoint. HTTP error
    statuses, transport failures and GraphQL ``errors`` payloads all surface as
    UpstreamServiceError; an empty ``domains`` list is a normal "not found".
    """

    SOURCE_NAME: ClassVar[UpstreamName] = UpstreamName.SUBGRAPH

    def _get_default_headers(self) -> dict[str, str]:
        headers = super()._get_default_headers()
        headers["Content-Type"] = "application/json"
        return headers

    async def query_domain(self, name: str) -> DomainInfo | None:
        """Look up a single domain by its exact name."""
        data = await self._post_query(DOMAIN_QUERY, {"name": name})
        domains = data.get("domains") or []
        if not domains:
            logger.debug(f"No indexed domain for {name}")
            return None
        return self._parse_domain(domains[0])

    async def list_domains(
        self,
        resolver: str | None = None,
        *,
        first: int = 100,
        skip: int = 0,
    ) -> list[DomainRecord]:
        """
        Page through domains that have a resolver set.

        Args:
            resolver: Restrict the listing to domains using this resolver address
            first: Page size
            skip: Number of domains to skip

        Returns:
            Domain records in subgraph order
        """
        if first < 1:
            raise ValueError("first must be at least 1")
        if skip < 0:
            raise ValueError("skip must not be negative")

        if resolver:
            query = DOMAINS_BY_RESOLVER_QUERY
            variables: dict[str, Any] = {"resolver": resolver.lower(), "first": first, "skip": skip}
        else:
            query = DOMAINS_WITH_RESOLVERS_QUERY
            variables = {"first": first, "skip": skip}

        data = await self._post_query(query, variables)
        return [self._parse_record(item) for item in data.get("domains") or []]

    async def _post_query(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """POST a GraphQL document and return its ``data`` object."""
        # The endpoint is the full URL; a relative path would gain a trailing slash
        response = await self._make_request(
            "POST",
            self.base_url,
            json={"query": query, "variables": variables},
        )

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise UpstreamServiceError(
                message=f"Subgraph query failed: HTTP {response.status_code}",
                source=self.source_name.value,
                status_code=response.status_code,
            ) from e

        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamServiceError(
                message="Subgraph returned a non-JSON body",
                source=self.source_name.value,
                status_code=response.status_code,
            ) from e

        if not isinstance(payload, dict):
            raise UpstreamServiceError(
                message="Subgraph returned an unexpected body",
                source=self.source_name.value,
                status_code=response.status_code,
            )

        if payload.get("errors"):
            raise UpstreamServiceError(
                message=f"Subgraph errors: {payload['errors']}",
                source=self.source_name.value,
                status_code=response.status_code,
                details={"errors": payload["errors"]},
            )

        data = payload.get("data") or {}
        if not isinstance(data, dict):
            raise UpstreamServiceError(
                message="Subgraph returned an unexpected data payload",
                source=self.source_name.value,
                status_code=response.status_code,
            )
        return data

    @staticmethod
    def _parse_domain(data: dict[str, Any]) -> DomainInfo:
        resolver = data.get("resolver") or {}
        resolved = data.get("resolvedAddress") or {}
        return DomainInfo(
            id=data["id"],
            name=data.get("name"),
            resolver_address=resolver.get("id"),
            resolved_address=resolved.get("id"),
        )

    @staticmethod
    def _parse_record(data: dict[str, Any]) -> DomainRecord:
        resolver = data.get("resolver") or {}
        addr = resolver.get("addr") or {}
        owner = data.get("owner") or {}

        # Subgraph timestamps are unix seconds encoded as strings
        created_at = None
        if raw_created := data.get("createdAt"):
            try:
                created_at = datetime.fromtimestamp(int(raw_created), tz=timezone.utc)
            except (TypeError, ValueError):
                pass

        return DomainRecord(
            id=data["id"],
            name=data.get("name"),
            created_at=created_at,
            resolver_address=resolver.get("id"),
            owner=owner.get("id"),
            address=addr.get("id"),
            texts=resolver.get("texts") or [],
        )

"""Block explorer client for contract source verification."""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from ensresolver.core.exceptions import UpstreamServiceError
from ensresolver.core.types import UpstreamName
from ensresolver.resolution.base import HTTPServiceClient, RetryPolicy

logger = logging.getLogger(__name__)


class ExplorerClient(HTTPServiceClient):
    """
    Etherscan-compatible ``getsourcecode`` lookups.

    API Documentation: https://docs.etherscan.io/api-endpoints/contracts
    """

    SOURCE_NAME: ClassVar[UpstreamName] = UpstreamName.EXPLORER

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        *,
        timeout: float = 30.0,
        retry: RetryPolicy | None = None,
    ) -> None:
        super().__init__(base_url, timeout=timeout, retry=retry)
        self._api_key = api_key

    async def get_source(self, address: str) -> dict[str, Any] | None:
        """Fetch the explorer's source record for a contract, if any."""
        params = {
            "module": "contract",
            "action": "getsourcecode",
            "address": address,
        }
        if self._api_key:
            params["apikey"] = self._api_key

        response = await self._make_request("GET", self.base_url, params=params)

        if response.status_code >= 400:
            raise UpstreamServiceError(
                message=f"Explorer request failed: HTTP {response.status_code}",
                source=self.source_name.value,
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamServiceError(
                message="Explorer returned a non-JSON body",
                source=self.source_name.value,
                status_code=response.status_code,
            ) from e

        if not isinstance(data, dict):
            raise UpstreamServiceError(
                message="Explorer returned an unexpected body",
                source=self.source_name.value,
                status_code=response.status_code,
            )

        result = data.get("result")

        # Etherscan reports errors as status "0" with a string result
        if data.get("status") != "1" or not isinstance(result, list):
            raise UpstreamServiceError(
                message=f"Explorer error: {data.get('message')}: {result}",
                source=self.source_name.value,
                status_code=response.status_code,
            )

        return result[0] if result else None

    async def is_verified(self, address: str) -> bool:
        """
        Whether the explorer holds verified source for ``address``.

        Lookup failures count as unverified.
        """
        try:
            source = await self.get_source(address)
        except UpstreamServiceError as e:
            logger.warning(f"Verification lookup for {address} failed: {e.message}")
            return False

        return isinstance(source, dict) and bool(source.get("SourceCode"))

"""Direct blockchain reads through an Ethereum JSON-RPC node."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from ens import AsyncENS
from web3 import AsyncWeb3

from ensresolver.core.exceptions import ChainReadError
from ensresolver.core.models import ContractMetadata, ResolverCapabilities
from ensresolver.resolution.probes import (
    ERC20_METADATA_ABI,
    METADATA_FALLBACKS,
    RESOLVER_FALLBACKS,
    RESOLVER_PROBE_ABI,
    TOKEN_TAGS,
    UNAVAILABLE_DESCRIPTION,
    WILDCARD_INTERFACE_ID,
    ProbeResult,
    apply_fallbacks,
    token_description,
)

logger = logging.getLogger(__name__)


class ChainClient:
    """
    Fault-tolerant reads against an Ethereum node.

    The resolution reads never raise for node-side failures: ENS lookups fall
    back to ``None``, bytecode checks to ``False`` and contract probes to their
    per-field defaults. Only ``block_number`` reports failure, as ChainReadError.
    Every node call runs under the configured deadline.
    """

    def __init__(
        self,
        web3: AsyncWeb3,
        ens: AsyncENS | None = None,
        *,
        timeout: float = 30.0,
    ) -> None:
        """
        Initialize the chain client.

        Args:
            web3: Connected async Web3 instance
            ens: ENS module to use for name lookups (built from ``web3`` if omitted)
            timeout: Deadline in seconds for each node call
        """
        self._w3 = web3
        self._ens = ens if ens is not None else AsyncENS.from_web3(web3)
        self._timeout = timeout

    @classmethod
    def from_url(cls, node_url: str, *, timeout: float = 30.0) -> ChainClient:
        """Build a client for a JSON-RPC endpoint."""
        w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(node_url))
        return cls(w3, timeout=timeout)

    @property
    def web3(self) -> AsyncWeb3:
        return self._w3

    async def block_number(self) -> int:
        """
        Latest block number, used as a liveness check.

        Raises:
            ChainReadError: If the node cannot be reached in time
        """
        try:
            async with asyncio.timeout(self._timeout):
                return await self._w3.eth.block_number
        except TimeoutError as e:
            raise ChainReadError(
                f"Node did not answer within {self._timeout}s", method="eth_blockNumber"
            ) from e
        except Exception as e:
            raise ChainReadError(f"Node read failed: {e}", method="eth_blockNumber") from e

    async def resolve_address(self, name: str) -> str | None:
        """Forward-resolve an ENS name to an address."""
        try:
            async with asyncio.timeout(self._timeout):
                address = await self._ens.address(name)
        except TimeoutError:
            logger.warning(f"ENS lookup for {name} timed out after {self._timeout}s")
            return None
        except Exception as e:
            logger.debug(f"ENS lookup for {name} failed: {e}")
            return None

        return str(address) if address else None

    async def is_contract(self, address: str) -> bool:
        """Whether deployed bytecode exists at ``address``."""
        try:
            checksum = AsyncWeb3.to_checksum_address(address)
            async with asyncio.timeout(self._timeout):
                code = await self._w3.eth.get_code(checksum)
        except TimeoutError:
            logger.warning(f"get_code for {address} timed out after {self._timeout}s")
            return False
        except Exception as e:
            logger.debug(f"get_code for {address} failed: {e}")
            return False

        return len(code) > 0

    async def get_resolver_capabilities(self, resolver_address: str) -> ResolverCapabilities:
        """Probe a resolver for wildcard support, declared type and version."""
        try:
            resolver = self._w3.eth.contract(
                address=AsyncWeb3.to_checksum_address(resolver_address),
                abi=RESOLVER_PROBE_ABI,
            )
        except Exception as e:
            logger.debug(f"Cannot bind resolver contract {resolver_address}: {e}")
            return ResolverCapabilities(address=resolver_address)

        interface_id = bytes.fromhex(WILDCARD_INTERFACE_ID[2:])
        probes = await asyncio.gather(
            self._probe(
                "supports_wildcards",
                lambda: resolver.functions.supportsInterface(interface_id).call(),
            ),
            self._probe("resolver_type", lambda: resolver.functions.resolverType().call()),
            self._probe("version", lambda: resolver.functions.version().call()),
        )
        values = apply_fallbacks(list(probes), RESOLVER_FALLBACKS)

        return ResolverCapabilities(
            address=resolver_address,
            resolver_type=str(values["resolver_type"]),
            version=str(values["version"]),
            supports_wildcards=bool(values["supports_wildcards"]),
        )

    async def get_contract_metadata(self, address: str) -> ContractMetadata:
        """Read ERC-20 style metadata, defaulting each field that cannot be read."""
        try:
            token = self._w3.eth.contract(
                address=AsyncWeb3.to_checksum_address(address),
                abi=ERC20_METADATA_ABI,
            )
        except Exception as e:
            logger.debug(f"Cannot bind contract {address}: {e}")
            return ContractMetadata()

        probes = await asyncio.gather(
            self._probe("name", lambda: token.functions.name().call()),
            self._probe("symbol", lambda: token.functions.symbol().call()),
            self._probe("decimals", lambda: token.functions.decimals().call()),
            self._probe("total_supply", lambda: token.functions.totalSupply().call()),
        )

        if not any(probe.ok for probe in probes):
            return ContractMetadata(
                description=UNAVAILABLE_DESCRIPTION,
                tags=[],
            )

        values = apply_fallbacks(list(probes), METADATA_FALLBACKS)
        symbol = str(values["symbol"])

        return ContractMetadata(
            name=str(values["name"]),
            symbol=symbol,
            decimals=int(values["decimals"]),
            total_supply=int(values["total_supply"]),
            description=token_description(symbol),
            tags=list(TOKEN_TAGS),
        )

    async def _probe(
        self,
        field: str,
        call: Callable[[], Awaitable[Any]],
    ) -> ProbeResult[Any]:
        """Run one contract read under the deadline, capturing failure as a value."""
        try:
            async with asyncio.timeout(self._timeout):
                value = await call()
        except TimeoutError:
            logger.debug(f"Probe {field} timed out after {self._timeout}s")
            return ProbeResult.failure(field, f"timed out after {self._timeout}s", timed_out=True)
        except Exception as e:
            logger.debug(f"Probe {field} failed: {e}")
            return ProbeResult.failure(field, str(e) or type(e).__name__)

        return ProbeResult.success(field, value)

    async def close(self) -> None:
        """Release the provider's connection pool, if it has one."""
        disconnect = getattr(self._w3.provider, "disconnect", None)
        if disconnect is None:
            return
        result = disconnect()
        if inspect.isawaitable(result):
            await result

    async def __aenter__(self) -> ChainClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

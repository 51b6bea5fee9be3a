"""Typed outcomes for best-effort contract reads and their fallback values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Mapping, TypeVar

from ensresolver.core.types import ProbeStatus

T = TypeVar("T")

# ENSIP-10 extended resolver interface
WILDCARD_INTERFACE_ID = "0x9061b923"

RESOLVER_PROBE_ABI: list[dict[str, Any]] = [
    {
        "name": "supportsInterface",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "interfaceID", "type": "bytes4"}],
        "outputs": [{"name": "", "type": "bool"}],
    },
    {
        "name": "resolverType",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "string"}],
    },
    {
        "name": "version",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "string"}],
    },
]

ERC20_METADATA_ABI: list[dict[str, Any]] = [
    {
        "name": "name",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "string"}],
    },
    {
        "name": "symbol",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "string"}],
    },
    {
        "name": "decimals",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint8"}],
    },
    {
        "name": "totalSupply",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
    },
]

# Field name on the result model -> value used when its probe fails
RESOLVER_FALLBACKS: Mapping[str, Any] = {
    "supports_wildcards": False,
    "resolver_type": "Unknown",
    "version": "Unknown",
}

METADATA_FALLBACKS: Mapping[str, Any] = {
    "name": "Unknown Contract",
    "symbol": "UNKNOWN",
    "decimals": 0,
    "total_supply": 0,
}

UNAVAILABLE_DESCRIPTION = "Contract metadata unavailable"
TOKEN_TAGS: tuple[str, ...] = ("erc20", "token")


def token_description(symbol: str) -> str:
    return f"ERC-20 token with symbol {symbol}"


@dataclass(frozen=True)
class ProbeResult(Generic[T]):
    """Outcome of one contract read: either a value or the reason it failed."""

    field: str
    status: ProbeStatus
    value: T | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == ProbeStatus.OK

    @classmethod
    def success(cls, field: str, value: T) -> ProbeResult[T]:
        return cls(field=field, status=ProbeStatus.OK, value=value)

    @classmethod
    def failure(cls, field: str, reason: str, *, timed_out: bool = False) -> ProbeResult[T]:
        status = ProbeStatus.TIMEOUT if timed_out else ProbeStatus.FAILED
        return cls(field=field, status=status, reason=reason)

    def value_or(self, fallbacks: Mapping[str, Any]) -> Any:
        """The probed value, or this field's entry in the fallback table."""
        if self.ok:
            return self.value
        return fallbacks[self.field]


def apply_fallbacks(
    probes: list[ProbeResult[Any]],
    fallbacks: Mapping[str, Any],
) -> dict[str, Any]:
    """Collapse probe outcomes into field values, defaulting each failure independently."""
    return {probe.field: probe.value_or(fallbacks) for probe in probes}

"""Cache key builders for consistent key formatting."""


class CacheKeys:
    """Cache key builders for consistent key formatting."""

    CONTRACT_PREFIX = "contract"

    @classmethod
    def contract(cls, ens_name: str) -> str:
        """Key for a resolved contract by ENS name."""
        return f"{cls.CONTRACT_PREFIX}:{ens_name}"

"""In-memory caching layer."""

from .keys import CacheKeys
from .store import ResultCache

__all__ = [
    "CacheKeys",
    "ResultCache",
]

"""Caching implementations."""

from ijq.domain.protocols import Cache
from ijq.infrastructure.cache.memory import MemoryCache

__all__ = [
    "Cache",
    "MemoryCache",
]

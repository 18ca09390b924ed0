"""Cache protocol."""

from typing import Protocol, TypeVar

__all__ = ["Cache", "K", "V"]

# Invariant: a cache is both read and written
K = TypeVar("K", contravariant=False)
V = TypeVar("V", contravariant=False)


class Cache(Protocol[K, V]):
    """Protocol for key/value caches shared between the UI loop and background fetches.

    Type Parameters:
        K: The key type
        V: The value type
    """

    def get(self, key: K) -> V | None:
        """Return the cached value, or None when absent."""
        ...

    def set(self, key: K, value: V) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    def clear(self, key: K | None = None) -> None:
        """Clear one key, or everything when ``key`` is None."""
        ...

    def has_changed(self, key: K, value: V) -> bool:
        """True if ``value`` differs from what is cached (or nothing is cached)."""
        ...

    def __contains__(self, key: object) -> bool:
        ...

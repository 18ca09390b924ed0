"""Thread-safe in-memory cache.

Values are replaced whole under a lock, so a reader sees either the previous
value or the new one and never a partially built entry.
"""

import threading
from typing import TypeVar

from ijq.domain.protocols import Cache

K = TypeVar("K")
V = TypeVar("V")


class MemoryCache(Cache[K, V]):
    """Dictionary-backed cache with no expiration.

    Example:
        >>> cache = MemoryCache[str, list[str]]()
        >>> cache.set(".a", [".a.b"])
        >>> cache.get(".a")
        ['.a.b']
        >>> cache.has_changed(".a", [".a.b"])
        False
    """

    def __init__(self) -> None:
        self._data: dict[K, V] = {}
        self._lock = threading.Lock()

    def get(self, key: K) -> V | None:
        with self._lock:
            return self._data.get(key)

    def set(self, key: K, value: V) -> None:
        with self._lock:
            self._data[key] = value

    def clear(self, key: K | None = None) -> None:
        """Clear cache entries.

        Args:
            key: If provided, clear only this key. If None, clear all entries.
        """
        with self._lock:
            if key is None:
                self._data.clear()
            else:
                self._data.pop(key, None)

    def has_changed(self, key: K, value: V) -> bool:
        cached = self.get(key)
        return cached is None or cached != value

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

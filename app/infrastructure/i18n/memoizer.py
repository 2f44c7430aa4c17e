"""Thread-safe memoization for compiled patterns.

Language bundles are shared by every system that renders text, and those
systems may run on parallel worker threads. The memoizer guarantees that a
value is built at most once per key, even when many readers ask for it at
the same time.
"""

import threading
from typing import Callable, Dict, Generic, Hashable, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class ConcurrentMemoizer(Generic[K, V]):
    """Internally synchronized get-or-create cache.

    The factory for a key runs while the memoizer's lock is held, so
    concurrent callers for the same key block until the first one has
    stored its value and then all receive that same object.

    Attributes:
        _entries: Dict mapping keys to built values.
        _lock: Re-entrant lock guarding entries and statistics.
    """

    def __init__(self):
        self._entries: Dict[K, V] = {}
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0

    def get_or_create(self, key: K, factory: Callable[[], V]) -> V:
        """Return the value for key, building it with factory on first use.

        Args:
            key: Hashable cache key.
            factory: Zero-argument callable producing the value.

        Returns:
            The memoized value.
        """
        with self._lock:
            if key in self._entries:
                self._hits += 1
                return self._entries[key]

            self._misses += 1
            value = factory()
            self._entries[key] = value
            return value

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def stats(self) -> Dict[str, int]:
        """Get cache statistics.

        Returns:
            Dict with ``hits``, ``misses`` and ``size``.
        """
        with self._lock:
            return {
                "hits": self._hits,
                "misses": self._misses,
                "size": len(self._entries),
            }

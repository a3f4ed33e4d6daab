"""Thread-safe in-process cache with a fixed time-to-live."""

import threading
import time
from typing import Callable, Generic, Hashable, Optional, TypeVar

from cachetools import TTLCache as _CachetoolsTTLCache

from storefront.config.logging_config import get_logger

logger = get_logger(__name__)

V = TypeVar("V")


class TTLCache(Generic[V]):
    """
    Key/value memo with lazy expiration.

    An entry is served while ``now - inserted_at < ttl`` and reported as a
    miss afterwards. Expired entries are dropped on access or by ``sweep()``;
    correctness never depends on the sweep running. ``maxsize`` bounds memory:
    once full, the least recently used entry is evicted.

    ``None`` is not a storable value since ``get`` uses it to signal a miss.
    """

    def __init__(
        self,
        ttl: float,
        maxsize: int = 1024,
        timer: Callable[[], float] = time.monotonic,
    ):
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        self.ttl = ttl
        self.maxsize = maxsize
        self._cache = _CachetoolsTTLCache(maxsize=maxsize, ttl=ttl, timer=timer)
        self._lock = threading.Lock()

    def get(self, key: Hashable) -> Optional[V]:
        """Return the live value for key, or None on a miss."""
        with self._lock:
            return self._cache.get(key)

    def set(self, key: Hashable, value: V) -> None:
        """Store value under key, replacing any previous entry and its age."""
        if value is None:
            raise ValueError("TTLCache cannot store None")
        with self._lock:
            self._cache[key] = value

    def delete(self, key: Hashable) -> None:
        with self._lock:
            self._cache.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def sweep(self) -> int:
        """
        Remove every expired entry.

        Returns:
            Number of entries removed
        """
        with self._lock:
            expired = self._cache.expire()
        if expired:
            logger.debug(f"Swept {len(expired)} expired cache entries")
        return len(expired)

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._cache

    def __len__(self) -> int:
        with self._lock:
            self._cache.expire()
            return len(self._cache)

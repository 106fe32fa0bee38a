"""Expiring Cache - process-scoped key/value store with per-entry TTL."""
import logging
import time
from typing import Any, Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class ExpiringCache:
    """
    In-memory cache where every entry carries its own expiry timestamp.

    Expiry is checked on read: an expired entry is evicted and reported as
    missing. One instance is created per process and handed to the
    components that need it (token provider, rate limiter).

    No locking is done. Rate-limit counters are only touched from the event
    loop; the token entry may also be read from worker threads, where a race
    at worst refreshes the token twice.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, float]] = {}

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            self._entries.pop(key, None)
            return None
        return value

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        """Store ``value`` under ``key`` for ``ttl_seconds``.

        A non-positive TTL removes the key instead.
        """
        if ttl_seconds <= 0:
            self._entries.pop(key, None)
            return
        self._entries[key] = (value, self._clock() + ttl_seconds)

    def expires_in(self, key: str) -> Optional[float]:
        """Seconds until ``key`` expires, or None if absent/expired."""
        if self.get(key) is None:
            return None
        entry = self._entries.get(key)
        if entry is None:
            return None
        return entry[1] - self._clock()

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        now = self._clock()
        return sum(1 for _, expires_at in self._entries.values() if expires_at > now)

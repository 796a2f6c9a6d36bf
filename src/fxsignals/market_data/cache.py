"""In-memory TTL cache for scraped market data.

Constructed once per process and passed by reference (stored on app.state);
there is no module-level cache. The clock is injectable so expiry can be
tested without sleeping. Access happens on the single asyncio event loop,
so no lock is taken.
"""

import time
from collections.abc import Awaitable, Callable
from typing import Any

from fxsignals.logging import get_logger

logger = get_logger(__name__)


class TTLCache:
    """Key/value store whose entries expire ``ttl_seconds`` after being set.

    Args:
        ttl_seconds: Entry lifetime. Entries older than this are misses.
        clock: Monotonic time source in seconds.
    """

    def __init__(
        self,
        ttl_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[Any, float]] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None if missing or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, stored_at = entry
        if self._clock() - stored_at >= self._ttl:
            del self._entries[key]
            return None
        return value

    def age(self, key: str) -> float | None:
        """Seconds since ``key`` was stored, or None if not cached."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        return self._clock() - entry[1]

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = (value, self._clock())

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    async def get_or_load(
        self,
        key: str,
        loader: Callable[[], Awaitable[Any]],
        force: bool = False,
    ) -> Any:
        """Return a fresh cached value or await ``loader`` and cache its result.

        A None result marks a failed load: it is returned but not cached, so
        the next call retries. Every other value is cached, including an
        empty list (a page that loaded with no matching rows).

        Args:
            key: Cache key.
            loader: Coroutine factory producing the value on a miss.
            force: Skip the lookup and reload unconditionally.
        """
        if not force:
            cached = self.get(key)
            if cached is not None:
                logger.debug("cache_hit", key=key)
                return cached

        value = await loader()
        if value is None:
            logger.debug("cache_skip_failed", key=key)
            self.invalidate(key)
        else:
            self.set(key, value)
            logger.debug("cache_stored", key=key, forced=force)
        return value

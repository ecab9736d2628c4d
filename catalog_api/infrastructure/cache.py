"""In-process cache for aggregate row counts.

Provides a cache-aside store mapping string keys to counts with a fixed
time-to-live, plus an optional background task that reclaims expired
entries.

Concurrent misses on the same key are not serialized: every caller that
misses computes the value and stores it. Counts are idempotent, so the
cache converges within one TTL window.
"""

import asyncio
import threading
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import structlog

logger = structlog.get_logger()

COUNT_CACHE_TTL = 180.0  # seconds
DEFAULT_SWEEP_INTERVAL = 60.0  # seconds


@dataclass(frozen=True)
class CacheEntry:
    """Cached count with its expiry deadline.

    Attributes:
        count: Cached aggregate value.
        expires_at: Clock reading after which the entry is stale.
    """

    count: int
    expires_at: float


class CountCache:
    """TTL cache for row counts.

    ``get`` honours the TTL on every read, so correctness never depends
    on when the sweep last ran.

    Example usage:
        cache = CountCache()
        await cache.start()

        total = await cache.get_or_compute("products__count", repository.count)

        await cache.stop()
    """

    def __init__(
        self,
        ttl: float = COUNT_CACHE_TTL,
        sweep_interval: float = DEFAULT_SWEEP_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize cache.

        Args:
            ttl: Default time-to-live in seconds.
            sweep_interval: Seconds between background purges.
            clock: Monotonic time source.
        """
        self.ttl = ttl
        self.sweep_interval = sweep_interval
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._sweeper: asyncio.Task[None] | None = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, key: str) -> int | None:
        """Get a cached count.

        Args:
            key: Cache key.

        Returns:
            Cached count, or None if never set or expired.
        """
        with self._lock:
            entry = self._entries.get(key)
        if entry is None or self._clock() >= entry.expires_at:
            return None
        return entry.count

    def set(self, key: str, count: int, ttl: float | None = None) -> None:
        """Store a count, replacing any previous entry.

        Args:
            key: Cache key.
            count: Value to cache.
            ttl: Time-to-live in seconds (defaults to the cache TTL).
        """
        expires_at = self._clock() + (self.ttl if ttl is None else ttl)
        with self._lock:
            self._entries[key] = CacheEntry(count=count, expires_at=expires_at)

    async def get_or_compute(
        self,
        key: str,
        compute: Callable[[], Awaitable[int]],
        ttl: float | None = None,
    ) -> int:
        """Return the cached count, computing and storing it on a miss.

        Args:
            key: Cache key.
            compute: Coroutine function producing the fresh count.
            ttl: Time-to-live for a freshly computed value.

        Returns:
            Cached or freshly computed count.
        """
        cached = self.get(key)
        if cached is not None:
            return cached

        logger.info("Count cache miss, computing from store", key=key)
        count = await compute()
        self.set(key, count, ttl)
        return count

    def purge_expired(self) -> int:
        """Remove expired entries.

        Returns:
            Number of entries removed.
        """
        now = self._clock()
        with self._lock:
            expired = [key for key, entry in self._entries.items() if now >= entry.expires_at]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.debug("Purged expired count cache entries", removed=len(expired))
        return len(expired)

    @property
    def running(self) -> bool:
        """Whether the background sweep is active."""
        return self._sweeper is not None and not self._sweeper.done()

    async def start(self) -> None:
        """Start the background sweep on the running event loop."""
        if self.running:
            return
        self._sweeper = asyncio.create_task(self._sweep_forever())

    async def stop(self) -> None:
        """Cancel the background sweep and wait for it to finish."""
        if self._sweeper is None:
            return
        self._sweeper.cancel()
        try:
            await self._sweeper
        except asyncio.CancelledError:
            pass
        self._sweeper = None

    async def _sweep_forever(self) -> None:
        while True:
            await asyncio.sleep(self.sweep_interval)
            self.purge_expired()

"""Tests for the count cache."""

import asyncio
import threading

import pytest

from catalog_api.infrastructure.cache import COUNT_CACHE_TTL, CountCache


class TestGetSet:
    """Tests for get/set expiry semantics."""

    def test_ttl_is_three_minutes(self) -> None:
        """Default TTL is fixed at 180 seconds."""
        assert COUNT_CACHE_TTL == 180.0
        assert CountCache().ttl == COUNT_CACHE_TTL

    def test_missing_key(self, counts: CountCache) -> None:
        """Unknown keys are absent."""
        assert counts.get("products__count") is None

    def test_hit_within_ttl(self, counts: CountCache, clock) -> None:
        """A stored count is returned until the TTL elapses."""
        counts.set("products__count", 42)
        clock.advance(COUNT_CACHE_TTL - 1)
        assert counts.get("products__count") == 42

    def test_expired_without_sweep(self, counts: CountCache, clock) -> None:
        """Expired entries are absent even before they are purged."""
        counts.set("products__count", 42)
        clock.advance(COUNT_CACHE_TTL)
        assert counts.get("products__count") is None
        assert len(counts) == 1

    def test_zero_count_is_a_hit(self, counts: CountCache) -> None:
        """A cached zero is distinguishable from a miss."""
        counts.set("categories__count", 0)
        assert counts.get("categories__count") == 0

    def test_set_overwrites_and_resets_expiry(self, counts: CountCache, clock) -> None:
        """Setting a key replaces its value and restarts the TTL."""
        counts.set("k", 1)
        clock.advance(COUNT_CACHE_TTL - 10)
        counts.set("k", 2)
        clock.advance(COUNT_CACHE_TTL - 10)
        assert counts.get("k") == 2

    def test_custom_ttl(self, counts: CountCache, clock) -> None:
        """Per-entry TTL overrides the default."""
        counts.set("k", 5, ttl=10)
        clock.advance(10)
        assert counts.get("k") is None


class TestPurge:
    """Tests for physical removal of expired entries."""

    def test_purge_removes_only_expired(self, counts: CountCache, clock) -> None:
        """Purging keeps live entries."""
        counts.set("old", 1, ttl=10)
        counts.set("new", 2, ttl=100)
        clock.advance(50)

        assert counts.purge_expired() == 1
        assert len(counts) == 1
        assert counts.get("new") == 2

    @pytest.mark.asyncio
    async def test_background_sweep_purges(self, clock) -> None:
        """The sweep task removes expired entries on its own."""
        cache = CountCache(sweep_interval=0.01, clock=clock)
        cache.set("k", 1, ttl=1)
        clock.advance(5)

        await cache.start()
        assert cache.running
        for _ in range(100):
            if len(cache) == 0:
                break
            await asyncio.sleep(0.01)
        await cache.stop()

        assert len(cache) == 0
        assert not cache.running

    @pytest.mark.asyncio
    async def test_start_twice_and_stop_without_start(self) -> None:
        """Start is idempotent and stop is safe when not started."""
        cache = CountCache(sweep_interval=60)
        await cache.stop()
        await cache.start()
        await cache.start()
        assert cache.running
        await cache.stop()
        assert not cache.running


class TestGetOrCompute:
    """Tests for the cache-aside helper."""

    @pytest.mark.asyncio
    async def test_computes_once_within_ttl(self, counts: CountCache, clock) -> None:
        """The source is consulted only on a miss."""
        calls = 0

        async def compute() -> int:
            nonlocal calls
            calls += 1
            return 10 + calls

        assert await counts.get_or_compute("k", compute) == 11
        assert await counts.get_or_compute("k", compute) == 11
        assert calls == 1

        clock.advance(COUNT_CACHE_TTL)
        assert await counts.get_or_compute("k", compute) == 12
        assert calls == 2

    @pytest.mark.asyncio
    async def test_concurrent_misses_converge(self, counts: CountCache) -> None:
        """Concurrent misses may recompute but never fail or disagree."""
        calls = 0

        async def compute() -> int:
            nonlocal calls
            calls += 1
            await asyncio.sleep(0)
            return 25

        results = await asyncio.gather(*(counts.get_or_compute("k", compute) for _ in range(20)))

        assert results == [25] * 20
        assert calls >= 1
        assert counts.get("k") == 25

    @pytest.mark.asyncio
    async def test_compute_failure_is_not_cached(self, counts: CountCache) -> None:
        """A failing computation propagates and leaves the key absent."""

        async def compute() -> int:
            raise RuntimeError("store unavailable")

        with pytest.raises(RuntimeError):
            await counts.get_or_compute("k", compute)
        assert counts.get("k") is None


def test_threaded_access_is_safe() -> None:
    """Concurrent get/set from threads never raises."""
    cache = CountCache()
    errors: list[BaseException] = []

    def worker(n: int) -> None:
        try:
            for i in range(500):
                cache.set(f"key-{i % 10}", n)
                cache.get(f"key-{(i + n) % 10}")
                cache.purge_expired()
        except BaseException as exc:  # pragma: no cover - failure path
            errors.append(exc)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert len(cache) == 10

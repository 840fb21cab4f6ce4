"""Unit tests for WriterCache — get-or-create semantics and LRU ceiling."""

from __future__ import annotations

import pytest

from dynsink.core.writer_cache import WriterCache


class TestGetOrCreate:
    def test_factory_called_once_per_key(self):
        calls: list[str] = []

        def factory(key: str) -> str:
            calls.append(key)
            return f"writer:{key}"

        cache: WriterCache[str] = WriterCache()
        assert cache.get_or_create("/a", factory) == "writer:/a"
        assert cache.get_or_create("/a", factory) == "writer:/a"
        assert cache.get_or_create("/b", factory) == "writer:/b"
        assert calls == ["/a", "/b"]
        assert len(cache) == 2

    def test_factory_failure_inserts_nothing(self):
        cache: WriterCache[str] = WriterCache()

        def boom(key: str) -> str:
            raise OSError("no storage")

        with pytest.raises(OSError):
            cache.get_or_create("/a", boom)
        assert "/a" not in cache
        assert len(cache) == 0

    def test_unbounded_by_default(self):
        cache: WriterCache[int] = WriterCache()
        for i in range(1000):
            cache.get_or_create(f"/{i}", lambda key: 1)
        assert len(cache) == 1000
        assert cache.max_open is None

    def test_zero_means_unbounded(self):
        assert WriterCache(max_open=0).max_open is None

    def test_negative_ceiling_rejected(self):
        with pytest.raises(ValueError):
            WriterCache(max_open=-1)

    def test_pop_and_clear(self):
        cache: WriterCache[str] = WriterCache()
        cache.get_or_create("/a", lambda k: "a")
        cache.get_or_create("/b", lambda k: "b")
        assert cache.pop("/a") == "a"
        assert cache.pop("/a") is None
        cache.clear()
        assert cache.keys() == []


class TestEviction:
    def test_least_recently_used_evicted(self):
        evicted: list[tuple[str, str]] = []
        cache: WriterCache[str] = WriterCache(
            max_open=2, on_evict=lambda k, v: evicted.append((k, v))
        )
        cache.get_or_create("/a", lambda k: "A")
        cache.get_or_create("/b", lambda k: "B")
        cache.get("/a")
        cache.get_or_create("/c", lambda k: "C")

        assert evicted == [("/b", "B")]
        assert cache.keys() == ["/a", "/c"]
        assert cache.evictions == 1

    def test_hit_refreshes_recency(self):
        evicted: list[str] = []
        cache: WriterCache[str] = WriterCache(max_open=2, on_evict=lambda k, v: evicted.append(k))
        cache.get_or_create("/a", lambda k: "A")
        cache.get_or_create("/b", lambda k: "B")
        cache.get_or_create("/a", lambda k: "unused")
        cache.get_or_create("/c", lambda k: "C")
        assert evicted == ["/b"]

    def test_pop_does_not_call_on_evict(self):
        evicted: list[str] = []
        cache: WriterCache[str] = WriterCache(max_open=1, on_evict=lambda k, v: evicted.append(k))
        cache.get_or_create("/a", lambda k: "A")
        cache.pop("/a")
        cache.get_or_create("/b", lambda k: "B")
        assert evicted == []

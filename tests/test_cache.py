"""Tests for the parse-result cache."""

from __future__ import annotations

import asyncio

import pytest

from scriptscope.cache import ParseCache
from scriptscope.config.constants import DEFAULT_CACHE_MAX_ENTRIES, DEFAULT_CACHE_TTL_SEC
from scriptscope.core.errors import ErrorCode, ParseError


class TestParseCache:
    """ParseCache get/set tests."""

    def test_given_non_positive_limits_then_defaults(self) -> None:
        cache = ParseCache(max_entries=0, ttl_sec=-1)

        assert cache.max_entries == DEFAULT_CACHE_MAX_ENTRIES
        assert cache.ttl_sec == DEFAULT_CACHE_TTL_SEC

    def test_given_set_then_get_returns_value(self) -> None:
        cache = ParseCache()
        cache.set("a.ts:1", "result")

        assert cache.get("a.ts:1") == "result"
        assert cache.get("b.ts:1") is None

    def test_given_full_cache_then_least_recently_read_evicted(self) -> None:
        # Given
        cache = ParseCache(max_entries=2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.get("a")

        # When
        cache.set("c", 3)

        # Then
        assert cache.get("b") is None
        assert cache.get("a") == 1
        assert cache.get("c") == 3
        assert len(cache) == 2

    def test_given_expired_entry_then_dropped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        clock = [100.0]
        monkeypatch.setattr("scriptscope.cache.time.monotonic", lambda: clock[0])
        cache = ParseCache(ttl_sec=10)
        cache.set("a", 1)

        clock[0] = 105.0
        assert cache.get("a") == 1

        clock[0] = 111.0
        assert cache.get("a") is None
        assert cache.size == 0

    @pytest.mark.parametrize("key", ["", None, 42])
    def test_given_invalid_key_then_ignored(self, key: object) -> None:
        cache = ParseCache()

        cache.set(key, "x")  # type: ignore[arg-type]

        assert cache.get(key) is None  # type: ignore[arg-type]
        assert len(cache) == 0

    def test_given_clear_then_empty(self) -> None:
        cache = ParseCache()
        cache.set("a", 1)

        cache.clear()

        assert cache.get("a") is None


class TestGetOrCompute:
    """ParseCache.get_or_compute() tests."""

    @pytest.mark.asyncio
    async def test_given_concurrent_callers_then_single_computation(self) -> None:
        # Given
        cache = ParseCache()
        calls = 0

        async def compute() -> str:
            nonlocal calls
            calls += 1
            await asyncio.sleep(0.01)
            return "parsed"

        # When
        results = await asyncio.gather(*(cache.get_or_compute("k", compute) for _ in range(5)))

        # Then
        assert results == ["parsed"] * 5
        assert calls == 1
        assert cache.get("k") == "parsed"

    @pytest.mark.asyncio
    async def test_given_cached_value_then_compute_not_called(self) -> None:
        cache = ParseCache()
        cache.set("k", "cached")

        async def compute() -> str:
            raise AssertionError("should not run")

        assert await cache.get_or_compute("k", compute) == "cached"

    @pytest.mark.asyncio
    async def test_given_failing_compute_then_error_propagates_and_nothing_cached(self) -> None:
        cache = ParseCache()

        async def compute() -> str:
            raise ValueError("boom")

        with pytest.raises(ValueError, match="boom"):
            await cache.get_or_compute("k", compute)

        assert cache.get("k") is None

    @pytest.mark.asyncio
    async def test_given_invalid_key_then_parse_error(self) -> None:
        cache = ParseCache()

        async def compute() -> str:
            return "x"

        with pytest.raises(ParseError) as exc_info:
            await cache.get_or_compute("", compute)

        assert exc_info.value.code == ErrorCode.PARSE_INVALID_INPUT

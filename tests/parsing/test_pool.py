"""Tests for the parser resource pool."""

from __future__ import annotations

import asyncio

import pytest

from scriptscope.core.errors import ParseError
from scriptscope.parsing.pool import ParserPool, get_parser_pool, reset_parser_pool


class TestParserPoolAcquire:
    """acquire()/release() behavior."""

    @pytest.mark.asyncio
    async def test_given_idle_handle_when_acquired_then_reused(self) -> None:
        # Given
        pool = ParserPool(max_per_dialect=2)
        first = await pool.acquire("typescript")
        pool.release("typescript", first)

        # When
        second = await pool.acquire("typescript")

        # Then
        assert second is first
        assert pool.get_pool_size("typescript") == 1
        pool.release("typescript", second)

    @pytest.mark.asyncio
    async def test_given_concurrent_acquires_then_handles_distinct(self) -> None:
        """No handle is checked out to two callers at once."""
        pool = ParserPool(max_per_dialect=3)

        handles = await asyncio.gather(*(pool.acquire("typescript") for _ in range(5)))

        assert len({id(h) for h in handles}) == 5
        assert pool.get_active_count("typescript") == 5
        assert pool.get_pool_size("typescript") == 3
        for handle in handles:
            pool.release("typescript", handle)
        assert pool.get_active_count("typescript") == 0

    @pytest.mark.asyncio
    async def test_given_released_handles_when_acquired_again_then_pool_not_grown(self) -> None:
        pool = ParserPool(max_per_dialect=2)
        handles = await asyncio.gather(pool.acquire("tsx"), pool.acquire("tsx"))
        for handle in handles:
            pool.release("tsx", handle)

        again = await asyncio.gather(pool.acquire("tsx"), pool.acquire("tsx"))

        assert {id(h) for h in again} == {id(h) for h in handles}
        assert pool.get_pool_size("tsx") == 2

    @pytest.mark.asyncio
    async def test_given_max_one_when_acquired_twice_then_overflow_succeeds(self) -> None:
        """The maximum is advisory: a full pool hands out a temporary parser."""
        # Given
        pool = ParserPool(max_per_dialect=1)

        # When
        first = await pool.acquire("typescript")
        second = await pool.acquire("typescript")

        # Then
        assert first is not second
        assert not first.temporary
        assert second.temporary
        assert pool.get_pool_size("typescript") == 1
        assert pool.get_active_count("typescript") == 2

        pool.release("typescript", second)
        pool.release("typescript", first)
        assert pool.get_pool_size("typescript") == 1
        assert pool.get_active_count("typescript") == 0

    @pytest.mark.asyncio
    async def test_handle_parses_source(self) -> None:
        pool = ParserPool()
        handle = await pool.acquire("typescript")
        try:
            tree = handle.parse(b"const x: number = 1;")
        finally:
            pool.release("typescript", handle)
        assert tree.root_node.type == "program"

    @pytest.mark.asyncio
    async def test_unknown_dialect_raises(self) -> None:
        pool = ParserPool()
        with pytest.raises(ParseError):
            await pool.acquire("cobol")

    def test_invalid_max_rejected(self) -> None:
        with pytest.raises(ValueError):
            ParserPool(max_per_dialect=0)


class TestParserPoolLifecycle:
    """Grammar cache, clear() and the shared pool."""

    @pytest.mark.asyncio
    async def test_grammar_loaded_once(self) -> None:
        pool = ParserPool()
        assert not pool.has_language("html")
        handle = await pool.acquire("html")
        pool.release("html", handle)
        assert pool.has_language("html")

    @pytest.mark.asyncio
    async def test_clear_drops_handles_and_grammars(self) -> None:
        pool = ParserPool()
        handle = await pool.acquire("typescript")
        pool.release("typescript", handle)

        pool.clear()

        assert pool.get_pool_size("typescript") == 0
        assert not pool.has_language("typescript")

    def test_pool_reusable_across_event_loops(self) -> None:
        """Sync entry points run each call in a fresh loop."""
        pool = ParserPool(max_per_dialect=1)

        async def roundtrip() -> int:
            handle = await pool.acquire("typescript")
            pool.release("typescript", handle)
            return handle.id

        assert asyncio.run(roundtrip()) == asyncio.run(roundtrip())

    def test_shared_pool_is_singleton(self) -> None:
        pool = get_parser_pool()
        assert get_parser_pool() is pool
        reset_parser_pool()
        assert get_parser_pool() is not pool

"""Parser resource pool.

Holds reusable tree-sitter parser instances per dialect. Grammars are loaded
lazily and cached once per dialect.

The configured maximum is an advisory cache size, not an admission limit:
when every pooled handle for a dialect is busy and the pool is full,
``acquire`` builds a temporary extra handle instead of making the caller
wait. Temporary handles are dropped on release, so the pool itself never
grows past the maximum.

Usage::

    pool = get_parser_pool()
    handle = await pool.acquire("typescript")
    try:
        tree = handle.parser.parse(source)
    finally:
        pool.release("typescript", handle)
"""

from __future__ import annotations

import asyncio
import itertools
from dataclasses import dataclass, field
from typing import Any

import tree_sitter

from scriptscope.config.constants import DEFAULT_POOL_MAX_PER_DIALECT
from scriptscope.core.logging import get_logger
from scriptscope.parsing.dialects import Dialect, get_dialect, load_language

log = get_logger(__name__)

_handle_ids = itertools.count(1)


@dataclass(eq=False)
class ParserHandle:
    """A grammar-bound parser checked out to one caller at a time."""

    dialect: str
    parser: Any = field(repr=False)
    language: Any = field(repr=False)
    in_use: bool = False
    temporary: bool = False
    id: int = field(default_factory=lambda: next(_handle_ids))

    def parse(self, source: bytes) -> Any:
        """Parse source bytes with this handle's parser."""
        return self.parser.parse(source)


class ParserPool:
    """Per-dialect pool of parser handles.

    Shared state (handle lists and the grammar cache) is only touched inside
    the pool lock or the grammar lock respectively. Grammar loading uses a
    separate lock so first use of one dialect does not hold up handle
    bookkeeping for the others.
    """

    def __init__(self, max_per_dialect: int = DEFAULT_POOL_MAX_PER_DIALECT) -> None:
        if max_per_dialect < 1:
            raise ValueError(f"max_per_dialect must be >= 1, got {max_per_dialect}")
        self._max = max_per_dialect
        self._handles: dict[str, list[ParserHandle]] = {}
        self._pending: dict[str, int] = {}
        self._temporary_active: dict[str, int] = {}
        self._languages: dict[str, Any] = {}
        self._lock = asyncio.Lock()
        self._grammar_lock = asyncio.Lock()
        self._loop: asyncio.AbstractEventLoop | None = None

    @property
    def max_per_dialect(self) -> int:
        return self._max

    # ------------------------------------------------------------------
    # Locks
    # ------------------------------------------------------------------

    def _bind_loop(self) -> None:
        """Recreate idle locks when the pool is reused from a new event loop.

        Sync entry points run each call under its own ``asyncio.run``; an
        asyncio lock that once waited inside a finished loop cannot be used
        from the next one.
        """
        loop = asyncio.get_running_loop()
        if self._loop is loop:
            return
        if not self._lock.locked():
            self._lock = asyncio.Lock()
        if not self._grammar_lock.locked():
            self._grammar_lock = asyncio.Lock()
        self._loop = loop

    # ------------------------------------------------------------------
    # Grammar cache
    # ------------------------------------------------------------------

    async def _get_language(self, dialect: Dialect) -> Any:
        """Load and cache a grammar (double-checked)."""
        lang = self._languages.get(dialect.name)
        if lang is not None:
            return lang
        async with self._grammar_lock:
            lang = self._languages.get(dialect.name)
            if lang is None:
                lang = load_language(dialect)
                self._languages[dialect.name] = lang
                log.debug("grammar_loaded", dialect=dialect.name, module=dialect.grammar_module)
        return lang

    async def _create_handle(self, dialect: Dialect, temporary: bool) -> ParserHandle:
        language = await self._get_language(dialect)
        parser = tree_sitter.Parser()
        parser.language = language
        return ParserHandle(
            dialect=dialect.name,
            parser=parser,
            language=language,
            in_use=True,
            temporary=temporary,
        )

    # ------------------------------------------------------------------
    # Acquire / release
    # ------------------------------------------------------------------

    async def acquire(self, dialect: str) -> ParserHandle:
        """Check out a parser for ``dialect``.

        Never waits for another caller's handle: if nothing is idle a new
        handle is built, temporary when the pool is already full.

        Raises:
            ParseError: Unknown dialect or grammar not installed.
        """
        spec = get_dialect(dialect)
        self._bind_loop()

        async with self._lock:
            handles = self._handles.setdefault(dialect, [])
            for handle in handles:
                if not handle.in_use:
                    handle.in_use = True
                    log.debug("parser_reused", dialect=dialect, handle_id=handle.id)
                    return handle
            pending = self._pending.get(dialect, 0)
            temporary = len(handles) + pending >= self._max
            if temporary:
                self._temporary_active[dialect] = self._temporary_active.get(dialect, 0) + 1
            else:
                self._pending[dialect] = pending + 1

        try:
            handle = await self._create_handle(spec, temporary)
        except BaseException:
            async with self._lock:
                if temporary:
                    self._temporary_active[dialect] -= 1
                else:
                    self._pending[dialect] -= 1
            raise

        async with self._lock:
            if temporary:
                log.debug(
                    "parser_overflow",
                    dialect=dialect,
                    handle_id=handle.id,
                    max_per_dialect=self._max,
                )
            else:
                self._pending[dialect] -= 1
                self._handles.setdefault(dialect, []).append(handle)
                log.debug(
                    "parser_created",
                    dialect=dialect,
                    handle_id=handle.id,
                    pool_size=len(self._handles[dialect]),
                )
        return handle

    def release(self, dialect: str, handle: ParserHandle) -> None:
        """Return a handle to the pool.

        Pooled handles are marked idle and kept. Temporary handles are
        dropped. Runs without awaiting, so it is atomic with respect to
        other coroutines on the loop.
        """
        if handle.dialect != dialect:
            log.warning(
                "parser_release_dialect_mismatch",
                dialect=dialect,
                handle_dialect=handle.dialect,
                handle_id=handle.id,
            )
            dialect = handle.dialect
        handle.in_use = False
        if handle.temporary:
            count = self._temporary_active.get(dialect, 0)
            if count > 0:
                self._temporary_active[dialect] = count - 1
            log.debug("parser_overflow_released", dialect=dialect, handle_id=handle.id)
            return
        if handle not in self._handles.get(dialect, ()):
            # Pool was cleared while the handle was checked out
            log.debug("parser_released_after_clear", dialect=dialect, handle_id=handle.id)

    def clear(self) -> None:
        """Drop every handle and the grammar cache."""
        for dialect, handles in self._handles.items():
            for handle in handles:
                try:
                    handle.parser.reset()
                except Exception as e:
                    log.warning(
                        "parser_dispose_failed",
                        dialect=dialect,
                        handle_id=handle.id,
                        error=str(e),
                    )
        self._handles.clear()
        self._pending.clear()
        self._temporary_active.clear()
        self._languages.clear()
        log.debug("parser_pool_cleared")

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def get_pool_size(self, dialect: str) -> int:
        """Number of pooled (non-temporary) handles for ``dialect``."""
        return len(self._handles.get(dialect, ()))

    def get_active_count(self, dialect: str) -> int:
        """Number of handles for ``dialect`` currently checked out."""
        pooled = sum(1 for h in self._handles.get(dialect, ()) if h.in_use)
        return pooled + self._temporary_active.get(dialect, 0)

    def has_language(self, dialect: str) -> bool:
        return dialect in self._languages


# ----------------------------------------------------------------------
# Process-wide pool
# ----------------------------------------------------------------------

_pool: ParserPool | None = None


def get_parser_pool(max_per_dialect: int | None = None) -> ParserPool:
    """Return the shared pool, creating it on first use.

    ``max_per_dialect`` only applies when the pool is created.
    """
    global _pool
    if _pool is None:
        _pool = ParserPool(max_per_dialect or DEFAULT_POOL_MAX_PER_DIALECT)
    return _pool


def reset_parser_pool() -> None:
    """Clear and discard the shared pool (mainly for testing)."""
    global _pool
    if _pool is not None:
        _pool.clear()
    _pool = None

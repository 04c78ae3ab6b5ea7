"""In-memory parse-result cache.

Design:
- LRU over an ``OrderedDict``; the least recently read entry is evicted
  first once ``max_entries`` is reached
- Entries older than ``ttl_sec`` are dropped on read
- ``get_or_compute`` shares one in-flight computation per key between
  concurrent callers
"""

from __future__ import annotations

import asyncio
import time
from collections import OrderedDict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from scriptscope.config.constants import (
    CACHE_KEY_LOG_PREFIX,
    DEFAULT_CACHE_MAX_ENTRIES,
    DEFAULT_CACHE_TTL_SEC,
)
from scriptscope.core.errors import ParseError
from scriptscope.core.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T")


def _short(key: str) -> str:
    return key[:CACHE_KEY_LOG_PREFIX]


def _valid_key(key: Any) -> bool:
    return isinstance(key, str) and bool(key)


@dataclass
class CacheEntry:
    value: Any
    created_at: float


class ParseCache:
    """LRU + TTL cache keyed by strings (``path:mtime`` for files)."""

    def __init__(
        self,
        max_entries: int = DEFAULT_CACHE_MAX_ENTRIES,
        ttl_sec: float = DEFAULT_CACHE_TTL_SEC,
    ) -> None:
        # Non-positive limits fall back to the defaults
        self._max = max_entries if max_entries > 0 else DEFAULT_CACHE_MAX_ENTRIES
        self._ttl = ttl_sec if ttl_sec > 0 else DEFAULT_CACHE_TTL_SEC
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._pending: dict[str, asyncio.Future[Any]] = {}
        log.debug("parse_cache_created", max_entries=self._max, ttl_sec=self._ttl)

    @property
    def max_entries(self) -> int:
        return self._max

    @property
    def ttl_sec(self) -> float:
        return self._ttl

    def get(self, key: str) -> Any | None:
        if not _valid_key(key):
            log.warning("cache_invalid_key", operation="get")
            return None
        entry = self._entries.get(key)
        if entry is None:
            log.debug("cache_miss", key=_short(key))
            return None
        if time.monotonic() - entry.created_at > self._ttl:
            log.debug("cache_expired", key=_short(key))
            del self._entries[key]
            return None
        self._entries.move_to_end(key)
        log.debug("cache_hit", key=_short(key))
        return entry.value

    def set(self, key: str, value: Any) -> None:
        if not _valid_key(key):
            log.warning("cache_invalid_key", operation="set")
            return
        self._entries.pop(key, None)
        while len(self._entries) >= self._max:
            evicted, _ = self._entries.popitem(last=False)
            log.debug("cache_evicted", key=_short(evicted))
        self._entries[key] = CacheEntry(value, time.monotonic())
        log.debug("cache_set", key=_short(key), size=len(self._entries))

    async def get_or_compute(self, key: str, compute: Callable[[], Awaitable[T]]) -> T:
        """Cached value for ``key``, computing it at most once at a time.

        Raises:
            ParseError: If ``key`` is not a non-empty string.
        """
        if not _valid_key(key):
            log.warning("cache_invalid_key", operation="get_or_compute")
            raise ParseError.invalid_input("cache key")

        cached = self.get(key)
        if cached is not None:
            return cached  # type: ignore[no-any-return]

        pending = self._pending.get(key)
        if pending is not None:
            log.debug("cache_join_pending", key=_short(key))
            return await asyncio.shield(pending)  # type: ignore[no-any-return]

        future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        self._pending[key] = future
        log.debug("cache_compute", key=_short(key))
        try:
            value = await compute()
        except asyncio.CancelledError:
            if not future.done():
                future.cancel()
            raise
        except Exception as e:
            log.warning("cache_compute_failed", key=_short(key), error=str(e))
            if not future.done():
                future.set_exception(e)
                # Mark retrieved so an unawaited failure is not reported at GC
                future.exception()
            raise
        else:
            self.set(key, value)
            if not future.done():
                future.set_result(value)
            return value
        finally:
            self._pending.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()
        self._pending.clear()

    @property
    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

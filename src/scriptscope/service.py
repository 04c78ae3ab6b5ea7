"""File-level parse service with result caching.

Resolves a path, checks its extension and size, and dispatches to the
component or script pipeline. Results are cached under ``path:mtime`` so an
edited file is reparsed.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from scriptscope.assembler import (
    ComponentParseResult,
    ParseResult,
    parse_component_file_async,
    parse_script_async,
)
from scriptscope.cache import ParseCache
from scriptscope.config.constants import COMPONENT_EXTENSIONS
from scriptscope.config.models import ScriptScopeConfig
from scriptscope.core.errors import ParseError
from scriptscope.core.logging import get_logger
from scriptscope.parsing.dialects import extension_of
from scriptscope.parsing.pool import get_parser_pool

log = get_logger(__name__)

_cache: ParseCache | None = None


def get_parse_cache(config: ScriptScopeConfig | None = None) -> ParseCache:
    """Return the shared cache, creating it from ``config`` on first use."""
    global _cache
    if _cache is None:
        cache_config = (config or ScriptScopeConfig()).cache
        _cache = ParseCache(cache_config.max_entries, cache_config.ttl_sec)
    return _cache


def reset_parse_cache() -> None:
    global _cache
    if _cache is not None:
        _cache.clear()
    _cache = None


def resolve_path(path: str | Path, cwd: str | Path | None = None) -> Path:
    """Absolute path of an existing file, trying ``cwd`` first for relative paths.

    Raises:
        ParseError: If no candidate exists.
    """
    raw = Path(path).expanduser()
    candidates = [raw] if raw.is_absolute() else [Path(cwd or Path.cwd()) / raw, raw]
    for candidate in candidates:
        if candidate.is_file():
            resolved = candidate.resolve()
            log.debug("path_resolved", path=str(path), resolved=str(resolved))
            return resolved
    raise ParseError.file_not_found(str(path), str(cwd) if cwd else None)


async def parse_file_async(
    path: str | Path,
    *,
    cwd: str | Path | None = None,
    config: ScriptScopeConfig | None = None,
) -> ParseResult | ComponentParseResult:
    """Parse a file from disk.

    Raises:
        ParseError: Missing file, unsupported extension, file over the size
            limit, or any failure of the underlying pipeline.
    """
    config = config or ScriptScopeConfig()
    resolved = resolve_path(path, cwd)
    filename = resolved.name

    ext = extension_of(filename)
    if ext not in config.parsing.supported_extensions:
        raise ParseError.unsupported_extension(str(path), ext)

    stat = resolved.stat()
    limit = config.parsing.max_file_size_bytes
    if stat.st_size > limit:
        raise ParseError.file_too_large(str(path), stat.st_size, limit)

    key = f"{resolved}:{stat.st_mtime_ns}"
    pool = get_parser_pool(config.pool.max_per_dialect)

    async def compute() -> ParseResult | ComponentParseResult:
        code = resolved.read_text(encoding="utf-8", errors="replace")
        log.debug("file_read", path=str(resolved), size=len(code))
        if ext in COMPONENT_EXTENSIONS:
            return await parse_component_file_async(code, filename, pool=pool)
        return await parse_script_async(code, filename, pool=pool)

    if not config.cache.enabled:
        result = await compute()
    else:
        result = await get_parse_cache(config).get_or_compute(key, compute)
    log.info("file_parsed", path=str(resolved), language=result.language)
    return result


def parse_file(
    path: str | Path,
    *,
    cwd: str | Path | None = None,
    config: ScriptScopeConfig | None = None,
) -> ParseResult | ComponentParseResult:
    return asyncio.run(parse_file_async(path, cwd=cwd, config=config))

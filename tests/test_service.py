"""Tests for the file-level parse service."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from scriptscope.assembler import ComponentParseResult, ParseResult
from scriptscope.config.models import CacheConfig, ParsingConfig, ScriptScopeConfig
from scriptscope.core.errors import ErrorCode, ParseError
from scriptscope.service import get_parse_cache, parse_file, parse_file_async, resolve_path


@pytest.fixture
def script_file(tmp_path: Path) -> Path:
    path = tmp_path / "util.ts"
    path.write_text("export function add(a: number, b: number) { return a + b }\n")
    return path


class TestResolvePath:
    """resolve_path() tests."""

    def test_given_relative_path_and_cwd_then_joined(self, script_file: Path) -> None:
        assert resolve_path("util.ts", cwd=script_file.parent) == script_file.resolve()

    def test_given_absolute_path_then_returned(self, script_file: Path) -> None:
        assert resolve_path(str(script_file)) == script_file.resolve()

    def test_given_missing_file_then_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(ParseError) as exc_info:
            resolve_path("missing.ts", cwd=tmp_path)

        assert exc_info.value.code == ErrorCode.PARSE_FILE_NOT_FOUND

    def test_given_directory_then_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(ParseError):
            resolve_path(str(tmp_path))


class TestParseFile:
    """parse_file() tests."""

    def test_given_script_then_script_result(self, script_file: Path) -> None:
        result = parse_file(script_file)

        assert type(result) is ParseResult
        assert [f.name for f in result.functions] == ["add"]

    def test_given_component_then_component_result(self, tmp_path: Path) -> None:
        path = tmp_path / "Hello.vue"
        path.write_text("<template><p>{{ msg }}</p></template>\n<script setup>\nconst msg = 'hi'\n</script>\n")

        result = parse_file(path)

        assert isinstance(result, ComponentParseResult)
        assert result.script_setup

    def test_given_unsupported_extension_then_error(self, tmp_path: Path) -> None:
        path = tmp_path / "main.py"
        path.write_text("print('hi')\n")

        with pytest.raises(ParseError) as exc_info:
            parse_file(path)

        assert exc_info.value.code == ErrorCode.PARSE_UNSUPPORTED_EXTENSION

    def test_given_file_over_limit_then_too_large(self, script_file: Path) -> None:
        config = ScriptScopeConfig(parsing=ParsingConfig(max_file_size_mb=0.00001))

        with pytest.raises(ParseError) as exc_info:
            parse_file(script_file, config=config)

        assert exc_info.value.code == ErrorCode.PARSE_FILE_TOO_LARGE
        assert exc_info.value.details["limit"] == config.parsing.max_file_size_bytes

    def test_given_unchanged_file_then_cached_result(self, script_file: Path) -> None:
        first = parse_file(script_file)
        second = parse_file(script_file)

        assert first is second
        assert get_parse_cache().size == 1

    def test_given_modified_file_then_reparsed(self, script_file: Path) -> None:
        first = parse_file(script_file)
        script_file.write_text("export function sub(a: number, b: number) { return a - b }\n")
        stat = script_file.stat()
        os.utime(script_file, ns=(stat.st_atime_ns, stat.st_mtime_ns + 1_000_000_000))

        second = parse_file(script_file)

        assert [f.name for f in first.functions] == ["add"]
        assert [f.name for f in second.functions] == ["sub"]

    def test_given_cache_disabled_then_fresh_results(self, script_file: Path) -> None:
        config = ScriptScopeConfig(cache=CacheConfig(enabled=False))

        first = parse_file(script_file, config=config)
        second = parse_file(script_file, config=config)

        assert first is not second
        assert first.to_dict() == second.to_dict()

    @pytest.mark.asyncio
    async def test_given_async_variant_then_same_declarations(self, script_file: Path) -> None:
        result = await parse_file_async(script_file.name, cwd=script_file.parent)

        assert [f.name for f in result.functions] == ["add"]

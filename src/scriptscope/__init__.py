"""scriptscope - structural analysis of JavaScript, TypeScript and Vue components."""

from scriptscope.assembler import (
    ComponentParseResult,
    ParseResult,
    parse_component_file,
    parse_component_file_async,
    parse_script,
    parse_script_async,
)
from scriptscope.core.errors import ErrorCode, ParseError, ScriptScopeError
from scriptscope.parsing.pool import get_parser_pool, reset_parser_pool
from scriptscope.service import parse_file, parse_file_async
from scriptscope.summary import build_summary

__all__ = [
    "ComponentParseResult",
    "ErrorCode",
    "ParseError",
    "ParseResult",
    "ScriptScopeError",
    "build_summary",
    "get_parser_pool",
    "parse_component_file",
    "parse_component_file_async",
    "parse_file",
    "parse_file_async",
    "parse_script",
    "parse_script_async",
    "reset_parser_pool",
]

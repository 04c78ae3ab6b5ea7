"""FastMCP server creation and wiring.

One tool, ``parse_code``, returning the Markdown summary of a file. Errors
are returned as structured payloads rather than raised, so clients see the
error code and details.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

from pydantic import Field

from scriptscope.config.models import ScriptScopeConfig
from scriptscope.core.errors import InternalError, ScriptScopeError
from scriptscope.core.logging import clear_request_id, get_logger, set_request_id
from scriptscope.mcp._compat import get_tools_sync
from scriptscope.service import parse_file_async
from scriptscope.summary import build_summary

if TYPE_CHECKING:
    from fastmcp import FastMCP

log = get_logger(__name__)


async def parse_code(filepath: str, config: ScriptScopeConfig | None = None) -> str | dict[str, Any]:
    """Summary of ``filepath``, or the error payload if it cannot be parsed."""
    config = config or ScriptScopeConfig()
    request_id = set_request_id()
    started = time.perf_counter()
    log.info("tool_start", tool="parse_code", filepath=filepath, request_id=request_id)
    try:
        result = await parse_file_async(filepath, config=config)
        summary = build_summary(result, filepath, config.summary)
    except ScriptScopeError as e:
        log.warning("tool_failed", tool="parse_code", error=e.error_name, message=e.message)
        return e.to_dict()
    except Exception as e:
        log.error("tool_failed", tool="parse_code", error=type(e).__name__, exc_info=True)
        return InternalError.unexpected(str(e), exception=type(e).__name__).to_dict()
    finally:
        clear_request_id()
    log.info(
        "tool_complete",
        tool="parse_code",
        language=result.language,
        duration_ms=round((time.perf_counter() - started) * 1000, 2),
    )
    return summary


def create_mcp_server(config: ScriptScopeConfig | None = None) -> FastMCP:
    """Create the FastMCP server with the parse_code tool registered.

    Args:
        config: Resolved configuration; defaults are used when omitted.

    Returns:
        Configured FastMCP server ready to run
    """
    from fastmcp import FastMCP

    config = config or ScriptScopeConfig()
    mcp = FastMCP(
        "scriptscope",
        instructions="Structural analysis of JavaScript, TypeScript and Vue single-file components.",
    )

    @mcp.tool(name="parse_code")
    async def parse_code_tool(
        filepath: str = Field(..., description="Path to a .js/.jsx/.ts/.tsx/.mjs/.cjs/.vue file"),
    ) -> str | dict[str, Any]:
        """Parse a source file and return a Markdown summary of its structure.

        Reports functions, calls, classes, variables, imports, exports and
        types. For .vue files it adds template, style, props, emits and
        Options/Composition API details.
        """
        return await parse_code(filepath, config)

    log.info("mcp_server_created", tools=sorted(get_tools_sync(mcp)))
    return mcp

"""FastMCP tool lookup helpers.

FastMCP v3 keeps registered tools in ``local_provider._components`` as
``FastMCPComponent`` instances; this gives typed, synchronous access to them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fastmcp import FastMCP
    from fastmcp.tools.function_tool import FunctionTool


def get_tools_sync(mcp: FastMCP) -> dict[str, FunctionTool]:
    """Registered tools as a ``{name: FunctionTool}`` dict."""
    from fastmcp.tools.function_tool import FunctionTool

    return {
        comp.name: comp
        for comp in mcp.local_provider._components.values()
        if isinstance(comp, FunctionTool)
    }

"""MCP server module - FastMCP tool registration and wiring."""

from scriptscope.mcp.server import create_mcp_server, parse_code

__all__ = ["create_mcp_server", "parse_code"]

"""scriptscope serve command - run the MCP server over stdio."""

import click

from scriptscope.config.loader import load_config
from scriptscope.core.errors import ScriptScopeError
from scriptscope.core.logging import configure_logging, get_logger

log = get_logger(__name__)


@click.command()
@click.pass_context
def serve_command(ctx: click.Context) -> None:
    """Serve the parse_code tool to MCP clients over stdio."""
    from scriptscope.mcp.server import create_mcp_server

    try:
        config = load_config()
    except ScriptScopeError as e:
        raise click.ClickException(str(e)) from e

    # Configured outputs apply unless -v asked for console debug logging.
    # stdout carries the protocol, so outputs should stay on stderr or files.
    if not (ctx.obj or {}).get("verbose"):
        configure_logging(config=config.logging)

    mcp = create_mcp_server(config)
    log.info("mcp_server_starting", transport="stdio")
    mcp.run(transport="stdio")

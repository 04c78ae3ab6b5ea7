"""Main CLI entry point for scriptscope."""

import click

from scriptscope.cli.parse import parse_command
from scriptscope.cli.serve import serve_command
from scriptscope.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="scriptscope")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """scriptscope - structural analysis of scripts and single-file components."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "INFO")


cli.add_command(parse_command, name="parse")
cli.add_command(serve_command, name="serve")


if __name__ == "__main__":
    cli()

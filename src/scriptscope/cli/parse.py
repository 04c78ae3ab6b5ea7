"""scriptscope parse command - analyze one file."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.markdown import Markdown

from scriptscope.config.loader import load_config
from scriptscope.core.errors import ScriptScopeError
from scriptscope.service import parse_file
from scriptscope.summary import build_summary


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Output the raw result as JSON")
@click.option("--no-positions", is_flag=True, help="Omit [L:C] positions from the summary")
@click.option("--compact", is_flag=True, help="Hide initializer values and per-entry detail sections")
def parse_command(path: Path, as_json: bool, no_positions: bool, compact: bool) -> None:
    """Parse a script or component file and print its structure.

    PATH is a .js/.jsx/.ts/.tsx/.mjs/.cjs/.vue file.
    """
    try:
        config = load_config()
        result = parse_file(path, config=config)
    except ScriptScopeError as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2, default=str))
        return

    options = config.summary.model_copy(
        update={
            "show_positions": config.summary.show_positions and not no_positions,
            "compact": config.summary.compact or compact,
        }
    )
    summary = build_summary(result, str(path), options)
    Console().print(Markdown(summary))

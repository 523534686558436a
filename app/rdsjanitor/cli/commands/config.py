"""Configuration commands.

Shows the effective configuration and writes a default config file.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from rdsjanitor.cli.types import get_config
from rdsjanitor.core.config import ConfigError, JanitorConfig, config_to_dict, save_config
from rdsjanitor.core.paths import get_config_path
from rdsjanitor.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show and initialize the configuration.",
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective configuration and where it is read from."""
    config = get_config(ctx)
    config_path = _config_path(ctx)
    defaults = config_to_dict(JanitorConfig(), include_defaults=True)

    table = Table(
        title="Effective Configuration",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", style="bold", no_wrap=True)
    table.add_column("Value")
    table.add_column("Source", style="muted")

    for key, value in config_to_dict(config, include_defaults=True).items():
        source = "default" if defaults.get(key) == value else "file"
        table.add_row(key, str(value), source)

    console.print(table)
    console.print(f"\n[dim]Config file: {config_path}[/]")
    if not config_path.exists():
        print_info("Config file not present, defaults apply.")


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing config file.",
        ),
    ] = False,
) -> None:
    """Write a config file containing every default setting."""
    config_path = _config_path(ctx)

    if config_path.exists() and not force:
        print_info(f"Config already exists: {config_path}")
        print_info("Use --force to overwrite.")
        raise typer.Exit(code=0)

    try:
        written = save_config(JanitorConfig(), config_path, include_defaults=True)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {written}")


def _config_path(ctx: typer.Context) -> Path:
    """Return the config path given on the command line, or the default."""
    obj = ctx.find_root().obj
    if isinstance(obj, dict) and obj.get("config_path") is not None:
        return obj["config_path"]
    return get_config_path()

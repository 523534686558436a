"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from pathlib import Path
from typing import Annotated

import typer

from rdsjanitor import __version__
from rdsjanitor.cli.commands import config, fslogix, profiles, sessions
from rdsjanitor.core.config import ConfigError, load_config
from rdsjanitor.core.logging import setup_logging
from rdsjanitor.utils.formatting import print_error

# Create main Typer app
app = typer.Typer(
    name="rdsjanitor",
    help="Housekeeping for Remote Desktop Session Hosts.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"rdsjanitor version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            dir_okay=False,
            help="Path to config file (default: <config dir>/rdsjanitor/config.toml).",
        ),
    ] = None,
) -> None:
    """rdsjanitor - Housekeeping for Remote Desktop Session Hosts.

    Reclaims stale local fallback profiles, logs off disconnected
    sessions and diagnoses FSLogix profile containers.
    """
    setup_logging(verbose=verbose, quiet=quiet)

    try:
        loaded = load_config(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config"] = loaded
    ctx.obj["config_path"] = config_path


# Register commands
app.add_typer(profiles.app, name="profiles")
app.add_typer(sessions.app, name="sessions")
app.add_typer(fslogix.app, name="fslogix")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()

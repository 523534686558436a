"""CLI package for rdsjanitor.

This package contains the Typer application and all subcommands.
"""

from rdsjanitor.cli.main import app

__all__ = ["app"]

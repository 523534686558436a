"""CLI commands for rdsjanitor.

This package contains all subcommand implementations.
"""

from rdsjanitor.cli.commands import config, fslogix, profiles, sessions

__all__ = ["config", "fslogix", "profiles", "sessions"]

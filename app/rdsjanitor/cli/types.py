"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

import json
from enum import Enum
from typing import Any

import typer

from rdsjanitor.core.config import JanitorConfig
from rdsjanitor.utils.formatting import console


class OutputFormat(str, Enum):
    """Output format options for read-only reports."""

    TABLE = "table"
    JSON = "json"


def get_config(ctx: typer.Context) -> JanitorConfig:
    """Return the configuration loaded by the root callback.

    Falls back to defaults when a command is invoked without the root
    callback having run (e.g. direct invocation in tests).

    Args:
        ctx: Typer context of the running command.

    Returns:
        Effective JanitorConfig.
    """
    obj = ctx.find_root().obj
    if isinstance(obj, dict):
        config = obj.get("config")
        if isinstance(config, JanitorConfig):
            return config
    return JanitorConfig()


def print_json(data: Any) -> None:
    """Print data as highlighted JSON."""
    console.print_json(json.dumps(data, default=str))

"""Configuration path management for rdsjanitor.

Locates the per-user configuration directory. XDG_CONFIG_HOME wins when
set (useful for tests and non-Windows hosts), then %APPDATA%, then
~/.config.

Defaults:
- Config: %APPDATA%\\rdsjanitor\\ (or ~/.config/rdsjanitor/)
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "rdsjanitor"


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to the application configuration directory.
    """
    for env_var in ("XDG_CONFIG_HOME", "APPDATA"):
        base = os.environ.get(env_var)
        if base:
            return Path(base) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_config_path() -> Path:
    """Get the default configuration file path.

    Returns:
        Path to <config dir>/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_user_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to <config dir>/theme.toml.
    """
    return get_config_dir() / "theme.toml"


"""Janitor configuration and settings.

This module provides the configuration model and I/O functions for
rdsjanitor: staleness policy, FSLogix locations and command timeouts.

Configuration is stored in <config dir>/config.toml. A missing file is
not an error; defaults apply.
"""

import logging
import os
import string
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from rdsjanitor.core.paths import get_config_path
from rdsjanitor.models.profile import DEFAULT_FALLBACK_PREFIX

logger = logging.getLogger(__name__)

DEFAULT_TEMP_PATH_TEMPLATE = "C:\\Users\\local_{username}\\AppData\\Local\\Temp"


class JanitorConfig(BaseModel):
    """Configuration for rdsjanitor.

    Attributes:
        threshold_days: Days since last use before a fallback profile is stale.
        fallback_prefix: Folder prefix marking local fallback profiles.
        event_days: Default look-back window for FSLogix events.
        fslogix_service: Name of the FSLogix Windows service.
        fslogix_registry_key: Registry key holding FSLogix profile settings.
        fslogix_event_log: Name of the FSLogix operational event log.
        temp_path_template: Local temp fallback path, '{username}' is substituted.
        command_timeout: Timeout in seconds for each external command.
    """

    model_config = ConfigDict(extra="forbid")

    threshold_days: Annotated[
        int,
        Field(ge=0, description="Staleness threshold in days"),
    ] = 3
    fallback_prefix: Annotated[
        str,
        Field(min_length=1, description="Fallback profile folder prefix"),
    ] = DEFAULT_FALLBACK_PREFIX
    event_days: Annotated[
        int,
        Field(ge=1, description="Default FSLogix event window in days"),
    ] = 3
    fslogix_service: str = "frxsvc"
    fslogix_registry_key: str = "HKLM:\\SOFTWARE\\FSLogix\\Profiles"
    fslogix_event_log: str = "Microsoft-FSLogix-Apps/Operational"
    temp_path_template: Annotated[
        str,
        Field(description="Local temp fallback path template"),
    ] = DEFAULT_TEMP_PATH_TEMPLATE
    command_timeout: Annotated[
        int,
        Field(ge=5, le=3600, description="Timeout in seconds (5-3600)"),
    ] = 60

    @field_validator("temp_path_template")
    @classmethod
    def validate_temp_path_template(cls, v: str) -> str:
        """Validate that '{username}' is the only placeholder in the template."""
        try:
            fields = [
                (name, format_spec, conversion)
                for _, name, format_spec, conversion in string.Formatter().parse(v)
                if name is not None
            ]
        except ValueError as e:
            msg = f"Malformed temp path template '{v}': {e}"
            raise ValueError(msg) from e
        if not fields or any(field != ("username", "", None) for field in fields):
            msg = f"Temp path template '{v}' must use exactly the {{username}} placeholder"
            raise ValueError(msg)
        return v


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> JanitorConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated JanitorConfig (defaults if the file does not exist).

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or fails validation.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return JanitorConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return JanitorConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e


def save_config(
    config: JanitorConfig,
    path: Path | None = None,
    *,
    include_defaults: bool = False,
) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically via a temporary file and os.replace().
    Only values that differ from the defaults are written unless
    include_defaults is set.

    Args:
        config: The JanitorConfig to save.
        path: Path to save the config. If None, uses the default config path.
        include_defaults: If True, write every setting (used by "config init").

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    data = config_to_dict(config, include_defaults=include_defaults)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def config_to_dict(config: JanitorConfig, include_defaults: bool = False) -> dict[str, object]:
    """Convert a JanitorConfig to a dictionary for TOML serialization.

    Args:
        config: The config to convert.
        include_defaults: If True, include values equal to their defaults.

    Returns:
        Dictionary ready for TOML serialization.
    """
    return config.model_dump(exclude_defaults=not include_defaults)

"""Theme management for rdsjanitor CLI.

Colors come from the bundled data/theme.toml, optionally overridden key by
key from a theme.toml in the user config directory.
"""

import logging
import re
import tomllib
from functools import cache
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from rdsjanitor.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})")

# Roles rendered in bold on top of their color
_BOLD_ROLES = frozenset({"error", "profile_stale", "session_disconnected"})


class ThemeColors(BaseModel):
    """Color palette for profile and session output.

    All colors must be hex codes (#RRGGBB or #RGB).
    """

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    profile_fallback: str = "#f5b332"
    profile_container: str = "#69B9A1"
    profile_stale: str = "#f53263"

    session_active: str = "#03b971"
    session_disconnected: str = "#f5b332"
    session_idle: str = "#0e8ac8"
    session_unknown: str = "#b2bec3"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, v: object, info: Any) -> str:
        """Reject anything that is not a #RGB or #RRGGBB string."""
        color = v.strip() if isinstance(v, str) else None
        if color is None or not _HEX_COLOR.fullmatch(color):
            msg = f"{info.field_name}: expected #RGB or #RRGGBB, got {v!r}"
            raise ValueError(msg)
        return color


def get_bundled_theme_path() -> Path:
    """Return the path of the bundled data/theme.toml."""
    return resources.files("rdsjanitor.data").joinpath("theme.toml")  # type: ignore[return-value]


def _load_toml_colors(path: Path) -> dict[str, str] | None:
    """Read the [colors] table of a theme file.

    Args:
        path: Theme file to read.

    Returns:
        String-valued color entries, or None if the file is missing or unusable.
    """
    try:
        with open(path, "rb") as f:
            section = tomllib.load(f).get("colors", {})
    except FileNotFoundError:
        return None
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    if not isinstance(section, dict):
        logger.warning("Ignoring theme file %s: 'colors' is not a table", path)
        return None
    return {key: value for key, value in section.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Load the bundled palette and apply the user's overrides.

    Falls back to the built-in defaults when the merged palette is invalid.
    """
    colors = _load_toml_colors(Path(get_bundled_theme_path()))
    if colors is None:
        logger.error("Bundled theme could not be loaded, using built-in colors")
        colors = {}

    user_path = get_user_theme_path()
    overrides = _load_toml_colors(user_path)
    if overrides:
        logger.debug("Applying theme overrides from %s", user_path)
        colors = {**colors, **overrides}

    try:
        return ThemeColors(**colors)
    except ValidationError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme used by every console.

    Args:
        colors: Palette to use. Loaded from the theme files when None.

    Returns:
        Rich Theme with one style per palette role plus bold_header and dim.
    """
    if colors is None:
        colors = load_theme()

    palette = colors.model_dump()
    styles = {
        role: f"bold {color}" if role in _BOLD_ROLES else color
        for role, color in palette.items()
    }
    styles["bold_header"] = f"bold {palette['header']}"
    styles["dim"] = palette["muted"]
    return Theme(styles)


@cache
def get_theme() -> Theme:
    """Return the Rich theme, loading it on first use."""
    return get_rich_theme()

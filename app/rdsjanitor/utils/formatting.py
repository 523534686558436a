"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from rdsjanitor.core.theme import get_theme
from rdsjanitor.models.session import SessionState

if TYPE_CHECKING:
    from rdsjanitor.models.profile import UserProfile
    from rdsjanitor.models.session import Session


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())

_STATE_STYLES: dict[SessionState, str] = {
    SessionState.ACTIVE: "session_active",
    SessionState.DISCONNECTED: "session_disconnected",
    SessionState.IDLE: "session_idle",
    SessionState.UNKNOWN: "session_unknown",
}


def _base_table(title: str) -> Table:
    """Create a table with the shared header and border styling."""
    return Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],
    )


def create_profile_table(title: str = "Local User Profiles") -> Table:
    """Create a pre-configured table for displaying profiles.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for profile display.
    """
    table = _base_table(title)
    table.add_column("", width=2, justify="center")
    table.add_column("User", no_wrap=True)
    table.add_column("Path", style="muted")
    table.add_column("Loaded", justify="center")
    table.add_column("Last Used", style="info")
    table.add_column("Status")
    return table


def format_profile_row(
    profile: UserProfile,
    is_candidate: bool = False,
) -> tuple[str, str, str, str, str, str]:
    """Format a profile as a table row.

    Stale fallback profiles get a filled marker, other fallback profiles
    an empty one, and container-backed profiles none.

    Args:
        profile: Profile to format.
        is_candidate: Whether the profile is a removal candidate.

    Returns:
        Tuple of (icon, user, path, loaded, last used, status) with Rich markup.
    """
    if is_candidate:
        icon = "[profile_stale]●[/]"
        status = "[profile_stale]stale fallback[/]"
    elif profile.is_fallback:
        icon = "[profile_fallback]○[/]"
        status = "[profile_fallback]fallback[/]"
    else:
        icon = ""
        status = "[profile_container]regular[/]"

    loaded = "[success]yes[/]" if profile.is_loaded else "[muted]no[/]"
    return (
        icon,
        profile.user_name,
        profile.profile_path,
        loaded,
        profile.last_used_display,
        status,
    )


def create_session_table(title: str = "Logon Sessions") -> Table:
    """Create a pre-configured table for displaying sessions.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for session display.
    """
    table = _base_table(title)
    table.add_column("ID", justify="right", style="info")
    table.add_column("User", no_wrap=True)
    table.add_column("Session Name", style="muted")
    table.add_column("State")
    return table


def format_session_row(session: Session) -> tuple[str, str, str, str]:
    """Format a session as a table row.

    Args:
        session: Session to format.

    Returns:
        Tuple of (id, user, session name, state) with Rich markup.
    """
    style = _STATE_STYLES[session.state]
    return (
        str(session.session_id),
        session.username,
        session.session_name,
        f"[{style}]{session.state.value}[/]",
    )


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")

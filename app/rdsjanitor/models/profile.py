"""User profile models for local profile auditing.

This module defines the data structure for a local Windows user profile
as reported by the OS profile registry (Win32_UserProfile).
"""

import re
from dataclasses import dataclass, field
from datetime import datetime

# Naming convention FSLogix uses when it falls back to a local profile
DEFAULT_FALLBACK_PREFIX = "local_"

_PATH_SEPARATORS = re.compile(r"[\\/]")


def extract_user_name(profile_path: str) -> str:
    """Derive the user name from the trailing segment of a profile path.

    A path without any separator is returned unchanged so that one
    malformed record never breaks an enumeration.

    Args:
        profile_path: Absolute profile path (e.g. 'C:\\Users\\local_alice').

    Returns:
        The final path segment.
    """
    segments = [s for s in _PATH_SEPARATORS.split(profile_path) if s]
    if not segments:
        return profile_path
    return segments[-1]


def is_fallback_path(profile_path: str, prefix: str = DEFAULT_FALLBACK_PREFIX) -> bool:
    """Check whether a profile path follows the fallback naming convention.

    Args:
        profile_path: Absolute profile path.
        prefix: Fallback folder prefix (case-insensitive).

    Returns:
        True if the profile folder name starts with the prefix.
    """
    return extract_user_name(profile_path).lower().startswith(prefix.lower())


@dataclass(frozen=True, slots=True)
class UserProfile:
    """Represents a local user profile discovered on the host.

    ``user_name`` and ``is_fallback`` are derived from ``profile_path``
    at construction time and cannot be set independently.

    Attributes:
        profile_path: Absolute filesystem path of the profile (source of truth).
        is_loaded: Whether the profile is mounted by an active session.
        last_used: Last use timestamp (UTC) or None if never recorded.
        sid: Security identifier of the owning account, if known.
        is_special: Whether the OS marks this as a special system profile.
        fallback_prefix: Folder prefix that marks fallback profiles.
        user_name: Trailing path segment (derived).
        is_fallback: Path matches the fallback convention (derived).
    """

    profile_path: str
    is_loaded: bool
    last_used: datetime | None
    sid: str | None = None
    is_special: bool = False
    fallback_prefix: str = field(default=DEFAULT_FALLBACK_PREFIX, repr=False)
    user_name: str = field(init=False)
    is_fallback: bool = field(init=False)

    def __post_init__(self) -> None:
        """Validate the path and compute derived fields."""
        if not self.profile_path:
            msg = "Profile path cannot be empty"
            raise ValueError(msg)
        object.__setattr__(self, "user_name", extract_user_name(self.profile_path))
        object.__setattr__(
            self, "is_fallback", is_fallback_path(self.profile_path, self.fallback_prefix)
        )

    @property
    def last_used_display(self) -> str:
        """Return the last use time formatted for display."""
        if self.last_used is None:
            return "never"
        return self.last_used.strftime("%Y-%m-%d %H:%M")

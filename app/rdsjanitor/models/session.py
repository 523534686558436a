"""Logon session models.

This module defines the structured form of one row of the session
listing produced by ``quser``.
"""

from dataclasses import dataclass
from enum import Enum

# Placeholder for sessions without a bound console/RDP session name
NO_SESSION_NAME = "-"


class SessionState(str, Enum):
    """Connection state of a logon session.

    Attributes:
        ACTIVE: A user is connected and interacting.
        DISCONNECTED: The session is alive but has no client attached.
        IDLE: The session exists but is idle.
        UNKNOWN: The listing reported a state we do not recognise.
    """

    ACTIVE = "Active"
    DISCONNECTED = "Disconnected"
    IDLE = "Idle"
    UNKNOWN = "Unknown"


@dataclass(frozen=True, slots=True)
class Session:
    """A logon session from a point-in-time session snapshot.

    Attributes:
        username: Account name owning the session.
        session_name: Console/RDP session name, or '-' when absent.
        session_id: Numeric session ID (unique within one snapshot).
        state: Connection state.
    """

    username: str
    session_name: str
    session_id: int
    state: SessionState

    def __post_init__(self) -> None:
        """Validate session data after initialization."""
        if not self.username:
            msg = "Session username cannot be empty"
            raise ValueError(msg)
        if self.session_id < 0:
            msg = f"Session ID must be non-negative, got {self.session_id}"
            raise ValueError(msg)

    @property
    def is_disconnected(self) -> bool:
        """Check if the session is disconnected."""
        return self.state == SessionState.DISCONNECTED

    @property
    def has_session_name(self) -> bool:
        """Check if the listing reported a session name."""
        return self.session_name != NO_SESSION_NAME

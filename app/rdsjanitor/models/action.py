"""Action models for profile and session operations.

This module defines data structures for representing housekeeping
actions (profile removal, session logoff) and their execution results.
"""

from dataclasses import dataclass
from enum import Enum

from rdsjanitor.models.profile import UserProfile
from rdsjanitor.models.session import Session


class ActionType(Enum):
    """Type of housekeeping action.

    Attributes:
        REMOVE_PROFILE: Delete a local user profile through the profile registry.
        LOGOFF_SESSION: Force logoff of a logon session.
    """

    REMOVE_PROFILE = "remove"
    LOGOFF_SESSION = "logoff"


@dataclass(frozen=True, slots=True)
class Action:
    """Represents a single housekeeping action to be executed.

    Attributes:
        action_type: The type of action.
        target: Identity acted upon (profile path or session ID).
        label: Human-readable owner of the target (user name).
        reason: Optional explanation for why this action is being taken.
    """

    action_type: ActionType
    target: str
    label: str
    reason: str | None = None

    def __post_init__(self) -> None:
        """Validate action data after initialization."""
        if not self.target:
            msg = "Action target cannot be empty"
            raise ValueError(msg)

    @property
    def is_profile_removal(self) -> bool:
        """Check if this is a profile removal action."""
        return self.action_type == ActionType.REMOVE_PROFILE

    @property
    def is_logoff(self) -> bool:
        """Check if this is a session logoff action."""
        return self.action_type == ActionType.LOGOFF_SESSION


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Result of executing a housekeeping action.

    Attributes:
        action: The action that was executed.
        success: Whether the action completed successfully.
        message: Optional success message or additional information.
        error: Optional error message if the action failed.
        dry_run: Whether this was a simulation only.
    """

    action: Action
    success: bool
    message: str | None = None
    error: str | None = None
    dry_run: bool = False

    @property
    def failed(self) -> bool:
        """Check if the action failed."""
        return not self.success


def create_remove_profile_action(profile: UserProfile, reason: str | None = None) -> Action:
    """Create a removal action for a local profile.

    Args:
        profile: Profile to remove.
        reason: Optional explanation for the removal.

    Returns:
        Action targeting the profile path.
    """
    return Action(
        action_type=ActionType.REMOVE_PROFILE,
        target=profile.profile_path,
        label=profile.user_name,
        reason=reason,
    )


def create_logoff_action(session: Session, reason: str | None = None) -> Action:
    """Create a logoff action for a session.

    Args:
        session: Session to log off.
        reason: Optional explanation for the logoff.

    Returns:
        Action targeting the session ID.
    """
    return Action(
        action_type=ActionType.LOGOFF_SESSION,
        target=str(session.session_id),
        label=session.username,
        reason=reason,
    )

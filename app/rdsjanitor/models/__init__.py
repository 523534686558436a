"""Data models for rdsjanitor.

This module exports the core data structures used throughout the application.
"""

from rdsjanitor.models.action import (
    Action,
    ActionResult,
    ActionType,
    create_logoff_action,
    create_remove_profile_action,
)
from rdsjanitor.models.fslogix import (
    FSLOGIX_EVENT_IDS,
    FSLogixConfig,
    FSLogixEvent,
    ServiceState,
    TempFolderCheck,
)
from rdsjanitor.models.profile import UserProfile
from rdsjanitor.models.session import NO_SESSION_NAME, Session, SessionState

__all__ = [
    "FSLOGIX_EVENT_IDS",
    "NO_SESSION_NAME",
    "Action",
    "ActionResult",
    "ActionType",
    "FSLogixConfig",
    "FSLogixEvent",
    "ServiceState",
    "Session",
    "SessionState",
    "TempFolderCheck",
    "UserProfile",
    "create_logoff_action",
    "create_remove_profile_action",
]

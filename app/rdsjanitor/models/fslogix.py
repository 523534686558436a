"""FSLogix diagnostic models.

Read-only snapshots of the FSLogix profile container service, its
configuration and its operational event log.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

# Profile load/unload/error events from the FSLogix operational log
FSLOGIX_EVENT_IDS: frozenset[int] = frozenset({25, 26, 27, 28, 31, 32, 57})


class ServiceState(str, Enum):
    """Run state of the FSLogix service.

    Attributes:
        RUNNING: Service installed and running.
        STOPPED: Service installed but not running.
        NOT_INSTALLED: Service does not exist on this host.
        UNKNOWN: State could not be determined.
    """

    RUNNING = "running"
    STOPPED = "stopped"
    NOT_INSTALLED = "not_installed"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class FSLogixConfig:
    """Snapshot of FSLogix service state and profile configuration.

    Values missing from the registry are reported as None or empty.

    Attributes:
        service_state: Run state of the FSLogix service.
        enabled: Profiles 'Enabled' flag.
        redirect_temp_to_local: Temp redirection flag.
        vhd_locations: Configured container storage locations.
    """

    service_state: ServiceState
    enabled: bool | None = None
    redirect_temp_to_local: bool | None = None
    vhd_locations: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_installed(self) -> bool:
        """Check if the FSLogix service exists on this host."""
        return self.service_state not in (ServiceState.NOT_INSTALLED, ServiceState.UNKNOWN)

    @property
    def is_running(self) -> bool:
        """Check if the FSLogix service is running."""
        return self.service_state == ServiceState.RUNNING


@dataclass(frozen=True, slots=True)
class FSLogixEvent:
    """A single record from the FSLogix operational event log.

    Attributes:
        event_id: Numeric event ID.
        time_created: When the event was logged (UTC).
        message: Free-text event message.
    """

    event_id: int
    time_created: datetime
    message: str


@dataclass(frozen=True, slots=True)
class TempFolderCheck:
    """Result of checking a loaded profile's local temp fallback folder.

    Attributes:
        user_name: User the path was built for.
        path: Conventional local temp fallback path.
        exists: Whether the path exists on disk.
    """

    user_name: str
    path: str
    exists: bool

"""FSLogix service, configuration and event log diagnostics.

Every query here tolerates the underlying facility being absent: a host
without FSLogix yields a NOT_INSTALLED snapshot and an empty event list
rather than an exception.
"""

import logging
import os
import subprocess
from collections.abc import Callable, Iterable
from datetime import UTC, datetime, timedelta
from typing import Any

from rdsjanitor.core.config import JanitorConfig
from rdsjanitor.models.fslogix import (
    FSLOGIX_EVENT_IDS,
    FSLogixConfig,
    FSLogixEvent,
    ServiceState,
    TempFolderCheck,
)
from rdsjanitor.models.profile import UserProfile
from rdsjanitor.scanners.profiles import parse_timestamp
from rdsjanitor.utils.shell import get_powershell, quote_powershell, run_powershell_json

logger = logging.getLogger(__name__)

_SERVICE_STATES: dict[str, ServiceState] = {
    "running": ServiceState.RUNNING,
    "stopped": ServiceState.STOPPED,
}


def parse_service_state(value: object) -> ServiceState:
    """Map a Get-Service status string to a ServiceState.

    Pending states (StartPending, StopPending, ...) map to UNKNOWN.
    """
    if not isinstance(value, str):
        return ServiceState.UNKNOWN
    return _SERVICE_STATES.get(value.strip().lower(), ServiceState.UNKNOWN)


def parse_flag(value: object) -> bool | None:
    """Interpret a registry DWORD flag; None when the value is absent."""
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip()) != 0
    return None


def parse_vhd_locations(value: object) -> tuple[str, ...]:
    """Normalise VHDLocations from REG_MULTI_SZ or ';'-separated REG_SZ."""
    if value is None:
        return ()
    items: list[str] = []
    raw_items = value if isinstance(value, list) else [value]
    for raw in raw_items:
        if not isinstance(raw, str):
            continue
        items.extend(part.strip() for part in raw.split(";") if part.strip())
    return tuple(items)


def parse_event_record(record: dict[str, Any]) -> FSLogixEvent | None:
    """Convert one event log record, or None if it lacks an ID or time."""
    event_id = record.get("Id")
    time_created = parse_timestamp(record.get("TimeCreated"))
    if not isinstance(event_id, int) or time_created is None:
        logger.debug("Skipping malformed event record: %r", record)
        return None
    message = record.get("Message")
    return FSLogixEvent(
        event_id=event_id,
        time_created=time_created,
        message=message if isinstance(message, str) else "",
    )


def filter_events(
    events: Iterable[FSLogixEvent],
    since: datetime,
    user: str | None = None,
    event_ids: frozenset[int] = FSLOGIX_EVENT_IDS,
) -> list[FSLogixEvent]:
    """Apply the event ID set, the start of the window and the user filter.

    Args:
        events: Events to filter.
        since: Inclusive start of the time window.
        user: Optional case-insensitive substring to find in the message.
        event_ids: Event IDs to keep.

    Returns:
        Matching events, newest first.
    """
    needle = user.lower() if user else None
    matched = [
        e
        for e in events
        if e.event_id in event_ids
        and e.time_created >= since
        and (needle is None or needle in e.message.lower())
    ]
    return sorted(matched, key=lambda e: e.time_created, reverse=True)


def build_temp_path(template: str, user_name: str) -> str:
    """Build the conventional local temp fallback path for a user."""
    return template.format(username=user_name)


class FSLogixDiagnostics:
    """Read-only FSLogix health checks.

    Args:
        config: Janitor configuration (service name, registry key, log name,
            temp path template, timeout).
    """

    def __init__(self, config: JanitorConfig | None = None) -> None:
        self._config = config or JanitorConfig()

    def is_available(self) -> bool:
        """Check if PowerShell is available for the queries."""
        return get_powershell() is not None

    def get_status(self) -> FSLogixConfig:
        """Take a snapshot of the service state and profile configuration.

        Returns:
            FSLogixConfig; NOT_INSTALLED when the service does not exist,
            UNKNOWN when PowerShell or the service query is unavailable.
        """
        if not self.is_available():
            logger.warning("PowerShell is not available; FSLogix status is unknown")
            return FSLogixConfig(service_state=ServiceState.UNKNOWN)

        service_state = self._query_service_state()
        settings = self._query_settings()

        return FSLogixConfig(
            service_state=service_state,
            enabled=parse_flag(settings.get("Enabled")),
            redirect_temp_to_local=parse_flag(settings.get("RedirectTempToLocal")),
            vhd_locations=parse_vhd_locations(settings.get("VHDLocations")),
        )

    def query_events(
        self,
        days: int | None = None,
        user: str | None = None,
        now: datetime | None = None,
    ) -> list[FSLogixEvent]:
        """Query FSLogix profile events in a look-back window.

        Args:
            days: Window size in days (defaults to the configured event_days).
            user: Optional username to look for in the event message.
            now: Reference time (defaults to the current UTC time).

        Returns:
            Matching events, newest first. Empty if the log is absent.
        """
        window = days if days is not None else self._config.event_days
        since = (now or datetime.now(UTC)) - timedelta(days=window)

        if not self.is_available():
            logger.warning("PowerShell is not available; cannot read the FSLogix event log")
            return []

        records = self._run_query(self._events_script(since), "FSLogix event log") or []
        events = [e for e in (parse_event_record(r) for r in records) if e is not None]
        return filter_events(events, since, user)

    def check_temp_redirection(
        self,
        profiles: Iterable[UserProfile],
        exists: Callable[[str], bool] = os.path.isdir,
    ) -> list[TempFolderCheck]:
        """Check the local temp fallback folder of every loaded profile.

        This is a heuristic: the real redirection target can differ from
        the configured convention.

        Args:
            profiles: Enumerated profiles; only loaded ones are checked.
            exists: Predicate used to test a path.

        Returns:
            One TempFolderCheck per loaded profile.
        """
        checks: list[TempFolderCheck] = []
        for profile in profiles:
            if not profile.is_loaded:
                continue
            path = build_temp_path(self._config.temp_path_template, profile.user_name)
            checks.append(
                TempFolderCheck(user_name=profile.user_name, path=path, exists=exists(path))
            )
        return checks

    def _query_service_state(self) -> ServiceState:
        """Query the FSLogix service run state."""
        script = (
            f"$s = Get-Service -Name {quote_powershell(self._config.fslogix_service)} "
            "-ErrorAction SilentlyContinue; "
            "if ($s) { [pscustomobject]@{ Status = $s.Status.ToString() } "
            "| ConvertTo-Json -Compress }"
        )
        records = self._run_query(script, "FSLogix service control")
        if records is None:
            return ServiceState.UNKNOWN
        if not records:
            return ServiceState.NOT_INSTALLED
        return parse_service_state(records[0].get("Status"))

    def _query_settings(self) -> dict[str, Any]:
        """Read the FSLogix profile settings from the registry."""
        script = (
            f"$k = Get-ItemProperty -Path {quote_powershell(self._config.fslogix_registry_key)} "
            "-ErrorAction SilentlyContinue; "
            "if ($k) { [pscustomobject]@{ Enabled = $k.Enabled; "
            "RedirectTempToLocal = $k.RedirectTempToLocal; "
            "VHDLocations = $k.VHDLocations } | ConvertTo-Json -Compress }"
        )
        records = self._run_query(script, "FSLogix registry settings")
        return records[0] if records else {}

    def _events_script(self, since: datetime) -> str:
        """Build the Get-WinEvent query for the configured log."""
        ids = ",".join(str(i) for i in sorted(FSLOGIX_EVENT_IDS))
        start = since.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
        return (
            "try { "
            "Get-WinEvent -ErrorAction Stop -FilterHashtable @{ "
            f"LogName = {quote_powershell(self._config.fslogix_event_log)}; "
            f"Id = {ids}; "
            f"StartTime = [datetime]::Parse({quote_powershell(start)}) }} | "
            "Select-Object Id, "
            "@{Name='TimeCreated';Expression="
            "{ $_.TimeCreated.ToUniversalTime().ToString('s') + 'Z' }}, "
            "Message | ConvertTo-Json -Compress "
            "} catch { "
            "if ($_.FullyQualifiedErrorId -like 'NoMatchingEventsFound*') { '[]' } else { throw } "
            "}"
        )

    def _run_query(self, script: str, facility: str) -> list[dict[str, Any]] | None:
        """Run a PowerShell query; None when the facility could not be queried."""
        try:
            return run_powershell_json(script, timeout=self._config.command_timeout)
        except (RuntimeError, FileNotFoundError, subprocess.TimeoutExpired) as e:
            logger.warning("%s unavailable: %s", facility, e)
            return None

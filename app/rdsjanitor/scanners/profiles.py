"""Local user profile scanner.

Enumerates non-special user profiles from the OS profile registry
(CIM class Win32_UserProfile) through PowerShell.
"""

import logging
import subprocess
from collections.abc import Iterable, Iterator
from datetime import UTC, datetime
from typing import Any

from rdsjanitor.models.profile import DEFAULT_FALLBACK_PREFIX, UserProfile
from rdsjanitor.scanners.base import Scanner
from rdsjanitor.utils.shell import get_powershell, run_powershell_json

logger = logging.getLogger(__name__)

# LastUseTime is formatted inside PowerShell so the JSON is the same on 5.1 and 7
_PROFILE_QUERY = (
    "Get-CimInstance -ClassName Win32_UserProfile | "
    "Where-Object { -not $_.Special -and $_.LocalPath } | "
    "Select-Object LocalPath, Loaded, Special, SID, "
    "@{Name='LastUseTime';Expression={ if ($_.LastUseTime) "
    "{ $_.LastUseTime.ToUniversalTime().ToString('s') + 'Z' } }} | "
    "ConvertTo-Json -Compress"
)


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO-8601 timestamp emitted by a PowerShell query.

    Args:
        value: ISO-8601 string (e.g. LastUseTime), or None.

    Returns:
        Aware datetime, or None if missing or unparseable.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        logger.debug("Unparseable timestamp: %r", value)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def parse_profile_record(
    record: dict[str, Any],
    fallback_prefix: str = DEFAULT_FALLBACK_PREFIX,
) -> UserProfile | None:
    """Convert one Win32_UserProfile record into a UserProfile.

    Args:
        record: Decoded JSON object from the profile query.
        fallback_prefix: Folder prefix marking fallback profiles.

    Returns:
        UserProfile, or None if the record is special or has no path.
    """
    path = record.get("LocalPath")
    if not isinstance(path, str) or not path.strip():
        logger.debug("Skipping profile record without LocalPath: %r", record)
        return None

    if bool(record.get("Special")):
        return None

    sid = record.get("SID")
    return UserProfile(
        profile_path=path.strip(),
        is_loaded=bool(record.get("Loaded")),
        last_used=parse_timestamp(record.get("LastUseTime")),
        sid=sid if isinstance(sid, str) and sid else None,
        is_special=False,
        fallback_prefix=fallback_prefix,
    )


def parse_profile_records(
    records: Iterable[dict[str, Any]],
    fallback_prefix: str = DEFAULT_FALLBACK_PREFIX,
) -> Iterator[UserProfile]:
    """Convert profile query records, dropping unusable ones.

    Args:
        records: Decoded JSON objects from the profile query.
        fallback_prefix: Folder prefix marking fallback profiles.

    Yields:
        UserProfile for each usable, non-special record.
    """
    for record in records:
        profile = parse_profile_record(record, fallback_prefix)
        if profile is not None:
            yield profile


class ProfileScanner(Scanner[UserProfile]):
    """Scanner for local user profiles.

    Args:
        fallback_prefix: Folder prefix marking fallback profiles.
        timeout: Timeout in seconds for the profile query.
    """

    def __init__(
        self,
        fallback_prefix: str = DEFAULT_FALLBACK_PREFIX,
        timeout: float = 60.0,
    ) -> None:
        self._fallback_prefix = fallback_prefix
        self._timeout = timeout

    @property
    def name(self) -> str:
        """Return the facility name."""
        return "profile registry"

    def is_available(self) -> bool:
        """Check if PowerShell is available to query CIM."""
        return get_powershell() is not None

    def scan(self) -> Iterator[UserProfile]:
        """Enumerate non-special local user profiles.

        Yields:
            UserProfile for each non-special profile.

        Raises:
            RuntimeError: If the profile registry cannot be queried.
        """
        if not self.is_available():
            msg = "PowerShell is not available; cannot query the profile registry"
            raise RuntimeError(msg)

        try:
            records = run_powershell_json(_PROFILE_QUERY, timeout=self._timeout)
        except (FileNotFoundError, subprocess.TimeoutExpired) as e:
            msg = f"Profile query failed: {e}"
            raise RuntimeError(msg) from e

        logger.debug("Profile registry returned %d record(s)", len(records))
        yield from parse_profile_records(records, self._fallback_prefix)

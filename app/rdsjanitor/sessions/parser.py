"""Parser for the free-text session listing printed by ``quser``.

Example input::

     USERNAME              SESSIONNAME        ID  STATE   IDLE TIME  LOGON TIME
    >alice                 console             1  Active      none   1/15/2025 9:02 AM
     bob                                       2  Disc          3:12 1/15/2025 8:10 AM
     carol                 rdp-tcp#3           4  Idle           12  1/15/2025 9:30 AM

Columns are separated by runs of two or more spaces. SESSIONNAME is
blank for disconnected sessions, which shifts ID into the second field,
so the ID is located by checking whether the second field is an integer.

Lines that do not fit this shape are dropped from the result. They are
kept on the returned SessionTable for diagnostics but never raised.
"""

import logging
import re
from dataclasses import dataclass

from rdsjanitor.models.session import NO_SESSION_NAME, Session, SessionState

logger = logging.getLogger(__name__)

_FIELD_DELIMITER = re.compile(r"\s{2,}")
_INTEGER = re.compile(r"^\d+$")

# Checked in order against the lower-cased line; the first hit wins
_STATE_MARKERS: tuple[tuple[str, SessionState], ...] = (
    ("disc", SessionState.DISCONNECTED),
    ("active", SessionState.ACTIVE),
    ("idle", SessionState.IDLE),
)


@dataclass(frozen=True, slots=True)
class ParsedLine:
    """A listing line that produced a session."""

    session: Session
    raw: str


@dataclass(frozen=True, slots=True)
class SkippedLine:
    """A listing line that could not be parsed.

    Attributes:
        raw: The original line.
        reason: Why the line was dropped.
    """

    raw: str
    reason: str


LineResult = ParsedLine | SkippedLine


@dataclass(frozen=True, slots=True)
class SessionTable:
    """Outcome of parsing a whole session listing.

    Attributes:
        sessions: Parsed sessions in listing order.
        skipped: Data lines that were dropped.
    """

    sessions: tuple[Session, ...]
    skipped: tuple[SkippedLine, ...] = ()

    @property
    def skipped_count(self) -> int:
        """Number of data lines that were dropped."""
        return len(self.skipped)


def classify_state(line: str) -> SessionState:
    """Derive the session state from a raw listing line.

    Args:
        line: Full original line.

    Returns:
        The first matching state, or UNKNOWN.
    """
    lowered = line.lower()
    for marker, state in _STATE_MARKERS:
        if marker in lowered:
            return state
    return SessionState.UNKNOWN


def split_fields(line: str) -> list[str]:
    """Split a listing line into fields on runs of 2+ whitespace characters.

    The leading '>' that marks the caller's own session is removed.
    """
    cleaned = line.strip().lstrip(">").strip()
    if not cleaned:
        return []
    return [f.strip() for f in _FIELD_DELIMITER.split(cleaned) if f.strip()]


def parse_session_line(line: str) -> LineResult:
    """Parse one data line of the session listing.

    Args:
        line: A single line, header excluded.

    Returns:
        ParsedLine on success, SkippedLine if the line is malformed.
    """
    fields = split_fields(line)
    if len(fields) < 2:
        return SkippedLine(raw=line, reason="fewer than 2 fields")

    username = fields[0]
    if _INTEGER.match(fields[1]):
        session_name = NO_SESSION_NAME
        id_field = fields[1]
    else:
        session_name = fields[1]
        if len(fields) < 3 or not _INTEGER.match(fields[2]):
            return SkippedLine(raw=line, reason="no numeric session ID")
        id_field = fields[2]

    session = Session(
        username=username,
        session_name=session_name,
        session_id=int(id_field),
        state=classify_state(line),
    )
    return ParsedLine(session=session, raw=line)


def parse_session_table(text: str) -> SessionTable:
    """Parse the complete output of the session listing command.

    The first non-blank line is the header and is always skipped.
    Blank lines are ignored.

    Args:
        text: Raw command output.

    Returns:
        SessionTable with sessions in listing order.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    sessions: list[Session] = []
    skipped: list[SkippedLine] = []

    for line in lines[1:]:
        result = parse_session_line(line)
        if isinstance(result, ParsedLine):
            sessions.append(result.session)
        else:
            logger.debug("Skipping session line (%s): %r", result.reason, line[:100])
            skipped.append(result)

    return SessionTable(sessions=tuple(sessions), skipped=tuple(skipped))

"""Session scanner built on the ``quser`` listing.

Runs ``quser`` and feeds its output to the session table parser.
"""

import logging
import subprocess
import sys
from collections.abc import Iterator

from rdsjanitor.models.session import Session
from rdsjanitor.scanners.base import Scanner
from rdsjanitor.sessions.parser import SessionTable, parse_session_table
from rdsjanitor.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)

# quser exits non-zero with this message when there are no sessions at all
_NO_SESSIONS_MARKER = "no user exists"

# quser writes in the OEM code page, not the ANSI one Python assumes
_LIST_ENCODING = "oem" if sys.platform == "win32" else None


class SessionScanner(Scanner[Session]):
    """Scanner for logon sessions.

    Args:
        timeout: Timeout in seconds for the listing command.
    """

    _LIST_COMMAND = "quser"

    def __init__(self, timeout: float = 60.0) -> None:
        self._timeout = timeout
        self._last_table: SessionTable | None = None

    @property
    def name(self) -> str:
        """Return the facility name."""
        return "session listing (quser)"

    @property
    def last_table(self) -> SessionTable | None:
        """Return the parse result of the most recent scan, if any."""
        return self._last_table

    def is_available(self) -> bool:
        """Check if quser is available."""
        return command_exists(self._LIST_COMMAND)

    def scan(self) -> Iterator[Session]:
        """Take a session snapshot.

        Yields:
            Session for each parseable listing line, in listing order.

        Raises:
            RuntimeError: If quser is missing or fails without output.
        """
        if not self.is_available():
            msg = "quser is not available on this system"
            raise RuntimeError(msg)

        try:
            result = run_command(
                [self._LIST_COMMAND], timeout=self._timeout, encoding=_LIST_ENCODING
            )
        except (FileNotFoundError, subprocess.TimeoutExpired) as e:
            msg = f"quser failed: {e}"
            raise RuntimeError(msg) from e

        output = result.stdout
        if not output.strip():
            if _NO_SESSIONS_MARKER in result.stderr.lower():
                logger.debug("quser reports no sessions")
                self._last_table = SessionTable(sessions=())
                return
            if not result.success:
                msg = f"quser failed: {result.stderr.strip() or 'unknown error'}"
                raise RuntimeError(msg)

        self._last_table = parse_session_table(output)
        if self._last_table.skipped_count:
            logger.debug("Dropped %d unparseable session line(s)", self._last_table.skipped_count)
        yield from self._last_table.sessions

"""Logon session listing, parsing and selection.

This module provides the quser table parser, the session scanner and
the logoff selection rule.
"""

from rdsjanitor.sessions.parser import (
    ParsedLine,
    SessionTable,
    SkippedLine,
    parse_session_line,
    parse_session_table,
)
from rdsjanitor.sessions.scanner import SessionScanner
from rdsjanitor.sessions.selection import select_sessions_for_logoff

__all__ = [
    "ParsedLine",
    "SessionScanner",
    "SessionTable",
    "SkippedLine",
    "parse_session_line",
    "parse_session_table",
    "select_sessions_for_logoff",
]

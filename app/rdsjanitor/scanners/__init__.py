"""Read-only scanners for OS facilities.

This module exports the scanner base class and the profile scanner.
The session scanner lives in :mod:`rdsjanitor.sessions`.
"""

from rdsjanitor.scanners.base import Scanner
from rdsjanitor.scanners.profiles import ProfileScanner

__all__ = ["ProfileScanner", "Scanner"]

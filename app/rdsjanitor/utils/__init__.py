"""Utility modules for rdsjanitor.

This module exports commonly used utility functions.
"""

from rdsjanitor.utils.formatting import (
    console,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from rdsjanitor.utils.shell import (
    CommandResult,
    command_exists,
    get_powershell,
    run_command,
    run_powershell,
    run_powershell_json,
)

__all__ = [
    "CommandResult",
    "command_exists",
    "console",
    "err_console",
    "get_powershell",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
    "run_powershell",
    "run_powershell_json",
]

"""Shell execution utilities.

Provides safe subprocess execution with proper error handling, plus
helpers for running non-interactive PowerShell queries that emit JSON.
"""

import json
import shutil
import subprocess
from dataclasses import dataclass
from typing import Any

# Windows PowerShell first, PowerShell 7 as a fallback
_POWERSHELL_CANDIDATES: tuple[str, ...] = ("powershell.exe", "powershell", "pwsh")


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of a shell command execution.

    Attributes:
        stdout: Standard output from the command.
        stderr: Standard error from the command.
        returncode: Exit code of the command.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if command executed successfully."""
        return self.returncode == 0


def run_command(
    args: list[str],
    *,
    check: bool = False,
    timeout: float | None = 60.0,
    cwd: str | None = None,
    encoding: str | None = None,
) -> CommandResult:
    """Execute a shell command and return the result.

    Output bytes that cannot be decoded are replaced rather than raised.

    Args:
        args: Command and arguments to execute.
        check: If True, raise CalledProcessError on non-zero exit.
        timeout: Maximum time in seconds to wait for command.
        cwd: Working directory for the command. If None, uses current directory.
        encoding: Output codec. If None, uses the locale encoding.

    Returns:
        CommandResult with stdout, stderr, and returncode.

    Raises:
        subprocess.CalledProcessError: If check=True and command fails.
        subprocess.TimeoutExpired: If command exceeds timeout.
        FileNotFoundError: If command executable is not found.
    """
    result = subprocess.run(
        args,
        capture_output=True,
        text=True,
        encoding=encoding,
        errors="replace",
        check=check,
        timeout=timeout,
        cwd=cwd,
    )
    return CommandResult(
        stdout=result.stdout,
        stderr=result.stderr,
        returncode=result.returncode,
    )


def command_exists(name: str) -> bool:
    """Check if a command exists in the system PATH.

    Args:
        name: Command name to check.

    Returns:
        True if command exists, False otherwise.
    """
    return shutil.which(name) is not None


def get_powershell() -> str | None:
    """Locate a PowerShell executable on the PATH.

    Returns:
        Name of the first available PowerShell executable, or None.
    """
    for candidate in _POWERSHELL_CANDIDATES:
        if command_exists(candidate):
            return candidate
    return None


def run_powershell(script: str, *, timeout: float | None = 60.0) -> CommandResult:
    """Run a PowerShell script block non-interactively.

    Args:
        script: PowerShell source passed to -Command.
        timeout: Maximum time in seconds to wait for PowerShell.

    Returns:
        CommandResult from the PowerShell process.

    Raises:
        FileNotFoundError: If no PowerShell executable is available.
        subprocess.TimeoutExpired: If PowerShell exceeds timeout.
    """
    executable = get_powershell()
    if executable is None:
        msg = "PowerShell is not available on this system"
        raise FileNotFoundError(msg)

    return run_command(
        [executable, "-NoProfile", "-NonInteractive", "-Command", script],
        timeout=timeout,
    )


def run_powershell_json(script: str, *, timeout: float | None = 60.0) -> list[dict[str, Any]]:
    """Run a PowerShell pipeline ending in ConvertTo-Json and decode it.

    ConvertTo-Json emits a bare object instead of an array when the
    pipeline yields exactly one item, so single objects are wrapped.

    Args:
        script: PowerShell source whose output is JSON.
        timeout: Maximum time in seconds to wait for PowerShell.

    Returns:
        List of decoded JSON objects (empty if the pipeline produced nothing).

    Raises:
        FileNotFoundError: If no PowerShell executable is available.
        RuntimeError: If PowerShell fails or emits invalid JSON.
    """
    result = run_powershell(script, timeout=timeout)
    if not result.success:
        msg = f"PowerShell query failed: {result.stderr.strip() or 'unknown error'}"
        raise RuntimeError(msg)

    output = result.stdout.strip()
    if not output:
        return []

    try:
        data = json.loads(output)
    except json.JSONDecodeError as e:
        msg = f"PowerShell returned invalid JSON: {e}"
        raise RuntimeError(msg) from e

    if isinstance(data, dict):
        return [data]
    if isinstance(data, list):
        return [item for item in data if isinstance(item, dict)]

    msg = f"Unexpected PowerShell JSON payload: {type(data).__name__}"
    raise RuntimeError(msg)


def quote_powershell(value: str) -> str:
    """Quote a value as a PowerShell single-quoted string literal.

    Args:
        value: Raw string value.

    Returns:
        The value wrapped in single quotes with embedded quotes doubled.
    """
    return "'" + value.replace("'", "''") + "'"

"""Abstract base class for housekeeping operators.

This module defines the Operator interface that the profile reclaimer
and session disconnector implement.
"""

import logging
import subprocess
from abc import ABC, abstractmethod

from rdsjanitor.models.action import Action, ActionResult
from rdsjanitor.utils.shell import CommandResult

logger = logging.getLogger(__name__)


class Operator(ABC):
    """Abstract base class for all operators.

    Operators execute one destructive action per target. Every target is
    attempted independently: a failure is recorded in that target's
    ActionResult and never stops the remaining targets.

    Attributes:
        dry_run: If True, only simulate actions without executing them.

    Example:
        >>> operator = SessionOperator(dry_run=True)
        >>> if operator.is_available():
        ...     for result in operator.logoff(sessions):
        ...         print(f"{result.action.label}: {result.success}")
    """

    def __init__(self, dry_run: bool = False, timeout: float = 60.0) -> None:
        """Initialize the operator.

        Args:
            dry_run: If True, only simulate actions without executing them.
            timeout: Timeout in seconds for each external command.
        """
        self._dry_run = dry_run
        self._timeout = timeout

    @property
    def dry_run(self) -> bool:
        """Check if operator is in dry-run mode."""
        return self._dry_run

    @property
    @abstractmethod
    def name(self) -> str:
        """Return a short name of the facility this operator drives."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the underlying facility is available on the system."""

    @abstractmethod
    def _run(self, action: Action) -> CommandResult:
        """Invoke the external facility for a single action."""

    def execute(self, actions: list[Action]) -> list[ActionResult]:
        """Execute actions one by one, isolating failures.

        Args:
            actions: Actions to execute.

        Returns:
            One ActionResult per action, in input order.

        Raises:
            RuntimeError: If the facility is not available at all.
        """
        if not actions:
            return []

        if not self.is_available():
            msg = f"{self.name} is not available on this system"
            raise RuntimeError(msg)

        return [self._execute_single(action) for action in actions]

    def _execute_single(self, action: Action) -> ActionResult:
        """Execute one action and convert every failure into a result."""
        if self._dry_run:
            logger.info("Dry-run: would %s %s", action.action_type.value, action.target)
            return ActionResult(
                action=action,
                success=True,
                message="Dry-run, nothing changed",
                dry_run=True,
            )

        logger.info(
            "Attempting %s of %s (%s)",
            action.action_type.value,
            action.target,
            action.label,
        )

        try:
            result = self._run(action)
        except subprocess.TimeoutExpired as e:
            return self._failure(action, f"Timed out after {e.timeout} seconds")
        except OSError as e:
            return self._failure(action, str(e))

        if not result.success:
            detail = result.stderr.strip() or result.stdout.strip()
            return self._failure(action, detail or f"Exit code {result.returncode}")

        logger.info("Completed %s of %s", action.action_type.value, action.target)
        return ActionResult(action=action, success=True, message="Completed")

    def _failure(self, action: Action, error: str) -> ActionResult:
        """Log a non-fatal warning and build a failed result."""
        logger.warning("Failed to %s %s: %s", action.action_type.value, action.target, error)
        return ActionResult(action=action, success=False, error=error)


"""Session logoff operator.

Forces logoff of logon sessions using the ``logoff`` command.
"""

import logging

from rdsjanitor.models.action import Action, ActionResult, create_logoff_action
from rdsjanitor.models.session import Session
from rdsjanitor.operators.base import Operator
from rdsjanitor.utils.shell import CommandResult, command_exists, run_command

logger = logging.getLogger(__name__)


class SessionOperator(Operator):
    """Operator that logs off sessions by numeric session ID.

    Attributes:
        dry_run: If True, report what would be logged off without doing it.
    """

    _LOGOFF_COMMAND = "logoff"

    @property
    def name(self) -> str:
        """Return the facility name."""
        return "logoff command"

    def is_available(self) -> bool:
        """Check if the logoff command exists."""
        return command_exists(self._LOGOFF_COMMAND)

    def logoff(self, sessions: list[Session]) -> list[ActionResult]:
        """Log off each session independently.

        Args:
            sessions: Sessions selected for logoff.

        Returns:
            One ActionResult per session, in input order.

        Raises:
            RuntimeError: If the logoff command is not available.
        """
        actions = [create_logoff_action(s, reason=f"Session {s.state.value}") for s in sessions]
        return self.execute(actions)

    def _run(self, action: Action) -> CommandResult:
        """Log off a single session."""
        return run_command([self._LOGOFF_COMMAND, action.target], timeout=self._timeout)

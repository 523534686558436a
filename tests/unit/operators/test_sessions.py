"""Unit tests for SessionOperator."""

from unittest.mock import patch

import pytest
from rdsjanitor.models.session import Session, SessionState
from rdsjanitor.operators.sessions import SessionOperator
from rdsjanitor.utils.shell import CommandResult


@pytest.fixture
def disconnected() -> list[Session]:
    """Two disconnected sessions."""
    return [
        Session(username="bob", session_name="-", session_id=3, state=SessionState.DISCONNECTED),
        Session(username="carol", session_name="-", session_id=4, state=SessionState.DISCONNECTED),
    ]


class TestSessionOperator:
    """Tests for SessionOperator class."""

    def test_is_available(self) -> None:
        """Availability follows the logoff command."""
        with patch("rdsjanitor.operators.sessions.command_exists") as mock_exists:
            mock_exists.side_effect = lambda cmd: cmd == "logoff"
            assert SessionOperator().is_available() is True

    def test_logoff(self, disconnected: list[Session]) -> None:
        """Each session is logged off by its numeric ID."""
        with (
            patch("rdsjanitor.operators.sessions.command_exists", return_value=True),
            patch("rdsjanitor.operators.sessions.run_command") as mock_run,
        ):
            mock_run.return_value = CommandResult(stdout="", stderr="", returncode=0)
            results = SessionOperator(timeout=30).logoff(disconnected)

        assert [c.args[0] for c in mock_run.call_args_list] == [["logoff", "3"], ["logoff", "4"]]
        assert all(r.success for r in results)
        assert results[1].action.label == "carol"
        assert results[1].action.reason == "Session Disconnected"

    def test_logoff_failure_isolated(self, disconnected: list[Session]) -> None:
        """A failed logoff does not stop the remaining sessions."""
        with (
            patch("rdsjanitor.operators.sessions.command_exists", return_value=True),
            patch("rdsjanitor.operators.sessions.run_command") as mock_run,
        ):
            mock_run.side_effect = [
                CommandResult(stdout="", stderr="Session ID 3 not found", returncode=1),
                CommandResult(stdout="", stderr="", returncode=0),
            ]
            results = SessionOperator().logoff(disconnected)

        assert [r.success for r in results] == [False, True]
        assert results[0].error == "Session ID 3 not found"

    def test_logoff_dry_run(self, disconnected: list[Session]) -> None:
        """Dry-run never invokes logoff."""
        with (
            patch("rdsjanitor.operators.sessions.command_exists", return_value=True),
            patch("rdsjanitor.operators.sessions.run_command") as mock_run,
        ):
            results = SessionOperator(dry_run=True).logoff(disconnected)

        mock_run.assert_not_called()
        assert len(results) == 2
        assert all(r.dry_run for r in results)

    def test_logoff_unavailable(self, disconnected: list[Session]) -> None:
        """Missing logoff raises RuntimeError."""
        with patch("rdsjanitor.operators.sessions.command_exists", return_value=False):
            with pytest.raises(RuntimeError, match="logoff command is not available"):
                SessionOperator().logoff(disconnected)

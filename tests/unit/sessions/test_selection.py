"""Unit tests for logoff selection."""

import pytest
from rdsjanitor.models.session import Session
from rdsjanitor.sessions.parser import parse_session_table
from rdsjanitor.sessions.selection import select_sessions_for_logoff


@pytest.fixture
def sessions(mock_quser_disconnected_output: str) -> list[Session]:
    """Snapshot with bob and carol disconnected and dave active."""
    return list(parse_session_table(mock_quser_disconnected_output).sessions)


class TestSelectSessionsForLogoff:
    """Tests for select_sessions_for_logoff function."""

    def test_single_user(self, sessions: list[Session]) -> None:
        """Only the named user's disconnected sessions are selected."""
        selected = select_sessions_for_logoff(sessions, users=["bob"])
        assert [s.session_id for s in selected] == [3]

    def test_all(self, sessions: list[Session]) -> None:
        """--all selects every disconnected session."""
        selected = select_sessions_for_logoff(sessions, all_sessions=True)
        assert [s.username for s in selected] == ["bob", "carol"]

    def test_all_does_not_widen_user_filter(self, sessions: list[Session]) -> None:
        """A user filter still applies when all_sessions is set."""
        selected = select_sessions_for_logoff(sessions, users=["carol"], all_sessions=True)
        assert [s.username for s in selected] == ["carol"]

    def test_no_filter_selects_all_disconnected(self, sessions: list[Session]) -> None:
        """Without a user filter every disconnected session is selected."""
        assert len(select_sessions_for_logoff(sessions)) == 2

    def test_empty_user_list(self, sessions: list[Session]) -> None:
        """An empty user list does not narrow the selection."""
        assert len(select_sessions_for_logoff(sessions, users=[])) == 2

    def test_active_user_not_selected(self, sessions: list[Session]) -> None:
        """Active sessions are never selected, even when named."""
        assert select_sessions_for_logoff(sessions, users=["dave"]) == []

    def test_case_sensitive(self, sessions: list[Session]) -> None:
        """Usernames are matched exactly."""
        assert select_sessions_for_logoff(sessions, users=["Bob"]) == []

    def test_multiple_users(self, sessions: list[Session]) -> None:
        """Several users can be named."""
        selected = select_sessions_for_logoff(sessions, users=["carol", "bob"])
        assert [s.username for s in selected] == ["bob", "carol"]

"""Unit tests for Rich formatting helpers."""

from datetime import UTC, datetime

from rdsjanitor.models.profile import UserProfile
from rdsjanitor.models.session import Session, SessionState
from rdsjanitor.utils.formatting import (
    create_profile_table,
    create_session_table,
    format_profile_row,
    format_session_row,
)


class TestProfileRows:
    """Tests for profile table formatting."""

    def test_table_columns(self) -> None:
        """The profile table has six columns."""
        assert len(create_profile_table().columns) == 6

    def test_candidate_row(self) -> None:
        """Removal candidates are marked as stale."""
        profile = UserProfile(
            profile_path="C:\\Users\\local_alice",
            is_loaded=False,
            last_used=datetime(2025, 1, 10, 8, 0, tzinfo=UTC),
        )
        icon, user, path, loaded, last_used, status = format_profile_row(profile, True)

        assert user == "local_alice"
        assert path == "C:\\Users\\local_alice"
        assert "no" in loaded
        assert last_used == "2025-01-10 08:00"
        assert "stale fallback" in status
        assert icon

    def test_regular_row(self) -> None:
        """Regular profiles have no marker."""
        profile = UserProfile(profile_path="C:\\Users\\carol", is_loaded=True, last_used=None)
        icon, _, _, loaded, last_used, status = format_profile_row(profile)

        assert icon == ""
        assert "yes" in loaded
        assert last_used == "never"
        assert "regular" in status


class TestSessionRows:
    """Tests for session table formatting."""

    def test_table_columns(self) -> None:
        """The session table has four columns."""
        assert len(create_session_table().columns) == 4

    def test_row(self) -> None:
        """Rows carry the ID, user, name and styled state."""
        session = Session(
            username="bob",
            session_name="-",
            session_id=3,
            state=SessionState.DISCONNECTED,
        )
        assert format_session_row(session) == (
            "3",
            "bob",
            "-",
            "[session_disconnected]Disconnected[/]",
        )

"""Unit tests for ProfileOperator."""

from datetime import UTC, datetime
from unittest.mock import patch

import pytest
from rdsjanitor.models.action import ActionType
from rdsjanitor.models.profile import UserProfile
from rdsjanitor.operators.profiles import ProfileOperator, build_removal_script, escape_wql
from rdsjanitor.utils.shell import CommandResult


@pytest.fixture
def candidates() -> list[UserProfile]:
    """Two stale fallback profiles."""
    last_used = datetime(2025, 1, 1, 8, 0, tzinfo=UTC)
    return [
        UserProfile(profile_path="C:\\Users\\local_alice", is_loaded=False, last_used=last_used),
        UserProfile(profile_path="C:\\Users\\local_bob", is_loaded=False, last_used=last_used),
    ]


class TestRemovalScript:
    """Tests for the removal script builder."""

    def test_escape_wql(self) -> None:
        """Backslashes and quotes are escaped for WQL."""
        assert escape_wql("C:\\Users\\o'neil") == "C:\\\\Users\\\\o\\'neil"

    def test_script_filters_by_path(self) -> None:
        """The script looks the profile up by its escaped path."""
        script = build_removal_script("C:\\Users\\local_alice")

        assert "Win32_UserProfile" in script
        assert "LocalPath = ''C:\\\\Users\\\\local_alice''" in script
        assert "Remove-CimInstance" in script

    def test_script_refuses_loaded_profile(self) -> None:
        """The script re-checks the Loaded flag before deleting."""
        script = build_removal_script("C:\\Users\\local_alice")
        assert script.index("$p.Loaded") < script.index("Remove-CimInstance")


class TestProfileOperator:
    """Tests for ProfileOperator class."""

    def test_is_available(self) -> None:
        """Availability follows PowerShell."""
        with patch("rdsjanitor.operators.profiles.get_powershell", return_value=None):
            assert ProfileOperator().is_available() is False

    def test_remove(self, candidates: list[UserProfile]) -> None:
        """Each profile gets its own PowerShell invocation."""
        with (
            patch("rdsjanitor.operators.profiles.get_powershell", return_value="pwsh"),
            patch("rdsjanitor.operators.profiles.run_powershell") as mock_ps,
        ):
            mock_ps.return_value = CommandResult(stdout="", stderr="", returncode=0)
            results = ProfileOperator(timeout=20).remove(candidates)

        assert mock_ps.call_count == 2
        assert mock_ps.call_args.kwargs["timeout"] == 20
        assert all(r.success for r in results)
        assert results[0].action.action_type == ActionType.REMOVE_PROFILE
        assert results[0].action.reason == "Last used 2025-01-01 08:00"

    def test_remove_continues_after_failure(self, candidates: list[UserProfile]) -> None:
        """A failed removal is reported and the next profile is still tried."""
        with (
            patch("rdsjanitor.operators.profiles.get_powershell", return_value="pwsh"),
            patch("rdsjanitor.operators.profiles.run_powershell") as mock_ps,
        ):
            mock_ps.side_effect = [
                CommandResult(stdout="", stderr="Profile is currently loaded", returncode=1),
                CommandResult(stdout="", stderr="", returncode=0),
            ]
            results = ProfileOperator().remove(candidates)

        assert [r.success for r in results] == [False, True]
        assert results[0].error == "Profile is currently loaded"

    def test_remove_dry_run(self, candidates: list[UserProfile]) -> None:
        """Dry-run never calls PowerShell."""
        with (
            patch("rdsjanitor.operators.profiles.get_powershell", return_value="pwsh"),
            patch("rdsjanitor.operators.profiles.run_powershell") as mock_ps,
        ):
            results = ProfileOperator(dry_run=True).remove(candidates)

        mock_ps.assert_not_called()
        assert all(r.dry_run for r in results)

    def test_remove_without_powershell(self, candidates: list[UserProfile]) -> None:
        """Missing PowerShell raises RuntimeError."""
        with patch("rdsjanitor.operators.profiles.get_powershell", return_value=None):
            with pytest.raises(RuntimeError, match="not available"):
                ProfileOperator().remove(candidates)

"""Unit tests for staleness classification."""

from datetime import datetime, timedelta

import pytest
from rdsjanitor.core.staleness import (
    DEFAULT_THRESHOLD_DAYS,
    find_removal_candidates,
    get_cutoff,
    is_removal_candidate,
)
from rdsjanitor.models.profile import UserProfile


def _profile(
    path: str,
    last_used: datetime | None,
    is_loaded: bool = False,
) -> UserProfile:
    """Create a test UserProfile."""
    return UserProfile(profile_path=path, is_loaded=is_loaded, last_used=last_used)


class TestGetCutoff:
    """Tests for get_cutoff function."""

    def test_default_threshold(self, now: datetime) -> None:
        """Default threshold is three days."""
        assert DEFAULT_THRESHOLD_DAYS == 3
        assert get_cutoff(now) == now - timedelta(days=3)

    def test_negative_threshold_rejected(self, now: datetime) -> None:
        """Negative thresholds raise ValueError."""
        with pytest.raises(ValueError, match="zero or more"):
            get_cutoff(now, -1)


class TestIsRemovalCandidate:
    """Tests for is_removal_candidate function."""

    def test_stale_fallback(self, now: datetime) -> None:
        """Unloaded fallback profile older than the threshold is a candidate."""
        profile = _profile("C:\\Users\\local_alice", now - timedelta(days=4))
        assert is_removal_candidate(profile, now) is True

    def test_recent_fallback(self, now: datetime) -> None:
        """Recently used fallback profile is kept."""
        profile = _profile("C:\\Users\\local_alice", now - timedelta(days=1))
        assert is_removal_candidate(profile, now) is False

    def test_exact_boundary_is_kept(self, now: datetime) -> None:
        """A profile used exactly at the cutoff is not stale."""
        profile = _profile("C:\\Users\\local_alice", now - timedelta(days=3))
        assert is_removal_candidate(profile, now) is False

    def test_just_past_boundary(self, now: datetime) -> None:
        """A profile used one second before the cutoff is stale."""
        profile = _profile("C:\\Users\\local_alice", now - timedelta(days=3, seconds=1))
        assert is_removal_candidate(profile, now) is True

    def test_loaded_profile_never_candidate(self, now: datetime) -> None:
        """Loaded profiles are never reclaimed."""
        profile = _profile("C:\\Users\\local_bob", now - timedelta(days=30), is_loaded=True)
        assert is_removal_candidate(profile, now) is False

    def test_regular_profile_never_candidate(self, now: datetime) -> None:
        """Profiles outside the fallback convention are never reclaimed."""
        profile = _profile("C:\\Users\\carol", now - timedelta(days=30))
        assert is_removal_candidate(profile, now) is False

    def test_missing_last_used_never_candidate(self, now: datetime) -> None:
        """Profiles without a last use time are never reclaimed."""
        profile = _profile("C:\\Users\\local_dave", None)
        assert is_removal_candidate(profile, now) is False

    def test_zero_threshold(self, now: datetime) -> None:
        """With a zero threshold anything used before now is stale."""
        profile = _profile("C:\\Users\\local_alice", now - timedelta(minutes=1))
        assert is_removal_candidate(profile, now, threshold_days=0) is True


class TestFindRemovalCandidates:
    """Tests for find_removal_candidates function."""

    @pytest.fixture
    def profiles(self, now: datetime) -> list[UserProfile]:
        """A mixed set of profiles."""
        return [
            _profile("C:\\Users\\local_alice", now - timedelta(days=5)),
            _profile("C:\\Users\\local_bob", now - timedelta(days=10), is_loaded=True),
            _profile("C:\\Users\\carol", now - timedelta(days=40)),
            _profile("C:\\Users\\local_dave", None),
            _profile("C:\\Users\\local_erin", now - timedelta(days=8)),
            _profile("C:\\Users\\local_frank", now - timedelta(hours=2)),
        ]

    def test_filters_candidates_in_order(
        self, profiles: list[UserProfile], now: datetime
    ) -> None:
        """Only stale unloaded fallback profiles are returned, in input order."""
        candidates = find_removal_candidates(profiles, now)
        assert [p.user_name for p in candidates] == ["local_alice", "local_erin"]

    def test_larger_threshold(self, profiles: list[UserProfile], now: datetime) -> None:
        """A larger threshold narrows the set."""
        candidates = find_removal_candidates(profiles, now, threshold_days=7)
        assert [p.user_name for p in candidates] == ["local_erin"]

    def test_idempotent(self, profiles: list[UserProfile], now: datetime) -> None:
        """Classifying the candidate set again yields the same set."""
        first = find_removal_candidates(profiles, now)
        second = find_removal_candidates(first, now)
        assert first == second

    def test_empty_input(self, now: datetime) -> None:
        """No profiles means no candidates."""
        assert find_removal_candidates([], now) == []

    def test_negative_threshold_rejected_even_when_empty(self, now: datetime) -> None:
        """Threshold validation does not depend on the input."""
        with pytest.raises(ValueError):
            find_removal_candidates([], now, threshold_days=-2)

"""Staleness classification for local fallback profiles.

A profile is a removal candidate when it is a fallback profile, is not
loaded, and was last used strictly before ``now - threshold_days``.
The caller supplies ``now``; nothing here reads the clock.
"""

from collections.abc import Iterable
from datetime import datetime, timedelta

from rdsjanitor.models.profile import UserProfile

DEFAULT_THRESHOLD_DAYS = 3


def get_cutoff(now: datetime, threshold_days: int = DEFAULT_THRESHOLD_DAYS) -> datetime:
    """Return the last-use cutoff for a threshold.

    Raises:
        ValueError: If threshold_days is negative.
    """
    if threshold_days < 0:
        msg = f"Threshold must be zero or more days, got {threshold_days}"
        raise ValueError(msg)
    return now - timedelta(days=threshold_days)


def is_removal_candidate(
    profile: UserProfile,
    now: datetime,
    threshold_days: int = DEFAULT_THRESHOLD_DAYS,
) -> bool:
    """Check whether a single profile is stale.

    Profiles without a recorded last use time are never candidates.

    Args:
        profile: Profile to classify.
        now: Reference time (must be comparable with profile.last_used).
        threshold_days: Minimum age in days.

    Returns:
        True if the profile should be reclaimed.
    """
    if not profile.is_fallback or profile.is_loaded or profile.last_used is None:
        return False
    return profile.last_used < get_cutoff(now, threshold_days)


def find_removal_candidates(
    profiles: Iterable[UserProfile],
    now: datetime,
    threshold_days: int = DEFAULT_THRESHOLD_DAYS,
) -> list[UserProfile]:
    """Filter profiles down to the removal candidate set.

    Args:
        profiles: Enumerated profiles.
        now: Reference time.
        threshold_days: Minimum age in days.

    Returns:
        Candidates in enumeration order.

    Raises:
        ValueError: If threshold_days is negative.
    """
    get_cutoff(now, threshold_days)
    return [p for p in profiles if is_removal_candidate(p, now, threshold_days)]

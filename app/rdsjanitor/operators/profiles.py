"""Local profile removal operator.

Deletes profiles through the OS profile registry (Remove-CimInstance on
Win32_UserProfile), which removes both the registry entry and the
profile folder.
"""

import logging

from rdsjanitor.models.action import Action, ActionResult, create_remove_profile_action
from rdsjanitor.models.profile import UserProfile
from rdsjanitor.operators.base import Operator
from rdsjanitor.utils.shell import CommandResult, get_powershell, quote_powershell, run_powershell

logger = logging.getLogger(__name__)


def escape_wql(value: str) -> str:
    """Escape a value for use inside a single-quoted WQL string literal."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def build_removal_script(profile_path: str) -> str:
    """Build the PowerShell script that removes one profile.

    The profile is looked up again by path and refused if it has become
    loaded since the audit.

    Args:
        profile_path: LocalPath of the profile to remove.

    Returns:
        PowerShell script source.
    """
    wql_filter = quote_powershell(f"LocalPath = '{escape_wql(profile_path)}'")
    return (
        f"$p = Get-CimInstance -ClassName Win32_UserProfile -Filter {wql_filter} "
        "-ErrorAction Stop; "
        "if (-not $p) { throw 'Profile not found in profile registry' }; "
        "if ($p.Loaded) { throw 'Profile is currently loaded' }; "
        "$p | Remove-CimInstance -ErrorAction Stop"
    )


class ProfileOperator(Operator):
    """Operator that reclaims local user profiles.

    Attributes:
        dry_run: If True, report what would be removed without removing.
    """

    @property
    def name(self) -> str:
        """Return the facility name."""
        return "Profile registry (PowerShell)"

    def is_available(self) -> bool:
        """Check if PowerShell is available."""
        return get_powershell() is not None

    def remove(self, profiles: list[UserProfile]) -> list[ActionResult]:
        """Remove each profile independently.

        Args:
            profiles: Removal candidates.

        Returns:
            One ActionResult per profile, in input order.

        Raises:
            RuntimeError: If PowerShell is not available.
        """
        actions = [
            create_remove_profile_action(p, reason=f"Last used {p.last_used_display}")
            for p in profiles
        ]
        return self.execute(actions)

    def _run(self, action: Action) -> CommandResult:
        """Remove a single profile by its path."""
        logger.info("Removing profile %s", action.target)
        return run_powershell(build_removal_script(action.target), timeout=self._timeout)

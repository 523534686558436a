"""Profile audit and reclaim commands.

Reports local user profiles and removes stale local fallback profiles.
"""

from datetime import UTC, datetime
from typing import Annotated, Any

import typer

from rdsjanitor.cli.display import (
    create_actions_table,
    create_results_table,
    print_results_summary,
)
from rdsjanitor.cli.types import OutputFormat, get_config, print_json
from rdsjanitor.core.config import JanitorConfig
from rdsjanitor.core.staleness import find_removal_candidates
from rdsjanitor.models.action import create_remove_profile_action
from rdsjanitor.models.profile import UserProfile
from rdsjanitor.operators.profiles import ProfileOperator
from rdsjanitor.scanners.profiles import ProfileScanner
from rdsjanitor.utils.formatting import (
    console,
    create_profile_table,
    format_profile_row,
    print_error,
    print_info,
)

app = typer.Typer(
    help="Audit and reclaim local user profiles.",
    no_args_is_help=True,
)

ThresholdOption = Annotated[
    int | None,
    typer.Option(
        "--threshold-days",
        "-t",
        min=0,
        help="Days since last use before a fallback profile is stale (default: 3).",
    ),
]


def enumerate_profiles(config: JanitorConfig) -> list[UserProfile]:
    """Enumerate all non-special local profiles.

    Raises:
        RuntimeError: If the profile registry is unavailable.
    """
    scanner = ProfileScanner(
        fallback_prefix=config.fallback_prefix,
        timeout=config.command_timeout,
    )
    return list(scanner.scan())


def scan_profiles(config: JanitorConfig) -> list[UserProfile]:
    """Enumerate profiles, exiting with code 1 if the registry is unavailable.

    Args:
        config: Effective configuration.

    Returns:
        All non-special local profiles.
    """
    try:
        return enumerate_profiles(config)
    except RuntimeError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def _profile_to_dict(profile: UserProfile, is_candidate: bool) -> dict[str, Any]:
    """Convert a profile to a JSON-serializable dictionary."""
    return {
        "user_name": profile.user_name,
        "profile_path": profile.profile_path,
        "sid": profile.sid,
        "is_loaded": profile.is_loaded,
        "is_fallback": profile.is_fallback,
        "last_used": profile.last_used.isoformat() if profile.last_used else None,
        "removal_candidate": is_candidate,
    }


@app.command()
def audit(
    ctx: typer.Context,
    threshold_days: ThresholdOption = None,
    stale_only: Annotated[
        bool,
        typer.Option(
            "--stale-only",
            "-s",
            help="Only show removal candidates.",
        ),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Report local profiles and which of them are stale (read-only).

    Examples:
        rdsjanitor profiles audit
        rdsjanitor profiles audit --threshold-days 7
        rdsjanitor profiles audit --stale-only --format json
    """
    config = get_config(ctx)
    threshold = threshold_days if threshold_days is not None else config.threshold_days

    profiles = scan_profiles(config)
    candidates = find_removal_candidates(profiles, datetime.now(UTC), threshold)
    candidate_paths = {p.profile_path for p in candidates}

    shown = candidates if stale_only else profiles

    if output_format == OutputFormat.JSON:
        print_json(
            {
                "threshold_days": threshold,
                "profiles": [
                    _profile_to_dict(p, p.profile_path in candidate_paths) for p in shown
                ],
                "summary": {
                    "total": len(profiles),
                    "fallback": sum(1 for p in profiles if p.is_fallback),
                    "candidates": len(candidates),
                },
            }
        )
        return

    if not shown:
        if stale_only:
            print_info(f"No stale fallback profiles (threshold: {threshold} day(s)).")
        else:
            print_info("No local user profiles found.")
        return

    table = create_profile_table("Stale Fallback Profiles" if stale_only else "Local User Profiles")
    for profile in shown:
        table.add_row(*format_profile_row(profile, profile.profile_path in candidate_paths))
    console.print(table)

    fallback_count = sum(1 for p in profiles if p.is_fallback)
    console.print(
        f"\n[dim]{len(profiles)} profile(s), {fallback_count} fallback, "
        f"{len(candidates)} stale (threshold: {threshold} day(s))[/]"
    )


@app.command()
def reclaim(
    ctx: typer.Context,
    threshold_days: ThresholdOption = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be removed without removing anything.",
        ),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip confirmation prompt (for scheduled runs).",
        ),
    ] = False,
) -> None:
    """Remove stale local fallback profiles.

    Each profile is removed independently. Failures are reported and
    picked up again on the next run; they do not change the exit code.

    Examples:
        rdsjanitor profiles reclaim --dry-run
        rdsjanitor profiles reclaim --threshold-days 7 --yes
    """
    config = get_config(ctx)
    threshold = threshold_days if threshold_days is not None else config.threshold_days

    profiles = scan_profiles(config)
    candidates = find_removal_candidates(profiles, datetime.now(UTC), threshold)

    if not candidates:
        print_info(f"No stale fallback profiles to reclaim (threshold: {threshold} day(s)).")
        return

    planned = [
        create_remove_profile_action(p, reason=f"Last used {p.last_used_display}")
        for p in candidates
    ]
    console.print(create_actions_table(planned, dry_run=dry_run))

    if not dry_run and not yes:
        confirmed = typer.confirm(
            f"\nProceed with removing {len(candidates)} profile(s)?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    operator = ProfileOperator(dry_run=dry_run, timeout=config.command_timeout)
    try:
        results = operator.remove(candidates)
    except RuntimeError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    console.print(create_results_table(results))
    print_results_summary(results)

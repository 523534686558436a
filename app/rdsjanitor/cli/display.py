"""Shared Rich display functions for actions and results.

Provides the planned-action and result tables used by the destructive
commands (profiles reclaim, sessions disconnect).
"""

from rich.table import Table

from rdsjanitor.models.action import Action, ActionResult
from rdsjanitor.utils.formatting import console, print_info, print_success, print_warning


def create_actions_table(actions: list[Action], dry_run: bool = False) -> Table:
    """Create a Rich table displaying planned actions.

    Args:
        actions: List of actions to display.
        dry_run: Whether this is a dry-run (changes table title).

    Returns:
        Rich Table configured for action display.
    """
    title = "Planned Actions (Dry Run)" if dry_run else "Planned Actions"

    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Action", width=8, justify="center")
    table.add_column("User", no_wrap=True)
    table.add_column("Target")
    table.add_column("Reason")

    for action in actions:
        table.add_row(
            f"[warning]{action.action_type.value}[/warning]",
            action.label,
            action.target,
            f"[muted]{action.reason or ''}[/muted]",
        )

    return table


def create_results_table(results: list[ActionResult]) -> Table:
    """Create a Rich table displaying one row per action result.

    Args:
        results: List of action results to display.

    Returns:
        Rich Table configured for results display.
    """
    table = Table(
        title="Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("User", no_wrap=True)
    table.add_column("Target")
    table.add_column("Message")

    for result in results:
        if result.dry_run:
            status = "[info]DRY[/info]"
            message = result.message or ""
        elif result.success:
            status = "[success]OK[/success]"
            message = result.message or ""
        else:
            status = "[error]FAIL[/error]"
            message = result.error or "Unknown error"

        table.add_row(
            status,
            result.action.label,
            result.action.target,
            f"[muted]{message}[/muted]",
        )

    return table


def print_results_summary(results: list[ActionResult]) -> None:
    """Print a summary of action results.

    Failures are reported as a warning; they are left for the next run
    and do not make the command fail.

    Args:
        results: List of action results.
    """
    dry_count = sum(1 for r in results if r.dry_run)
    success_count = sum(1 for r in results if r.success and not r.dry_run)
    fail_count = sum(1 for r in results if r.failed)

    if dry_count:
        print_info(f"Dry-run: {dry_count} action(s) would be executed.")
    elif fail_count == 0:
        print_success(f"All {success_count} action(s) completed successfully.")
    else:
        console.print(
            f"\n[success]{success_count} succeeded[/success], [error]{fail_count} failed[/error]"
        )
        print_warning("Failed items will be retried on the next run.")

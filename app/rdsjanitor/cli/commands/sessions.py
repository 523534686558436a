"""Session list and disconnect commands.

Lists logon sessions and logs off disconnected ones.
"""

from typing import Annotated, Any

import typer

from rdsjanitor.cli.display import (
    create_actions_table,
    create_results_table,
    print_results_summary,
)
from rdsjanitor.cli.types import OutputFormat, get_config, print_json
from rdsjanitor.core.config import JanitorConfig
from rdsjanitor.models.action import create_logoff_action
from rdsjanitor.models.session import Session
from rdsjanitor.operators.sessions import SessionOperator
from rdsjanitor.sessions.scanner import SessionScanner
from rdsjanitor.sessions.selection import select_sessions_for_logoff
from rdsjanitor.utils.formatting import (
    console,
    create_session_table,
    format_session_row,
    print_error,
    print_info,
)

app = typer.Typer(
    help="List logon sessions and log off disconnected ones.",
    no_args_is_help=True,
)


def scan_sessions(config: JanitorConfig) -> list[Session]:
    """Take a session snapshot, exiting with code 1 if quser is unavailable.

    Args:
        config: Effective configuration.

    Returns:
        Parsed sessions in listing order.
    """
    scanner = SessionScanner(timeout=config.command_timeout)
    try:
        return list(scanner.scan())
    except RuntimeError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def _session_to_dict(session: Session) -> dict[str, Any]:
    """Convert a session to a JSON-serializable dictionary."""
    return {
        "session_id": session.session_id,
        "username": session.username,
        "session_name": session.session_name,
        "state": session.state.value,
    }


@app.command("list")
def list_sessions(
    ctx: typer.Context,
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
    """List current logon sessions.

    Examples:
        rdsjanitor sessions list
        rdsjanitor sessions list --format json
    """
    sessions = scan_sessions(get_config(ctx))

    if output_format == OutputFormat.JSON:
        print_json([_session_to_dict(s) for s in sessions])
        return

    if not sessions:
        print_info("No sessions found.")
        return

    table = create_session_table()
    for session in sessions:
        table.add_row(*format_session_row(session))
    console.print(table)

    disconnected = sum(1 for s in sessions if s.is_disconnected)
    console.print(f"\n[dim]{len(sessions)} session(s), {disconnected} disconnected[/]")


@app.command()
def disconnect(
    ctx: typer.Context,
    users: Annotated[
        list[str] | None,
        typer.Option(
            "--user",
            "-u",
            help="Only log off sessions of this user (repeatable, case-sensitive).",
        ),
    ] = None,
    all_sessions: Annotated[
        bool,
        typer.Option(
            "--all",
            "-a",
            help="Log off every disconnected session.",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be logged off without doing it.",
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
    """Log off disconnected sessions.

    Active and idle sessions are never touched. With --user only the named
    users' disconnected sessions are logged off; otherwise all of them.

    Examples:
        rdsjanitor sessions disconnect --all --dry-run
        rdsjanitor sessions disconnect -u alice -u bob --yes
    """
    config = get_config(ctx)
    sessions = scan_sessions(config)
    selected = select_sessions_for_logoff(sessions, users=users, all_sessions=all_sessions)

    if not selected:
        if users:
            print_info(f"No disconnected sessions for: {', '.join(users)}")
        else:
            print_info("No disconnected sessions to log off.")
        return

    planned = [create_logoff_action(s, reason=f"Session {s.state.value}") for s in selected]
    console.print(create_actions_table(planned, dry_run=dry_run))

    if not dry_run and not yes:
        confirmed = typer.confirm(
            f"\nProceed with logging off {len(selected)} session(s)?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    operator = SessionOperator(dry_run=dry_run, timeout=config.command_timeout)
    try:
        results = operator.logoff(selected)
    except RuntimeError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    console.print(create_results_table(results))
    print_results_summary(results)

"""FSLogix diagnostic commands.

Read-only reports on the FSLogix service, its profile configuration,
its operational event log and local temp redirection.
"""

from typing import Annotated

import typer
from rich.table import Table

from rdsjanitor.cli.commands.profiles import enumerate_profiles
from rdsjanitor.cli.types import OutputFormat, get_config, print_json
from rdsjanitor.fslogix.diagnostics import FSLogixDiagnostics
from rdsjanitor.models.fslogix import FSLogixConfig, FSLogixEvent, ServiceState
from rdsjanitor.utils.formatting import (
    console,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Diagnose FSLogix profile containers.",
    no_args_is_help=True,
)

_SERVICE_STYLES: dict[ServiceState, str] = {
    ServiceState.RUNNING: "success",
    ServiceState.STOPPED: "error",
    ServiceState.NOT_INSTALLED: "warning",
    ServiceState.UNKNOWN: "muted",
}


def _format_flag(value: bool | None) -> str:
    """Format a registry flag for display."""
    if value is None:
        return "[muted]not set[/]"
    return "[success]yes[/]" if value else "[warning]no[/]"


@app.command()
def status(
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
    """Show FSLogix service state and profile configuration.

    Examples:
        rdsjanitor fslogix status
        rdsjanitor fslogix status --format json
    """
    config = get_config(ctx)
    snapshot = FSLogixDiagnostics(config).get_status()

    if output_format == OutputFormat.JSON:
        print_json(
            {
                "service": config.fslogix_service,
                "service_state": snapshot.service_state.value,
                "enabled": snapshot.enabled,
                "redirect_temp_to_local": snapshot.redirect_temp_to_local,
                "vhd_locations": list(snapshot.vhd_locations),
            }
        )
        return

    _print_status(snapshot, config.fslogix_service)

    if snapshot.service_state == ServiceState.NOT_INSTALLED:
        print_warning(f"FSLogix service '{config.fslogix_service}' is not installed.")
    elif snapshot.service_state == ServiceState.STOPPED:
        print_warning(f"FSLogix service '{config.fslogix_service}' is not running.")


@app.command()
def events(
    ctx: typer.Context,
    user: Annotated[
        str | None,
        typer.Option(
            "--user",
            "-u",
            help="Only show events whose message mentions this user.",
        ),
    ] = None,
    days: Annotated[
        int | None,
        typer.Option(
            "--days",
            "-d",
            min=1,
            help="Look-back window in days (default: 3).",
        ),
    ] = None,
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
    """Show recent FSLogix profile load and error events.

    Examples:
        rdsjanitor fslogix events
        rdsjanitor fslogix events --user alice --days 7
    """
    config = get_config(ctx)
    window = days if days is not None else config.event_days
    found = FSLogixDiagnostics(config).query_events(days=window, user=user)

    if output_format == OutputFormat.JSON:
        print_json(
            [
                {
                    "event_id": e.event_id,
                    "time_created": e.time_created.isoformat(),
                    "message": e.message,
                }
                for e in found
            ]
        )
        return

    if not found:
        suffix = f" for '{user}'" if user else ""
        print_info(f"No FSLogix events found in the last {window} day(s){suffix}.")
        return

    _print_events(found)
    console.print(f"\n[dim]{len(found)} event(s) in the last {window} day(s)[/]")


@app.command("temp-check")
def temp_check(ctx: typer.Context) -> None:
    """Check local temp fallback folders of loaded profiles.

    A loaded profile whose conventional local temp folder is missing may
    point to a broken temp redirection. This is a heuristic only. Like the
    other diagnostics it degrades to a warning when profiles cannot be read.

    Examples:
        rdsjanitor fslogix temp-check
    """
    config = get_config(ctx)
    try:
        profiles = enumerate_profiles(config)
    except RuntimeError as e:
        print_warning(f"Cannot check temp folders: {e}")
        return

    checks = FSLogixDiagnostics(config).check_temp_redirection(profiles)

    if not checks:
        print_info("No loaded profiles found.")
        return

    table = Table(
        title="Local Temp Folders",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("User", no_wrap=True)
    table.add_column("Path", style="muted")
    table.add_column("Exists", justify="center")

    for check in checks:
        exists = "[success]yes[/]" if check.exists else "[error]no[/]"
        table.add_row(check.user_name, check.path, exists)
    console.print(table)

    missing = [c for c in checks if not c.exists]
    if missing:
        print_warning(f"{len(missing)} of {len(checks)} temp folder(s) missing.")
    else:
        print_success(f"All {len(checks)} temp folder(s) present.")


# === Private helper functions ===


def _print_status(snapshot: FSLogixConfig, service_name: str) -> None:
    """Display the FSLogix snapshot as a two-column table."""
    table = Table(
        title="FSLogix Status",
        show_header=False,
        border_style="border",
    )
    table.add_column("Setting", style="bold")
    table.add_column("Value")

    style = _SERVICE_STYLES[snapshot.service_state]
    table.add_row(f"Service ({service_name})", f"[{style}]{snapshot.service_state.value}[/]")
    table.add_row("Profiles enabled", _format_flag(snapshot.enabled))
    table.add_row("Redirect temp to local", _format_flag(snapshot.redirect_temp_to_local))
    locations = "\n".join(snapshot.vhd_locations) or "[muted]none[/]"
    table.add_row("VHD locations", locations)

    console.print(table)


def _print_events(found: list[FSLogixEvent]) -> None:
    """Display events as a Rich table."""
    table = Table(
        title="FSLogix Events",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Time", style="info", no_wrap=True)
    table.add_column("ID", justify="right")
    table.add_column("Message")

    for event in found:
        first_line = event.message.strip().splitlines()[0] if event.message.strip() else ""
        table.add_row(
            event.time_created.strftime("%Y-%m-%d %H:%M:%S"),
            str(event.event_id),
            first_line,
        )

    console.print(table)

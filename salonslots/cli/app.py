"""
Main CLI application using Typer.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Annotated, Optional, Tuple

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..adapters.memory_store import InMemoryScheduleStore
from ..adapters.schedule_file import load_schedule_file
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import SchedulingError
from ..domain.models import TimeInterval, format_clock, parse_calendar_date, parse_clock
from ..domain.results import CommandResult
from ..domain.slot_enumerator import SlotResult
from ..services.permissions import AuthorizedBookingService
from ..services.scheduling import SchedulingService

app = typer.Typer(
    name="salonslots",
    help="Check staff availability and list bookable appointment slots",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml"),
]
DurationOption = Annotated[
    Optional[int],
    typer.Option("--duration", "-d", help="Service duration in minutes"),
]
StepOption = Annotated[
    Optional[int],
    typer.Option("--step", "-s", help="Minutes between slot start times"),
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log store reads and decisions.")] = False,
):
    """
    Appointment availability checks for salon staff.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


def _load(config_file: Optional[Path]) -> Tuple[AppConfig, InMemoryScheduleStore, SchedulingService]:
    """Load config and schedule data, and wire the scheduling service."""
    config_path = config_file or get_default_config_path()
    config = AppConfig.load_from_yaml(config_path)
    store = load_schedule_file(config.resolve_schedule_path())
    service = SchedulingService(
        staff_directory=store,
        appointment_store=store,
        time_off_store=store,
    )
    return config, store, service


def _parse_day(value: str, timezone: str) -> date:
    """Accept ``today`` or a ``YYYY-MM-DD`` date."""
    if value.strip().lower() == "today":
        return pendulum.today(timezone).date()
    return parse_calendar_date(value)


def _fail(error: Exception) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
    raise typer.Exit(1)


def _print_command_result(result: CommandResult) -> None:
    if result.success:
        console.print(f"[bold green]✓ Available:[/bold green] {result.summary()}")
        return

    console.print(f"[bold red]✗ Not available[/bold red] ({len(result.conflicts)} conflict(s))")
    for conflict in result.conflicts:
        console.print(f"  • [yellow]{conflict.code}[/yellow] {conflict.describe()}")


def _slot_status(slot: SlotResult) -> str:
    if slot.is_available:
        return "[green]free[/green]"
    return "[red]blocked[/red]"


@app.command()
def check(
    staff_id: Annotated[str, typer.Argument(help="Staff member id")],
    day: Annotated[str, typer.Argument(help="Date (YYYY-MM-DD or 'today')")],
    start: Annotated[str, typer.Argument(help="Start time (HH:MM)")],
    duration: DurationOption = None,
    move: Annotated[Optional[str], typer.Option("--move", "-m", help="Validate moving this appointment id instead of a new booking")] = None,
    as_role: Annotated[Optional[str], typer.Option("--as-role", help="Require this role's appointment permission first")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the result as JSON")] = False,
    config_file: ConfigOption = None,
):
    """
    Check whether a booking (or a move) fits a staff member's schedule.

    Examples:

        salonslots check anna 2024-11-25 10:30 --duration 45

        salonslots check anna today 14:00 --move apt-17 --as-role receptionist
    """
    try:
        config, _, service = _load(config_file)
        target_day = _parse_day(day, config.timezone)
        minutes = duration if duration is not None else config.defaults.service_duration_minutes
        candidate = TimeInterval.from_clock_strings(start, minutes)

        if as_role:
            booking = AuthorizedBookingService(service, config.permission_table())
            if move:
                result = booking.move(as_role, move, staff_id, target_day, candidate)
            else:
                result = booking.create(as_role, staff_id, target_day, candidate)
        elif move:
            result = service.move_command(move, staff_id, target_day, candidate)
        else:
            result = service.create_command(staff_id, target_day, candidate)
    except (FileNotFoundError, ValueError, SchedulingError) as e:
        _fail(e)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _print_command_result(result)


@app.command()
def slots(
    staff_id: Annotated[str, typer.Argument(help="Staff member id")],
    day: Annotated[str, typer.Argument(help="Date (YYYY-MM-DD or 'today')")],
    duration: DurationOption = None,
    step: StepOption = None,
    available_only: Annotated[bool, typer.Option("--available-only", "-a", help="Only list free slots")] = False,
    move: Annotated[Optional[str], typer.Option("--move", "-m", help="Ignore this appointment id, for picking a move target")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print slots as JSON")] = False,
    config_file: ConfigOption = None,
):
    """
    List every slot of the day with its availability.
    """
    try:
        config, store, service = _load(config_file)
        target_day = _parse_day(day, config.timezone)
        minutes = duration if duration is not None else config.defaults.service_duration_minutes
        step_minutes = step if step is not None else config.defaults.step_minutes

        sequence = service.enumerate_slots(
            staff_id, target_day, minutes, step_minutes, exclude_booking_id=move
        )
        if available_only:
            sequence = sequence.only_available()
        slot_list = list(sequence)
    except (FileNotFoundError, ValueError, SchedulingError) as e:
        _fail(e)

    if as_json:
        typer.echo(json.dumps([slot.to_dict() for slot in slot_list], indent=2))
        return

    member = store.get_staff(staff_id)
    name = member.name if member else staff_id

    table = Table(
        title=f"{name} · {target_day.isoformat()} · {minutes} min",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Start", style="bold")
    table.add_column("End")
    table.add_column("Status")
    table.add_column("Reason", style="dim")

    for slot in slot_list:
        reason = slot.first_conflict_reason
        table.add_row(
            slot.start_label,
            slot.end_label,
            _slot_status(slot),
            reason.describe() if reason else "",
        )

    console.print()
    console.print(table)
    console.print()


@app.command("next")
def next_slot(
    staff_id: Annotated[str, typer.Argument(help="Staff member id")],
    day: Annotated[str, typer.Argument(help="Date (YYYY-MM-DD or 'today')")],
    duration: DurationOption = None,
    step: StepOption = None,
    after: Annotated[Optional[str], typer.Option("--after", help="Earliest start time (HH:MM)")] = None,
    config_file: ConfigOption = None,
):
    """
    Show the first free slot of the day.
    """
    try:
        config, _, service = _load(config_file)
        target_day = _parse_day(day, config.timezone)
        minutes = duration if duration is not None else config.defaults.service_duration_minutes
        step_minutes = step if step is not None else config.defaults.step_minutes
        not_before = parse_clock(after) if after else 0

        slot = service.find_next_available_slot(
            staff_id, target_day, minutes, step_minutes, not_before=not_before
        )
    except (FileNotFoundError, ValueError, SchedulingError) as e:
        _fail(e)

    if slot is None:
        console.print(
            f"[yellow]⚠ No free {minutes}-minute slot for {staff_id} on {target_day.isoformat()} "
            f"after {format_clock(not_before)}.[/yellow]"
        )
        raise typer.Exit(1)

    console.print(f"[bold green]✓ Next free slot:[/bold green] {slot.start_label} – {slot.end_label}")


@app.command()
def list_staff(
    config_file: ConfigOption = None,
):
    """
    List all staff members and their weekly schedule.
    """
    try:
        _, store, _ = _load(config_file)
    except (FileNotFoundError, ValueError, SchedulingError) as e:
        _fail(e)

    members = store.list_staff()
    if not members:
        console.print("[yellow]No staff members defined in the schedule file.[/yellow]")
        return

    table = Table(
        title="Staff",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Id", style="bold yellow")
    table.add_column("Name")
    table.add_column("Days")
    table.add_column("Hours")
    table.add_column("Break", style="dim")

    for member in members:
        profile = member.profile
        if profile is None:
            table.add_row(member.staff_id, member.name, "-", "[red]no schedule[/red]", "-")
            continue
        days = ", ".join(d.label[:3] for d in sorted(profile.working_days))
        table.add_row(
            member.staff_id,
            member.name,
            days or "-",
            str(profile.working_hours),
            str(profile.break_window) if profile.break_window else "-",
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]salonslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()

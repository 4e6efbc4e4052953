"""Bookly command line: inspect and exercise the sample calendar."""

import json
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

import click
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import get_settings
from .core.logging import setup_logging
from .scheduling import BookingProposal, CalendarStore

console = Console()


def print_json(data: Any) -> None:
    """Print data as indented JSON."""
    click.echo(json.dumps(data, indent=2, default=str))


def print_table(rows: List[Dict[str, Any]], columns: List[str], title: Optional[str] = None) -> None:
    """Print rows as a table."""
    if not rows:
        console.print("[dim]No data to display[/dim]")
        return

    table = Table(title=title, show_header=True, header_style="bold cyan")
    for col in columns:
        table.add_column(col.replace("_", " ").title())
    for row in rows:
        table.add_row(*["" if row.get(col) is None else str(row.get(col)) for col in columns])
    console.print(table)


def format_output(ctx: click.Context, rows: List[Dict[str, Any]], columns: List[str], title: Optional[str] = None) -> None:
    if ctx.obj["output"] == "json":
        print_json(rows)
    else:
        print_table(rows, columns, title)


def print_error(message: str) -> None:
    console.print(f"[red]✗[/red] {message}")


@click.group()
@click.version_option(version=__version__, prog_name="bookly")
@click.option("--output", "-o", type=click.Choice(["table", "json"]), default="table",
              help="Output format")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, output: str, debug: bool):
    """Bookly - appointment calendar and conflict checks.

    \b
    Examples:
      bookly events
      bookly shifts 1 2025-09-01
      bookly check --staff 1 --start 2025-09-01T10:00 --end 2025-09-01T11:00
      bookly slots template-1 --start 2025-09-01 --end 2025-09-14
    """
    ctx.ensure_object(dict)

    settings = get_settings()
    setup_logging("debug" if debug else settings.log_level, settings.log_format)

    ctx.obj["output"] = output
    ctx.obj["store"] = CalendarStore.from_defaults(settings=settings)


@cli.command("events")
@click.option("--staff", "staff_id", help="Only this staff member's events")
@click.pass_context
def list_events(ctx: click.Context, staff_id: Optional[str]):
    """List calendar events."""
    store: CalendarStore = ctx.obj["store"]
    if staff_id:
        store.set_staff_filters([staff_id])

    rows = [e.to_dict() for e in store.get_filtered_events()]
    format_output(ctx, rows, ["id", "title", "start", "end", "staff_id", "room_id", "status"], "Events")


@cli.command("shifts")
@click.argument("entity_id")
@click.argument("day", type=click.DateTime(formats=["%Y-%m-%d"]))
@click.pass_context
def show_shifts(ctx: click.Context, entity_id: str, day: datetime):
    """Show effective working shifts of a staff member, room or branch."""
    store: CalendarStore = ctx.obj["store"]
    effective = store.get_effective_shifts(entity_id, day.date())

    if ctx.obj["output"] == "json":
        print_json(effective.to_dict())
        return
    if not effective.is_available:
        console.print(f"{entity_id} is not available on {day.date().isoformat()}")
        return
    print_table([s.to_dict() for s in effective.shifts], ["start", "end", "capacity"], "Shifts")


@cli.command("check")
@click.option("--staff", "staff_id", help="Staff member ID")
@click.option("--room", "room_id", help="Room ID")
@click.option("--slot", "slot_id", help="Slot ID")
@click.option("--start", required=True, type=click.DateTime(formats=["%Y-%m-%dT%H:%M"]),
              help="Start, YYYY-MM-DDTHH:MM")
@click.option("--end", required=True, type=click.DateTime(formats=["%Y-%m-%dT%H:%M"]),
              help="End, YYYY-MM-DDTHH:MM")
@click.option("--party-size", type=int, default=1, help="Number of attendees")
@click.pass_context
def check_booking(
    ctx: click.Context,
    staff_id: Optional[str],
    room_id: Optional[str],
    slot_id: Optional[str],
    start: datetime,
    end: datetime,
    party_size: int,
):
    """Check whether a booking would be accepted."""
    store: CalendarStore = ctx.obj["store"]
    result = store.validate_booking(BookingProposal(
        start=start,
        end=end,
        staff_id=staff_id,
        room_id=room_id,
        slot_id=slot_id,
        party_size=party_size,
    ))

    if ctx.obj["output"] == "json":
        print_json(result.to_dict())
    elif result:
        console.print("[green]✓[/green] Booking is available")
    else:
        print_error(result.reason)
    if not result:
        sys.exit(1)


@cli.command("templates")
@click.pass_context
def list_templates(ctx: click.Context):
    """List schedule templates."""
    store: CalendarStore = ctx.obj["store"]
    rows = [
        {
            "id": t.id,
            "name": t.name,
            "active_from": t.active_from.isoformat(),
            "active_until": t.active_until.isoformat() if t.active_until else None,
            "is_active": t.is_active,
            "patterns": len(t.weekly_pattern),
        }
        for t in store.list_templates()
    ]
    format_output(ctx, rows, ["id", "name", "active_from", "active_until", "is_active", "patterns"], "Templates")


@cli.command("slots")
@click.argument("template_id")
@click.option("--start", required=True, type=click.DateTime(formats=["%Y-%m-%d"]), help="First date")
@click.option("--end", required=True, type=click.DateTime(formats=["%Y-%m-%d"]), help="Last date")
@click.pass_context
def generate_slots(ctx: click.Context, template_id: str, start: datetime, end: datetime):
    """Generate a template's slots over a date range and list them."""
    store: CalendarStore = ctx.obj["store"]
    store.generate_slots_from_template(template_id, start.date(), end.date())
    if store.last_action_error:
        print_error(store.last_action_error)
        sys.exit(1)

    slots = store.get_slots(start=start.date(), end=end.date(), template_id=template_id)
    rows = [s.to_dict() for s in slots]
    format_output(ctx, rows, ["id", "date", "start_time", "end_time", "room_id", "service_name", "capacity"], "Slots")


def main():
    """Main entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()

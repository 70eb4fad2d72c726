"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..adapters.mock_salon_client import MockSalonClient
from ..adapters.supabase_client import SupabaseClient
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import BookingConflictError, SalonSlotsError
from ..domain.models import parse_time_of_day
from ..domain.slot_calculator import SlotCalculator, format_business_hours
from ..services.booking import BookingService

app = typer.Typer(
    name="salonslots",
    help="Find bookable appointment times for a salon",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")]
MockOption = Annotated[bool, typer.Option("--mock", help="Use the bundled mock salon data instead of Supabase.")]
StylistOption = Annotated[str, typer.Option("--stylist", "-s", help="Stylist id")]
ServiceOption = Annotated[Optional[str], typer.Option("--service", help="Service id; its duration is used")]
DurationOption = Annotated[Optional[int], typer.Option("--duration", "-d", min=1, help="Service duration in minutes")]
DateArgument = Annotated[str, typer.Argument(help="Date (YYYY-MM-DD)")]


def _load_config(config_file: Optional[Path]) -> AppConfig:
    config = AppConfig.load_from_yaml(config_file or get_default_config_path())
    _setup_logging(config.log_level)
    return config


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _build_service(config: AppConfig, mock: bool) -> BookingService:
    """Wire the data client and calculator according to the config."""
    if mock:
        client = MockSalonClient(data_file=config.defaults.mock_data_file)
    else:
        if not config.has_remote_backend():
            raise ValueError(
                "supabase_url and supabase_key must be configured (or use --mock)."
            )
        client = SupabaseClient(url=config.supabase_url, api_key=config.supabase_key)

    calculator = SlotCalculator(default_duration_minutes=config.defaults.service_duration_minutes)
    return BookingService(data_client=client, slot_calculator=calculator)


def _parse_day(value: str) -> pendulum.Date:
    try:
        return pendulum.from_format(value, "YYYY-MM-DD").date()
    except ValueError as e:
        raise ValueError(f"Invalid date '{value}', expected YYYY-MM-DD") from e


def _fail(error: Exception) -> NoReturn:
    console.print(f"[bold red]Error:[/bold red] {error}")
    raise typer.Exit(1)


@app.command()
def slots(
    day: DateArgument,
    stylist: StylistOption,
    service: ServiceOption = None,
    duration: DurationOption = None,
    config_file: ConfigOption = None,
    mock: MockOption = False,
):
    """
    List bookable start times for a stylist on a date.

    Examples:

        salonslots slots 2024-11-25 --stylist st-1 --service svc-color

        salonslots slots 2024-11-25 -s st-1 -d 45 --mock
    """
    try:
        config = _load_config(config_file)
        booking = _build_service(config, mock)
        date = _parse_day(day)

        times = booking.available_slots(
            config.salon_id, date, stylist, service_id=service, duration=duration
        )
    except (FileNotFoundError, ValueError, SalonSlotsError) as e:
        _fail(e)

    if not times:
        console.print(f"[yellow]No bookable times on {date.format('dddd, MMMM D, YYYY')}.[/yellow]")
        return

    console.print(f"[bold green]{len(times)} bookable time(s) on {date.format('dddd, MMMM D, YYYY')}:[/bold green]")
    for slot_time in times:
        console.print(f"  {slot_time}")


@app.command("next")
def next_slot(
    day: DateArgument,
    stylist: StylistOption,
    service: ServiceOption = None,
    duration: DurationOption = None,
    config_file: ConfigOption = None,
    mock: MockOption = False,
):
    """
    Show the earliest bookable start time on a date.
    """
    try:
        config = _load_config(config_file)
        booking = _build_service(config, mock)
        date = _parse_day(day)

        first = booking.next_available_slot(
            config.salon_id, date, stylist, service_id=service, duration=duration
        )
    except (FileNotFoundError, ValueError, SalonSlotsError) as e:
        _fail(e)

    if first is None:
        console.print(f"[yellow]No bookable times on {date.to_date_string()}.[/yellow]")
    else:
        console.print(f"Next available: [bold]{first}[/bold]")


@app.command()
def day(
    day: DateArgument,
    stylist: StylistOption,
    service: ServiceOption = None,
    duration: DurationOption = None,
    config_file: ConfigOption = None,
    mock: MockOption = False,
):
    """
    Show the day calendar of a stylist.
    """
    try:
        config = _load_config(config_file)
        booking = _build_service(config, mock)
        date = _parse_day(day)

        grid = booking.day_view(config.salon_id, date, stylist, service_id=service, duration=duration)
    except (FileNotFoundError, ValueError, SalonSlotsError) as e:
        _fail(e)

    if not grid:
        console.print(f"[yellow]Closed on {date.format('dddd, MMMM D, YYYY')}.[/yellow]")
        return

    table = Table(
        title=date.format("dddd, MMMM D, YYYY"),
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Time", style="bold")
    table.add_column("Status")
    table.add_column("Appointment", style="dim")

    for slot in grid:
        if slot.appointment is not None:
            apt = slot.appointment
            details = f"{apt.customer_name or apt.customer_id} - {apt.service_name or apt.service_id} ({apt.status.value})"
        else:
            details = ""
        status = "[green]available[/green]" if slot.available else "[red]unavailable[/red]"
        table.add_row(slot.time, status, details)

    console.print()
    console.print(table)
    console.print(f"Available slots: {sum(1 for s in grid if s.available)}")


@app.command()
def week(
    day: DateArgument,
    stylist: StylistOption,
    service: ServiceOption = None,
    duration: DurationOption = None,
    config_file: ConfigOption = None,
    mock: MockOption = False,
):
    """
    Show the week calendar (Monday to Sunday) containing DAY.
    """
    try:
        config = _load_config(config_file)
        booking = _build_service(config, mock)
        week_start = _parse_day(day).start_of("week")

        view = booking.week_view(config.salon_id, week_start, stylist, service_id=service, duration=duration)
    except (FileNotFoundError, ValueError, SalonSlotsError) as e:
        _fail(e)

    table = Table(
        title=f"Week of {week_start.format('MMMM D, YYYY')}",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Time", style="bold")
    for date in view.days:
        table.add_column(date.format("ddd D"), justify="center")

    for row_time in view.rows:
        cells = []
        for date in view.days:
            slot = view.cell(date, row_time)
            if slot.appointment is not None:
                cells.append(f"[magenta]{slot.appointment.customer_name or 'booked'}[/magenta]")
            elif slot.available:
                cells.append("[green]+[/green]")
            else:
                cells.append("[dim]·[/dim]")
        table.add_row(row_time, *cells)

    console.print()
    console.print(table)


@app.command()
def book(
    day: DateArgument,
    start: Annotated[str, typer.Argument(help="Start time (HH:MM)")],
    stylist: StylistOption,
    service: Annotated[str, typer.Option("--service", help="Service id")],
    customer: Annotated[str, typer.Option("--customer", help="Customer id")],
    notes: Annotated[Optional[str], typer.Option("--notes", help="Notes for the appointment")] = None,
    config_file: ConfigOption = None,
    mock: MockOption = False,
):
    """
    Book an appointment after checking it fits the stylist's availability.
    """
    try:
        config = _load_config(config_file)
        booking = _build_service(config, mock)
        date = _parse_day(day)
        start_time = parse_time_of_day(start)

        appointment = booking.create_appointment(
            config.salon_id,
            date,
            start_time,
            stylist_id=stylist,
            service_id=service,
            customer_id=customer,
            notes=notes,
        )
    except BookingConflictError as e:
        console.print(f"[bold red]Not available:[/bold red] {e}")
        raise typer.Exit(1)
    except (FileNotFoundError, ValueError, SalonSlotsError) as e:
        _fail(e)

    console.print(
        f"[green]✓ Booked {appointment.appointment_date.isoformat()} "
        f"{appointment.start_time.strftime('%H:%M')}-{appointment.end_time.strftime('%H:%M')} "
        f"({appointment.status.value})[/green]"
    )


@app.command()
def hours(
    config_file: ConfigOption = None,
    mock: MockOption = False,
):
    """
    Show the salon's weekly business hours.
    """
    try:
        config = _load_config(config_file)
        booking = _build_service(config, mock)
        business_hours = booking.business_hours(config.salon_id)
    except (FileNotFoundError, ValueError, SalonSlotsError) as e:
        _fail(e)

    if not business_hours:
        console.print("[yellow]No business hours configured.[/yellow]")
        return

    console.print(format_business_hours(business_hours))


@app.command("stylists")
def list_stylists(
    config_file: ConfigOption = None,
    mock: MockOption = False,
):
    """
    List the salon's active stylists.
    """
    try:
        config = _load_config(config_file)
        stylists = _build_service(config, mock).stylists(config.salon_id)
    except (FileNotFoundError, ValueError, SalonSlotsError) as e:
        _fail(e)

    if not stylists:
        console.print("[yellow]No active stylists.[/yellow]")
        return

    table = Table(
        title="Stylists",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Id", style="bold yellow")
    table.add_column("Name")
    table.add_column("Specialties", style="dim")

    for stylist in stylists:
        table.add_row(stylist.id, stylist.full_name, ", ".join(stylist.specialties))

    console.print()
    console.print(table)
    console.print()


@app.command("services")
def list_services(
    config_file: ConfigOption = None,
    mock: MockOption = False,
):
    """
    List the salon's active services with their durations.
    """
    try:
        config = _load_config(config_file)
        services = _build_service(config, mock).services(config.salon_id)
    except (FileNotFoundError, ValueError, SalonSlotsError) as e:
        _fail(e)

    table = Table(
        title="Services",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Id", style="bold yellow")
    table.add_column("Name")
    table.add_column("Category", style="dim")
    table.add_column("Minutes", justify="right")
    table.add_column("Price", justify="right")

    for service in services:
        table.add_row(service.id, service.name, service.category, str(service.duration_minutes), f"${service.price:.2f}")

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

"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..adapters.calendar_file import CalendarFileClient
from ..adapters.graph_client import GraphClient
from ..adapters.ingestion import reference_day
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import FreeSlotError
from ..domain.slot_calculator import SlotCalculator
from ..services.free_slot_finder import FreeSlotFinderService

app = typer.Typer(
    name="freeslotfinder",
    help="Find free meeting slots shared by a group of people on one day",
    add_completion=False
)

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True
    )


def _build_calendar_client(config: AppConfig, calendar: Optional[Path], graph: bool):
    """
    Pick the calendar source: Microsoft Graph, or a JSON calendar file.
    """
    if graph:
        return GraphClient(
            access_token=config.graph.get_access_token(),
            timeout_seconds=config.graph.timeout_seconds
        )

    calendar_path = calendar or config.calendar_file
    if calendar_path is None:
        raise ValueError(
            "No calendar source configured. Pass --calendar FILE, set calendar_file "
            "in the config, or use --graph."
        )
    return CalendarFileClient(path=calendar_path, timezone=config.timezone)


@app.command()
def find(
    people: Annotated[Optional[List[str]], typer.Argument(help="Names, emails or ids of the people. Defaults to everyone configured.")] = None,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
    day: Annotated[Optional[str], typer.Option("--day", help="Reference day (YYYY-MM-DD). Defaults to today.")] = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Minimum meeting length in minutes")] = None,
    calendar: Annotated[Optional[Path], typer.Option("--calendar", help="JSON calendar file with busy events")] = None,
    graph: Annotated[bool, typer.Option("--graph", help="Fetch busy times from Microsoft Graph.")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Find free meeting slots on one day.

    Examples:

        # Everyone configured, today, default length
        freeslotfinder find

        # Selected people on a given day
        freeslotfinder find alice bob --day 2024-11-25 --duration 60

        # Busy times from a specific calendar file
        freeslotfinder find --calendar calendar.example.json --day 2024-11-25
    """
    _configure_logging(verbose)

    try:
        config_path = config_file or get_default_config_path()
        config = AppConfig.load_from_yaml(config_path)

        reference = reference_day(day, config.timezone)
        selected = config.resolve_people(people or [])
        min_length = duration if duration is not None else config.defaults.meeting_length_minutes

        console.print("\n[bold cyan]Free slot finder[/bold cyan]\n")
        console.print(f"   People: {', '.join(person.name for person in selected)}")
        console.print(f"   Day: {reference.format('dddd, DD.MM.YYYY')} ({config.timezone})")
        console.print(f"   Minimum length: {min_length} minutes")
        console.print()

        client = _build_calendar_client(config, calendar, graph)
        service = FreeSlotFinderService(calendar_client=client, slot_calculator=SlotCalculator())

        persons = service.fetch_people(people=selected, day=reference)
        slots = service.calculate_slots(persons, min_length)
        busy_blocks = service.busy_blocks(persons)

        if busy_blocks:
            console.print("[bold]Busy:[/bold]")
            for block in busy_blocks:
                console.print(f"  {block}")
            console.print()

        if not slots:
            console.print(
                "[yellow]No free slots found.[/yellow]\n"
                "Try a shorter minimum length."
            )
        else:
            console.print(f"[bold green]{len(slots)} free slot(s) found:[/bold green]")
            for slot in slots:
                console.print(f"  {slot.format_display(reference)}")

        console.print()

    except (FileNotFoundError, FreeSlotError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def list_people(
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Path to config file"
    )
):
    """
    List all configured people.
    """
    try:
        config_path = config_file or get_default_config_path()
        config = AppConfig.load_from_yaml(config_path)

        if not config.people:
            console.print("[yellow]No people defined in the config file.[/yellow]")
            return

        table = Table(
            title="Configured people",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Id", justify="right")
        table.add_column("Name (Alias)", style="bold yellow")
        table.add_column("E-Mail", style="dim")

        for person in config.people:
            table.add_row(str(person.id), person.name, person.email)

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]freeslotfinder[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()

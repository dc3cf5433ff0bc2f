"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import List, Optional, Annotated

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..config import AppConfig, load_config
from ..domain.exceptions import SchedulingError
from ..services.scheduler import CalendarScheduler, build_scheduler

app = typer.Typer(
    name="meetingfinder",
    help="Find windows in the working day where every attendee is free",
    add_completion=False
)

console = Console()

# Sample queries shown by the demo command: (attendees, minutes)
DEMO_QUERIES = [
    (["Alice", "Jack"], 60),
    (["Bob"], 30),
    (["Alice", "Jack", "Bob"], 120),
]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_scheduler(config_file: Optional[Path], cache: Optional[bool] = None) -> tuple[AppConfig, CalendarScheduler]:
    """Load configuration, apply CLI overrides and build the scheduler."""
    config = load_config(config_file)

    if cache is not None:
        config = config.model_copy(update={"enable_caching": cache})

    return config, build_scheduler(config)


def _print_windows(scheduler: CalendarScheduler, attendees: List[str], minutes: int) -> None:
    """Run one query and render the result."""
    duration = pendulum.duration(minutes=minutes)
    windows = scheduler.find_available_windows(attendees, duration)

    console.print(f"[bold cyan]📊 Attendees:[/bold cyan] {', '.join(attendees)}")
    console.print(f"   Meeting duration: {minutes} minutes")
    console.print(f"   Working hours: {scheduler.working_hours}")
    console.print()

    if not windows:
        console.print(
            "[yellow]⚠ No available time windows found.[/yellow]\n"
            "Try fewer attendees or a shorter meeting."
        )
        console.print()
        return

    table = Table(
        title=f"{len(windows)} window(s) in which the meeting can start",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Earliest start", style="bold green")
    table.add_column("Latest start", style="bold green")
    table.add_column("Window", justify="right", style="dim")

    for window in windows:
        table.add_row(
            f"{window.start:%H:%M}",
            f"{window.end:%H:%M}",
            f"{window.duration_minutes()} min",
        )

    console.print(table)
    console.print()


@app.command()
def find(
    attendees: Annotated[List[str], typer.Argument(help="Attendee names (e.g. 'alice jack'). Matching ignores case.")],
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Meeting duration in minutes")] = None,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
    cache: Annotated[Optional[bool], typer.Option("--cache/--no-cache", help="Override the enable_caching setting.")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")] = False,
):
    """
    Find the windows in which a meeting with all attendees can start.

    Examples:

        meetingfinder find alice jack

        meetingfinder find bob --duration 30

        meetingfinder find alice jack bob -d 120 --config ./config.yaml
    """
    _configure_logging(verbose)

    try:
        config, scheduler = _load_scheduler(config_file, cache)
        minutes = duration if duration is not None else config.default_duration_minutes

        console.print()
        _print_windows(scheduler, attendees, minutes)

    except SchedulingError as e:
        console.print("[bold red]Error:[/bold red]", escape(str(e)))
        raise typer.Exit(1)


@app.command()
def attendees(
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Path to config file"
    )
):
    """
    List attendees found in the calendar data.
    """
    _configure_logging(False)

    try:
        _, scheduler = _load_scheduler(config_file)
        counts = scheduler.list_attendees()

        if not counts:
            console.print("[yellow]No busy records in the calendar data.[/yellow]")
            return

        table = Table(
            title="Attendees",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Name", style="bold yellow")
        table.add_column("Busy records", justify="right", style="dim")

        for name, count in sorted(counts.items(), key=lambda item: item[0].casefold()):
            table.add_row(name, str(count))

        console.print()
        console.print(table)
        console.print()

    except SchedulingError as e:
        console.print("[bold red]Error:[/bold red]", escape(str(e)))
        raise typer.Exit(1)


@app.command()
def demo(
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Path to config file"
    )
):
    """
    Run the sample queries against the calendar data.
    """
    _configure_logging(False)

    try:
        _, scheduler = _load_scheduler(config_file)

        for index, (names, minutes) in enumerate(DEMO_QUERIES, 1):
            console.print("\n" + "=" * 60)
            console.print(f"[bold]Example {index}:[/bold] {' & '.join(names)} - {minutes} minute meeting")
            console.print("=" * 60 + "\n")
            _print_windows(scheduler, names, minutes)

    except SchedulingError as e:
        console.print("[bold red]Error:[/bold red]", escape(str(e)))
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]meetingfinder[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()

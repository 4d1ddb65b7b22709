"""
Main CLI application using Typer.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..adapters.json_booking_source import JsonBookingSource
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import HostslotsError
from ..domain.models import UTC
from ..services.availability_service import AvailabilityService, parse_date

app = typer.Typer(
    name="hostslots",
    help="Generate bookable slots for pooled resources",
    add_completion=False
)

console = Console()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_config(config_file: Optional[Path]) -> AppConfig:
    config_path = config_file or get_default_config_path()
    config = AppConfig.load_from_yaml(config_path)
    _configure_logging(config.log_level)
    return config


@app.command()
def slots(
    resource_id: Annotated[str, typer.Argument(help="Resource id as configured in config.yaml")],
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
    bookings_file: Annotated[Optional[Path], typer.Option("--bookings", "-b", help="JSON file with existing bookings. Overrides the config.")] = None,
    start: Annotated[Optional[str], typer.Option("--start", help="Start date (YYYY-MM-DD). Defaults to today.")] = None,
    end: Annotated[Optional[str], typer.Option("--end", help="End date (YYYY-MM-DD)")] = None,
    days: Annotated[int, typer.Option("--days", "-d", help="Days to search when --end is omitted")] = 7,
    as_json: Annotated[bool, typer.Option("--json", help="Print the response body as JSON")] = False,
):
    """
    List available slots for a resource.

    Examples:

        hostslots slots studio-a

        hostslots slots studio-a --start 2024-07-01 --end 2024-07-07

        hostslots slots studio-a --bookings bookings.json --json
    """
    try:
        config = _load_config(config_file)
        resource = config.find_resource(resource_id)

        start_date = parse_date(start) if start else pendulum.today(UTC).date()
        end_date = parse_date(end) if end else start_date.add(days=days)

        source = JsonBookingSource(bookings_file or config.bookings_file)
        service = AvailabilityService(booking_source=source)

        result = asyncio.run(
            service.get_availability(resource, start_date, end_date)
        )

        if as_json:
            typer.echo(json.dumps(result.to_dict(), indent=2))
            return

        console.print(
            f"\n[bold cyan]{resource.display_name()}[/bold cyan] "
            f"{start_date.to_date_string()} - {end_date.to_date_string()} "
            f"({result.slot_minutes} min slots, {result.timezone})\n"
        )

        if not result.slots:
            console.print("[yellow]⚠ No available slots found.[/yellow]\n")
            return

        console.print(f"[bold green]✓ {len(result.slots)} slot(s) found:[/bold green]\n")
        for slot in result.slots:
            console.print(f"  {slot.format_display(result.timezone)}")
        console.print()

    except (HostslotsError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def list_resources(
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
):
    """
    List all configured resources.
    """
    try:
        config = _load_config(config_file)

        if not config.resources:
            console.print("[yellow]No resources defined in the config file.[/yellow]")
            return

        table = Table(
            title="Configured resources",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Id", style="bold yellow")
        table.add_column("Name")
        table.add_column("Bookable")
        table.add_column("Hosts", style="dim")
        table.add_column("Pooling", style="dim")

        for resource in config.resources:
            rules = resource.availability_rules
            hosts = sorted({window.host for window in rules.windows})
            table.add_row(
                resource.id,
                resource.display_name(),
                "yes" if resource.is_active and resource.is_bookable else "no",
                ", ".join(hosts) or "-",
                rules.pooling.value,
            )

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]hostslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()

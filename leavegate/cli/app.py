"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Optional, Annotated

import pendulum
import typer
from rich.console import Console
from rich.table import Table

from ..adapters.holiday_source import load_holiday_calendar
from ..config import AppConfig
from ..domain.exceptions import LeaveGateError
from ..domain.leave_duration import LeaveDurationEvaluator
from ..domain.models import DateRange, LeavePolicy

app = typer.Typer(
    name="leavegate",
    help="Count chargeable leave days and check them against the leave policy",
    add_completion=False
)

console = Console()


def _parse_date(value: str, label: str, tz: str):
    try:
        return pendulum.from_format(value, "YYYY-MM-DD", tz=tz).date()
    except ValueError as e:
        console.print(f"[red]Could not parse {label} '{value}': {e}[/red]")
        raise typer.Exit(1)


def _load_config(config_file: Optional[Path]) -> AppConfig:
    try:
        return AppConfig.load_or_default(config_file)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def evaluate(
    start: Annotated[str, typer.Argument(help="First day of leave (YYYY-MM-DD)")],
    end: Annotated[str, typer.Argument(help="Day the employee is back (YYYY-MM-DD)")],
    max_days: Annotated[Optional[int], typer.Option("--max-days", "-m", help="Maximum chargeable days. Defaults to the configured value.")] = None,
    holidays_file: Annotated[Optional[Path], typer.Option("--holidays", help="YAML or JSON holiday table.")] = None,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
):
    """
    Evaluate a leave range against the maximum-duration policy.

    Examples:

        leavegate evaluate 2015-02-03 2015-02-10

        leavegate evaluate 2015-03-02 2015-03-30 --max-days 15
    """
    config = _load_config(config_file)
    tz = config.timezone

    try:
        date_range = DateRange(
            start=_parse_date(start, "start date", tz),
            end=_parse_date(end, "end date", tz),
        )
        calendar = load_holiday_calendar(holidays_file) if holidays_file else config.holiday_calendar()
        policy = LeavePolicy(max_duration_days=max_days) if max_days is not None else config.get_policy()
    except (FileNotFoundError, ValueError, LeaveGateError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    result = LeaveDurationEvaluator().evaluate(date_range, calendar, policy)

    table = Table(title=f"Leave {date_range}", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Days requested", str(result.raw_days))
    table.add_row("Weekends and holidays", str(result.excluded_days))
    table.add_row("Chargeable days", str(result.chargeable_days))
    table.add_row("Maximum allowed", str(policy.max_duration_days))

    console.print()
    console.print(table)

    if result.within_policy:
        console.print("[bold green]✓ Within leave policy[/bold green]\n")
    else:
        console.print(
            f"[bold red]✗ Exceeds leave policy by "
            f"{result.chargeable_days - policy.max_duration_days} day(s)[/bold red]\n"
        )
        raise typer.Exit(1)


@app.command()
def holidays(
    year: Annotated[Optional[int], typer.Option("--year", "-y", help="Only show this year.")] = None,
    holidays_file: Annotated[Optional[Path], typer.Option("--holidays", help="YAML or JSON holiday table.")] = None,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file")] = None,
):
    """
    List the configured national holidays.
    """
    config = _load_config(config_file)

    try:
        calendar = load_holiday_calendar(holidays_file) if holidays_file else config.holiday_calendar()
    except (FileNotFoundError, LeaveGateError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    years = [year] if year is not None else calendar.years()
    dates = [day for y in years for day in calendar.holidays_in(y)]

    if not dates:
        console.print("[yellow]No holidays recorded.[/yellow]")
        return

    table = Table(
        title="National holidays",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Date", style="bold yellow")
    table.add_column("Weekday", style="dim")

    for day in dates:
        table.add_row(day.format("YYYY-MM-DD"), day.format("dddd", locale="en"))

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]leavegate[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()

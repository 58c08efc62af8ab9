"""
Main CLI entry point for cliclockwork.

This module provides the command-line interface using typer.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..core.credentials import CredentialResolver
from ..core.timer import TimerService
from ..core.worklogs import DailyReport, NameMatchPolicy, WorklogSummarizer
from ..exceptions import (
    ClockworkError,
    NoActiveTimerError,
    SummaryError,
)
from ..integrations.summary import SummaryConfig, WorklogSummaryService
from ..utils.config import get_config_store
from ..utils.formatting import format_duration, pluralize, truncate_text

ASCII_ART = r"""
 .d8888b.  888      8888888       .d8888b.  888                   888                                     888
d88P  Y88b 888        888        d88P  Y88b 888                   888                                     888
888    888 888        888        888    888 888                   888                                     888
888        888        888        888        888  .d88b.   .d8888b 888  888 888  888  888  .d88b.  888d888 888  888
888        888        888        888        888 d88""88b d88P"    888 .88P 888  888  888 d88""88b 888P"   888 .88P
888    888 888        888        888    888 888 888  888 888      888888K  888  888  888 888  888 888     888888K
Y88b  d88P 888        888        Y88b  d88P 888 Y88..88P Y88b.    888 "88b Y88b 888 d88P Y88..88P 888     888 "88b
 "Y8888P"  88888888 8888888       "Y8888P"  888  "Y88P"   "Y8888P 888  888  "Y8888888P"   "Y88P"  888     888  888"""

NO_ACTIVE_TIMER = "No active timer found."

# Create the main typer app
app = typer.Typer(
    name="cliclockwork",
    add_completion=False,
    rich_markup_mode=None,
)

# Initialize console for rich output
console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Set up logging for the command-line application."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def get_resolver() -> CredentialResolver:
    """Build the credential resolver on the default config store."""
    return CredentialResolver(get_config_store())


def get_timer_service() -> TimerService:
    """Build the timer service on the default config store."""
    return TimerService(get_config_store(), get_resolver())


def get_worklog_summarizer() -> WorklogSummarizer:
    """Build the worklog summarizer on the default config store."""
    return WorklogSummarizer(get_config_store(), get_resolver())


def get_summary_service(config: SummaryConfig) -> WorklogSummaryService:
    """Build the text-generation summary service."""
    return WorklogSummaryService(config)


@app.command()
def start(
    ticket_name: str = typer.Argument(..., help="Ticket identifier, e.g. PROJ-123"),
) -> None:
    """Start a timer for the given ticket name. Starting a new timer will stop the current one."""
    try:
        timer_service = get_timer_service()
        message = timer_service.start(ticket_name)
        console.print(f"[green]✓[/green] {escape(message)}")
    except (ClockworkError, OSError) as e:
        console.print(f"[red]Error starting the timer: {escape(str(e))}[/red]")


@app.command()
def stop() -> None:
    """Stop the current timer, if there is one."""
    try:
        timer_service = get_timer_service()
        message = timer_service.stop()
        console.print(f"[green]✓[/green] {escape(message)}")
    except NoActiveTimerError:
        console.print(f"[yellow]{NO_ACTIVE_TIMER}[/yellow]")
    except (ClockworkError, OSError) as e:
        console.print(f"[red]Error stopping the timer: {escape(str(e))}[/red]")


@app.command()
def info() -> None:
    """Get info if a timer is currently active."""
    timer = get_timer_service().info()

    if not timer:
        console.print(f"[dim]{NO_ACTIVE_TIMER}[/dim]")
        return

    console.print(f"[green]●[/green] Running timer for ticket [bold]{escape(timer)}[/bold]")


@app.command()
def reset() -> None:
    """Reset the current timer in case of sync problems."""
    try:
        get_timer_service().reset()
        console.print("[green]✓[/green] Clockwork timer reset")
    except OSError as e:
        console.print(f"[red]Error resetting the timer: {escape(str(e))}[/red]")


@app.command()
def auth() -> None:
    """Get the current API token or set one if it does not exist."""
    try:
        token = get_timer_service().auth()
        console.print(token, markup=False, highlight=False)
    except (ClockworkError, OSError) as e:
        console.print(f"[red]Error resolving the API token: {escape(str(e))}[/red]")


@app.command()
def daily(
    day: Optional[str] = typer.Option(
        None, "--date", "-d", help="Day to report on (YYYY-MM-DD). Defaults to yesterday."
    ),
    match: Optional[NameMatchPolicy] = typer.Option(
        None, "--match", "-m", help="How to match your name against worklog authors"
    ),
    no_ai: bool = typer.Option(
        False, "--no-ai", help="Print the table even if a summary service is configured"
    ),
) -> None:
    """Show yesterday's worklogs, summarized when OPENAI_API_KEY is set."""
    report_day = _parse_day(day) if day else None

    try:
        summarizer = get_worklog_summarizer()
        report = summarizer.build_report(
            day=report_day, policy=match.value if match else None
        )
    except (ClockworkError, OSError) as e:
        console.print(f"[red]Error fetching worklogs: {escape(str(e))}[/red]")
        return

    if not report.entries:
        console.print(f"[dim]No worklogs found for {report.day.isoformat()}[/dim]")
        return

    summary_config = None if no_ai else SummaryConfig.from_env()
    if summary_config:
        try:
            with console.status("Summarizing worklogs..."):
                summary = get_summary_service(summary_config).summarize(
                    report.to_report_dicts()
                )
            console.print(
                Panel(escape(summary), title=f"Daily summary {report.day.isoformat()}")
            )
            return
        except SummaryError as e:
            console.print(f"[red]Error summarizing worklogs: {escape(str(e))}[/red]")

    _display_report(report)


def _parse_day(value: str) -> date:
    """Parse a YYYY-MM-DD option value."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise typer.BadParameter(f"Invalid date '{value}', expected YYYY-MM-DD")


def _display_report(report: DailyReport) -> None:
    """Print the worklogs of a report as a table."""
    count = len(report.entries)
    console.print(
        f"[bold]Worklogs for {escape(report.name)} on {report.day.isoformat()}[/bold] "
        f"[dim]({count} {pluralize(count, 'entry', 'entries')})[/dim]"
    )

    table = Table()
    table.add_column("Issue", style="bold")
    table.add_column("Summary", style="cyan")
    table.add_column("Comment", style="dim")
    table.add_column("Time spent", justify="right")

    for entry in report.entries:
        table.add_row(
            escape(entry.issue),
            escape(truncate_text(entry.summary)),
            escape(entry.comment),
            entry.time_spent,
        )

    console.print(table)

    if report.total_seconds > 0:
        total = timedelta(seconds=report.total_seconds)
        console.print(f"\n[bold]Total: {format_duration(total)}[/bold]")


@app.command()
def version() -> None:
    """Show cliclockwork version information."""
    from .. import __version__

    console.print(f"cliclockwork version {__version__}")


def version_callback(value: bool) -> None:
    """Version callback that prints version and exits."""
    if value:
        version()
        raise typer.Exit()


@app.callback(help=f"\b{ASCII_ART}\n\nA little CLI to manage Clockwork in Jira.")
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging"
    ),
) -> None:
    """Configure logging before running a command."""
    setup_logging(verbose)


if __name__ == "__main__":
    app()

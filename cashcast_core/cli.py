from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from cashcast_core.domain.models import SimulationConfigError, SimulationOptions, SimulationReport
from cashcast_core.io import config as config_io
from cashcast_core.io import events as events_io
from cashcast_core.io import report as report_io
from cashcast_core.log import configure_logging
from cashcast_core.services import simulation

app = typer.Typer(help="Cashcast CLI: Monte Carlo forecasting of account balances from cash events.")

logger = logging.getLogger(__name__)

DEFAULT_EVENTS_PATH = Path("./var/cashevent-template.csv")
DEFAULT_OUTPUT_DIR = Path("./var")


def _fail(console: Console, message: str) -> None:
    console.print(f"[red]{message}[/red]")
    raise typer.Exit(code=1)


def _load_events(console: Console, path: Path):
    try:
        return events_io.load_cash_events(path)
    except events_io.CsvFileNotFoundError as exc:
        _fail(console, str(exc))
    except events_io.CashEventDecodeError as exc:
        detail = f" (row: {exc.data})" if exc.data is not None else ""
        _fail(console, f"{exc}{detail}")


def _print_summary(console: Console, report: SimulationReport) -> None:
    final = report.final_day()
    console.print(
        f"[bold cyan]Simulation {report.id}[/bold cyan] | runs: {report.meta.run_count} "
        f"| days: {report.meta.run_length} | events: {len(report.cash_events)}"
    )
    if final is None:
        return
    table = Table(title=f"Balance on day {final.day}")
    for name in ("p10", "p25", "p50", "p75", "p90"):
        table.add_column(name.upper(), justify="right")
    table.add_row(*(f"{getattr(final, name):,.2f}" for name in ("p10", "p25", "p50", "p75", "p90")))
    console.print(table)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    configure_logging(verbose)


@app.command("list")
def list_events(
    events: Path = typer.Option(DEFAULT_EVENTS_PATH, help="CSV of cash events with ID,label,value,date"),
):
    """List all cash events."""
    console = Console()
    cash_events = _load_events(console, events)

    table = Table(title=f"Cash events in {events}")
    table.add_column("ID")
    table.add_column("Label")
    table.add_column("Value", justify="right")
    table.add_column("Date")
    for event in cash_events:
        table.add_row(event.id, event.label, f"{event.value:,.2f}", event.date.isoformat())
    console.print(table)


@app.command()
def simulate(
    events: Path = typer.Option(DEFAULT_EVENTS_PATH, help="CSV of cash events with ID,label,value,date"),
    config: Optional[Path] = typer.Option(None, help="JSON file with simulation options"),
    run_count: Optional[int] = typer.Option(None, help="Number of runs to simulate [default: 20]"),
    run_length: Optional[int] = typer.Option(None, help="Number of days to project [default: 60]"),
    date_variance_days: Optional[int] = typer.Option(None, help="Max date jitter in days [default: 10]"),
    value_variance_pct: Optional[float] = typer.Option(None, help="Max value jitter in percent [default: 20]"),
    starting_balance: Optional[float] = typer.Option(None, help="Balance on day 0 before events [default: 0]"),
    seed: Optional[str] = typer.Option(None, help="Reproducibility key"),
    out_dir: Path = typer.Option(DEFAULT_OUTPUT_DIR, help="Directory for the report files"),
    html: bool = typer.Option(False, help="Also write an HTML report"),
):
    """Run a new simulation."""
    console = Console()
    cash_events = _load_events(console, events)

    options = config_io.load_simulation_options(config) if config else SimulationOptions()
    options = config_io.merge_options(
        options,
        run_count=run_count,
        run_length=run_length,
        date_variance_days=date_variance_days,
        value_variance_pct=value_variance_pct,
        starting_balance=starting_balance,
    )
    logger.debug("Requested options: %s", options)

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
            console=console,
        ) as progress:
            task = progress.add_task("Running simulation...", total=None)
            report = simulation.run_simulation(cash_events, options, seed)
            progress.update(task, advance=1)
    except SimulationConfigError as exc:
        _fail(console, f"Invalid simulation options: {exc}")

    try:
        json_path = report_io.save_report(report, out_dir / report_io.report_filename(report))
        typer.echo(f"Simulation written to {json_path}")
        if html:
            html_path = report_io.save_report_html(
                report_io.render_report_html(report),
                out_dir / report_io.report_filename(report, suffix=".html"),
            )
            typer.echo(f"HTML report written to {html_path}")
    except report_io.SaveReportError as exc:
        _fail(console, str(exc))

    _print_summary(console, report)


@app.command()
def render(
    report: Path = typer.Option(..., help="Saved simulation report JSON"),
    out: Optional[Path] = typer.Option(None, help="Output path for the HTML report"),
):
    """Render a saved simulation report to HTML."""
    console = Console()
    if not report.exists():
        _fail(console, f"Report not found: {report}")
    loaded = report_io.load_report(report)
    target = out or report.with_suffix(".html")
    try:
        report_io.save_report_html(report_io.render_report_html(loaded), target)
    except report_io.SaveReportError as exc:
        _fail(console, str(exc))
    typer.echo(f"HTML report written to {target}")


if __name__ == "__main__":
    app()

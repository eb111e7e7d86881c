"""
CLI interface for Service Desk.
Uses Typer for commands and Rich for beautiful output.
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from service_desk.automations.batch_importer import BatchImporter, BatchResult
from service_desk.config import get_settings
from service_desk.exceptions import BatchDecodeError
from service_desk.models import RecordKind, init_db, reset_db, session_scope
from service_desk.services.report_service import ReportService
from service_desk.services.repository import MessageRepository

app = typer.Typer(
    name="service-desk",
    help="Import customer messages as reviews and failure reports",
    no_args_is_help=True,
)

console = Console()
logger = logging.getLogger(__name__)

KIND_LABELS = {
    RecordKind.REVIEW: "Reviews",
    RecordKind.FAILURE_REPORT: "Failure Reports",
}


@app.callback()
def configure_logging(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Route log records through Rich."""
    settings = get_settings()
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )


# ============================================================================
# Database Commands
# ============================================================================
@app.command("init")
def init_database(
    reset: bool = typer.Option(False, "--reset", help="Drop existing tables first"),
):
    """Initialize the database (creates tables if they don't exist)."""
    settings = get_settings()
    console.print(f"[blue]Initializing database:[/blue] {settings.database_url}")
    if reset:
        reset_db()
    else:
        init_db()
    console.print("[green]Database initialized successfully![/green]")


@app.command("status")
def show_status():
    """Show stored record counts per kind and status."""
    settings = get_settings()
    console.print(Panel.fit(
        f"[bold]{settings.app_name}[/bold]\n"
        f"Database: {settings.get_db_path()}\n"
        f"Default phone region: {settings.default_phone_region}",
        title="System Status",
        border_style="blue",
    ))

    init_db()
    with session_scope() as session:
        repository = MessageRepository(session)

        table = Table(title="Records by Status", box=box.ROUNDED)
        table.add_column("Kind", style="cyan")
        table.add_column("Status")
        table.add_column("Count", justify="right", style="green")

        total = 0
        for kind, label in KIND_LABELS.items():
            for status, count in sorted(repository.count_by_status(kind).items()):
                table.add_row(label, status.title(), str(count))
                total += count

        if not total:
            console.print("[dim]No records in the system yet.[/dim]")
            return

        table.add_row("─" * 15, "─" * 10, "─" * 5, style="dim")
        table.add_row("[bold]Total[/bold]", "", f"[bold]{total}[/bold]")
        console.print(table)


# ============================================================================
# Import Commands
# ============================================================================
def _print_summary(result: BatchResult) -> None:
    """Print created/duplicate/error counts and the error reasons."""
    created = result.created_by_kind()
    duplicates = result.duplicates_by_kind()

    table = Table(title="Import Results", box=box.ROUNDED)
    table.add_column("Outcome", style="cyan")
    table.add_column("Count", justify="right", style="green")
    for kind, label in KIND_LABELS.items():
        table.add_row(f"Created {label}", str(created.get(kind.value, 0)))
    for kind, label in KIND_LABELS.items():
        table.add_row(f"Duplicate {label}", str(duplicates.get(kind.value, 0)), style="yellow")
    table.add_row("Errors", str(len(result.errors)), style="red" if result.errors else None)
    table.add_row("─" * 20, "─" * 5, style="dim")
    table.add_row("[bold]Total[/bold]", f"[bold]{result.total}[/bold]")
    console.print(table)

    if result.errors:
        errors = Table(title="Errors", box=box.SIMPLE)
        errors.add_column("Message #", style="dim")
        errors.add_column("Reason", style="red")
        for number, reason in result.errors:
            errors.add_row(str(number), reason)
        console.print(errors)


def _import_messages(
    file_path: Path,
    write_report: bool,
    results_dir: Optional[Path],
) -> None:
    settings = get_settings()
    console.print(f"[blue]Provided filepath to the source:[/blue] {file_path}")

    if not file_path.is_file():
        console.print(f"[red]Provided filepath to the source is invalid: {file_path}[/red]")
        raise typer.Exit(2)

    init_db()
    try:
        with session_scope() as session:
            result = BatchImporter(session).import_file(file_path)
            _print_summary(result)

            if write_report:
                report_dir = results_dir or settings.results_dir
                written = ReportService(report_dir).write(result)
                if written:
                    console.print(f"[green]Result files written to {report_dir}:[/green]")
                    for path in written:
                        console.print(f"  {path.name}")
    except BatchDecodeError as e:
        logger.warning(f"Batch decoding failed for {file_path}: {e}")
        console.print(f"[red]Cannot import {file_path}: {e}[/red]")
        raise typer.Exit(1)


@app.command("import")
def import_messages(
    file_path: Path = typer.Argument(..., help="Path of the JSON source file"),
    write_report: bool = typer.Option(True, "--report/--no-report", help="Write result files"),
    results_dir: Optional[Path] = typer.Option(None, "--results-dir", "-o", help="Directory for result files"),
):
    """Import messages from a JSON file as reviews and failure reports."""
    _import_messages(file_path, write_report, results_dir)


@app.command("im", hidden=True)
def import_messages_alias(
    file_path: Path = typer.Argument(..., help="Path of the JSON source file"),
    write_report: bool = typer.Option(True, "--report/--no-report", help="Write result files"),
    results_dir: Optional[Path] = typer.Option(None, "--results-dir", "-o", help="Directory for result files"),
):
    """Alias for import."""
    _import_messages(file_path, write_report, results_dir)


if __name__ == "__main__":
    app()

"""Command-line interface for the registration dashboard."""

import subprocess
import sys
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer
from loguru import logger
from typing_extensions import Annotated

from registration_dashboard.api import FormDataAPIClient
from registration_dashboard.config import get_settings
from registration_dashboard.core.export import ExportError, export_basename, export_records
from registration_dashboard.core.filters import tag_counts
from registration_dashboard.services import DashboardState, LoadStatus
from registration_dashboard.utils.logging import setup_logging

app = typer.Typer(help="Registration Dashboard - inspect and export event registrations")


class Partition(str, Enum):
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"


TagOption = Annotated[
    Optional[List[str]],
    typer.Option("--tag", "-t", help="Event tag to filter on (repeatable)"),
]
MatchAllOption = Annotated[
    bool,
    typer.Option("--match-all", help="Require every selected tag instead of any"),
]
LogLevelOption = Annotated[
    str,
    typer.Option("--loglevel", "-l", help="Logging level"),
]


def _load_state(tags: Optional[List[str]], match_all: bool) -> DashboardState:
    state = DashboardState()
    state.selected_tags = frozenset(tags or [])
    state.match_all = match_all

    if state.load(FormDataAPIClient()) is LoadStatus.ERROR:
        typer.echo(state.error, err=True)
        raise typer.Exit(code=1)
    return state


@app.command("check")
def check(loglevel: LogLevelOption = "WARNING") -> None:
    """Check that the form data endpoint is reachable."""
    setup_logging(loglevel)

    health = FormDataAPIClient().health_check()
    if health["status"] != "healthy":
        typer.echo(f"✗ Endpoint unavailable: {health.get('error')}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"✓ Endpoint reachable (HTTP {health['status_code']})")


@app.command("summary")
def summary(
    tag: TagOption = None,
    match_all: MatchAllOption = False,
    loglevel: LogLevelOption = "WARNING",
) -> None:
    """Print session counts per partition and per event tag."""
    setup_logging(loglevel)
    state = _load_state(tag, match_all)
    filtered = state.filtered()

    typer.echo(f"Total sessions:      {state.partitions.total}")
    typer.echo(f"Completed sessions:  {len(filtered.complete)}")
    typer.echo(f"Incomplete sessions: {len(filtered.incomplete)}")
    typer.echo("")
    typer.echo("Registrants per event:")
    for name, count in tag_counts(filtered.complete + filtered.incomplete).items():
        typer.echo(f"  {name:<12} {count}")


@app.command("export")
def export(
    partition: Annotated[Partition, typer.Argument(help="Which sessions to export")],
    tag: TagOption = None,
    match_all: MatchAllOption = False,
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output-dir", "-o", help="Directory for the workbook"),
    ] = None,
    loglevel: LogLevelOption = "INFO",
) -> None:
    """Export completed or incomplete sessions to an Excel workbook."""
    setup_logging(loglevel)
    settings = get_settings()
    state = _load_state(tag, match_all)

    records = state.filtered().get(partition.value)
    directory = output_dir if output_dir is not None else Path(settings.export_dir)

    try:
        path = export_records(records, export_basename(partition.value), directory, settings.display_timezone)
    except ExportError as e:
        typer.echo(f"Export failed: {e.message}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Exported {len(records)} {partition.value} sessions to {path}")


@app.command("dashboard")
def dashboard(
    port: Annotated[int, typer.Option("--port", "-p", help="Port for the Streamlit server")] = 8501,
) -> None:
    """Launch the Streamlit dashboard."""
    script = Path(__file__).with_name("main.py")
    logger.info(f"Starting dashboard from {script} on port {port}")
    result = subprocess.run(
        [sys.executable, "-m", "streamlit", "run", str(script), "--server.port", str(port)],
        check=False,
    )
    raise typer.Exit(code=result.returncode)


if __name__ == "__main__":
    app()

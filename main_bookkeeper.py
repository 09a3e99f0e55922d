"""Mini README: Entry point CLI for the Haulbook bookkeeping service.

This script exposes a Typer CLI with two commands: ``run`` starts the FastAPI
application under uvicorn, and ``export-report`` writes a PDF report for a
standalone in-memory ledger. That ledger is separate from any running
service, so the report only holds demo records unless ``--no-demo`` is given,
in which case it is empty. Defaults come from ``HAULBOOK_*`` environment
variables when available.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
import uvicorn

from haulbook.aggregation import LedgerAggregator
from haulbook.configuration import get_settings
from haulbook.logging_utils import configure_root_logger
from haulbook.presentation import PdfReportRenderer, ReportLayout, default_report_filename
from haulbook.records import RecordStore

cli = typer.Typer(help="Launch and manage the Haulbook bookkeeping service.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level.upper())

    # Browsers cannot open the 0.0.0.0 wildcard, so point at localhost instead.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting Haulbook on {effective_host}:{effective_port}.\n"
        f"Open your browser at http://{browser_host}:{effective_port}"
    )
    uvicorn.run(
        "haulbook.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command("export-report")
def export_report(
    destination: Optional[Path] = typer.Argument(
        None, help="PDF file to write. Defaults to a dated file in the report directory."
    ),
    demo: bool = typer.Option(
        True, help="Seed the standalone ledger with demo records before exporting."
    ),
) -> None:
    """Write a PDF report for a standalone ledger built by this command.

    The command cannot read records held by a running service; use the
    service's /api/report.pdf route for those. With --no-demo the report is empty.
    """

    settings = get_settings()
    configure_root_logger(settings.log_level.upper())

    store = RecordStore()
    if demo:
        store.seed_demo_records()
    snapshot = LedgerAggregator(store).export_snapshot()
    document = ReportLayout(title=settings.report_title, currency=settings.currency_code).build(
        snapshot
    )
    target = destination or settings.report_directory / default_report_filename(snapshot.generated_at)
    PdfReportRenderer().write(document, target)
    typer.echo(f"Report with {document.page_count} page(s) written to {target}")


if __name__ == "__main__":
    cli()

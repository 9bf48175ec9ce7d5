"""Mini README: Entry point CLI for the Happy Softie bookkeeping service.

This script exposes a Typer CLI that starts the FastAPI application with
configurable host, port, and production flags, prints the dashboard figures
for the persisted ledger, and writes CSV reports for a date range. Settings
come from ``HAPPYSOFTIE_`` environment variables when available.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
import uvicorn

from happysoftie.configuration import get_settings
from happysoftie.export import export_filename, project_rows, write_csv
from happysoftie.interface import build_store
from happysoftie.logging_utils import configure_root_logger
from happysoftie.reporting import build_report, default_report_range, summarise

cli = typer.Typer(help="Run and query the Happy Softie bookkeeping service.")


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
    configure_root_logger(settings.log_level)

    # Browsers cannot open the 0.0.0.0 bind address, so point them at localhost.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting Happy Softie on {effective_host}:{effective_port}.\n"
        f"API docs at http://{browser_host}:{effective_port}/docs"
    )
    uvicorn.run(
        "happysoftie.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def summary() -> None:
    """Print headline metrics for the persisted ledger."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    figures = summarise(build_store(settings).state)
    typer.echo(f"Total sales:        {figures.total_sales:,.2f}")
    typer.echo(f"Total expenses:     {figures.total_expenses:,.2f}")
    typer.echo(f"Net profit:         {figures.profit:,.2f}")
    typer.echo(f"Profit margin:      {figures.profit_margin:.1f}%")
    typer.echo(f"Average sale:       {figures.average_sale:,.2f}")
    typer.echo(f"Average expense:    {figures.average_expense:,.2f}")
    typer.echo(f"Transactions:       {figures.transaction_count}")
    typer.echo(f"Status:             {figures.profit_status}")


@cli.command()
def export(
    start: Optional[datetime] = typer.Option(None, formats=["%Y-%m-%d"], help="First day to include."),
    end: Optional[datetime] = typer.Option(None, formats=["%Y-%m-%d"], help="Last day to include."),
    output: Optional[Path] = typer.Option(None, help="Destination file or directory."),
) -> None:
    """Write the transactions of a date range to CSV."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    default_start, default_end = default_report_range(window_days=settings.report_window_days)
    range_start = start.date() if start else default_start
    range_end = end.date() if end else default_end

    report = build_report(build_store(settings).state, range_start, range_end)
    destination = output or Path.cwd()
    if destination.is_dir():
        destination = destination / export_filename(range_start, range_end)
    write_csv(project_rows(report.transactions), destination)
    typer.echo(
        f"Exported {report.transactions.transaction_count} transactions to {destination} "
        f"(net {report.profit:,.2f})"
    )


if __name__ == "__main__":
    cli()

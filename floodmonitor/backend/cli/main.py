#!/usr/bin/env python3
"""
Sri Lanka Flood Monitor command-line interface.

Commands:
1. ``serve``    run the dashboard API (and built client, if present)
2. ``init-db``  create the relational tables
3. ``stations`` print the river-gauge overview in the terminal
"""

from __future__ import annotations

import logging
import os

import click
import uvicorn
from rich.console import Console
from rich.table import Table

from floodmonitor import __version__
from floodmonitor.backend.api.app import create_app
from floodmonitor.backend.core.data import catalog
from floodmonitor.backend.core.db.session import Database
from floodmonitor.backend.core.utils.config import resolve_config
from floodmonitor.backend.core.utils.logging_setup import setup_logging

console = Console()

STATUS_STYLES = {
    "normal": "green",
    "warning": "yellow",
    "danger": "red",
    "critical": "bold white on red",
}

TREND_ARROWS = {"rising": "↑", "falling": "↓", "stable": "→"}


def print_banner():
    """Print the project banner."""
    banner = f"""
╔══════════════════════════════════════════════════════════════╗
║     Sri Lanka Flood Monitor  v{__version__:<32s}║
║     River levels · Risk zones · Hazard alerts · Weather      ║
╚══════════════════════════════════════════════════════════════╝
    """
    console.print(banner, style="bold blue")


@click.group()
@click.version_option(__version__, prog_name="floodmonitor")
def main():
    """Flood-monitoring dashboard backend for Sri Lanka."""


@main.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    default=None,
    help="Path to configuration file.",
)
@click.option("--host", default=None, help="Bind address (overrides config).")
@click.option("--port", "-p", type=int, default=None, help="Port (overrides config / $PORT).")
@click.option("--reload", is_flag=True, default=False, help="Reload on code changes.")
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode with additional logging.",
)
def serve(config: str | None, host: str | None, port: int | None, reload: bool, debug: bool):
    """Run the API server."""
    cfg = resolve_config(config)
    log_level = logging.DEBUG if debug else cfg["logging"].get("level", "INFO")
    setup_logging(log_level, cfg["logging"].get("file"))

    print_banner()

    host = host or cfg["server"]["host"]
    port = port or cfg["server"]["port"]
    console.print(f"  Environment: {cfg['server']['environment']}")
    console.print(f"  Database:    {cfg['database']['url']}")
    console.print(f"  Serving on:  http://{host}:{port}\n")

    if reload:
        # Reload mode needs an import string; the factory in the worker reads
        # the same config through $FLOODMONITOR_CONFIG.
        if config:
            os.environ["FLOODMONITOR_CONFIG"] = config
        uvicorn.run(
            "floodmonitor.backend.api.app:build_app",
            factory=True,
            host=host,
            port=port,
            reload=True,
            log_config=None,
        )
        return

    uvicorn.run(create_app(cfg), host=host, port=port, log_config=None)


@main.command("init-db")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    default=None,
    help="Path to configuration file.",
)
def init_db(config: str | None):
    """Create database tables that do not exist yet."""
    cfg = resolve_config(config)
    setup_logging(cfg["logging"].get("level", "INFO"))

    database = Database(cfg["database"]["url"])
    try:
        database.init_database()
        tables = database.table_names()
    except Exception as e:
        console.print(f"\n[bold red]Database initialisation failed:[/bold red] {e}")
        raise SystemExit(1)
    finally:
        database.dispose()

    console.print(f"[bold green]Tables ready:[/bold green] {', '.join(tables)}")


@main.command()
@click.option("--district", "-d", default=None, help="Only show stations in this district.")
def stations(district: str | None):
    """Show the current river-gauge readings."""
    rows = catalog.list_stations(district)
    if not rows:
        console.print(f"[yellow]No stations found for district '{district}'.[/yellow]")
        return

    table = Table(title="River Gauging Stations")
    table.add_column("Station", style="cyan")
    table.add_column("District")
    table.add_column("Level (m)", justify="right")
    table.add_column("Warning", justify="right")
    table.add_column("Danger", justify="right")
    table.add_column("Trend", justify="center")
    table.add_column("Status")

    for s in rows:
        style = STATUS_STYLES.get(s["status"], "")
        table.add_row(
            s["name"],
            s["district"],
            f"{s['current_level']:.1f}",
            f"{s['warning_level']:.1f}",
            f"{s['danger_level']:.1f}",
            TREND_ARROWS.get(s["trend"], "?"),
            f"[{style}]{s['status'].upper()}[/{style}]",
        )

    console.print(table)


if __name__ == "__main__":
    main()

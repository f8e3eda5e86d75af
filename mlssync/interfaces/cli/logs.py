"""CLI command listing the sync audit log."""

from __future__ import annotations

import json

import click
from rich.console import Console

from mlssync.interfaces.cli.context import build_sync_service, common_options
from mlssync.interfaces.cli.status import render_runs

console = Console()


@click.command(name="logs")
@common_options
@click.option("--limit", type=click.IntRange(min=1), default=20, show_default=True)
@click.option("--json-output", is_flag=True, help="Output the runs as JSON.")
def logs(db_path: str | None, config_path: str | None, limit: int, json_output: bool) -> None:
    """List recorded sync runs, newest first."""
    service = build_sync_service(db_path, config_path)
    runs = service.list_sync_runs(limit=limit)
    if json_output:
        click.echo(json.dumps([run.model_dump(mode="json") for run in runs], indent=2))
        return
    if not runs:
        console.print("[yellow]No sync runs recorded yet.[/yellow]")
        return
    console.print(render_runs(runs, title="Sync log"))

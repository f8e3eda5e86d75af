"""CLI commands for inspecting sync history and API connectivity."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from mlssync.interfaces.cli.context import build_sync_service, common_options
from mlssync.services.dto import SyncRunDTO

console = Console()


def render_runs(runs: list[SyncRunDTO], title: str) -> Table:
    table = Table(title=title)
    table.add_column("ID", justify="right")
    table.add_column("Type")
    table.add_column("Status", style="bold")
    table.add_column("Processed", justify="right")
    table.add_column("Created", justify="right")
    table.add_column("Updated", justify="right")
    table.add_column("Started")
    table.add_column("Completed")
    table.add_column("Error")
    for run in runs:
        table.add_row(
            str(run.id),
            run.sync_type,
            run.status.value,
            str(run.records_processed),
            str(run.records_created),
            str(run.records_updated),
            run.started_at,
            run.completed_at or "",
            run.error_message or "",
        )
    return table


@click.command(name="status")
@common_options
@click.option("--limit", type=click.IntRange(min=1), default=10, show_default=True)
@click.option(
    "--probe",
    is_flag=True,
    help="Issue a $metadata request to check that the RESO API is reachable.",
)
@click.option(
    "--json-output",
    is_flag=True,
    help="Output the summary as JSON instead of a table.",
)
def status(
    db_path: str | None,
    config_path: str | None,
    limit: int,
    probe: bool,
    json_output: bool,
) -> None:
    """Show the most recent sync runs and the RESO API status."""
    service = build_sync_service(db_path, config_path)
    summary = service.get_sync_status(limit=limit, probe=probe)
    if json_output:
        click.echo(summary.model_dump_json(indent=2))
        return

    connectivity = summary.connectivity
    console.print(f"RESO API configured: {'yes' if connectivity.configured else 'no'}")
    if connectivity.base_url:
        console.print(f"Base URL: {connectivity.base_url}")
    if connectivity.connected is not None:
        reachable = "[green]yes[/green]" if connectivity.connected else "[red]no[/red]"
        console.print(f"Reachable: {reachable}")
        if connectivity.error:
            console.print(f"  {connectivity.error}")
    if connectivity.uses_sample_data:
        console.print("[yellow]Syncs will use the built-in sample listings.[/yellow]")

    if not summary.recent_runs:
        console.print("[yellow]No sync runs recorded yet.[/yellow]")
        return
    console.print(render_runs(summary.recent_runs, title="Recent sync runs"))

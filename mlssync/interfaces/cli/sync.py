"""Synchronization CLI for mlssync."""

from __future__ import annotations

import asyncio
from contextlib import nullcontext

import click
from rich.console import Console

from mlssync.infrastructure.observability import format_prometheus
from mlssync.interfaces.cli.context import build_sync_service, common_options
from mlssync.services.dto import FullSyncResult, SyncResult
from mlssync.services.sync import PROPERTIES_SYNC, SYNC_KINDS

console = Console()


def _print_step(result: SyncResult) -> None:
    stats = result.stats
    colour = "green" if result.success else "red"
    console.print(
        f"[{colour}]{result.sync_type}[/{colour}]: "
        f"processed={stats.processed} created={stats.created} updated={stats.updated}"
    )
    if result.error:
        console.print(f"  [red]{result.error}[/red]")


@click.command(name="sync")
@common_options
@click.option(
    "--kind",
    type=click.Choice(SYNC_KINDS),
    default=PROPERTIES_SYNC,
    show_default=True,
    help="'properties' syncs one batch of listings; 'full' probes the API first.",
)
@click.option(
    "--limit",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum listings to request (properties sync only; defaults to the configured batch size).",
)
@click.option(
    "--json-output",
    is_flag=True,
    help="Print the run result as JSON.",
)
@click.option(
    "--metrics",
    "show_metrics",
    is_flag=True,
    help="Print sync metrics in Prometheus text format after the run.",
)
def sync(
    db_path: str | None,
    config_path: str | None,
    kind: str,
    limit: int | None,
    json_output: bool,
    show_metrics: bool,
) -> None:
    """Pull listings and media from the RESO API into the local database.

    Without a configured API the built-in sample listings are used, so the
    command can always be exercised. Exits with status 1 when the run fails.
    """
    service = build_sync_service(db_path, config_path)
    if not json_output and not service.settings.is_configured:
        console.print("[yellow]RESO API not configured; sample listings will be used.[/yellow]")
    if limit is not None and kind != PROPERTIES_SYNC:
        click.echo("--limit only applies to properties syncs; ignoring.", err=True)
        limit = None

    progress = nullcontext() if json_output else console.status(f"Running {kind} sync...")
    with progress:
        result = asyncio.run(service.run_sync(kind, limit=limit))

    if json_output:
        click.echo(result.model_dump_json(by_alias=True, indent=2))
    elif isinstance(result, FullSyncResult):
        if result.connectivity is not None:
            state = "connected" if result.connectivity.connected else "using sample data"
            console.print(f"RESO API: {state}")
        for step in result.results:
            _print_step(step)
        if result.error:
            console.print(f"[red]{result.error}[/red]")
    else:
        _print_step(result)

    if show_metrics:
        click.echo(format_prometheus())
    if not result.success:
        raise SystemExit(1)

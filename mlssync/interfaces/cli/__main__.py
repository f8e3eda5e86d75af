"""Entry point for running the mlssync CLI.

This module defines a top-level Click group that aggregates all subcommands
defined in the ``mlssync.interfaces.cli`` package. Executing
``python -m mlssync.interfaces.cli`` (or the ``mlssync`` script) will invoke
this group.
"""

import logging

import click

from mlssync.infrastructure.observability import configure_logging

from .logs import logs
from .status import status
from .sync import sync


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    show_default=True,
)
@click.option("--json-logs", is_flag=True, help="Emit log records as JSON lines.")
def cli(log_level: str, json_logs: bool) -> None:
    """mlssync command-line interface."""
    configure_logging(level=getattr(logging, log_level.upper()), use_json=json_logs)


cli.add_command(sync)
cli.add_command(status)
cli.add_command(logs)


if __name__ == "__main__":
    cli()

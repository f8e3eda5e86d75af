"""Shared helpers for composing CLI commands.

This module centralises common CLI wiring such as the ``--db``/``--config``
options and building a :class:`SyncService` with the project defaults applied.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, TypeVar

import click

from mlssync.app.config import load_reso_settings
from mlssync.infrastructure.db import get_path_config
from mlssync.services.sync_service import SyncService

F = TypeVar("F", bound=Callable[..., object])


def common_options(fn: F) -> F:
    """Attach the ``--db`` and ``--config`` options to a command."""
    fn = click.option(
        "--config",
        "config_path",
        type=click.Path(dir_okay=False, path_type=str),
        default=None,
        help="Path to config.json (defaults to $MLSSYNC_CONFIG or the project root).",
    )(fn)
    fn = click.option(
        "--db",
        "db_path",
        type=click.Path(dir_okay=False, path_type=str),
        default=None,
        help="Path to the SQLite database file. Will be created if it does not exist.",
    )(fn)
    return fn


def resolve_db_path(db_path: str | None, config_path: str | None) -> Path:
    if db_path:
        return Path(db_path)
    return get_path_config(config_path)["db_path"]


def build_sync_service(db_path: str | None, config_path: str | None) -> SyncService:
    """Create a :class:`SyncService` for the resolved database and settings."""
    settings = load_reso_settings(config_path)
    return SyncService.from_sqlite_path(
        resolve_db_path(db_path, config_path), settings=settings
    )


__all__ = ["build_sync_service", "common_options", "resolve_db_path"]

"""SQLite connections for the listing store."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from .config import get_default_timeout, get_path_config, load_config


class DatabaseError(Exception):
    """Raised when the listing database cannot be opened or configured."""


def iso_utcnow() -> str:
    """Return the current UTC time as ISO-8601 with a ``Z`` suffix."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class ConnectionOptions:
    """How a store connection is opened; see the ``db`` config section."""

    timeout: float
    enable_wal: bool = True
    foreign_keys: bool = True

    @classmethod
    def from_config(cls, config_path: Path | str | None = None) -> "ConnectionOptions":
        db_cfg = load_config(config_path).get("db", {})
        if not isinstance(db_cfg, dict):
            db_cfg = {}
        return cls(
            timeout=get_default_timeout(config_path),
            enable_wal=bool(db_cfg.get("enable_wal", True)),
            foreign_keys=bool(db_cfg.get("foreign_keys", True)),
        )


def apply_pragmas(conn: sqlite3.Connection, options: ConnectionOptions) -> None:
    pragmas = [f"busy_timeout={int(options.timeout * 1000)}"]
    if options.enable_wal:
        pragmas.append("journal_mode=WAL")
    if options.foreign_keys:
        pragmas.append("foreign_keys=ON")
    try:
        for pragma in pragmas:
            conn.execute(f"PRAGMA {pragma};")
    except sqlite3.Error as exc:
        raise DatabaseError(f"Failed to configure listing database: {exc}") from exc


@contextmanager
def get_connection(
    db_path: str | Path | None = None,
    options: ConnectionOptions | None = None,
) -> Iterator[sqlite3.Connection]:
    """Open the listing database, creating its directory, and close it on exit.

    Transactions are left to the caller; the store commits after every write.
    """
    path = Path(db_path) if db_path is not None else get_path_config()["db_path"]
    options = options or ConnectionOptions.from_config()
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        conn = sqlite3.connect(path, timeout=options.timeout)
    except sqlite3.Error as exc:
        raise DatabaseError(f"Failed to open listing database {path}: {exc}") from exc
    try:
        apply_pragmas(conn, options)
        yield conn
    finally:
        conn.close()

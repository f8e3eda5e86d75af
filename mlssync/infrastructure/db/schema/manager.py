from __future__ import annotations

from .migrations import SchemaMigrator
from .tables import (
    SCHEMA_LISTING_MEDIA_SQL,
    SCHEMA_LISTINGS_SQL,
    SCHEMA_SYNC_RUNS_SQL,
)


def ensure_schema(conn) -> None:
    """Create the listing, media and sync-run tables and record the version."""

    conn.executescript(SCHEMA_LISTINGS_SQL)
    conn.executescript(SCHEMA_LISTING_MEDIA_SQL)
    conn.executescript(SCHEMA_SYNC_RUNS_SQL)
    migrator = SchemaMigrator(conn)
    migrator.ensure_table()
    migrator.apply_path()
    migrator.ensure_current_version()
    conn.commit()

"""SQLite implementation of the listing store used by the sync engine."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import replace
from pathlib import Path
from typing import Any

from mlssync.domain.models import Listing, ListingMedia, SyncRun

from .connection import ConnectionOptions, get_connection
from .repositories import ListingRepository, MediaRepository, SyncRunRepository
from .schema import ensure_schema


class SqliteListingStore:
    """Listing, media and sync-run persistence over one SQLite connection.

    Every write is committed immediately so that a failure on one record
    never rolls back the records synced before it.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn
        self.listings = ListingRepository(conn)
        self.media = MediaRepository(conn)
        self.sync_runs = SyncRunRepository(conn)

    # -------------------- listings --------------------
    def get_listing_by_external_id(self, external_id: str) -> Listing | None:
        return self.listings.get_by_external_id(external_id)

    def create_listing(self, listing: Listing) -> Listing:
        listing_id = self._committed(self.listings.create, listing)
        return self.listings.get(listing_id) or replace(listing, id=listing_id)

    def update_listing(self, listing_id: int, values: Mapping[str, Any]) -> bool:
        return self._committed(self.listings.update, listing_id, values)

    # -------------------- media --------------------
    def get_media_by_external_key(self, media_key: str) -> ListingMedia | None:
        return self.media.get_by_external_media_key(media_key)

    def create_media(self, media: ListingMedia) -> ListingMedia:
        media_id = self._committed(self.media.create, media)
        return replace(media, id=media_id)

    def update_media(self, media_id: int, values: Mapping[str, Any]) -> bool:
        return self._committed(self.media.update, media_id, values)

    # -------------------- sync runs --------------------
    def create_sync_run(self, run: SyncRun) -> SyncRun:
        run_id = self._committed(self.sync_runs.create, run)
        return replace(run, id=run_id)

    def update_sync_run(self, run_id: int, values: Mapping[str, Any]) -> bool:
        return self._committed(self.sync_runs.update, run_id, values)

    def get_recent_sync_runs(self, limit: int = 10) -> list[SyncRun]:
        return self.sync_runs.list_recent(limit)

    def _committed(self, fn, *args):
        try:
            result = fn(*args)
        except Exception:
            self.conn.rollback()
            raise
        self.conn.commit()
        return result


@contextmanager
def open_store(
    db_path: str | Path | None = None,
    options: ConnectionOptions | None = None,
) -> Iterator[SqliteListingStore]:
    """Yield a store bound to a configured connection with the schema applied."""

    with get_connection(db_path, options) as conn:
        ensure_schema(conn)
        yield SqliteListingStore(conn)


__all__ = ["SqliteListingStore", "open_store"]

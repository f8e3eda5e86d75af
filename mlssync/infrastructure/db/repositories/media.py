from __future__ import annotations

import sqlite3
from collections.abc import Mapping
from dataclasses import fields
from typing import Any

from mlssync.domain.models import ListingMedia

from ..connection import iso_utcnow
from .base import BaseRepository

_COLUMNS = frozenset(f.name for f in fields(ListingMedia)) - {"id"}


class MediaRepository(BaseRepository):
    """Persistence for listing media keyed by ``external_media_key``."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        super().__init__(conn)

    def get_by_external_media_key(self, media_key: str) -> ListingMedia | None:
        row = self._fetch_one_as_dict(
            "SELECT * FROM listing_media WHERE external_media_key = ?", (media_key,)
        )
        return ListingMedia.from_dict(row) if row else None

    def create(self, media: ListingMedia) -> int:
        now = iso_utcnow()
        values = media.to_dict()
        values.pop("id", None)
        values["created_at"] = media.created_at or now
        values["updated_at"] = now
        return self._insert_row("listing_media", values, _COLUMNS)

    def update(self, media_id: int, values: Mapping[str, Any]) -> bool:
        row = dict(values)
        row.pop("id", None)
        row["updated_at"] = iso_utcnow()
        return self._update_row("listing_media", media_id, row, _COLUMNS)

    def list_for_listing(self, external_key: str) -> list[ListingMedia]:
        rows = self._fetch_all_as_dicts(
            "SELECT * FROM listing_media WHERE external_key = ? ORDER BY sequence, id",
            (external_key,),
        )
        return [ListingMedia.from_dict(row) for row in rows]

from __future__ import annotations

import json
import sqlite3
from collections.abc import Mapping
from dataclasses import fields
from typing import Any

from mlssync.domain.models import Listing

from ..connection import iso_utcnow
from .base import BaseRepository

_COLUMNS = frozenset(f.name for f in fields(Listing)) - {"id"}
_BOOL_COLUMNS = frozenset({"featured", "luxury", "style_analyzed", "is_external_listing"})


def _to_db(values: Mapping[str, Any]) -> dict[str, Any]:
    row: dict[str, Any] = {}
    for column, value in values.items():
        if column == "images":
            value = json.dumps(list(value or []))
        elif column in _BOOL_COLUMNS:
            value = 1 if value else 0
        row[column] = value
    return row


class ListingRepository(BaseRepository):
    """Persistence for canonical listings keyed by their MLS ``external_id``."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        super().__init__(conn)

    def get(self, listing_id: int) -> Listing | None:
        row = self._fetch_one_as_dict("SELECT * FROM listings WHERE id = ?", (listing_id,))
        return Listing.from_dict(row) if row else None

    def get_by_external_id(self, external_id: str) -> Listing | None:
        row = self._fetch_one_as_dict(
            "SELECT * FROM listings WHERE external_id = ?", (external_id,)
        )
        return Listing.from_dict(row) if row else None

    def create(self, listing: Listing) -> int:
        now = iso_utcnow()
        values = listing.to_dict()
        values.pop("id", None)
        values["created_at"] = listing.created_at or now
        values["updated_at"] = now
        return self._insert_row("listings", _to_db(values), _COLUMNS)

    def update(self, listing_id: int, values: Mapping[str, Any]) -> bool:
        """Apply a partial update; ``updated_at`` is always refreshed."""
        row = _to_db(values)
        row.pop("id", None)
        row["updated_at"] = iso_utcnow()
        return self._update_row("listings", listing_id, row, _COLUMNS)

    def count(self) -> int:
        return int(self._fetch_scalar("SELECT COUNT(*) FROM listings") or 0)

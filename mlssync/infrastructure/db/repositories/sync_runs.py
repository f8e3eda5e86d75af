from __future__ import annotations

import sqlite3
from collections.abc import Mapping
from typing import Any

from mlssync.domain.models import SyncRun, SyncRunStatus

from .base import BaseRepository

_COLUMNS = frozenset(
    {
        "sync_type",
        "status",
        "records_processed",
        "records_created",
        "records_updated",
        "error_message",
        "started_at",
        "completed_at",
    }
)


def _to_db(values: Mapping[str, Any]) -> dict[str, Any]:
    row = dict(values)
    status = row.get("status")
    if isinstance(status, SyncRunStatus):
        row["status"] = status.value
    return row


class SyncRunRepository(BaseRepository):
    """Append-only audit log of sync runs."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        super().__init__(conn)

    def create(self, run: SyncRun) -> int:
        values = run.to_dict()
        values.pop("id", None)
        return self._insert_row("sync_runs", _to_db(values), _COLUMNS)

    def update(self, run_id: int, values: Mapping[str, Any]) -> bool:
        return self._update_row("sync_runs", run_id, _to_db(values), _COLUMNS)

    def get(self, run_id: int) -> SyncRun | None:
        row = self._fetch_one_as_dict("SELECT * FROM sync_runs WHERE id = ?", (run_id,))
        return SyncRun.from_dict(row) if row else None

    def list_recent(self, limit: int = 10) -> list[SyncRun]:
        rows = self._fetch_all_as_dicts(
            "SELECT * FROM sync_runs ORDER BY started_at DESC, id DESC LIMIT ?",
            (limit,),
        )
        return [SyncRun.from_dict(row) for row in rows]

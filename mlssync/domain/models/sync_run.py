"""Sync run audit model."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any


class SyncRunStatus(str, Enum):
    """Lifecycle states of a sync run."""

    IN_PROGRESS = "in_progress"
    SUCCESS = "success"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self is not SyncRunStatus.IN_PROGRESS

    @classmethod
    def from_string(cls, value: str | None) -> "SyncRunStatus":
        """Convert a stored status string, raising for unknown values."""
        if not value:
            raise ValueError("Sync run status is empty")
        return cls(value.lower().strip())


@dataclass
class SyncRun:
    """One invocation of the sync engine as recorded in the audit log.

    ``completed_at`` stays ``None`` exactly as long as the run is
    ``in_progress``; a finalized run is never written again.
    """

    sync_type: str
    status: SyncRunStatus
    started_at: str
    records_processed: int = 0
    records_created: int = 0
    records_updated: int = 0
    error_message: str | None = None
    completed_at: str | None = None
    id: int | None = None

    @property
    def is_finalized(self) -> bool:
        return self.status.is_terminal

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SyncRun":
        return cls(
            id=data.get("id"),
            sync_type=data["sync_type"],
            status=SyncRunStatus.from_string(data.get("status")),
            started_at=data["started_at"],
            records_processed=data.get("records_processed") or 0,
            records_created=data.get("records_created") or 0,
            records_updated=data.get("records_updated") or 0,
            error_message=data.get("error_message"),
            completed_at=data.get("completed_at"),
        )


__all__ = ["SyncRun", "SyncRunStatus"]

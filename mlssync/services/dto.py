"""
Centralized DTOs for mlssync services.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from mlssync.domain.models import SyncRun, SyncRunStatus
from mlssync.infrastructure.reso import ConnectivityStatus


# --- Sync result DTOs ---
class SyncStats(BaseModel):
    model_config = ConfigDict(extra="forbid")

    processed: int = 0
    created: int = 0
    updated: int = 0


class SyncResult(BaseModel):
    """Outcome of one sync step, tagged with its type (``"properties"``)."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    sync_type: str = Field(default="properties", alias="type")
    success: bool
    stats: SyncStats = Field(default_factory=SyncStats)
    error: str | None = None
    sync_run_id: int | None = None


class FullSyncResult(BaseModel):
    """Ordered results of every step of a full sync."""

    model_config = ConfigDict(extra="forbid")

    success: bool
    results: list[SyncResult] = Field(default_factory=list)
    connectivity: ConnectivityStatus | None = None
    error: str | None = None

    @classmethod
    def from_results(
        cls,
        results: Iterable[SyncResult],
        connectivity: ConnectivityStatus | None = None,
    ) -> "FullSyncResult":
        results = list(results)
        return cls(
            success=all(result.success for result in results),
            results=results,
            connectivity=connectivity,
        )


# --- Sync log DTOs ---
class SyncRunDTO(BaseModel):
    model_config = ConfigDict(extra="forbid", from_attributes=True)

    id: int | None = None
    sync_type: str
    status: SyncRunStatus
    records_processed: int = 0
    records_created: int = 0
    records_updated: int = 0
    error_message: str | None = None
    started_at: str
    completed_at: str | None = None

    @classmethod
    def from_run(cls, run: SyncRun) -> "SyncRunDTO":
        return cls.model_validate(run)


class SyncStatusSummary(BaseModel):
    model_config = ConfigDict(extra="forbid")

    last_run: SyncRunDTO | None = None
    recent_runs: list[SyncRunDTO] = Field(default_factory=list)
    connectivity: ConnectivityStatus


__all__ = [
    "FullSyncResult",
    "SyncResult",
    "SyncRunDTO",
    "SyncStats",
    "SyncStatusSummary",
]

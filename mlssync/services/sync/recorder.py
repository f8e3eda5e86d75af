"""Audit log entries for sync runs."""

from __future__ import annotations

from collections.abc import Callable

from mlssync.domain.models import SyncRun, SyncRunStatus
from mlssync.infrastructure.db.connection import iso_utcnow
from mlssync.infrastructure.observability import get_logger
from mlssync.services.dto import SyncStats

from .store import ListingStore

logger = get_logger(__name__)


class SyncRunStateError(RuntimeError):
    """Raised when a sync run would leave the in_progress -> terminal path."""


class SyncLogRecorder:
    """Create a run in ``in_progress`` and finalize it exactly once."""

    def __init__(self, store: ListingStore, *, clock: Callable[[], str] = iso_utcnow) -> None:
        self._store = store
        self._clock = clock

    def start(self, sync_type: str) -> SyncRun:
        run = SyncRun(
            sync_type=sync_type,
            status=SyncRunStatus.IN_PROGRESS,
            started_at=self._clock(),
        )
        run = self._store.create_sync_run(run)
        logger.info("Started %s sync run %s", sync_type, run.id)
        return run

    def finalize(
        self,
        run: SyncRun,
        status: SyncRunStatus | str,
        stats: SyncStats,
        error: str | None = None,
    ) -> SyncRun:
        """Write the terminal status and counters, stamping ``completed_at``.

        The ``run`` instance is updated in place so a second call with the
        same run is rejected.

        Raises:
            SyncRunStateError: If ``status`` is not terminal, the run is
                already finalized or it was never persisted.
        """
        status = SyncRunStatus(status)
        if not status.is_terminal:
            raise SyncRunStateError(f"Cannot finalize sync run with status {status.value}")
        if run.is_finalized:
            raise SyncRunStateError(f"Sync run {run.id} is already {run.status.value}")
        if run.id is None:
            raise SyncRunStateError("Sync run has not been persisted")

        values = {
            "status": status,
            "records_processed": stats.processed,
            "records_created": stats.created,
            "records_updated": stats.updated,
            "error_message": error if status is SyncRunStatus.ERROR else None,
            "completed_at": self._clock(),
        }
        self._store.update_sync_run(run.id, values)
        for name, value in values.items():
            setattr(run, name, value)
        logger.info(
            "Finalized %s sync run %s as %s (processed=%d, created=%d, updated=%d)",
            run.sync_type,
            run.id,
            status.value,
            stats.processed,
            stats.created,
            stats.updated,
        )
        return run


__all__ = ["SyncLogRecorder", "SyncRunStateError"]

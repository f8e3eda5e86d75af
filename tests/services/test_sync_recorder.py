from __future__ import annotations

import pytest

from mlssync.domain.models import SyncRunStatus
from mlssync.services.dto import SyncStats
from mlssync.services.sync import SyncLogRecorder, SyncRunStateError


def _clock():
    ticks = iter(f"2025-01-01T00:00:0{i}Z" for i in range(10))
    return lambda: next(ticks)


def test_start_creates_in_progress_run(store) -> None:
    recorder = SyncLogRecorder(store, clock=_clock())

    run = recorder.start("properties")

    stored = store.sync_runs.get(run.id)
    assert stored.status is SyncRunStatus.IN_PROGRESS
    assert stored.sync_type == "properties"
    assert stored.started_at == "2025-01-01T00:00:00Z"
    assert stored.completed_at is None


def test_finalize_success_writes_counters(store) -> None:
    recorder = SyncLogRecorder(store, clock=_clock())
    run = recorder.start("properties")

    recorder.finalize(
        run, SyncRunStatus.SUCCESS, SyncStats(processed=3, created=1, updated=2), error="ignored"
    )

    stored = store.sync_runs.get(run.id)
    assert stored.status is SyncRunStatus.SUCCESS
    assert (stored.records_processed, stored.records_created, stored.records_updated) == (3, 1, 2)
    assert stored.error_message is None
    assert stored.completed_at == "2025-01-01T00:00:01Z"


def test_finalize_error_keeps_message(store) -> None:
    recorder = SyncLogRecorder(store)
    run = recorder.start("properties")

    recorder.finalize(run, "error", SyncStats(processed=1), error="search failed")

    stored = store.sync_runs.get(run.id)
    assert stored.status is SyncRunStatus.ERROR
    assert stored.error_message == "search failed"
    assert stored.completed_at is not None


def test_run_can_only_be_finalized_once(store) -> None:
    recorder = SyncLogRecorder(store)
    run = recorder.start("properties")
    recorder.finalize(run, SyncRunStatus.SUCCESS, SyncStats())

    with pytest.raises(SyncRunStateError):
        recorder.finalize(run, SyncRunStatus.ERROR, SyncStats(), error="late")

    assert store.sync_runs.get(run.id).status is SyncRunStatus.SUCCESS


def test_finalize_rejects_non_terminal_status(store) -> None:
    recorder = SyncLogRecorder(store)
    run = recorder.start("properties")

    with pytest.raises(SyncRunStateError):
        recorder.finalize(run, SyncRunStatus.IN_PROGRESS, SyncStats())

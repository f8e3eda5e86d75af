"""Listing sync engine.

Public API:
  - SyncOrchestrator – runs properties/full syncs against a ListingStore
  - SyncLogRecorder – start/finalize audit records for a run
  - SyncRunGuard – rejects overlapping runs of the same kind
  - ListingStore – persistence protocol consumed by the engine
"""

from .guard import SyncAlreadyRunningError, SyncRunGuard, get_sync_guard
from .orchestrator import (
    FULL_SYNC,
    PROPERTIES_SYNC,
    SYNC_KINDS,
    SYNC_STATUSES,
    SyncOrchestrator,
)
from .recorder import SyncLogRecorder, SyncRunStateError
from .store import ListingStore

__all__ = [
    # === Orchestration
    "FULL_SYNC",
    "PROPERTIES_SYNC",
    "SYNC_KINDS",
    "SYNC_STATUSES",
    "SyncOrchestrator",
    # === Audit log
    "SyncLogRecorder",
    "SyncRunStateError",
    # === Concurrency guard
    "SyncAlreadyRunningError",
    "SyncRunGuard",
    "get_sync_guard",
    # === Persistence contract
    "ListingStore",
]

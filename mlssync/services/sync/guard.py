"""Process-wide guard against overlapping sync runs of the same kind."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class SyncAlreadyRunningError(RuntimeError):
    """Raised when a sync of the same kind is already running in this process."""

    def __init__(self, kind: str) -> None:
        super().__init__(f"A {kind} sync is already in progress")
        self.kind = kind


class SyncRunGuard:
    """One non-blocking slot per sync kind."""

    def __init__(self) -> None:
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, kind: str) -> threading.Lock:
        with self._registry_lock:
            return self._locks.setdefault(kind, threading.Lock())

    def is_running(self, kind: str) -> bool:
        return self._lock_for(kind).locked()

    @contextmanager
    def hold(self, kind: str) -> Iterator[None]:
        """Occupy the slot for ``kind`` or fail immediately.

        Raises:
            SyncAlreadyRunningError: If the slot is taken.
        """
        lock = self._lock_for(kind)
        if not lock.acquire(blocking=False):
            raise SyncAlreadyRunningError(kind)
        try:
            yield
        finally:
            lock.release()


_default_guard = SyncRunGuard()


def get_sync_guard() -> SyncRunGuard:
    """Return the guard shared by every orchestrator in this process."""
    return _default_guard


__all__ = ["SyncAlreadyRunningError", "SyncRunGuard", "get_sync_guard"]

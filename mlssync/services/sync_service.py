from __future__ import annotations

import asyncio
from typing import Callable

from mlssync.app.config import ResoSettings, load_reso_settings
from mlssync.infrastructure.reso import RemoteListingClient
from mlssync.services.base import BaseService, StoreFactory
from mlssync.services.dto import (
    FullSyncResult,
    SyncResult,
    SyncRunDTO,
    SyncStatusSummary,
)
from mlssync.services.sync import (
    FULL_SYNC,
    PROPERTIES_SYNC,
    SYNC_KINDS,
    SyncOrchestrator,
    SyncRunGuard,
    get_sync_guard,
)

ClientFactory = Callable[[ResoSettings], RemoteListingClient]


def _check_kind(kind: str) -> None:
    if kind not in SYNC_KINDS:
        raise ValueError(
            f"Unknown sync kind {kind!r}; expected one of {', '.join(SYNC_KINDS)}"
        )


class SyncService(BaseService):
    """Entry points used by the CLI (and any route layer) to run and inspect syncs."""

    def __init__(
        self,
        store_factory: StoreFactory,
        *,
        settings: ResoSettings | None = None,
        client_factory: ClientFactory = RemoteListingClient,
        guard: SyncRunGuard | None = None,
    ) -> None:
        super().__init__(store_factory)
        self._settings = settings or load_reso_settings()
        self._client_factory = client_factory
        self._guard = guard or get_sync_guard()

    @property
    def settings(self) -> ResoSettings:
        return self._settings

    def _orchestrator(self, store, client: RemoteListingClient) -> SyncOrchestrator:
        return SyncOrchestrator(store, client, self._settings, guard=self._guard)

    def trigger_sync(
        self, kind: str = PROPERTIES_SYNC, *, limit: int | None = None
    ) -> SyncResult | FullSyncResult:
        """Run a sync of ``kind`` and block until it finishes.

        Raises:
            ValueError: If ``kind`` is not ``"properties"`` or ``"full"``.
        """
        _check_kind(kind)
        self._logger.info("Starting %s sync", kind)

        def run(store) -> SyncResult | FullSyncResult:
            with self._client_factory(self._settings) as client:
                orchestrator = self._orchestrator(store, client)
                if kind == FULL_SYNC:
                    return orchestrator.full_sync()
                return orchestrator.sync_listings(limit)

        result = self._with_store(run)
        self._logger.info("%s sync finished: success=%s", kind, result.success)
        return result

    async def run_sync(
        self, kind: str = PROPERTIES_SYNC, *, limit: int | None = None
    ) -> SyncResult | FullSyncResult:
        """Run :meth:`trigger_sync` in a worker thread."""
        _check_kind(kind)
        try:
            return await asyncio.to_thread(self.trigger_sync, kind, limit=limit)
        except Exception as exc:
            self._logger.error("%s sync failed: %s", kind, exc)
            if kind == FULL_SYNC:
                return FullSyncResult(success=False, error=str(exc))
            return SyncResult(sync_type=kind, success=False, error=str(exc))

    def get_sync_status(self, limit: int = 10, *, probe: bool = False) -> SyncStatusSummary:
        """Recent runs plus connectivity; ``probe`` issues a ``$metadata`` request."""

        def run(store) -> SyncStatusSummary:
            with self._client_factory(self._settings) as client:
                connectivity = client.probe_connection() if probe else None
                return self._orchestrator(store, client).get_last_sync_status(
                    limit=limit, connectivity=connectivity
                )

        return self._with_store(run)

    def list_sync_runs(self, limit: int = 20) -> list[SyncRunDTO]:
        return self._with_store(
            lambda store: [SyncRunDTO.from_run(run) for run in store.get_recent_sync_runs(limit)]
        )

"""Reconcile the remote listing feed into the local store.

A run is strictly sequential: listings are handled in the order the feed
returns them and the media of one listing is synced before the next listing
is touched. Failures on a single listing or media record are logged and
skipped; only a failure outside the per-record loop marks the run as
``error``. No exception escapes :meth:`SyncOrchestrator.sync_listings` or
:meth:`SyncOrchestrator.full_sync`.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

from mlssync.app.config import ResoSettings
from mlssync.domain.models import SyncRunStatus
from mlssync.infrastructure.db.connection import iso_utcnow
from mlssync.infrastructure.observability import (
    MEDIA_SYNC_DURATION,
    Timer,
    get_logger,
    log_context,
    log_exception,
    record_record_failure,
    record_sync_run,
)
from mlssync.infrastructure.reso import (
    ConnectivityStatus,
    RemoteListing,
    RemoteListingClient,
    SearchParams,
    convert_listing,
    convert_media,
)
from mlssync.services.dto import (
    FullSyncResult,
    SyncResult,
    SyncRunDTO,
    SyncStats,
    SyncStatusSummary,
)

from .guard import SyncAlreadyRunningError, SyncRunGuard, get_sync_guard
from .recorder import SyncLogRecorder
from .store import ListingStore

logger = get_logger(__name__)

PROPERTIES_SYNC = "properties"
FULL_SYNC = "full"
SYNC_KINDS = (PROPERTIES_SYNC, FULL_SYNC)

# Source statuses requested by a properties sync.
SYNC_STATUSES: tuple[str, ...] = ("Active", "Pending")

PHOTO_MEDIA_TYPE = "Photo"


class SyncOrchestrator:
    """Drive reconciliation passes against a :class:`ListingStore`."""

    def __init__(
        self,
        store: ListingStore,
        client: RemoteListingClient,
        settings: ResoSettings | None = None,
        *,
        guard: SyncRunGuard | None = None,
        recorder: SyncLogRecorder | None = None,
        clock: Callable[[], str] = iso_utcnow,
    ) -> None:
        self.store = store
        self.client = client
        self.settings = settings or client.settings
        self.guard = guard or get_sync_guard()
        self.recorder = recorder or SyncLogRecorder(store, clock=clock)
        self._clock = clock

    # -------------------- properties --------------------
    def sync_listings(self, limit: int | None = None) -> SyncResult:
        """Run one properties sync and return its structured result."""
        batch_size = limit if limit is not None else self.settings.properties_batch_size
        try:
            with self.guard.hold(PROPERTIES_SYNC):
                return self._run_properties_sync(batch_size)
        except SyncAlreadyRunningError as exc:
            logger.warning("Rejected properties sync: %s", exc)
            return SyncResult(sync_type=PROPERTIES_SYNC, success=False, error=str(exc))

    def _run_properties_sync(self, limit: int) -> SyncResult:
        stats = SyncStats()
        started = time.perf_counter()
        try:
            run = self.recorder.start(PROPERTIES_SYNC)
        except Exception as exc:
            log_exception(logger, "Could not record start of properties sync", exc)
            return SyncResult(sync_type=PROPERTIES_SYNC, success=False, stats=stats, error=str(exc))

        with log_context(sync_run_id=run.id):
            status = SyncRunStatus.SUCCESS
            error: str | None = None
            try:
                records = self.client.search_records(
                    SearchParams(statuses=list(SYNC_STATUSES), limit=limit)
                )
                logger.info("Fetched %d remote listings", len(records))
                for record in records:
                    stats.processed += 1
                    self._sync_one_listing(record, stats)
            except Exception as exc:
                status = SyncRunStatus.ERROR
                error = str(exc) or exc.__class__.__name__
                log_exception(logger, "Properties sync failed", exc)

            try:
                self.recorder.finalize(run, status, stats, error)
            except Exception as exc:
                log_exception(logger, "Could not finalize properties sync", exc)
                status = SyncRunStatus.ERROR
                error = error or str(exc)

            record_sync_run(
                PROPERTIES_SYNC,
                status.value,
                time.perf_counter() - started,
                stats.processed,
                stats.created,
                stats.updated,
            )
        return SyncResult(
            sync_type=PROPERTIES_SYNC,
            success=status is SyncRunStatus.SUCCESS,
            stats=stats,
            error=error,
            sync_run_id=run.id,
        )

    def _sync_one_listing(self, record: dict[str, Any], stats: SyncStats) -> None:
        with log_context(
            external_id=record.get("ListingId"), external_key=record.get("ListingKey")
        ):
            try:
                remote = RemoteListing.model_validate(record)
                listing = convert_listing(
                    remote,
                    default_state=self.settings.home_region,
                    synced_at=self._clock(),
                )
                existing = self.store.get_listing_by_external_id(listing.external_id)
                if existing is not None and not existing.is_external_listing:
                    logger.warning(
                        "Listing %s is maintained by hand; leaving it untouched",
                        listing.external_id,
                    )
                    return
                if existing is not None and existing.id is not None:
                    self.store.update_listing(existing.id, listing.feed_fields())
                    stats.updated += 1
                    logger.debug("Updated listing %s", listing.external_id)
                else:
                    self.store.create_listing(listing)
                    stats.created += 1
                    logger.debug("Created listing %s", listing.external_id)
            except Exception as exc:
                record_record_failure("listing")
                log_exception(logger, "Failed to sync listing", exc)
                return

            if listing.external_key:
                self.sync_media_for_listing(listing.external_key, listing.external_id)
            else:
                logger.debug("Listing %s has no ListingKey; skipping media", listing.external_id)

    # -------------------- media --------------------
    def sync_media_for_listing(self, listing_key: str, external_id: str) -> None:
        """Upsert a listing's media and re-project its photo URLs onto it.

        Best effort: nothing raised here reaches the caller.
        """
        with log_context(external_id=external_id), Timer(MEDIA_SYNC_DURATION):
            try:
                remote_media = self.client.get_media(listing_key)
                for remote in remote_media:
                    try:
                        media = convert_media(remote)
                        media.external_id = external_id
                        if not media.external_key:
                            media.external_key = listing_key
                        existing = self.store.get_media_by_external_key(media.external_media_key)
                        if existing is not None and existing.id is not None:
                            values = media.to_dict()
                            for name in ("id", "created_at", "updated_at"):
                                values.pop(name)
                            self.store.update_media(existing.id, values)
                        else:
                            self.store.create_media(media)
                    except Exception as exc:
                        record_record_failure("media")
                        log_exception(
                            logger,
                            "Failed to sync media",
                            exc,
                            media_key=remote.media_key,
                        )

                photos = [
                    remote
                    for remote in sorted(remote_media, key=lambda item: item.order or 0)
                    if remote.media_type == PHOTO_MEDIA_TYPE and remote.media_url
                ]
                if photos:
                    listing = self.store.get_listing_by_external_id(external_id)
                    if listing is not None and listing.id is not None:
                        self.store.update_listing(
                            listing.id, {"images": [photo.media_url for photo in photos]}
                        )
            except Exception as exc:
                record_record_failure("listing_media")
                log_exception(logger, "Failed to sync media for listing", exc)

    # -------------------- full sync --------------------
    def full_sync(self) -> FullSyncResult:
        """Probe connectivity, then run every sync step in order."""
        results: list[SyncResult] = []
        connectivity: ConnectivityStatus | None = None
        try:
            with self.guard.hold(FULL_SYNC):
                connectivity = self.client.probe_connection()
                if connectivity.connected:
                    logger.info("RESO API reachable at %s", connectivity.base_url)
                else:
                    logger.warning(
                        "RESO API unavailable (%s); sample data will likely be used",
                        connectivity.error or "not connected",
                    )
                results.append(self.sync_listings(limit=self.settings.full_sync_batch_size))
                return FullSyncResult.from_results(results, connectivity)
        except SyncAlreadyRunningError as exc:
            logger.warning("Rejected full sync: %s", exc)
            return FullSyncResult(success=False, error=str(exc))
        except Exception as exc:
            log_exception(logger, "Full sync failed", exc)
            return FullSyncResult(
                success=False,
                results=results,
                connectivity=connectivity,
                error=str(exc) or exc.__class__.__name__,
            )

    # -------------------- status --------------------
    def get_last_sync_status(
        self,
        limit: int = 10,
        connectivity: ConnectivityStatus | None = None,
    ) -> SyncStatusSummary:
        """Return the most recent runs and the given (or configured) connectivity."""
        runs = [SyncRunDTO.from_run(run) for run in self.store.get_recent_sync_runs(limit)]
        return SyncStatusSummary(
            last_run=runs[0] if runs else None,
            recent_runs=runs,
            connectivity=connectivity or self.client.configuration_status(),
        )


__all__ = [
    "FULL_SYNC",
    "PROPERTIES_SYNC",
    "SYNC_KINDS",
    "SYNC_STATUSES",
    "SyncOrchestrator",
]

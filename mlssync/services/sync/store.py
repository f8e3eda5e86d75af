"""Persistence contract consumed by the sync engine."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from mlssync.domain.models import Listing, ListingMedia, SyncRun


class ListingStore(Protocol):
    """Listing, media and sync-run storage keyed by external identifiers.

    :class:`mlssync.infrastructure.db.SqliteListingStore` is the production
    implementation; tests may pass any object with these methods.
    """

    def get_listing_by_external_id(self, external_id: str) -> Listing | None: ...

    def create_listing(self, listing: Listing) -> Listing: ...

    def update_listing(self, listing_id: int, values: Mapping[str, Any]) -> bool: ...

    def get_media_by_external_key(self, media_key: str) -> ListingMedia | None: ...

    def create_media(self, media: ListingMedia) -> ListingMedia: ...

    def update_media(self, media_id: int, values: Mapping[str, Any]) -> bool: ...

    def create_sync_run(self, run: SyncRun) -> SyncRun: ...

    def update_sync_run(self, run_id: int, values: Mapping[str, Any]) -> bool: ...

    def get_recent_sync_runs(self, limit: int = 10) -> list[SyncRun]: ...


__all__ = ["ListingStore"]

"""Domain models for mlssync."""

from .listing import FEED_FIELDS, Listing, ListingMedia
from .sync_run import SyncRun, SyncRunStatus

__all__ = [
    "FEED_FIELDS",
    "Listing",
    "ListingMedia",
    "SyncRun",
    "SyncRunStatus",
]

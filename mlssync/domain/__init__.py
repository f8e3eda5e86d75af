"""Domain layer for mlssync.

Contains business models that are independent of persistence and transport.
"""

from .models import Listing, ListingMedia, SyncRun, SyncRunStatus

__all__ = ["Listing", "ListingMedia", "SyncRun", "SyncRunStatus"]

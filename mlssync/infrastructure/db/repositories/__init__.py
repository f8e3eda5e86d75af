from .listings import ListingRepository
from .media import MediaRepository
from .sync_runs import SyncRunRepository

__all__ = [
    "ListingRepository",
    "MediaRepository",
    "SyncRunRepository",
]

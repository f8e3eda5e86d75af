"""RESO/OData listing feed: queries, record shapes and canonical mapping."""

from .client import DEFAULT_STATUS, RemoteListingClient, build_filter
from .mapping import (
    LUXURY_PRICE_THRESHOLD,
    ListingMappingError,
    convert_listing,
    convert_media,
    is_luxury,
)
from .models import ConnectivityStatus, RemoteListing, RemoteMedia, SearchParams
from .sample_data import SAMPLE_EXTERNAL_IDS, sample_listing_records

__all__ = [
    "ConnectivityStatus",
    "DEFAULT_STATUS",
    "LUXURY_PRICE_THRESHOLD",
    "ListingMappingError",
    "RemoteListing",
    "RemoteListingClient",
    "RemoteMedia",
    "SAMPLE_EXTERNAL_IDS",
    "SearchParams",
    "build_filter",
    "convert_listing",
    "convert_media",
    "is_luxury",
    "sample_listing_records",
]

"""Convert RESO records into canonical :mod:`mlssync.domain` models."""

from __future__ import annotations

from mlssync.app.config import DEFAULT_HOME_REGION
from mlssync.domain.models import Listing, ListingMedia

from .models import RemoteListing, RemoteMedia

# Listings priced strictly above this are flagged as luxury.
LUXURY_PRICE_THRESHOLD = 750_000


class ListingMappingError(ValueError):
    """Raised when a remote record lacks the identifiers needed to store it."""


def is_luxury(price: float | None) -> bool:
    return price is not None and price > LUXURY_PRICE_THRESHOLD


def build_address(street_number: str | None, street_name: str | None) -> str | None:
    parts = [part.strip() for part in (street_number, street_name) if part and part.strip()]
    return " ".join(parts) or None


def build_title(beds: int | None, baths: float | None, city: str | None) -> str:
    title = f"{beds or 0} Bed, {_format_count(baths)} Bath Home"
    if city:
        title += f" in {city}"
    return title


def _format_count(value: float | None) -> str:
    if not value:
        return "0"
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def convert_listing(
    remote: RemoteListing,
    *,
    default_state: str = DEFAULT_HOME_REGION,
    synced_at: str | None = None,
) -> Listing:
    """Map a remote ``Property`` record onto a :class:`Listing`.

    The mapping is total: fields absent from the remote record become
    ``None``. Only ``state`` has a fallback (``default_state``). Images are
    left empty; they are filled in by the media sync step.

    Raises:
        ListingMappingError: If ``ListingId`` is missing. A missing
            ``ListingKey`` only means the listing has no media to sync.
    """
    if not remote.listing_id:
        raise ListingMappingError("Remote listing has no ListingId")

    baths = (
        float(remote.bathrooms_total_integer)
        if remote.bathrooms_total_integer is not None
        else None
    )
    source_status = remote.standard_status
    return Listing(
        external_id=remote.listing_id,
        external_key=remote.listing_key or None,
        title=build_title(remote.bedrooms_total, baths, remote.city),
        description=remote.public_remarks,
        price=remote.list_price,
        address=build_address(remote.street_number, remote.street_name),
        city=remote.city,
        state=remote.state_or_province or default_state,
        postal_code=remote.postal_code,
        beds=remote.bedrooms_total,
        baths=baths,
        sqft=remote.living_area,
        year_built=remote.year_built,
        property_type=remote.property_type,
        property_subtype=remote.property_sub_type,
        latitude=remote.latitude,
        longitude=remote.longitude,
        status=source_status.lower() if source_status else None,
        source_status=source_status,
        mls_status=remote.mls_status,
        original_list_price=remote.original_list_price,
        days_on_market=remote.days_on_market,
        listing_contract_date=remote.listing_contract_date,
        modification_timestamp=remote.modification_timestamp,
        photo_count=remote.photo_count,
        virtual_tour_url=remote.virtual_tour_url,
        listing_agent_key=remote.list_agent_key,
        listing_office_name=remote.list_office_name,
        luxury=is_luxury(remote.list_price),
        images=[],
        is_external_listing=True,
        last_synced_at=synced_at,
    )


def convert_media(remote: RemoteMedia) -> ListingMedia:
    """Map a remote ``Media`` record; ``external_id`` is attached by the caller."""
    if not remote.media_key:
        raise ListingMappingError("Remote media has no MediaKey")
    if not remote.media_url:
        raise ListingMappingError(f"Remote media {remote.media_key} has no MediaURL")
    return ListingMedia(
        external_media_key=remote.media_key,
        external_key=remote.resource_record_key or "",
        media_url=remote.media_url,
        external_id=None,
        media_type=remote.media_type,
        media_object_id=remote.media_object_id,
        short_description=remote.short_description,
        long_description=remote.long_description,
        sequence=remote.order if remote.order is not None else 0,
        modification_timestamp=remote.modification_timestamp,
    )


__all__ = [
    "LUXURY_PRICE_THRESHOLD",
    "ListingMappingError",
    "build_address",
    "build_title",
    "convert_listing",
    "convert_media",
    "is_luxury",
]

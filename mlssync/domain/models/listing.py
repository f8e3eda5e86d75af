"""Listing and media domain models."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, fields
from typing import Any

# Fields written by the feed conversion. Business attributes (featured,
# images, architectural style) are owned elsewhere and excluded.
FEED_FIELDS: tuple[str, ...] = (
    "external_id",
    "external_key",
    "title",
    "description",
    "price",
    "address",
    "city",
    "state",
    "postal_code",
    "beds",
    "baths",
    "sqft",
    "year_built",
    "property_type",
    "property_subtype",
    "latitude",
    "longitude",
    "status",
    "source_status",
    "mls_status",
    "original_list_price",
    "days_on_market",
    "listing_contract_date",
    "modification_timestamp",
    "photo_count",
    "virtual_tour_url",
    "listing_agent_key",
    "listing_office_name",
    "luxury",
    "is_external_listing",
    "last_synced_at",
)

_BOOL_FIELDS = {"featured", "luxury", "style_analyzed", "is_external_listing"}


@dataclass
class Listing:
    """Canonical property record.

    A listing is either sourced from the MLS feed (``is_external_listing``)
    or authored by hand; only the former is ever written by a sync run.
    """

    external_id: str
    title: str
    external_key: str | None = None
    description: str | None = None
    price: float | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    beds: int | None = None
    baths: float | None = None
    sqft: int | None = None
    year_built: int | None = None
    property_type: str | None = None
    property_subtype: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    status: str | None = None
    source_status: str | None = None
    mls_status: str | None = None
    original_list_price: float | None = None
    days_on_market: int | None = None
    listing_contract_date: str | None = None
    modification_timestamp: str | None = None
    photo_count: int | None = None
    virtual_tour_url: str | None = None
    listing_agent_key: str | None = None
    listing_office_name: str | None = None
    featured: bool = False
    luxury: bool = False
    images: list[str] = field(default_factory=list)
    architectural_style: str | None = None
    secondary_style: str | None = None
    style_confidence: float | None = None
    style_analyzed: bool = False
    is_external_listing: bool = False
    last_synced_at: str | None = None
    id: int | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @property
    def coordinates(self) -> tuple[float, float] | None:
        if self.latitude is None or self.longitude is None:
            return None
        return self.latitude, self.longitude

    def feed_fields(self) -> dict[str, Any]:
        """Return only the attributes the MLS feed is allowed to overwrite."""
        return {name: getattr(self, name) for name in FEED_FIELDS}

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Listing":
        """Create a Listing from a dictionary (e.g., from a database row)."""
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}
        for name in _BOOL_FIELDS & values.keys():
            values[name] = bool(values[name])
        images = values.get("images")
        if isinstance(images, str):
            values["images"] = json.loads(images) if images else []
        elif images is None:
            values["images"] = []
        return cls(**values)


@dataclass
class ListingMedia:
    """An ordered image or other asset attached to a listing."""

    external_media_key: str
    external_key: str
    media_url: str
    external_id: str | None = None
    media_type: str | None = None
    media_object_id: str | None = None
    short_description: str | None = None
    long_description: str | None = None
    sequence: int = 0
    modification_timestamp: str | None = None
    id: int | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @property
    def is_photo(self) -> bool:
        return self.media_type == "Photo"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ListingMedia":
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})


__all__ = ["FEED_FIELDS", "Listing", "ListingMedia"]

from __future__ import annotations

import pytest

from mlssync.infrastructure.reso import (
    LUXURY_PRICE_THRESHOLD,
    ListingMappingError,
    RemoteListing,
    RemoteMedia,
    convert_listing,
    convert_media,
    is_luxury,
    sample_listing_records,
)


def _remote(**fields) -> RemoteListing:
    data = {"ListingKey": "GPRMLS-777", "ListingId": "777"}
    data.update(fields)
    return RemoteListing.model_validate(data)


@pytest.mark.parametrize(
    ("price", "expected"),
    [(750000, False), (750001, True), (None, False)],
)
def test_luxury_threshold(price, expected) -> None:
    listing = convert_listing(_remote(ListPrice=price))

    assert listing.luxury is expected
    assert is_luxury(price) is expected
    assert LUXURY_PRICE_THRESHOLD == 750_000


def test_sample_record_maps_to_canonical_listing() -> None:
    record = sample_listing_records("2025-01-01T00:00:00Z")[0]

    listing = convert_listing(
        RemoteListing.model_validate(record), synced_at="2025-01-02T00:00:00Z"
    )

    assert listing.external_id == "22520502"
    assert listing.external_key == "GPRMLS-001"
    assert listing.title == "4 Bed, 5 Bath Home in Elkhorn"
    assert listing.address == "21727 Cimarron Road"
    assert listing.price == 1195000
    assert listing.beds == 4
    assert listing.baths == 5
    assert listing.sqft == 3694
    assert listing.status == "active"
    assert listing.source_status == "Active"
    assert listing.mls_status == "Active"
    assert listing.property_type == "Residential"
    assert listing.property_subtype == "Single Family Residence"
    assert listing.listing_agent_key == "AGENT-001"
    assert listing.virtual_tour_url == "https://example.com/tour/1"
    assert listing.modification_timestamp == "2025-01-01T00:00:00Z"
    assert listing.coordinates == (41.2871, -96.2394)
    assert listing.luxury is True
    assert listing.images == []
    assert listing.featured is False
    assert listing.is_external_listing is True
    assert listing.last_synced_at == "2025-01-02T00:00:00Z"


def test_address_skips_missing_parts() -> None:
    assert convert_listing(_remote(StreetName="Farnam Street")).address == "Farnam Street"
    assert convert_listing(_remote(StreetNumber="12")).address == "12"
    assert convert_listing(_remote()).address is None


def test_title_without_city_or_counts() -> None:
    assert convert_listing(_remote()).title == "0 Bed, 0 Bath Home"
    assert convert_listing(_remote(BedroomsTotal=2, City="Omaha")).title == "2 Bed, 0 Bath Home in Omaha"


def test_state_defaults_only_when_omitted() -> None:
    assert convert_listing(_remote()).state == "NE"
    assert convert_listing(_remote(), default_state="IA").state == "IA"
    assert convert_listing(_remote(StateOrProvince="KS"), default_state="IA").state == "KS"


def test_absent_fields_stay_empty() -> None:
    listing = convert_listing(_remote())

    assert listing.price is None
    assert listing.status is None
    assert listing.source_status is None
    assert listing.description is None
    assert listing.virtual_tour_url is None
    assert listing.coordinates is None


def test_pending_status_is_lower_cased() -> None:
    listing = convert_listing(_remote(StandardStatus="Pending"))

    assert listing.status == "pending"
    assert listing.source_status == "Pending"


def test_numeric_identifiers_are_coerced_to_strings() -> None:
    listing = convert_listing(_remote(ListingId=22520502, PostalCode=68022))

    assert listing.external_id == "22520502"
    assert listing.postal_code == "68022"


def test_missing_listing_id_raises_mapping_error() -> None:
    with pytest.raises(ListingMappingError):
        convert_listing(RemoteListing.model_validate({"ListingKey": "K"}))


def test_missing_listing_key_maps_to_none() -> None:
    listing = convert_listing(RemoteListing.model_validate({"ListingId": "1"}))

    assert listing.external_id == "1"
    assert listing.external_key is None
    assert listing.is_external_listing


def test_convert_media_leaves_owner_id_blank() -> None:
    remote = RemoteMedia.model_validate(
        {
            "MediaKey": "M-1",
            "MediaObjectID": "OBJ-1",
            "ResourceRecordKey": "GPRMLS-001",
            "MediaURL": "https://cdn.example.com/1.jpg",
            "MediaType": "Photo",
            "ShortDescription": "Front",
            "Order": 3,
            "ModificationTimestamp": "2025-01-01T00:00:00Z",
        }
    )

    media = convert_media(remote)

    assert media.external_media_key == "M-1"
    assert media.external_key == "GPRMLS-001"
    assert media.external_id is None
    assert media.sequence == 3
    assert media.short_description == "Front"
    assert media.is_photo


def test_convert_media_defaults_sequence_and_requires_url() -> None:
    media = convert_media(
        RemoteMedia.model_validate({"MediaKey": "M-2", "MediaURL": "https://cdn/2.jpg"})
    )
    assert media.sequence == 0

    with pytest.raises(ListingMappingError):
        convert_media(RemoteMedia.model_validate({"MediaKey": "M-3"}))

from __future__ import annotations

import pytest

from mlssync.domain.models import FEED_FIELDS, Listing, ListingMedia, SyncRun, SyncRunStatus


def test_feed_fields_exclude_business_attributes() -> None:
    listing = Listing(external_id="1", title="t", featured=True, images=["a"])

    values = listing.feed_fields()

    assert set(values) == set(FEED_FIELDS)
    assert "featured" not in values
    assert "images" not in values
    assert "architectural_style" not in values
    assert values["external_id"] == "1"


def test_from_dict_decodes_database_row() -> None:
    listing = Listing.from_dict(
        {
            "id": 4,
            "external_id": "1",
            "title": "t",
            "images": '["https://cdn/1.jpg"]',
            "luxury": 1,
            "featured": 0,
            "is_external_listing": 1,
            "unknown_column": "ignored",
        }
    )

    assert listing.id == 4
    assert listing.images == ["https://cdn/1.jpg"]
    assert listing.luxury is True
    assert listing.featured is False
    assert listing.is_external_listing is True


def test_from_dict_handles_missing_images() -> None:
    assert Listing.from_dict({"external_id": "1", "title": "t", "images": None}).images == []
    assert Listing.from_dict({"external_id": "1", "title": "t", "images": ""}).images == []


def test_media_photo_flag() -> None:
    assert ListingMedia("M", "K", "u", media_type="Photo").is_photo
    assert not ListingMedia("M", "K", "u", media_type="Video").is_photo


def test_sync_run_status_round_trip() -> None:
    run = SyncRun.from_dict(
        {"id": 1, "sync_type": "properties", "status": "SUCCESS", "started_at": "s", "completed_at": "c"}
    )

    assert run.status is SyncRunStatus.SUCCESS
    assert run.is_finalized
    assert run.to_dict()["status"] == "success"
    assert not SyncRunStatus.IN_PROGRESS.is_terminal


def test_sync_run_status_rejects_unknown_values() -> None:
    with pytest.raises(ValueError):
        SyncRunStatus.from_string("")
    with pytest.raises(ValueError):
        SyncRunStatus.from_string("paused")

"""Shared pytest fixtures for the mlssync test suite."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from mlssync.app.config import ResoSettings  # noqa: E402
from mlssync.infrastructure.db import open_store  # noqa: E402
from mlssync.infrastructure.observability import get_registry  # noqa: E402
from mlssync.infrastructure.reso import (  # noqa: E402
    ConnectivityStatus,
    RemoteListing,
    RemoteMedia,
    SearchParams,
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep tests away from real config files, credentials and stale metrics."""
    for name in (
        "RESO_API_URL",
        "RESO_ACCESS_TOKEN",
        "RESO_CLIENT_ID",
        "RESO_CLIENT_SECRET",
        "MLSSYNC_HOME_REGION",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("MLSSYNC_CONFIG", str(tmp_path / "missing-config.json"))
    get_registry().reset()
    yield
    get_registry().reset()


@pytest.fixture
def store(tmp_path):
    with open_store(tmp_path / "mlssync.db") as opened:
        yield opened


def make_remote_listing(index: int, **overrides: Any) -> RemoteListing:
    data: dict[str, Any] = {
        "ListingKey": f"KEY-{index}",
        "ListingId": f"ID-{index}",
        "StandardStatus": "Active",
        "MlsStatus": "Active",
        "ListPrice": 400000 + index,
        "StreetNumber": str(100 + index),
        "StreetName": "Dodge Street",
        "City": "Omaha",
        "StateOrProvince": "NE",
        "PostalCode": "68102",
        "BedroomsTotal": 3,
        "BathroomsTotalInteger": 2,
        "ModificationTimestamp": "2025-01-01T00:00:00Z",
    }
    data.update(overrides)
    return RemoteListing.model_validate(data)


def make_remote_media(
    key: str,
    order: int,
    *,
    listing_key: str = "KEY-1",
    media_type: str = "Photo",
    url: str | None = None,
) -> RemoteMedia:
    return RemoteMedia.model_validate(
        {
            "MediaKey": key,
            "ResourceRecordKey": listing_key,
            "MediaURL": url if url is not None else f"https://cdn.example.com/{key}.jpg",
            "MediaType": media_type,
            "Order": order,
        }
    )


class StubListingClient:
    """In-memory stand-in for :class:`RemoteListingClient`."""

    def __init__(
        self,
        listings: list[RemoteListing | dict[str, Any]] | None = None,
        media: dict[str, list[RemoteMedia]] | None = None,
        *,
        search_error: Exception | None = None,
        media_error: Exception | None = None,
        probe_error: Exception | None = None,
    ) -> None:
        self.settings = ResoSettings()
        self.listings = listings or []
        self.media = media or {}
        self.search_error = search_error
        self.media_error = media_error
        self.probe_error = probe_error
        self.search_calls: list[SearchParams] = []
        self.media_calls: list[str] = []
        self.probes = 0

    def search_records(self, params: SearchParams | None = None) -> list[dict[str, Any]]:
        self.search_calls.append(params or SearchParams())
        if self.search_error is not None:
            raise self.search_error
        limit = (params or SearchParams()).limit
        return [
            item.model_dump(by_alias=True) if isinstance(item, RemoteListing) else dict(item)
            for item in self.listings[:limit]
        ]

    def get_media(self, listing_key: str) -> list[RemoteMedia]:
        self.media_calls.append(listing_key)
        if self.media_error is not None:
            raise self.media_error
        return list(self.media.get(listing_key, []))

    def configuration_status(self) -> ConnectivityStatus:
        return ConnectivityStatus(configured=False)

    def probe_connection(self) -> ConnectivityStatus:
        self.probes += 1
        if self.probe_error is not None:
            raise self.probe_error
        return ConnectivityStatus(configured=False, connected=False, error="not configured")

    def close(self) -> None:
        pass

    def __enter__(self) -> "StubListingClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


@pytest.fixture
def remote_listing_factory():
    return make_remote_listing


@pytest.fixture
def remote_media_factory():
    return make_remote_media


@pytest.fixture
def stub_client_cls():
    return StubListingClient

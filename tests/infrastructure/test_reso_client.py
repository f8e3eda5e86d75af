from __future__ import annotations

import json
from typing import Any

import pytest
import requests
from requests import Response

from mlssync.app.config import ResoSettings
from mlssync.infrastructure.http import ResoApiError, ResoHttpClient
from mlssync.infrastructure.observability import get_registry
from mlssync.infrastructure.observability.metrics import REMOTE_FALLBACKS
from mlssync.infrastructure.reso import (
    SAMPLE_EXTERNAL_IDS,
    RemoteListingClient,
    SearchParams,
)

BASE_URL = "https://api.example-mls.com/odata"


def _make_response(payload: Any, status: int = 200, *, text: str | None = None) -> Response:
    resp = Response()
    body = text if text is not None else json.dumps(payload)
    resp._content = body.encode("utf-8")
    resp.status_code = status
    resp.reason = "OK" if status < 400 else "Server Error"
    resp.url = BASE_URL
    return resp


class FakeSession:
    def __init__(self, responses: list[Response | Exception]) -> None:
        self.responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        outcome = self.responses.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self) -> None:
        pass


def _client(session: FakeSession, **settings: Any) -> RemoteListingClient:
    reso_settings = ResoSettings(base_url=BASE_URL, access_token="secret", **settings)
    http = ResoHttpClient(
        base_url=BASE_URL,
        access_token=reso_settings.access_token,
        timeout_seconds=reso_settings.timeout_seconds,
        session=session,
    )
    return RemoteListingClient(reso_settings, http_client=http, clock=lambda: "2025-02-01T00:00:00Z")


def test_unconfigured_search_returns_sample_listings() -> None:
    client = RemoteListingClient(ResoSettings())

    first = client.search()
    second = client.search(SearchParams(city="Nowhere", min_price=5_000_000))

    assert [item.listing_id for item in first] == list(SAMPLE_EXTERNAL_IDS)
    assert [item.listing_id for item in second] == list(SAMPLE_EXTERNAL_IDS)
    counter = get_registry().counter(REMOTE_FALLBACKS)
    assert counter.get({"reason": "unconfigured", "resource": "Property"}) == 2


def test_sample_fallback_respects_limit() -> None:
    client = RemoteListingClient(ResoSettings())

    listings = client.search(SearchParams(limit=2))

    assert [item.listing_id for item in listings] == ["22520502", "22520385"]


def test_sample_records_are_stamped_with_the_request_time() -> None:
    client = RemoteListingClient(ResoSettings(), clock=lambda: "2025-03-04T05:06:07Z")

    listings = client.search()

    assert {item.modification_timestamp for item in listings} == {"2025-03-04T05:06:07Z"}
    assert listings[1].virtual_tour_url is None


def test_search_sends_odata_query_with_bearer_token() -> None:
    session = FakeSession(
        [_make_response({"value": [{"ListingKey": "K1", "ListingId": "100", "ListPrice": 500000}]})]
    )
    client = _client(session)

    listings = client.search(SearchParams(city="Omaha", limit=10, offset=20))

    assert [item.listing_id for item in listings] == ["100"]
    call = session.calls[0]
    assert call["url"] == f"{BASE_URL}/Property"
    assert call["params"] == {
        "$filter": "City eq 'Omaha' and StandardStatus eq 'Active'",
        "$orderby": "ModificationTimestamp desc",
        "$top": 10,
        "$skip": 20,
    }
    assert call["headers"]["Authorization"] == "Bearer secret"
    assert call["headers"]["User-Agent"].startswith("mlssync-client/")
    assert call["timeout"] == 30.0


def test_search_omits_skip_without_offset() -> None:
    session = FakeSession([_make_response({"value": []})])

    assert _client(session).search() == []
    assert "$skip" not in session.calls[0]["params"]
    assert session.calls[0]["params"]["$top"] == 50


def test_http_error_falls_back_to_sample_data() -> None:
    session = FakeSession([_make_response({"error": "boom"}, status=500)])

    listings = _client(session).search()

    assert [item.listing_id for item in listings] == list(SAMPLE_EXTERNAL_IDS)
    counter = get_registry().counter(REMOTE_FALLBACKS)
    assert counter.get({"reason": "request_failed", "resource": "Property"}) == 1


def test_network_error_falls_back_to_sample_data() -> None:
    session = FakeSession([requests.ConnectionError("connection refused")])

    listings = _client(session).search()

    assert len(listings) == 3


def test_missing_value_array_falls_back_to_sample_data() -> None:
    session = FakeSession([_make_response({"items": []})])

    assert len(_client(session).search()) == 3


def test_invalid_records_are_dropped() -> None:
    session = FakeSession(
        [
            _make_response(
                {
                    "value": [
                        {"ListingKey": "K1", "ListingId": "1", "ListPrice": "not-a-number"},
                        {"ListingKey": "K2", "ListingId": "2", "ListPrice": 1000},
                    ]
                }
            )
        ]
    )

    listings = _client(session).search()

    assert [item.listing_key for item in listings] == ["K2"]


def test_get_by_external_key_uses_listing_key_filter() -> None:
    session = FakeSession([_make_response({"value": [{"ListingKey": "K9", "ListingId": "9"}]})])

    listing = _client(session).get_by_external_key("K9")

    assert listing is not None and listing.listing_id == "9"
    assert session.calls[0]["params"] == {"$filter": "ListingKey eq 'K9'"}


def test_get_by_external_key_returns_none_when_absent() -> None:
    session = FakeSession([_make_response({"value": []})])

    assert _client(session).get_by_external_key("missing") is None


def test_get_by_external_key_in_fallback_mode_searches_samples() -> None:
    client = RemoteListingClient(ResoSettings())

    listing = client.get_by_external_key("GPRMLS-002")

    assert listing is not None
    assert listing.listing_id == "22520385"
    assert client.get_by_external_key("GPRMLS-999") is None


def test_get_media_queries_by_resource_record_key() -> None:
    session = FakeSession(
        [
            _make_response(
                {
                    "value": [
                        {"MediaKey": "M1", "ResourceRecordKey": "K1", "MediaURL": "https://x/1.jpg", "Order": 0},
                        {"MediaKey": "M2", "ResourceRecordKey": "K1", "MediaURL": "https://x/2.jpg", "Order": 1},
                    ]
                }
            )
        ]
    )

    media = _client(session).get_media("K1")

    assert [item.media_key for item in media] == ["M1", "M2"]
    assert session.calls[0]["url"] == f"{BASE_URL}/Media"
    assert session.calls[0]["params"] == {
        "$filter": "ResourceRecordKey eq 'K1'",
        "$orderby": "Order",
    }


def test_get_media_failure_returns_empty_list() -> None:
    session = FakeSession([_make_response({}, status=503)])

    assert _client(session).get_media("K1") == []
    assert RemoteListingClient(ResoSettings()).get_media("GPRMLS-001") == []


def test_probe_connection_success() -> None:
    session = FakeSession([_make_response(None, text="<edmx:Edmx/>")])

    status = _client(session).probe_connection()

    assert status.configured is True
    assert status.connected is True
    assert status.has_access_token is True
    assert status.checked_at == "2025-02-01T00:00:00Z"
    assert session.calls[0]["url"] == f"{BASE_URL}/$metadata"


def test_probe_connection_failure_reports_error() -> None:
    session = FakeSession([_make_response(None, status=401, text="denied")])

    status = _client(session).probe_connection()

    assert status.connected is False
    assert "401" in (status.error or "")
    assert status.uses_sample_data


def test_probe_without_configuration_makes_no_request() -> None:
    client = RemoteListingClient(ResoSettings(client_id="id", client_secret="shh"))

    status = client.probe_connection()

    assert status.configured is False
    assert status.connected is False
    assert status.has_client_credentials is True


def test_configuration_status_does_not_probe() -> None:
    session = FakeSession([])

    status = _client(session).configuration_status()

    assert status.connected is None
    assert session.calls == []


def test_unencodable_credentials_fall_back_to_sample_data() -> None:
    error = UnicodeEncodeError("latin-1", "Bearer tok€en", 10, 11, "ordinal not in range(256)")
    session = FakeSession([error, error])
    client = _client(session)

    listings = client.search()
    status = client.probe_connection()

    assert [item.listing_id for item in listings] == list(SAMPLE_EXTERNAL_IDS)
    assert status.connected is False
    assert "latin-1" in (status.error or "")


def test_http_client_wraps_encoding_errors() -> None:
    error = UnicodeEncodeError("latin-1", "tok€en", 3, 4, "ordinal not in range(256)")
    http = ResoHttpClient(base_url=BASE_URL, access_token="tok€en", session=FakeSession([error]))

    with pytest.raises(ResoApiError):
        http.get_records("Property")


def test_search_records_keeps_malformed_records() -> None:
    session = FakeSession(
        [
            _make_response(
                {
                    "value": [
                        {"ListingKey": "K1", "ListingId": "1", "ListPrice": "N/A"},
                        {"ListingKey": "K2", "ListingId": "2", "ListPrice": 1000},
                    ]
                }
            )
        ]
    )

    records = _client(session).search_records()

    assert [record["ListingKey"] for record in records] == ["K1", "K2"]

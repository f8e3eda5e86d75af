"""Client for the RESO listing feed.

:class:`RemoteListingClient` turns structured searches into OData queries and
returns validated :class:`RemoteListing`/:class:`RemoteMedia` records. It never
raises to its caller: when the provider is unconfigured or a request fails it
falls back to the built-in sample listings (or no media), logs the fallback
and records a metric.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from mlssync.app.config import ResoSettings
from mlssync.infrastructure.db.connection import iso_utcnow
from mlssync.infrastructure.http import ResoHttpClient
from mlssync.infrastructure.observability import get_logger, record_remote_fallback

from .models import ConnectivityStatus, RemoteListing, RemoteMedia, SearchParams
from .sample_data import sample_listing_records

logger = get_logger(__name__)

PROPERTY_RESOURCE = "Property"
MEDIA_RESOURCE = "Media"
METADATA_RESOURCE = "$metadata"

DEFAULT_STATUS = "Active"

_RecordT = TypeVar("_RecordT", bound=BaseModel)


def _quote(value: str) -> str:
    escaped = str(value).replace("'", "''")
    return f"'{escaped}'"


def _number(value: float | int) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_filter(params: SearchParams) -> str:
    """Build the OData ``$filter`` expression for a search.

    Clauses appear in a fixed order and are joined with ``and``; unset
    parameters produce no clause. Several statuses become a parenthesised
    ``or`` group, no statuses means ``StandardStatus eq 'Active'``.
    """
    clauses: list[str] = []
    if params.city:
        clauses.append(f"City eq {_quote(params.city)}")
    if params.state:
        clauses.append(f"StateOrProvince eq {_quote(params.state)}")
    if params.postal_code:
        clauses.append(f"PostalCode eq {_quote(params.postal_code)}")
    if params.min_price is not None:
        clauses.append(f"ListPrice ge {_number(params.min_price)}")
    if params.max_price is not None:
        clauses.append(f"ListPrice le {_number(params.max_price)}")
    if params.min_beds is not None:
        clauses.append(f"BedroomsTotal ge {_number(params.min_beds)}")
    if params.min_baths is not None:
        clauses.append(f"BathroomsTotalInteger ge {_number(params.min_baths)}")
    if params.property_type:
        clauses.append(f"PropertyType eq {_quote(params.property_type)}")

    statuses = [status for status in (params.statuses or []) if status]
    if statuses:
        group = " or ".join(f"StandardStatus eq {_quote(status)}" for status in statuses)
        clauses.append(f"({group})")
    else:
        clauses.append(f"StandardStatus eq {_quote(DEFAULT_STATUS)}")
    return " and ".join(clauses)


class RemoteListingClient:
    """Search and fetch listings and media from a RESO/OData provider."""

    build_filter = staticmethod(build_filter)

    def __init__(
        self,
        settings: ResoSettings | None = None,
        *,
        http_client: ResoHttpClient | None = None,
        clock: Callable[[], str] = iso_utcnow,
    ) -> None:
        self.settings = settings or ResoSettings()
        if http_client is None and self.settings.is_configured:
            http_client = ResoHttpClient(
                base_url=self.settings.base_url,
                access_token=self.settings.access_token,
                timeout_seconds=self.settings.timeout_seconds,
            )
        self._http = http_client
        self._clock = clock

    @property
    def is_configured(self) -> bool:
        return self._http is not None

    # -------------------- queries --------------------
    def search(self, params: SearchParams | None = None) -> list[RemoteListing]:
        """Return listings matching ``params``, newest modification first."""
        return self._parse(self.search_records(params), RemoteListing)

    def search_records(self, params: SearchParams | None = None) -> list[dict[str, Any]]:
        """Like :meth:`search` but return the raw ``Property`` records unvalidated.

        Callers that must account for every record the feed returned, malformed
        ones included, validate each record themselves.
        """
        params = params or SearchParams()
        query: dict[str, Any] = {
            "$filter": build_filter(params),
            "$orderby": "ModificationTimestamp desc",
            "$top": params.limit,
        }
        if params.offset:
            query["$skip"] = params.offset

        def sample() -> list[dict[str, Any]]:
            return sample_listing_records(self._clock())[: params.limit]

        return self._fetch(PROPERTY_RESOURCE, query, fallback=sample)

    def get_by_external_key(self, key: str) -> RemoteListing | None:
        """Look up one listing by its provider key; ``None`` when absent."""
        query = {"$filter": f"ListingKey eq {_quote(key)}"}

        def sample() -> list[dict[str, Any]]:
            return [
                record
                for record in sample_listing_records(self._clock())
                if record.get("ListingKey") == key
            ]

        listings = self._parse(self._fetch(PROPERTY_RESOURCE, query, fallback=sample), RemoteListing)
        return listings[0] if listings else None

    def get_media(self, listing_key: str) -> list[RemoteMedia]:
        """Return media records for a listing in provider ``Order``."""
        query = {
            "$filter": f"ResourceRecordKey eq {_quote(listing_key)}",
            "$orderby": "Order",
        }
        records = self._fetch(MEDIA_RESOURCE, query, fallback=list)
        return self._parse(records, RemoteMedia)

    # -------------------- connectivity --------------------
    def configuration_status(self) -> ConnectivityStatus:
        """Describe the configuration without touching the network."""
        return ConnectivityStatus(
            configured=self.is_configured,
            connected=None,
            base_url=self.settings.base_url,
            has_access_token=bool(self.settings.access_token),
            has_client_credentials=self.settings.has_client_credentials,
        )

    def probe_connection(self) -> ConnectivityStatus:
        """Issue a ``$metadata`` request and report whether it succeeded."""
        base = self.configuration_status()
        checked_at = self._clock()
        if self._http is None:
            return base.model_copy(
                update={
                    "connected": False,
                    "checked_at": checked_at,
                    "error": "RESO API base URL is not configured",
                }
            )
        try:
            self._http.fetch_text(METADATA_RESOURCE)
        except Exception as exc:
            logger.warning("RESO connectivity probe failed: %s", exc)
            return base.model_copy(
                update={"connected": False, "checked_at": checked_at, "error": str(exc)}
            )
        return base.model_copy(update={"connected": True, "checked_at": checked_at})

    def close(self) -> None:
        if self._http is not None:
            self._http.close()

    def __enter__(self) -> "RemoteListingClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -------------------- internals --------------------
    def _fetch(
        self,
        resource: str,
        query: dict[str, Any],
        *,
        fallback: Callable[[], list[dict[str, Any]]],
    ) -> list[dict[str, Any]]:
        if self._http is None:
            logger.info("RESO API not configured; using fallback data for %s", resource)
            record_remote_fallback(resource, "unconfigured")
            return fallback()
        try:
            return self._http.get_records(resource, query)
        except Exception as exc:
            logger.warning("RESO %s request failed, using fallback data: %s", resource, exc)
            record_remote_fallback(resource, "request_failed")
            return fallback()

    @staticmethod
    def _parse(records: Iterable[dict[str, Any]], model: type[_RecordT]) -> list[_RecordT]:
        parsed: list[_RecordT] = []
        for record in records:
            try:
                parsed.append(model.model_validate(record))
            except ValidationError as exc:
                logger.warning(
                    "Skipping invalid %s record: %s",
                    model.__name__,
                    exc.errors(include_url=False),
                )
        return parsed


__all__ = [
    "DEFAULT_STATUS",
    "RemoteListingClient",
    "build_filter",
]

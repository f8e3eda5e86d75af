"""HTTP client for RESO/OData listing APIs.

This module centralises HTTP access to the MLS provider. It maintains a
:class:`requests.Session`, attaches the bearer token when one is configured
and turns every transport or protocol problem into a :class:`ResoApiError`
so callers have a single failure type to handle.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import urljoin

import requests
from requests import Response, Session

from mlssync.infrastructure.observability import get_logger

logger = get_logger(__name__)


class ResoApiError(Exception):
    """Raised when a request to the RESO API fails or returns unusable data."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class ResoHttpClient:
    """Thin authenticated GET helper for an OData endpoint."""

    def __init__(
        self,
        *,
        base_url: str,
        access_token: str | None = None,
        timeout_seconds: float = 30.0,
        session: Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.access_token = access_token
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    # -------------------- request helpers --------------------
    def build_url(self, endpoint: str) -> str:
        return urljoin(self.base_url + "/", endpoint.lstrip("/"))

    def _prepare_headers(self, accept: str) -> dict[str, str]:
        from mlssync import __version__

        headers = {
            "Accept": accept,
            "User-Agent": f"mlssync-client/{__version__}",
        }
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def _get(
        self, endpoint: str, params: dict[str, Any] | None, accept: str
    ) -> Response:
        url = self.build_url(endpoint)
        clean_params = {k: v for k, v in (params or {}).items() if v is not None}
        try:
            response = self.session.get(
                url,
                params=clean_params,
                headers=self._prepare_headers(accept),
                timeout=self.timeout_seconds,
            )
        except (requests.RequestException, ValueError) as exc:
            # ValueError covers header values http.client cannot encode.
            logger.warning("RESO request to %s failed: %s", url, exc)
            raise ResoApiError(f"Request to {url} failed: {exc}") from exc
        self._raise_for_status(response)
        return response

    def _raise_for_status(self, response: Response) -> None:
        if 200 <= response.status_code < 300:
            return
        reason = response.reason or ""
        message = f"RESO API error: {response.status_code} {reason}".strip()
        logger.warning("%s (%s)", message, response.url)
        raise ResoApiError(message, status=response.status_code)

    # -------------------- convenience --------------------
    def get_json(
        self, endpoint: str, params: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """GET an OData resource and return the decoded JSON envelope."""
        response = self._get(endpoint, params, accept="application/json")
        try:
            payload = response.json()
        except ValueError as exc:
            raise ResoApiError(f"Failed to parse JSON response: {exc}") from exc
        if not isinstance(payload, dict):
            raise ResoApiError("Unexpected JSON payload; expected an object")
        return payload

    def get_records(
        self, endpoint: str, params: dict[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """GET an OData collection and return its ``value`` array."""
        payload = self.get_json(endpoint, params)
        records = payload.get("value")
        if not isinstance(records, list):
            raise ResoApiError("OData response is missing the 'value' array")
        return [record for record in records if isinstance(record, dict)]

    def fetch_text(self, endpoint: str) -> str:
        """GET a resource and return decoded text (used for ``$metadata``)."""
        response = self._get(endpoint, None, accept="application/xml")
        response.encoding = response.encoding or "utf-8"
        return response.text

    def close(self) -> None:
        self.session.close()


__all__ = ["ResoApiError", "ResoHttpClient"]

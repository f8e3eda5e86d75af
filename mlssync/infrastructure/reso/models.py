"""Pydantic shapes for RESO search requests and remote records."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SearchParams(BaseModel):
    """Structured listing search translated into an OData ``$filter``."""

    model_config = ConfigDict(extra="forbid")

    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    min_beds: int | None = None
    min_baths: int | None = None
    property_type: str | None = None
    statuses: list[str] | None = None
    limit: int = Field(default=50, ge=1)
    offset: int | None = Field(default=None, ge=0)


class _ResoRecord(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )


class RemoteListing(_ResoRecord):
    """A RESO ``Property`` record as returned by the provider."""

    listing_key: str | None = Field(default=None, alias="ListingKey")
    listing_id: str | None = Field(default=None, alias="ListingId")
    mls_status: str | None = Field(default=None, alias="MlsStatus")
    standard_status: str | None = Field(default=None, alias="StandardStatus")
    list_price: float | None = Field(default=None, alias="ListPrice")
    original_list_price: float | None = Field(default=None, alias="OriginalListPrice")
    days_on_market: int | None = Field(default=None, alias="DaysOnMarket")
    listing_contract_date: str | None = Field(default=None, alias="ListingContractDate")
    modification_timestamp: str | None = Field(default=None, alias="ModificationTimestamp")
    street_number: str | None = Field(default=None, alias="StreetNumber")
    street_name: str | None = Field(default=None, alias="StreetName")
    city: str | None = Field(default=None, alias="City")
    state_or_province: str | None = Field(default=None, alias="StateOrProvince")
    postal_code: str | None = Field(default=None, alias="PostalCode")
    bedrooms_total: int | None = Field(default=None, alias="BedroomsTotal")
    bathrooms_total_integer: int | None = Field(default=None, alias="BathroomsTotalInteger")
    living_area: int | None = Field(default=None, alias="LivingArea")
    year_built: int | None = Field(default=None, alias="YearBuilt")
    property_type: str | None = Field(default=None, alias="PropertyType")
    property_sub_type: str | None = Field(default=None, alias="PropertySubType")
    list_agent_key: str | None = Field(default=None, alias="ListAgentKey")
    list_office_name: str | None = Field(default=None, alias="ListOfficeName")
    photo_count: int | None = Field(default=None, alias="PhotoCount")
    virtual_tour_url: str | None = Field(default=None, alias="VirtualTourURLUnbranded")
    public_remarks: str | None = Field(default=None, alias="PublicRemarks")
    latitude: float | None = Field(default=None, alias="Latitude")
    longitude: float | None = Field(default=None, alias="Longitude")


class RemoteMedia(_ResoRecord):
    """A RESO ``Media`` record attached to a listing."""

    media_key: str | None = Field(default=None, alias="MediaKey")
    media_object_id: str | None = Field(default=None, alias="MediaObjectID")
    resource_record_key: str | None = Field(default=None, alias="ResourceRecordKey")
    media_url: str | None = Field(default=None, alias="MediaURL")
    media_type: str | None = Field(default=None, alias="MediaType")
    short_description: str | None = Field(default=None, alias="ShortDescription")
    long_description: str | None = Field(default=None, alias="LongDescription")
    order: int | None = Field(default=None, alias="Order")
    modification_timestamp: str | None = Field(default=None, alias="ModificationTimestamp")


class ConnectivityStatus(BaseModel):
    """Point-in-time view of the provider configuration and reachability.

    ``connected`` is ``None`` when no probe was made.
    """

    model_config = ConfigDict(frozen=True)

    configured: bool
    connected: bool | None = None
    base_url: str = ""
    has_access_token: bool = False
    has_client_credentials: bool = False
    checked_at: str | None = None
    error: str | None = None

    @property
    def uses_sample_data(self) -> bool:
        return not self.configured or self.connected is False


__all__ = ["ConnectivityStatus", "RemoteListing", "RemoteMedia", "SearchParams"]

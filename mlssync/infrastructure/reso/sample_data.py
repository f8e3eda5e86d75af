"""Built-in listing records served when the provider cannot be reached.

The set is fixed so that the whole pipeline can be exercised without
credentials. Only ``ModificationTimestamp`` varies: it is stamped with the
time of the request, as a live feed would report freshly changed records.
"""

from __future__ import annotations

import copy
from typing import Any

SAMPLE_EXTERNAL_IDS: tuple[str, ...] = ("22520502", "22520385", "22520377")

_SAMPLE_LISTINGS: tuple[dict[str, Any], ...] = (
    {
        "ListingKey": "GPRMLS-001",
        "ListingId": "22520502",
        "MlsStatus": "Active",
        "StandardStatus": "Active",
        "ListPrice": 1195000,
        "OriginalListPrice": 1195000,
        "DaysOnMarket": 45,
        "ListingContractDate": "2024-12-01T00:00:00Z",
        "StreetNumber": "21727",
        "StreetName": "Cimarron Road",
        "City": "Elkhorn",
        "StateOrProvince": "NE",
        "PostalCode": "68022",
        "BedroomsTotal": 4,
        "BathroomsTotalInteger": 5,
        "LivingArea": 3694,
        "YearBuilt": 2020,
        "PropertyType": "Residential",
        "PropertySubType": "Single Family Residence",
        "ListAgentKey": "AGENT-001",
        "ListOfficeName": "Bjork Group - Berkshire Hathaway",
        "PhotoCount": 25,
        "VirtualTourURLUnbranded": "https://example.com/tour/1",
        "PublicRemarks": (
            "Stunning luxury home with modern amenities and beautiful "
            "landscaping in prestigious Elkhorn location."
        ),
        "Latitude": 41.2871,
        "Longitude": -96.2394,
    },
    {
        "ListingKey": "GPRMLS-002",
        "ListingId": "22520385",
        "MlsStatus": "Active",
        "StandardStatus": "Active",
        "ListPrice": 850000,
        "OriginalListPrice": 875000,
        "DaysOnMarket": 23,
        "ListingContractDate": "2024-12-15T00:00:00Z",
        "StreetNumber": "2904",
        "StreetName": "Georgian Court",
        "City": "Lincoln",
        "StateOrProvince": "NE",
        "PostalCode": "68502",
        "BedroomsTotal": 4,
        "BathroomsTotalInteger": 4,
        "LivingArea": 3244,
        "YearBuilt": 2024,
        "PropertyType": "Residential",
        "PropertySubType": "Single Family Residence",
        "ListAgentKey": "AGENT-002",
        "ListOfficeName": "Bjork Group - Berkshire Hathaway",
        "PhotoCount": 18,
        "PublicRemarks": (
            "Brand new home with contemporary design and energy-efficient "
            "features in desirable Lincoln area."
        ),
        "Latitude": 40.8136,
        "Longitude": -96.7025,
    },
    {
        "ListingKey": "GPRMLS-003",
        "ListingId": "22520377",
        "MlsStatus": "Active",
        "StandardStatus": "Active",
        "ListPrice": 1995000,
        "OriginalListPrice": 1995000,
        "DaysOnMarket": 67,
        "ListingContractDate": "2024-11-10T00:00:00Z",
        "StreetNumber": "13824",
        "StreetName": "Cuming Street",
        "City": "Omaha",
        "StateOrProvince": "NE",
        "PostalCode": "68154",
        "BedroomsTotal": 5,
        "BathroomsTotalInteger": 6,
        "LivingArea": 7460,
        "YearBuilt": 2018,
        "PropertyType": "Residential",
        "PropertySubType": "Single Family Residence",
        "ListAgentKey": "AGENT-001",
        "ListOfficeName": "Bjork Group - Berkshire Hathaway",
        "PhotoCount": 45,
        "VirtualTourURLUnbranded": "https://example.com/tour/3",
        "PublicRemarks": (
            "Exceptional luxury home with premium finishes and extensive "
            "amenities in prestigious West Omaha location."
        ),
        "Latitude": 41.2619,
        "Longitude": -96.1951,
    },
)


def sample_listing_records(modified_at: str) -> list[dict[str, Any]]:
    """Return fresh copies of the sample records stamped with ``modified_at``."""
    records = copy.deepcopy(list(_SAMPLE_LISTINGS))
    for record in records:
        record["ModificationTimestamp"] = modified_at
    return records


__all__ = ["SAMPLE_EXTERNAL_IDS", "sample_listing_records"]

"""HTTP adapters for mlssync.

This package provides the HTTP transport used to talk to RESO/OData
listing providers.
"""

from .client import ResoApiError, ResoHttpClient

__all__ = [
    "ResoApiError",
    "ResoHttpClient",
]

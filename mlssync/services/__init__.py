"""Service layer modules for mlssync."""

from .sync_service import SyncService  # noqa: F401

__all__ = ["SyncService"]

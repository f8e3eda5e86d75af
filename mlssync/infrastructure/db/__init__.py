from .config import (DEFAULT_DB_TIMEOUT, get_default_timeout, get_path_config,
                     load_config)
from .connection import (ConnectionOptions, DatabaseError, apply_pragmas,
                         get_connection, iso_utcnow)
from .schema import SchemaMigrator, ensure_schema
from .store import SqliteListingStore, open_store

__all__ = [
    "ConnectionOptions",
    "DEFAULT_DB_TIMEOUT",
    "DatabaseError",
    "apply_pragmas",
    "get_connection",
    "get_default_timeout",
    "get_path_config",
    "iso_utcnow",
    "load_config",
    "open_store",
    "SchemaMigrator",
    "SqliteListingStore",
    "ensure_schema",
]

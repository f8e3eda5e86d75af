"""Base service class with shared store and infrastructure patterns.

This module provides a base class for service layer implementations,
standardizing store management, logging and schema initialization.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from pathlib import Path
from typing import Any, Callable, TypeVar

from mlssync.infrastructure.db import SqliteListingStore, get_path_config, open_store
from mlssync.infrastructure.observability import get_logger

StoreFactory = Callable[[], AbstractContextManager[SqliteListingStore]]
T = TypeVar("T")
ServiceT = TypeVar("ServiceT", bound="BaseService")


class BaseService:
    """Base class for all service layer implementations.

    Provides shared infrastructure for:
    - Store factory pattern (dependency injection for testing)
    - Automatic schema initialization through :func:`open_store`
    - Consistent logging setup

    Example usage:
        service = SyncService.from_sqlite_path("/path/to/mlssync.db")
    """

    def __init__(self, store_factory: StoreFactory) -> None:
        """Initialize service with a store factory.

        Args:
            store_factory: Callable returning a context manager that yields
                           a :class:`SqliteListingStore`
        """
        self._store_factory = store_factory
        self._logger = get_logger(self.__class__.__module__)

    @classmethod
    def from_sqlite_path(
        cls: type[ServiceT], db_path: str | Path | None = None, **kwargs: Any
    ) -> ServiceT:
        """Create a service bound to a SQLite database path.

        Args:
            db_path: Path to the SQLite database file; defaults to the
                configured ``paths.db_path``.
            **kwargs: Extra keyword arguments for the service constructor.

        Returns:
            Service instance configured to use the specified database
        """
        resolved = db_path or get_path_config()["db_path"]

        def store_factory() -> AbstractContextManager[SqliteListingStore]:
            return open_store(resolved)

        return cls(store_factory, **kwargs)

    def _with_store(self, fn: Callable[[SqliteListingStore], T]) -> T:
        """Execute a function with a freshly opened store."""
        with self._store_factory() as store:
            return fn(store)

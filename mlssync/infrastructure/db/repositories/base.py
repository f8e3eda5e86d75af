"""Base repository class with shared database query helpers.

This module provides a base class for all repository implementations,
eliminating duplicate cursor→dict conversion and column-update logic.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Collection, Mapping
from typing import Any


class BaseRepository:
    """Base class for all repository implementations."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        """Initialize repository with a database connection.

        Args:
            conn: SQLite database connection
        """
        self.conn = conn

    def _fetch_all_as_dicts(
        self, query: str, params: tuple[Any, ...] | None = None
    ) -> list[dict[str, Any]]:
        """Execute query and return all rows as dictionaries.

        Example:
            >>> rows = self._fetch_all_as_dicts(
            ...     "SELECT id, external_id FROM listings WHERE city = ?",
            ...     ("Omaha",)
            ... )
            >>> rows[0]['external_id']
            '22520377'
        """
        cur = self.conn.execute(query, params or ())
        columns = [c[0] for c in cur.description]
        return [dict(zip(columns, row)) for row in cur.fetchall()]

    def _fetch_one_as_dict(
        self, query: str, params: tuple[Any, ...] | None = None
    ) -> dict[str, Any] | None:
        """Execute query and return first row as dictionary, or None."""
        cur = self.conn.execute(query, params or ())
        row = cur.fetchone()
        if not row:
            return None
        columns = [c[0] for c in cur.description]
        return dict(zip(columns, row))

    def _fetch_scalar(self, query: str, params: tuple[Any, ...] | None = None) -> Any:
        """Execute query and return first column of first row."""
        cur = self.conn.execute(query, params or ())
        row = cur.fetchone()
        return row[0] if row else None

    def _execute_insert(self, query: str, params: tuple[Any, ...] | None = None) -> int:
        """Execute INSERT query and return last row ID."""
        cur = self.conn.execute(query, params or ())
        if cur.lastrowid is None:
            raise RuntimeError("INSERT did not produce a row id")
        return int(cur.lastrowid)

    def _execute(
        self, query: str, params: tuple[Any, ...] | None = None
    ) -> sqlite3.Cursor:
        """Execute query and return cursor for custom processing."""
        return self.conn.execute(query, params or ())

    def _insert_row(
        self, table: str, values: Mapping[str, Any], allowed: Collection[str]
    ) -> int:
        """Insert ``values`` into ``table`` after checking column names."""
        self._check_columns(table, values, allowed)
        columns = list(values)
        placeholders = ", ".join("?" for _ in columns)
        return self._execute_insert(
            f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})",
            tuple(values[c] for c in columns),
        )

    def _update_row(
        self,
        table: str,
        row_id: int,
        values: Mapping[str, Any],
        allowed: Collection[str],
    ) -> bool:
        """Update selected columns of one row. Returns True if a row changed."""
        if not values:
            return False
        self._check_columns(table, values, allowed)
        assignments = ", ".join(f"{column} = ?" for column in values)
        cur = self._execute(
            f"UPDATE {table} SET {assignments} WHERE id = ?",
            (*values.values(), row_id),
        )
        return cur.rowcount > 0

    @staticmethod
    def _check_columns(
        table: str, values: Mapping[str, Any], allowed: Collection[str]
    ) -> None:
        unknown = [column for column in values if column not in allowed]
        if unknown:
            raise ValueError(f"Unknown {table} column(s): {', '.join(sorted(unknown))}")

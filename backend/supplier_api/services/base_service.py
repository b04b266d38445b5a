"""
BaseService: query helpers shared by the domain services.

Services never open connections themselves; routers pass in the
request-scoped connection borrowed from the Database handle.
"""
from __future__ import annotations

import sqlite3
from typing import Any

from ..store import row_to_vendor
from .query_builder import QueryBuilder


class BaseService:
    """Base class for domain services."""

    def _count(self, conn: sqlite3.Connection, qb: QueryBuilder) -> int:
        """Number of rows (or groups) the builder matches."""
        sql, params = qb.build_count()
        return conn.execute(sql, params).fetchone()[0]

    def _select(self, conn: sqlite3.Connection, qb: QueryBuilder, columns: str) -> list[sqlite3.Row]:
        """Run the builder's SELECT for ``columns``."""
        return self._execute_many(conn, *qb.build_select(columns))

    def _fetch_vendors(self, conn: sqlite3.Connection, qb: QueryBuilder, columns: str) -> list[dict]:
        """Matched vendor rows rebuilt as nested documents."""
        return [row_to_vendor(row) for row in self._select(conn, qb, columns)]

    def _execute_many(
        self,
        conn: sqlite3.Connection,
        sql: str,
        params: list[Any] | tuple = (),
    ) -> list[sqlite3.Row]:
        """Execute raw SQL expecting multiple rows."""
        return conn.execute(sql, params).fetchall()

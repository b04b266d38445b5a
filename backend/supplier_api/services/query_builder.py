"""
QueryBuilder: fluent SQL query construction with parameterized queries.

Vendor documents keep their array fields (services, coverage, brands) as JSON
text, so the directory filters match array elements through ``json_each``.
All user inputs go through ? parameterized placeholders.
"""
from __future__ import annotations

from typing import Any

LIKE_ESCAPE = "\\"


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class QueryBuilder:
    """Fluent SQL query builder with safe parameterization."""

    def __init__(self, base_table: str):
        """
        Args:
            base_table: Table name with optional alias, e.g. "vendors v"
        """
        self.base_table = base_table
        self._conditions: list[str] = []
        self._params: list[Any] = []
        self._order_by: str | None = None
        self._limit: int | None = None
        self._group_by: str | None = None

    # --- Generic where ---

    def where(self, condition: str, *params: Any) -> QueryBuilder:
        """Add a WHERE condition with parameters."""
        self._conditions.append(condition)
        self._params.extend(params)
        return self

    # --- Domain-specific filters ---

    def filter_listing_eligible(self, alias: str = "v") -> QueryBuilder:
        """Active verified accounts, or unclaimed directory placeholders."""
        self._conditions.append(
            f"(({alias}.account_status = ? AND {alias}.verification_status = ?)"
            f" OR {alias}.listing_status = ?)"
        )
        self._params.extend(["active", "verified", "unclaimed"])
        return self

    def filter_active_verified(self, alias: str = "v") -> QueryBuilder:
        """Active verified accounts only (unclaimed placeholders excluded)."""
        self._conditions.append(f"{alias}.account_status = ? AND {alias}.verification_status = ?")
        self._params.extend(["active", "verified"])
        return self

    def filter_service(self, service: str | None, column: str = "v.services") -> QueryBuilder:
        """Require a case-insensitive exact match against any element of a JSON array."""
        if service:
            self._conditions.append(
                f"EXISTS (SELECT 1 FROM json_each({column}) WHERE casefold(json_each.value) = casefold(?))"
            )
            self._params.append(service)
        return self

    @staticmethod
    def _like_clauses(columns: list[str], array_columns: list[str]) -> list[str]:
        clauses = [f"casefold({col}) LIKE casefold(?) ESCAPE '{LIKE_ESCAPE}'" for col in columns]
        clauses.extend(
            f"EXISTS (SELECT 1 FROM json_each({col})"
            f" WHERE casefold(json_each.value) LIKE casefold(?) ESCAPE '{LIKE_ESCAPE}')"
            for col in array_columns
        )
        return clauses

    def filter_search(
        self,
        search: str | None,
        columns: list[str],
        array_columns: list[str] | None = None,
    ) -> QueryBuilder:
        """Add case-insensitive substring search across columns (OR). Returns self.

        Args:
            search: Search term (escaped, then wrapped in %...%).
            columns: Scalar column expressions to LIKE-match.
            array_columns: JSON array columns; matches if any element matches.
        """
        array_columns = array_columns or []
        if search and (columns or array_columns):
            clauses = self._like_clauses(columns, array_columns)
            self._conditions.append(f"({' OR '.join(clauses)})")
            self._params.extend([f"%{escape_like(search)}%"] * len(clauses))
        return self

    def filter_location(self, location: str | None, alias: str = "v") -> QueryBuilder:
        """Location page match: city, region or coverage contain the place name,
        or a postcode area contains its first two letters."""
        if location:
            clauses = self._like_clauses([f"{alias}.city", f"{alias}.region"], [f"{alias}.coverage"])
            params = [f"%{escape_like(location)}%"] * len(clauses)
            clauses.extend(self._like_clauses([], [f"{alias}.postcode_areas"]))
            params.append(f"%{escape_like(location[:2])}%")
            self._conditions.append(f"({' OR '.join(clauses)})")
            self._params.extend(params)
        return self

    # --- Grouping ---

    def group_by(self, clause: str) -> QueryBuilder:
        """Set GROUP BY clause."""
        self._group_by = clause
        return self

    # --- Sorting and limits ---

    def order_by(self, clause: str) -> QueryBuilder:
        """Set ORDER BY directly (use only with trusted input)."""
        self._order_by = clause
        return self

    def limit(self, n: int) -> QueryBuilder:
        """Set LIMIT directly."""
        self._limit = n
        return self

    # --- Build methods ---

    def _build_where(self) -> str:
        """Build WHERE clause."""
        if not self._conditions:
            return ""
        return "WHERE " + " AND ".join(self._conditions)

    def _build_group_by(self) -> str:
        if not self._group_by:
            return ""
        return f"GROUP BY {self._group_by}"

    def _build_tail(self) -> str:
        """Build ORDER BY + LIMIT."""
        parts = []
        if self._order_by:
            parts.append(f"ORDER BY {self._order_by}")
        if self._limit is not None:
            parts.append(f"LIMIT {self._limit}")
        return " ".join(parts)

    def build_count(self) -> tuple[str, list[Any]]:
        """Build a COUNT(*) query."""
        parts = [
            "SELECT COUNT(*)",
            f"FROM {self.base_table}",
            self._build_where(),
            self._build_group_by(),
        ]
        sql = " ".join(p for p in parts if p)

        # If GROUP BY is used, we need to count the groups
        if self._group_by:
            sql = f"SELECT COUNT(*) FROM ({sql})"

        return sql, list(self._params)

    def build_select(self, columns: str) -> tuple[str, list[Any]]:
        """Build a full SELECT query."""
        parts = [
            f"SELECT {columns}",
            f"FROM {self.base_table}",
            self._build_where(),
            self._build_group_by(),
            self._build_tail(),
        ]
        sql = " ".join(p for p in parts if p)
        return sql, list(self._params)

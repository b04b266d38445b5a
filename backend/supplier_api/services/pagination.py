"""
Pagination utilities for the service layer.

Public listings are ranked on a computed score, so the whole matched set is
fetched, sorted in application code and then sliced. These helpers keep the
clamping and envelope metadata consistent across endpoints.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field

from ..config.constants import DEFAULT_LISTING_LIMIT, MAX_LISTING_LIMIT


@dataclass
class PaginatedResult:
    """Page of items plus metadata matching the API envelope format."""
    data: list[dict] = field(default_factory=list)
    pagination: dict = field(default_factory=dict)


def clamp_page(page: int | None) -> int:
    """Pages are 1-indexed; anything lower is page 1."""
    if page is None:
        return 1
    return max(1, page)


def clamp_limit(limit: int | None, maximum: int = MAX_LISTING_LIMIT) -> int:
    """Clamp a requested page size to [1, maximum]."""
    if limit is None:
        return DEFAULT_LISTING_LIMIT
    return max(1, min(limit, maximum))


def page_offset(page: int, limit: int) -> int:
    return (page - 1) * limit


def build_pagination(page: int, limit: int, total: int) -> dict:
    """Pagination block: page, limit, total, totalPages, hasMore."""
    total_pages = math.ceil(total / limit) if limit > 0 else 0
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "total_pages": total_pages,
        "has_more": page_offset(page, limit) + limit < total,
    }

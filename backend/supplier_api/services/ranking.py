"""
Ranking of vendor documents for public listings.

The sort key is computed per request from tier and profile completeness,
which is why listings sort in application code rather than in the store.
"""
from __future__ import annotations

from typing import Any, Iterable

from ..config.tiers import calculate_priority_score
from .pagination import clamp_limit, clamp_page, page_offset


def score_vendors(
    vendors: Iterable[dict[str, Any]],
    product_counts: dict[str, int],
) -> list[dict[str, Any]]:
    """Attach product_count and priority_score to each vendor document."""
    scored = []
    for vendor in vendors:
        product_count = product_counts.get(vendor["id"], 0)
        scored_vendor = {**vendor, "product_count": product_count, "has_products": product_count > 0}
        scored_vendor["priority_score"] = calculate_priority_score(scored_vendor)
        scored.append(scored_vendor)
    return scored


def rank_key(vendor: dict[str, Any]) -> tuple[int, str]:
    """Descending priority score, then ascending id for a stable order."""
    return (-vendor["priority_score"], vendor["id"])


def rank_vendors(vendors: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Full ranking of scored vendors."""
    return sorted(vendors, key=rank_key)


def rank_and_paginate(
    vendors: Iterable[dict[str, Any]],
    page: int,
    limit: int,
) -> list[dict[str, Any]]:
    """Sort scored vendors and return the requested page.

    Args:
        vendors: Vendor dicts carrying ``priority_score`` and ``id``.
        page: 1-indexed page number (values below 1 mean page 1).
        limit: Page size, clamped to the listing maximum.
    """
    page = clamp_page(page)
    limit = clamp_limit(limit)
    skip = page_offset(page, limit)
    return rank_vendors(vendors)[skip:skip + limit]

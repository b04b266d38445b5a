"""
Vendor domain service: public directory listings, category overviews and
category location pages.

Router becomes thin: parse request → call service → return response.
"""
from __future__ import annotations

import sqlite3
from typing import Any

import structlog

from ..config.constants import (
    CLAIMED_LISTING_STATUSES,
    LOCATION_STATS_LIMIT,
    MAJOR_LOCATIONS,
    NATIONAL_CITY_VALUES,
    NEARBY_LOCATIONS,
)
from ..config.services import SERVICES, get_service_from_slug
from ..config.tiers import DisplayTier, get_display_tier
from .base_service import BaseService
from .pagination import PaginatedResult, build_pagination, clamp_limit, clamp_page
from .query_builder import QueryBuilder
from .ranking import rank_and_paginate, rank_vendors, score_vendors

logger = structlog.get_logger("directory.services.vendor")

# Bounded projection for public listings. Email is not projected, so it never
# contributes to the listing priority score.
LISTING_COLUMNS = """
    v.id, v.company, v.name, v.services,
    v.city, v.region, v.coverage,
    v.rating, v.review_count,
    v.description, v.years_in_business, v.accreditations,
    v.brands, v.tier, v.phone, v.website,
    v.show_pricing, v.listing_status, v.login_count
"""


def is_account_claimed(vendor: dict[str, Any]) -> bool:
    """Whether a listing looks like a real account rather than a placeholder."""
    listing_status = (vendor.get("listing_status") or "unclaimed").lower()
    contact = vendor.get("contact_info") or {}
    performance = vendor.get("performance") or {}
    account = vendor.get("account") or {}
    return (
        listing_status in CLAIMED_LISTING_STATUSES
        or bool(contact.get("phone"))
        or get_display_tier(vendor.get("tier")) is not DisplayTier.FREE
        or (performance.get("rating") or 0) > 0
        or (account.get("login_count") or 0) > 0
    )


def is_national_vendor(vendor: dict[str, Any]) -> bool:
    """Vendors without a town, or based "UK"/"nationwide", serve everywhere."""
    city = ((vendor.get("location") or {}).get("city") or "").strip().lower()
    return city in NATIONAL_CITY_VALUES


def format_location_name(slug: str) -> str:
    """``weston-super-mare`` -> ``Weston Super Mare``."""
    return " ".join(word[:1].upper() + word[1:] for word in slug.split("-"))


class VendorService(BaseService):
    """Business logic for public vendor queries."""

    def _listing_query(self, category: str | None, location: str | None) -> QueryBuilder:
        qb = QueryBuilder("vendors v")
        qb.filter_listing_eligible()
        # Unknown category slugs apply no filter
        qb.filter_service(get_service_from_slug(category))
        qb.filter_search(location, ["v.city", "v.region"], array_columns=["v.coverage"])
        return qb

    def get_product_counts(self, conn: sqlite3.Connection, qb: QueryBuilder) -> dict[str, int]:
        """Active product counts for every vendor matched by ``qb``.

        Products with is_active NULL count as active; only an explicit
        false excludes them.
        """
        ids_sql, ids_params = qb.build_select("v.id")
        rows = self._execute_many(
            conn,
            f"""
            SELECT vendor_id, COUNT(*) AS product_count
            FROM vendor_products
            WHERE vendor_id IN ({ids_sql})
              AND (is_active IS NULL OR is_active != 0)
            GROUP BY vendor_id
            """,
            ids_params,
        )
        return {row["vendor_id"]: row["product_count"] for row in rows}

    def list_public_vendors(
        self,
        conn: sqlite3.Connection,
        *,
        category: str | None = None,
        location: str | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> PaginatedResult:
        """
        Ranked, paginated public listing.

        Counts the matches, fetches the full matched set, joins product
        counts, scores every vendor, then sorts and slices in memory.
        """
        page = clamp_page(page)
        limit = clamp_limit(limit)
        qb = self._listing_query(category, location)

        total = self._count(conn, qb)
        vendors = self._fetch_vendors(conn, qb, LISTING_COLUMNS)
        product_counts = self.get_product_counts(conn, qb)

        ranked = rank_and_paginate(score_vendors(vendors, product_counts), page, limit)
        logger.info(
            "public_vendors_listed",
            category=category,
            location=location,
            page=page,
            limit=limit,
            total=total,
            returned=len(ranked),
        )
        return PaginatedResult(
            data=[self._map_public_vendor(vendor) for vendor in ranked],
            pagination=build_pagination(page, limit, total),
        )

    @staticmethod
    def _map_public_vendor(vendor: dict[str, Any]) -> dict:
        """Map a scored vendor document to the public listing shape."""
        display_tier = get_display_tier(vendor.get("tier"))
        location = vendor["location"]
        profile = vendor["business_profile"]
        performance = vendor["performance"]
        coverage = location.get("coverage") or []
        return {
            "id": vendor["id"],
            "company": vendor["company"],
            "name": vendor.get("name"),
            "services": vendor.get("services") or [],
            "location": {
                "city": location.get("city"),
                "region": location.get("region"),
                "coverage": coverage,
            },
            "rating": performance.get("rating") or 0,
            "review_count": performance.get("review_count") or 0,
            "tier": display_tier.value,
            "description": profile.get("description"),
            "accreditations": profile.get("accreditations") or [],
            "years_in_business": profile.get("years_in_business"),
            "brands": vendor.get("brands") or [],
            "product_count": vendor["product_count"],
            "website": vendor["contact_info"].get("website"),
            "show_pricing": display_tier is not DisplayTier.FREE or vendor["show_pricing"],
            "account_claimed": is_account_claimed(vendor),
            "priority_score": vendor["priority_score"],
            "area_served": coverage,
        }

    def get_category_overview(self, conn: sqlite3.Connection, slug: str) -> dict | None:
        """Verified supplier count and popular coverage areas for a category.

        Returns None for slugs outside the service catalogue.
        """
        service = SERVICES.get(slug.lower())
        service_name = get_service_from_slug(slug)
        if service is None or service_name is None:
            return None

        count_qb = QueryBuilder("vendors v").filter_active_verified().filter_service(service_name)
        vendor_count = self._count(conn, count_qb)

        stats_qb = (
            QueryBuilder("vendors v, json_each(v.coverage) c")
            .filter_active_verified()
            .filter_service(service_name)
            .group_by("c.value")
            .order_by("location_count DESC, c.value ASC")
            .limit(LOCATION_STATS_LIMIT)
        )
        rows = self._select(conn, stats_qb, "c.value AS location, COUNT(*) AS location_count")

        logger.info("category_overview_built", slug=slug, vendor_count=vendor_count)
        return {
            "service": service,
            "service_name": service_name,
            "vendor_count": vendor_count,
            "location_stats": [
                {"location": row["location"], "count": row["location_count"]} for row in rows
            ],
            "major_locations": list(MAJOR_LOCATIONS),
        }


    def get_category_location_listing(self, conn: sqlite3.Connection, slug: str, location: str) -> dict | None:
        """Ranked suppliers of one service around one location, local first.

        ``location`` is a slug such as ``port-talbot``. Only active, verified
        vendors are listed. Returns None for slugs outside the service catalogue.
        """
        service = SERVICES.get(slug.lower())
        service_name = get_service_from_slug(slug)
        if service is None or service_name is None:
            return None

        place = location.replace("-", " ")
        qb = (
            QueryBuilder("vendors v")
            .filter_active_verified()
            .filter_service(service_name)
            .filter_location(place)
        )
        vendors = self._fetch_vendors(conn, qb, LISTING_COLUMNS)
        ranked = rank_vendors(score_vendors(vendors, self.get_product_counts(conn, qb)))

        local, national = [], []
        for vendor in ranked:
            (national if is_national_vendor(vendor) else local).append(self._map_public_vendor(vendor))

        logger.info(
            "category_location_listed",
            slug=slug,
            location=location,
            local=len(local),
            national=len(national),
        )
        return {
            "service": service,
            "service_name": service_name,
            "location_name": format_location_name(location),
            "local_vendors": local,
            "national_vendors": national,
            "total": len(ranked),
            "nearby_locations": list(NEARBY_LOCATIONS.get(location.lower(), ())),
        }


# Singleton instance for router use
vendor_service = VendorService()

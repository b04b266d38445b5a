"""
API router for the public vendor listing.

Thin router: ranking and shaping live in VendorService.
"""
import sqlite3
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query, Request

from ..config.constants import DEFAULT_LISTING_LIMIT, DEFAULT_PAGE
from ..dependencies import Database, get_database
from ..middleware.error_handler import StoreError
from ..models.common import PaginationMeta
from ..models.vendor import PublicVendor, VendorListData, VendorListFilters, VendorListResponse
from ..rate_limit import GENERAL_LIMIT, limiter
from ..services.vendor_service import vendor_service

logger = structlog.get_logger("directory.api.vendors")

router = APIRouter(prefix="/public", tags=["vendors"])


@router.get("/vendors", response_model=VendorListResponse)
@limiter.limit(GENERAL_LIMIT)
def list_public_vendors(
    request: Request,
    category: Optional[str] = Query(None, description="Service slug, e.g. telecoms or copiers"),
    location: Optional[str] = Query(None, description="Town, region or coverage area (substring match)"),
    page: int = Query(DEFAULT_PAGE, description="Page number (1-indexed)"),
    limit: int = Query(DEFAULT_LISTING_LIMIT, description="Items per page, clamped to 1-100"),
    database: Database = Depends(get_database),
):
    """
    List publicly visible vendors.

    Active verified vendors and unclaimed directory entries, ranked by
    priority score (tier first, then profile completeness).
    """
    try:
        with database.connection() as conn:
            result = vendor_service.list_public_vendors(
                conn,
                category=category,
                location=location,
                page=page,
                limit=limit,
            )
    except sqlite3.Error as exc:
        logger.error("public_vendors_failed", error=str(exc))
        raise StoreError("Failed to fetch vendors") from exc

    return VendorListResponse(
        data=VendorListData(
            vendors=[PublicVendor(**vendor) for vendor in result.data],
            pagination=PaginationMeta(**result.pagination),
            filters=VendorListFilters(category=category or None, location=location or None),
        )
    )

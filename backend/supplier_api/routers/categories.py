"""
API router for service categories.

The overview for a category is cached for an hour per database. Location
pages rank the category's suppliers around one town on every request.
"""
import sqlite3

import structlog
from fastapi import APIRouter, Depends, Path, Request

from ..cache import CATEGORY_OVERVIEW_CACHE, app_cache
from ..config.services import SERVICES
from ..dependencies import Database, get_database
from ..middleware.error_handler import NotFoundError, StoreError
from ..models.vendor import (
    CategoryListResponse,
    CategoryLocationListing,
    CategoryLocationResponse,
    CategoryOverview,
    CategoryOverviewResponse,
    ServiceCategory,
)
from ..rate_limit import GENERAL_LIMIT, limiter
from ..services.vendor_service import vendor_service

logger = structlog.get_logger("directory.api.categories")

router = APIRouter(prefix="/public", tags=["categories"])


@router.get("/categories", response_model=CategoryListResponse)
def list_categories():
    """Service catalogue used for category pages and slug lookup."""
    return CategoryListResponse(data=[ServiceCategory(**service) for service in SERVICES.values()])


@router.get("/categories/{slug}", response_model=CategoryOverviewResponse)
@limiter.limit(GENERAL_LIMIT)
def get_category_overview(
    request: Request,
    slug: str = Path(..., description="Category slug, e.g. photocopiers"),
    database: Database = Depends(get_database),
):
    """Verified supplier count and most covered locations for a category."""
    cache_key = f"{database.path}:{slug.lower()}"
    overview = app_cache.get(CATEGORY_OVERVIEW_CACHE, cache_key)
    if overview is None:
        try:
            with database.connection() as conn:
                overview = vendor_service.get_category_overview(conn, slug)
        except sqlite3.Error as exc:
            logger.error("category_overview_failed", slug=slug, error=str(exc))
            raise StoreError("Failed to load category") from exc
        if overview is None:
            raise NotFoundError("Category not found")
        app_cache.set(CATEGORY_OVERVIEW_CACHE, cache_key, overview)

    return CategoryOverviewResponse(data=CategoryOverview(**overview))


@router.get("/categories/{slug}/{location}", response_model=CategoryLocationResponse)
@limiter.limit(GENERAL_LIMIT)
def get_category_location_listing(
    request: Request,
    slug: str = Path(..., description="Category slug, e.g. cctv"),
    location: str = Path(..., description="Location slug, e.g. port-talbot"),
    database: Database = Depends(get_database),
):
    """Local and national suppliers for a category in one location, each ranked."""
    try:
        with database.connection() as conn:
            listing = vendor_service.get_category_location_listing(conn, slug, location)
    except sqlite3.Error as exc:
        logger.error("category_location_failed", slug=slug, location=location, error=str(exc))
        raise StoreError("Failed to fetch vendors") from exc
    if listing is None:
        raise NotFoundError("Category not found")

    return CategoryLocationResponse(data=CategoryLocationListing(**listing))

"""Pydantic models for public vendor listing and category endpoints."""
from typing import List, Optional

from pydantic import Field

from .common import CamelModel, PaginationMeta


class PublicVendorLocation(CamelModel):
    city: Optional[str] = None
    region: Optional[str] = None
    coverage: List[str] = Field(default_factory=list)


class PublicVendor(CamelModel):
    """Vendor summary for public listings.

    Contact email, account state and raw tier are intentionally excluded;
    ``tier`` is the display tier.
    """

    id: str = Field(..., description="Vendor ID")
    company: str = Field(..., description="Company name")
    name: Optional[str] = Field(None, description="Contact name")
    services: List[str] = Field(default_factory=list, description="Canonical services offered")
    location: PublicVendorLocation
    rating: float = Field(0, description="Average review rating")
    review_count: int = Field(0, description="Number of reviews")
    tier: str = Field(..., description="Display tier: free, visible or verified")
    description: Optional[str] = None
    accreditations: List[str] = Field(default_factory=list)
    years_in_business: Optional[int] = None
    brands: List[str] = Field(default_factory=list)
    product_count: int = Field(0, description="Active products in the catalogue")
    website: Optional[str] = None
    show_pricing: bool = Field(..., description="Paid tier or vendor pricing override")
    account_claimed: bool = Field(..., description="Listing belongs to a real account")
    priority_score: int = Field(..., description="Ranking score (tier dominates completeness)")
    # Schema.org metadata
    schema_context: str = Field("https://schema.org", alias="@context")
    schema_type: str = Field("LocalBusiness", alias="@type")
    area_served: List[str] = Field(default_factory=list)


class VendorListFilters(CamelModel):
    category: Optional[str] = None
    location: Optional[str] = None


class VendorListData(CamelModel):
    vendors: List[PublicVendor]
    pagination: PaginationMeta
    filters: VendorListFilters


class VendorListResponse(CamelModel):
    """Envelope for GET /public/vendors."""

    success: bool = True
    data: VendorListData


class ServiceCategory(CamelModel):
    slug: str
    name: str
    description: str
    keywords: List[str]


class LocationStat(CamelModel):
    location: str
    count: int


class CategoryOverview(CamelModel):
    service: ServiceCategory
    service_name: str = Field(..., description="Canonical service value stored on vendors")
    vendor_count: int = Field(..., description="Active, verified vendors offering the service")
    location_stats: List[LocationStat]
    major_locations: List[str]


class CategoryOverviewResponse(CamelModel):
    success: bool = True
    data: CategoryOverview


class CategoryListResponse(CamelModel):
    success: bool = True
    data: List[ServiceCategory]


class CategoryLocationListing(CamelModel):
    """Ranked suppliers of one service around one location."""

    service: ServiceCategory
    service_name: str
    location_name: str = Field(..., description="Display name built from the location slug")
    local_vendors: List[PublicVendor] = Field(..., description="Vendors based in a named town")
    national_vendors: List[PublicVendor] = Field(..., description="UK-wide vendors, or vendors with no town")
    total: int
    nearby_locations: List[str]


class CategoryLocationResponse(CamelModel):
    success: bool = True
    data: CategoryLocationListing

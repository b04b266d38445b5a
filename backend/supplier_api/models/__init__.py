# Pydantic models for API request/response
from .common import CamelModel, PaginationMeta
from .lead import Lead, QuoteConfirmation, QuoteRequestIn, QuoteResponse
from .vendor import (
    CategoryListResponse,
    CategoryOverviewResponse,
    PublicVendor,
    VendorListResponse,
)

__all__ = [
    "CamelModel",
    "PaginationMeta",
    "Lead",
    "QuoteConfirmation",
    "QuoteRequestIn",
    "QuoteResponse",
    "CategoryListResponse",
    "CategoryOverviewResponse",
    "PublicVendor",
    "VendorListResponse",
]

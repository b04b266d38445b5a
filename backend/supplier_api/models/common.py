"""Common Pydantic models for pagination and response envelopes."""
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class PaginationMeta(CamelModel):
    """Pagination metadata for list responses."""

    page: int = Field(..., description="Current page number (1-indexed)")
    limit: int = Field(..., description="Items per page")
    total: int = Field(..., description="Total number of matching items")
    total_pages: int = Field(..., description="Total number of pages")
    has_more: bool = Field(..., description="Whether a later page exists")


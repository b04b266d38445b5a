"""
Service layer for the supplier directory API.

Domain services encapsulate business logic, query construction,
and data mapping. Routers become thin: parse request → call service → return response.
"""
from .query_builder import QueryBuilder
from .pagination import PaginatedResult, build_pagination
from .ranking import rank_and_paginate, score_vendors
from .vendor_service import vendor_service
from .quote_service import quote_service

__all__ = [
    "QueryBuilder",
    "PaginatedResult",
    "build_pagination",
    "rank_and_paginate",
    "score_vendors",
    "vendor_service",
    "quote_service",
]

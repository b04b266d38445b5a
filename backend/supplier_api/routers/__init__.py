# API routers
from .vendors import router as vendors_router
from .quotes import router as quotes_router
from .categories import router as categories_router

__all__ = [
    "vendors_router",
    "quotes_router",
    "categories_router",
]

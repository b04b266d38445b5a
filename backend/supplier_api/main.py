"""
Supplier Directory API

Public REST API for the office equipment supplier marketplace: ranked
supplier listings, category overviews and quote request intake.

Run with: uvicorn supplier_api.main:app --port 8001 --reload
"""
import os
import sqlite3
import time as _time_module
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.gzip import GZipMiddleware

# Configure structured logging FIRST (before any logger calls)
from .middleware.structlog_config import configure as configure_logging
configure_logging()

import structlog

from .cache import app_cache
from .dependencies import DB_PATH, Database, get_database
from .middleware import RequestLoggingMiddleware, register_error_handlers
from .rate_limit import limiter
from .routers import categories_router, quotes_router, vendors_router

logger = structlog.get_logger("directory.api")

# Track server start time for uptime reporting
_server_start_time = _time_module.time()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: open the document store. Shutdown: close it."""
    database = Database(DB_PATH).open()
    app.state.database = database
    logger.info("database_opened", path=str(database.path))
    yield
    database.close()
    logger.info("Shutting down.")


# API metadata
API_TITLE = "Supplier Directory API"
API_DESCRIPTION = """
Public API for the office equipment supplier directory.

### Core Endpoints

- **Vendors** - Ranked, filtered supplier listings
- **Categories** - Service catalogue and per-category overviews
- **Quotes** - Quote request intake for paid-tier suppliers
"""
API_VERSION = "1.0.0"

_docs_enabled = os.environ.get("ENABLE_DOCS", "true").lower() == "true"
app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
    docs_url="/docs" if _docs_enabled else None,
    redoc_url="/redoc" if _docs_enabled else None,
    lifespan=lifespan,
)

# Register global error handlers
register_error_handlers(app)

app.state.limiter = limiter

# Request logging middleware (must be added before CORS/GZip so it wraps them)
app.add_middleware(RequestLoggingMiddleware)

cors_origins = os.environ.get(
    "CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
).split(",")
if "*" in cors_origins:
    logger.warning("Wildcard CORS origin rejected for security; falling back to localhost defaults")
    cors_origins = ["http://localhost:3000", "http://127.0.0.1:3000"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Authorization", "Accept", "Accept-Language"],
)


@app.middleware("http")
async def security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    if request.headers.get("x-forwarded-proto") == "https":
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
    return response


# GZip compression for responses > 1KB
app.add_middleware(GZipMiddleware, minimum_size=1000)

app.include_router(vendors_router, prefix="/api")
app.include_router(quotes_router, prefix="/api")
app.include_router(categories_router, prefix="/api")


@app.get("/", tags=["root"])
async def root():
    """API root - returns basic info and links."""
    return {
        "name": API_TITLE,
        "version": API_VERSION,
        "docs": "/docs",
        "endpoints": {
            "vendors": "/api/public/vendors",
            "quote_request": "/api/public/quote-request",
            "categories": "/api/public/categories",
            "category_overview": "/api/public/categories/{slug}",
            "category_location": "/api/public/categories/{slug}/{location}",
            "health": "/health",
        },
    }


@app.get("/health", tags=["root"])
def health_check(database: Database = Depends(get_database)):
    """Health check endpoint with database and uptime status."""
    uptime_seconds = round(_time_module.time() - _server_start_time)

    db_info = {"status": "not found"}
    db_reachable = False
    if not database.is_open:
        db_info = {"status": "closed"}
    elif database.exists():
        try:
            with database.connection() as conn:
                vendor_count = conn.execute("SELECT COUNT(*) FROM vendors").fetchone()[0]
            db_info = {"status": "connected", "vendor_count": vendor_count}
            db_reachable = True
        except sqlite3.Error:
            db_info = {"status": "error"}

    overall_status = "healthy" if db_reachable else ("degraded" if database.exists() else "unavailable")

    return JSONResponse(
        status_code=200 if db_reachable else 503,
        content={
            "status": overall_status,
            "version": API_VERSION,
            "database": db_info,
            "uptime_seconds": uptime_seconds,
            "cache": app_cache.stats(),
        },
    )


# Main entry point
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8001)

"""
API router for public quote requests.

Buyers request a quote from one supplier; accepted requests become leads.
"""
import sqlite3

import structlog
from fastapi import APIRouter, Depends, Request

from ..dependencies import Database, get_database
from ..middleware.error_handler import StoreError
from ..models.lead import QuoteConfirmation, QuoteRequestIn, QuoteResponse
from ..rate_limit import QUOTE_LIMIT, limiter
from ..services.quote_service import quote_service

logger = structlog.get_logger("directory.api.quotes")

router = APIRouter(prefix="/public", tags=["quotes"])


@router.post("/quote-request", response_model=QuoteResponse)
@limiter.limit(QUOTE_LIMIT)
def submit_quote_request(
    request: Request,
    body: QuoteRequestIn,
    database: Database = Depends(get_database),
):
    """
    Submit a quote request to a supplier.

    The supplier must be on a paid tier or have pricing enabled.
    """
    try:
        with database.connection() as conn:
            confirmation = quote_service.submit_quote_request(conn, body)
    except sqlite3.Error as exc:
        logger.error("quote_request_failed", error=str(exc))
        raise StoreError("Failed to submit quote request") from exc

    return QuoteResponse(data=QuoteConfirmation(**confirmation))

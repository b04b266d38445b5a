"""
Quote request intake.

Validates the public payload, checks the target vendor accepts quotes,
normalizes the requested service and writes a Lead.
"""
from __future__ import annotations

import re
import sqlite3

import structlog
from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from ..config.constants import DEFAULT_QUOTE_TIMELINE, EXPECTED_QUOTE_RESPONSE
from ..config.services import get_service_from_slug
from ..config.tiers import can_receive_quotes
from ..middleware.error_handler import NotFoundError, QuoteNotAcceptedError, RequestValidationFailed
from ..models.lead import Lead, QuoteRequestIn
from ..store import get_vendor, insert_lead
from .base_service import BaseService

logger = structlog.get_logger("directory.services.quote")

REQUIRED_QUOTE_FIELDS = ("vendor_id", "service", "company_name", "contact_name", "email", "phone")
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
CONFIRMATION_MESSAGE = "Quote request submitted successfully. The supplier will contact you shortly."


def _strip(value: str | None) -> str | None:
    return value.strip() if value is not None else None


def _lead_error_messages(exc: ValidationError) -> list[str]:
    messages = []
    for error in exc.errors():
        path = ".".join(str(part) for part in error["loc"])
        cause = (error.get("ctx") or {}).get("error")
        message = str(cause) if cause is not None else error["msg"]
        messages.append(f"{path}: {message}")
    return messages


def build_lead(request: QuoteRequestIn, service: str) -> Lead:
    """Assemble the Lead document for a validated quote request."""
    referral = request.referral_source
    requirements = None
    if request.monthly_volume:
        requirements = {"monthly_volume": request.monthly_volume, "features": request.requirements}

    return Lead(
        vendor_id=request.vendor_id,
        service=service,
        timeline=request.timeline or DEFAULT_QUOTE_TIMELINE,
        budget_range=request.budget_range,
        customer={
            "company_name": request.company_name.strip(),
            "contact_name": request.contact_name.strip(),
            "email": request.email.strip().lower(),
            "phone": request.phone.strip(),
            "postcode": _strip(request.postcode),
            "message": _strip(request.message),
        },
        requirements=requirements,
        source={
            "page": "public-api",
            "referrer": referral or "website",
            "utm": {
                "source": referral or "direct",
                "medium": "api",
                "campaign": referral,
            },
        },
    )


class QuoteService(BaseService):
    """Business logic for public quote requests."""

    def submit_quote_request(self, conn: sqlite3.Connection, request: QuoteRequestIn) -> dict:
        """Validate, gate and persist a quote request. Returns the confirmation."""
        missing = [field for field in REQUIRED_QUOTE_FIELDS if not getattr(request, field)]
        if missing:
            raise RequestValidationFailed(
                "Validation failed",
                details=[f"{to_camel(field)} is required" for field in missing],
            )

        if not EMAIL_PATTERN.fullmatch(request.email):
            raise RequestValidationFailed("Invalid email format")

        vendor = get_vendor(conn, request.vendor_id)
        if vendor is None:
            raise NotFoundError("Supplier not found")

        if not (can_receive_quotes(vendor["tier"]) or vendor["show_pricing"]):
            logger.info("quote_request_rejected", vendor_id=vendor["id"], tier=vendor["tier"])
            raise QuoteNotAcceptedError("This supplier is not currently accepting quote requests")

        service = get_service_from_slug(request.service) or request.service
        try:
            lead = build_lead(request, service)
        except ValidationError as exc:
            raise RequestValidationFailed("Invalid request data", details=_lead_error_messages(exc)) from exc

        lead_id = insert_lead(conn, lead.model_dump())
        conn.commit()

        logger.info("quote_request_created", lead_id=lead_id, vendor_id=vendor["id"], service=service)
        return {
            "quote_id": lead_id,
            "message": CONFIRMATION_MESSAGE,
            "supplier_name": vendor["company"],
            "expected_response": EXPECTED_QUOTE_RESPONSE,
        }


# Singleton instance for router use
quote_service = QuoteService()

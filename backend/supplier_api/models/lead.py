"""Pydantic models for quote requests and the leads they create."""
import re
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..config.constants import DEFAULT_QUOTE_TIMELINE
from ..config.services import VALID_SERVICES
from .common import CamelModel

LEAD_EMAIL_PATTERN = re.compile(r".+@.+\..+")


class QuoteRequestIn(CamelModel):
    """Public quote request body.

    Required fields are optional here so that missing ones are reported
    together as ``"<field> is required"`` by the quote service.
    """

    vendor_id: Optional[str] = None
    service: Optional[str] = None
    company_name: Optional[str] = None
    contact_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    postcode: Optional[str] = None
    message: Optional[str] = None
    timeline: Optional[str] = None
    budget_range: Optional[str] = None
    monthly_volume: Optional[float] = None
    requirements: Optional[List[str]] = None
    referral_source: Optional[str] = None


class LeadCustomer(BaseModel):
    company_name: str = Field(..., min_length=1)
    contact_name: str = Field(..., min_length=1)
    email: str
    phone: str = Field(..., min_length=1)
    postcode: Optional[str] = None
    message: Optional[str] = None

    @field_validator("email")
    @classmethod
    def email_shape(cls, value: str) -> str:
        if not LEAD_EMAIL_PATTERN.fullmatch(value):
            raise ValueError("Please provide a valid email address")
        return value


class LeadRequirements(BaseModel):
    monthly_volume: Optional[float] = None
    features: Optional[List[str]] = None


class LeadUtm(BaseModel):
    source: Optional[str] = None
    medium: Optional[str] = None
    campaign: Optional[str] = None


class LeadSource(BaseModel):
    page: Optional[str] = None
    referrer: Optional[str] = None
    utm: LeadUtm = Field(default_factory=LeadUtm)


class Lead(BaseModel):
    """Lead document written for each accepted quote request."""

    vendor_id: str
    service: str
    timeline: Literal["urgent", "soon", "planning", "future"] = DEFAULT_QUOTE_TIMELINE
    budget_range: Optional[str] = None
    customer: LeadCustomer
    requirements: Optional[LeadRequirements] = None
    source: LeadSource = Field(default_factory=LeadSource)
    status: Literal["pending", "contacted", "quoted", "won", "lost", "spam"] = "pending"

    @field_validator("service")
    @classmethod
    def known_service(cls, value: str) -> str:
        if value not in VALID_SERVICES:
            raise ValueError(f"`{value}` is not a valid service")
        return value


class QuoteConfirmation(CamelModel):
    quote_id: str
    message: str
    supplier_name: str
    expected_response: str


class QuoteResponse(CamelModel):
    """Envelope for POST /public/quote-request."""

    success: bool = True
    data: QuoteConfirmation

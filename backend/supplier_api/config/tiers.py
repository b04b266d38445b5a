"""
Subscription tiers: display classification and ranking priority.

Raw tier strings on vendor documents carry legacy aliases (gold, bronze,
managed, ...). Everything downstream works with the closed DisplayTier enum.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

from .constants import MIN_DESCRIPTION_LENGTH


class DisplayTier(str, Enum):
    """Canonical tier shown to buyers and used for feature gating."""

    FREE = "free"
    VISIBLE = "visible"
    VERIFIED = "verified"


VERIFIED_TIER_ALIASES = frozenset({"enterprise", "managed", "verified", "gold", "platinum"})
VISIBLE_TIER_ALIASES = frozenset({"basic", "visible", "standard", "silver", "bronze"})

TIER_PRIORITY = {
    # Verified tiers (highest priority) - £149/mo
    "enterprise": 100,
    "managed": 100,
    "verified": 100,
    # Visible tiers (medium priority) - £99/mo
    "basic": 50,
    "visible": 50,
    "standard": 50,
    # Legacy tiers
    "gold": 100,
    "platinum": 100,
    "silver": 50,
    "bronze": 50,
    # Free tiers
    "free": 0,
    "listed": 0,
}

# Profile completeness points; hasProducts carries the largest weight.
VISIBILITY_WEIGHTS = {
    "company": 3,
    "phone": 4,
    "email": 3,
    "website": 5,
    "years_in_business": 3,
    "description": 4,
    "has_products": 15,
    "brands": 5,
    "coverage": 5,
}

TIER_WEIGHT = 1000
VISIBILITY_WEIGHT = 10


def get_display_tier(tier: str | None = None) -> DisplayTier:
    """Map a raw tier string to its display tier. Unknown or empty is FREE."""
    if not tier:
        return DisplayTier.FREE

    normalised = tier.lower()
    if normalised in VERIFIED_TIER_ALIASES:
        return DisplayTier.VERIFIED
    if normalised in VISIBLE_TIER_ALIASES:
        return DisplayTier.VISIBLE
    return DisplayTier.FREE


def can_show_pricing(tier: str | None = None) -> bool:
    """Paid display tiers may show pricing and contact details."""
    return get_display_tier(tier) is not DisplayTier.FREE


def can_receive_quotes(tier: str | None = None) -> bool:
    """Quote requests follow the pricing gate.

    Callers also honour the vendor-level ``show_pricing`` override:
    ``can_receive_quotes(vendor["tier"]) or vendor["show_pricing"]``.
    """
    return can_show_pricing(tier)


def get_tier_priority(tier: str | None = None) -> int:
    """Tier component of the priority score (0, 50 or 100)."""
    if not tier:
        return 0
    return TIER_PRIORITY.get(tier.lower(), 0)


def calculate_visibility_score(vendor: Mapping[str, Any]) -> int:
    """Sum the completeness points present on a vendor document (0-47)."""
    contact = vendor.get("contact_info") or {}
    profile = vendor.get("business_profile") or {}
    location = vendor.get("location") or {}
    description = profile.get("description") or ""

    signals = {
        "company": bool(vendor.get("company")),
        "phone": bool(contact.get("phone")),
        "email": bool(vendor.get("email")),
        "website": bool(contact.get("website")),
        "years_in_business": bool(profile.get("years_in_business")),
        "description": len(description) > MIN_DESCRIPTION_LENGTH,
        "has_products": bool(vendor.get("has_products")),
        "brands": bool(vendor.get("brands")),
        "coverage": bool(location.get("coverage")),
    }
    return sum(VISIBILITY_WEIGHTS[name] for name, present in signals.items() if present)


def calculate_priority_score(vendor: Mapping[str, Any]) -> int:
    """Composite ranking score: tier dominates, then profile completeness.

    The visibility component tops out at 470, well under one tier step
    (50 * 1000), so no amount of profile data crosses a tier boundary.
    """
    tier_score = get_tier_priority(vendor.get("tier"))
    visibility_score = calculate_visibility_score(vendor)
    return tier_score * TIER_WEIGHT + visibility_score * VISIBILITY_WEIGHT

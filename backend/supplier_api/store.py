"""
Document mapping for the vendor directory store.

Vendor, product and lead documents are nested dicts in the application and
flat rows in SQLite. Array fields are stored as JSON text and queried with
the JSON1 ``json_each`` table function.
"""
from __future__ import annotations

import json
import secrets
import sqlite3
from datetime import datetime, timezone
from typing import Any, Mapping

SCHEMA = """
CREATE TABLE IF NOT EXISTS vendors (
    id TEXT PRIMARY KEY,
    company TEXT NOT NULL,
    name TEXT,
    email TEXT,
    tier TEXT DEFAULT 'free',
    listing_status TEXT DEFAULT 'unclaimed',
    show_pricing INTEGER DEFAULT 0,
    account_status TEXT DEFAULT 'pending',
    verification_status TEXT DEFAULT 'unverified',
    login_count INTEGER DEFAULT 0,
    phone TEXT,
    website TEXT,
    city TEXT,
    region TEXT,
    coverage TEXT DEFAULT '[]',
    postcode_areas TEXT DEFAULT '[]',
    services TEXT DEFAULT '[]',
    brands TEXT DEFAULT '[]',
    description TEXT,
    years_in_business INTEGER,
    accreditations TEXT DEFAULT '[]',
    rating REAL DEFAULT 0,
    review_count INTEGER DEFAULT 0,
    created_at TEXT
);

CREATE TABLE IF NOT EXISTS vendor_products (
    id TEXT PRIMARY KEY,
    vendor_id TEXT NOT NULL REFERENCES vendors(id),
    name TEXT,
    is_active INTEGER,
    created_at TEXT
);
CREATE INDEX IF NOT EXISTS idx_vendor_products_vendor ON vendor_products(vendor_id);

CREATE TABLE IF NOT EXISTS leads (
    id TEXT PRIMARY KEY,
    vendor_id TEXT NOT NULL REFERENCES vendors(id),
    service TEXT NOT NULL,
    timeline TEXT NOT NULL,
    budget_range TEXT,
    customer TEXT NOT NULL,
    requirements TEXT,
    source TEXT,
    status TEXT NOT NULL DEFAULT 'pending',
    created_at TEXT,
    updated_at TEXT
);
CREATE INDEX IF NOT EXISTS idx_leads_vendor ON leads(vendor_id, created_at);
"""

_JSON_LIST_COLUMNS = ("coverage", "postcode_areas", "services", "brands", "accreditations")


def new_document_id() -> str:
    """Random 24-character hex document id."""
    return secrets.token_hex(12)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _json_list(value: str | None) -> list:
    if not value:
        return []
    return json.loads(value)


def insert_vendor(conn: sqlite3.Connection, vendor: Mapping[str, Any]) -> str:
    """Insert a nested vendor document and return its id."""
    vendor_id = vendor.get("id") or new_document_id()
    account = vendor.get("account") or {}
    contact = vendor.get("contact_info") or {}
    location = vendor.get("location") or {}
    profile = vendor.get("business_profile") or {}
    performance = vendor.get("performance") or {}

    conn.execute(
        """
        INSERT INTO vendors (
            id, company, name, email, tier, listing_status, show_pricing,
            account_status, verification_status, login_count,
            phone, website, city, region, coverage, postcode_areas, services, brands,
            description, years_in_business, accreditations,
            rating, review_count, created_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            vendor_id,
            vendor["company"],
            vendor.get("name"),
            vendor.get("email"),
            vendor.get("tier") or "free",
            vendor.get("listing_status") or "unclaimed",
            1 if vendor.get("show_pricing") else 0,
            account.get("status") or "pending",
            account.get("verification_status") or "unverified",
            account.get("login_count") or 0,
            contact.get("phone"),
            contact.get("website"),
            location.get("city"),
            location.get("region"),
            json.dumps(list(location.get("coverage") or [])),
            json.dumps([area.strip().upper() for area in vendor.get("postcode_areas") or []]),
            json.dumps(list(vendor.get("services") or [])),
            json.dumps(list(vendor.get("brands") or [])),
            profile.get("description"),
            profile.get("years_in_business"),
            json.dumps(list(profile.get("accreditations") or [])),
            performance.get("rating") or 0,
            performance.get("review_count") or 0,
            _now(),
        ),
    )
    return vendor_id


def insert_product(
    conn: sqlite3.Connection,
    vendor_id: str,
    name: str,
    is_active: bool | None = True,
) -> str:
    """Insert a vendor product. ``is_active=None`` counts as active."""
    product_id = new_document_id()
    conn.execute(
        "INSERT INTO vendor_products (id, vendor_id, name, is_active, created_at) VALUES (?, ?, ?, ?, ?)",
        (product_id, vendor_id, name, None if is_active is None else int(is_active), _now()),
    )
    return product_id


def insert_lead(conn: sqlite3.Connection, lead: Mapping[str, Any]) -> str:
    """Insert a lead document and return its id."""
    lead_id = new_document_id()
    now = _now()
    requirements = lead.get("requirements")
    conn.execute(
        """
        INSERT INTO leads (
            id, vendor_id, service, timeline, budget_range, customer,
            requirements, source, status, created_at, updated_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            lead_id,
            lead["vendor_id"],
            lead["service"],
            lead["timeline"],
            lead.get("budget_range"),
            json.dumps(lead["customer"]),
            json.dumps(requirements) if requirements is not None else None,
            json.dumps(lead.get("source") or {}),
            lead.get("status") or "pending",
            now,
            now,
        ),
    )
    return lead_id


def row_to_vendor(row: sqlite3.Row) -> dict:
    """Rebuild a nested vendor document from a (possibly projected) row."""
    cols = set(row.keys())

    def get(column: str, default: Any = None) -> Any:
        if column not in cols:
            return default
        value = row[column]
        if column in _JSON_LIST_COLUMNS:
            return _json_list(value)
        return value if value is not None else default

    vendor = {
        "id": get("id"),
        "company": get("company"),
        "name": get("name"),
        "email": get("email"),
        "tier": get("tier"),
        "listing_status": get("listing_status"),
        "show_pricing": bool(get("show_pricing", 0)),
        "services": get("services", []),
        "brands": get("brands", []),
        "postcode_areas": get("postcode_areas", []),
        "account": {
            "status": get("account_status"),
            "verification_status": get("verification_status"),
            "login_count": get("login_count", 0),
        },
        "contact_info": {
            "phone": get("phone"),
            "website": get("website"),
        },
        "location": {
            "city": get("city"),
            "region": get("region"),
            "coverage": get("coverage", []),
        },
        "business_profile": {
            "description": get("description"),
            "years_in_business": get("years_in_business"),
            "accreditations": get("accreditations", []),
        },
        "performance": {
            "rating": get("rating", 0),
            "review_count": get("review_count", 0),
        },
    }
    return vendor


def get_vendor(conn: sqlite3.Connection, vendor_id: str) -> dict | None:
    """Load one vendor document by id."""
    row = conn.execute("SELECT * FROM vendors WHERE id = ?", (vendor_id,)).fetchone()
    if row is None:
        return None
    return row_to_vendor(row)


def get_lead(conn: sqlite3.Connection, lead_id: str) -> dict | None:
    """Load one lead document by id."""
    row = conn.execute("SELECT * FROM leads WHERE id = ?", (lead_id,)).fetchone()
    if row is None:
        return None
    lead = dict(row)
    lead["customer"] = json.loads(lead["customer"])
    lead["requirements"] = json.loads(lead["requirements"]) if lead["requirements"] else None
    lead["source"] = json.loads(lead["source"]) if lead["source"] else {}
    return lead

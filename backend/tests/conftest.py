"""
Pytest fixtures for API tests.

Every test gets its own SQLite directory database; the app's database
dependency is overridden to point at it.
"""
import os
import tempfile
from pathlib import Path

# Keep the lifespan database out of the source tree and disable rate limits
os.environ.setdefault("DATABASE_PATH", str(Path(tempfile.mkdtemp(prefix="supplier-api-")) / "lifespan.db"))
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from fastapi.testclient import TestClient

from supplier_api.dependencies import Database, get_database
from supplier_api.main import app
from supplier_api.store import insert_product, insert_vendor


def vendor_doc(**overrides):
    """A listable vendor document: active, verified, free tier."""
    doc = {
        "company": "Test Supplier Ltd",
        "tier": "free",
        "listing_status": "claimed",
        "services": ["Photocopiers"],
        "account": {"status": "active", "verification_status": "verified"},
        "location": {"city": "Cardiff", "region": "South Wales", "coverage": ["Cardiff"]},
    }
    doc.update(overrides)
    return doc


@pytest.fixture
def database(tmp_path):
    """Fresh, opened directory database."""
    db = Database(tmp_path / "directory.db").open()
    yield db
    db.close()


@pytest.fixture
def make_vendor(database):
    """Insert a vendor (plus products) and return its id."""

    def _make(active_products=0, inactive_products=0, **fields):
        with database.connection() as conn:
            vendor_id = insert_vendor(conn, vendor_doc(**fields))
            for i in range(active_products):
                insert_product(conn, vendor_id, f"Product {i}", is_active=True)
            for i in range(inactive_products):
                insert_product(conn, vendor_id, f"Retired {i}", is_active=False)
            conn.commit()
        return vendor_id

    return _make


@pytest.fixture
def client(database):
    """Test client bound to the per-test database."""
    app.dependency_overrides[get_database] = lambda: database
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def base_url():
    """Base URL for public endpoints."""
    return "/api/public"

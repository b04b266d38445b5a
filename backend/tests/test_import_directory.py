"""
Tests for the directory import script.
"""
import json

import pytest

from scripts.import_directory import import_vendors, load_vendor_file
from supplier_api.store import get_vendor


class TestLoadVendorFile:

    def test_reads_array(self, tmp_path):
        path = tmp_path / "vendors.json"
        path.write_text(json.dumps([{"company": "Acme"}]), encoding="utf-8")
        assert load_vendor_file(path) == [{"company": "Acme"}]

    def test_rejects_object(self, tmp_path):
        path = tmp_path / "vendors.json"
        path.write_text(json.dumps({"company": "Acme"}), encoding="utf-8")
        with pytest.raises(ValueError):
            load_vendor_file(path)


class TestImportVendors:

    def test_imports_unclaimed_placeholders(self, database):
        docs = [
            {
                "id": "c" * 24,
                "company": "Acme Copiers",
                "services": ["Photocopiers"],
                "location": {"city": "Cardiff", "coverage": ["Cardiff", "Newport"]},
                "products": [{"name": "MFP 1"}, {"name": "MFP 2", "is_active": False}],
            }
        ]
        with database.connection() as conn:
            stats = import_vendors(conn, docs)
            conn.commit()
            vendor = get_vendor(conn, "c" * 24)
        assert stats == {"vendors": 1, "products": 2, "skipped": 0, "invalid": 0}
        assert vendor["listing_status"] == "unclaimed"
        assert vendor["location"]["coverage"] == ["Cardiff", "Newport"]

    def test_skips_existing_and_invalid(self, database, make_vendor):
        existing = make_vendor()
        with database.connection() as conn:
            stats = import_vendors(conn, [{"id": existing, "company": "Dupe"}, {"services": ["IT"]}])
        assert stats == {"vendors": 0, "products": 0, "skipped": 1, "invalid": 1}

    def test_imported_entries_are_listed(self, client, base_url, database):
        with database.connection() as conn:
            import_vendors(conn, [{"company": "Placeholder Telecoms", "services": ["Telecoms"]}])
            conn.commit()
        data = client.get(f"{base_url}/vendors?category=telecoms").json()["data"]
        assert [v["company"] for v in data["vendors"]] == ["Placeholder Telecoms"]
        assert data["vendors"][0]["accountClaimed"] is False

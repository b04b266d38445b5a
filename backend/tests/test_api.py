"""
Tests for application-level endpoints, error envelopes and middleware.
"""
from supplier_api.middleware.structlog_config import REDACTED, redact_buyer_contact, redact_fields


class TestRoot:
    """Test root and health endpoints."""

    def test_root_endpoint(self, client):
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Supplier Directory API"
        assert "version" in data
        assert data["endpoints"]["vendors"] == "/api/public/vendors"

    def test_health_endpoint(self, client, make_vendor):
        make_vendor()
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == {"status": "connected", "vendor_count": 1}
        assert "uptime_seconds" in data
        assert "cache" in data

    def test_health_reports_closed_store(self, client, database):
        database.close()
        response = client.get("/health")
        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "degraded"
        assert data["database"]["status"] == "closed"


class TestErrorEnvelope:
    """Framework errors use the public failure envelope."""

    def test_unknown_route(self, client):
        response = client.get("/api/public/nonexistent")
        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert "error" in body

    def test_method_not_allowed(self, client, base_url):
        response = client.delete(f"{base_url}/vendors")
        assert response.status_code == 405
        assert response.json()["success"] is False

    def test_validation_details(self, client, base_url):
        response = client.get(f"{base_url}/vendors?limit=many")
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Invalid request data"
        assert body["details"][0].startswith("query.limit:")


class TestMiddleware:
    """Request tracing and security headers."""

    def test_request_id_header(self, client, base_url):
        response = client.get(f"{base_url}/vendors")
        request_id = response.headers.get("X-Request-ID")
        assert request_id is not None
        assert len(request_id) == 8

    def test_request_ids_differ(self, client):
        first = client.get("/").headers["X-Request-ID"]
        second = client.get("/").headers["X-Request-ID"]
        assert first != second

    def test_security_headers(self, client):
        response = client.get("/")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"

    def test_cors_allows_configured_origin(self, client, base_url):
        response = client.get(f"{base_url}/vendors", headers={"Origin": "http://localhost:3000"})
        assert response.headers.get("access-control-allow-origin") == "http://localhost:3000"


class TestLogRedaction:
    """Buyer contact fields are masked in log events."""

    def test_processor_masks_contact_fields(self):
        event = redact_buyer_contact(None, "info", {"event": "x", "email": "a@b.co", "phone": "1", "vendor_id": "v"})
        assert event["email"] == REDACTED
        assert event["phone"] == REDACTED
        assert event["vendor_id"] == "v"

    def test_query_params_redacted(self):
        assert redact_fields({"Email": "a@b.co", "location": "Bath"}) == {
            "Email": "[REDACTED]",
            "location": "Bath",
        }

"""
Tests for the public quote request endpoint.
"""
import pytest

from supplier_api.rate_limit import limiter
from supplier_api.store import get_lead


def quote_payload(vendor_id, **overrides):
    payload = {
        "vendorId": vendor_id,
        "service": "photocopiers",
        "companyName": "Buyer Ltd",
        "contactName": "Sam Buyer",
        "email": "sam@buyer.example",
        "phone": "029 2000 0000",
    }
    payload.update(overrides)
    return {k: v for k, v in payload.items() if v is not None}


@pytest.fixture
def paid_vendor(make_vendor):
    return make_vendor(company="Paid Copiers Ltd", tier="silver")


@pytest.fixture
def submit(client, base_url):
    def _submit(payload):
        return client.post(f"{base_url}/quote-request", json=payload)

    return _submit


def _stored_lead(database, quote_id):
    with database.connection() as conn:
        return get_lead(conn, quote_id)


class TestQuoteAccepted:
    """Successful submissions create a pending lead."""

    def test_confirmation_envelope(self, submit, database, paid_vendor):
        response = submit(quote_payload(paid_vendor))
        assert response.status_code == 200, response.text
        body = response.json()
        assert body["success"] is True
        data = body["data"]
        assert data["supplierName"] == "Paid Copiers Ltd"
        assert data["expectedResponse"] == "1-2 business days"
        assert data["message"].startswith("Quote request submitted successfully")

        lead = _stored_lead(database, data["quoteId"])
        assert lead is not None
        assert lead["vendor_id"] == paid_vendor
        assert lead["status"] == "pending"
        assert lead["service"] == "Photocopiers"

    def test_customer_fields_normalized(self, submit, database, paid_vendor):
        response = submit(
            quote_payload(
                paid_vendor,
                companyName="  Buyer Ltd  ",
                contactName=" Sam ",
                email="Sam@Buyer.EXAMPLE",
                phone=" 01234 ",
                postcode=" CF10 1AA ",
                message=" Need a quote ",
            )
        )
        assert response.status_code == 200, response.text
        customer = _stored_lead(database, response.json()["data"]["quoteId"])["customer"]
        assert customer == {
            "company_name": "Buyer Ltd",
            "contact_name": "Sam",
            "email": "sam@buyer.example",
            "phone": "01234",
            "postcode": "CF10 1AA",
            "message": "Need a quote",
        }

    @pytest.mark.parametrize(
        "given,stored",
        [
            ("copiers", "Photocopiers"),
            ("VOIP", "Telecoms"),
            ("it-services", "IT"),
            ("security-cameras", "CCTV"),
            ("Software", "Software"),
        ],
    )
    def test_service_normalized(self, submit, database, paid_vendor, given, stored):
        response = submit(quote_payload(paid_vendor, service=given))
        assert response.status_code == 200, response.text
        assert _stored_lead(database, response.json()["data"]["quoteId"])["service"] == stored

    def test_default_timeline_and_source(self, submit, database, paid_vendor):
        response = submit(quote_payload(paid_vendor))
        lead = _stored_lead(database, response.json()["data"]["quoteId"])
        assert lead["timeline"] == "planning"
        assert lead["requirements"] is None
        assert lead["source"] == {
            "page": "public-api",
            "referrer": "website",
            "utm": {"source": "direct", "medium": "api", "campaign": None},
        }

    def test_referral_source_recorded(self, submit, database, paid_vendor):
        response = submit(quote_payload(paid_vendor, referralSource="newsletter", timeline="urgent"))
        lead = _stored_lead(database, response.json()["data"]["quoteId"])
        assert lead["timeline"] == "urgent"
        assert lead["source"]["referrer"] == "newsletter"
        assert lead["source"]["utm"] == {"source": "newsletter", "medium": "api", "campaign": "newsletter"}

    def test_monthly_volume_sets_requirements(self, submit, database, paid_vendor):
        response = submit(
            quote_payload(paid_vendor, monthlyVolume=5000, requirements=["colour", "duplex"], budgetRange="£100-£200")
        )
        lead = _stored_lead(database, response.json()["data"]["quoteId"])
        assert lead["requirements"] == {"monthly_volume": 5000, "features": ["colour", "duplex"]}
        assert lead["budget_range"] == "£100-£200"

    def test_requirements_ignored_without_volume(self, submit, database, paid_vendor):
        response = submit(quote_payload(paid_vendor, requirements=["colour"]))
        assert _stored_lead(database, response.json()["data"]["quoteId"])["requirements"] is None


class TestQuoteGate:
    """Only paid tiers or pricing-enabled vendors accept quotes."""

    def test_free_vendor_rejected(self, submit, database, make_vendor):
        vendor_id = make_vendor(tier="free")
        response = submit(quote_payload(vendor_id))
        assert response.status_code == 403
        assert response.json() == {
            "success": False,
            "error": "This supplier is not currently accepting quote requests",
        }
        with database.connection() as conn:
            assert conn.execute("SELECT COUNT(*) FROM leads").fetchone()[0] == 0

    def test_free_vendor_with_pricing_override_accepted(self, submit, make_vendor):
        vendor_id = make_vendor(tier="free", show_pricing=True)
        assert submit(quote_payload(vendor_id)).status_code == 200

    @pytest.mark.parametrize("tier", ["bronze", "standard", "visible", "gold", "enterprise"])
    def test_paid_tiers_accepted(self, submit, make_vendor, tier):
        vendor_id = make_vendor(tier=tier)
        assert submit(quote_payload(vendor_id)).status_code == 200

    def test_unknown_vendor(self, submit):
        response = submit(quote_payload("0" * 24))
        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Supplier not found"}


class TestQuoteValidation:
    """Malformed submissions are rejected without writing a lead."""

    def test_all_fields_missing(self, submit):
        response = submit({})
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Validation failed"
        assert body["details"] == [
            "vendorId is required",
            "service is required",
            "companyName is required",
            "contactName is required",
            "email is required",
            "phone is required",
        ]

    def test_empty_string_counts_as_missing(self, submit, paid_vendor):
        response = submit(quote_payload(paid_vendor, phone=""))
        assert response.status_code == 400
        assert response.json()["details"] == ["phone is required"]

    @pytest.mark.parametrize(
        "email",
        [
            "not-an-email",
            "a@b",
            "a b@c.d",
            "@example.com",
            "  sam@buyer.example ",
            "sam@buyer.example\n",
        ],
    )
    def test_invalid_email(self, submit, paid_vendor, email):
        response = submit(quote_payload(paid_vendor, email=email))
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Invalid email format"}

    def test_validation_runs_before_vendor_lookup(self, submit):
        response = submit(quote_payload("0" * 24, email="broken"))
        assert response.status_code == 400

    def test_unknown_service(self, submit, database, paid_vendor):
        response = submit(quote_payload(paid_vendor, service="plumbing"))
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Invalid request data"
        assert any("`plumbing` is not a valid service" in d for d in body["details"])
        with database.connection() as conn:
            assert conn.execute("SELECT COUNT(*) FROM leads").fetchone()[0] == 0

    def test_invalid_timeline(self, submit, paid_vendor):
        response = submit(quote_payload(paid_vendor, timeline="yesterday"))
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Invalid request data"
        assert body["details"][0].startswith("timeline:")

    def test_whitespace_company_name(self, submit, paid_vendor):
        response = submit(quote_payload(paid_vendor, companyName="   "))
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Invalid request data"
        assert body["details"][0].startswith("customer.company_name:")

    def test_wrong_type_rejected(self, submit, paid_vendor):
        response = submit(quote_payload(paid_vendor, monthlyVolume="lots"))
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request data"

    def test_malformed_json(self, client, base_url):
        response = client.post(
            f"{base_url}/quote-request",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["success"] is False


class TestQuoteFailures:
    """Store failures are reported with the quote-specific message."""

    def test_store_unavailable(self, submit, database, paid_vendor):
        database.close()
        response = submit(quote_payload(paid_vendor))
        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Failed to submit quote request"}


@pytest.fixture
def rate_limited():
    """Enable the limiter with fresh counters for one test."""
    limiter.enabled = True
    limiter.reset()
    yield limiter
    limiter.reset()
    limiter.enabled = False


class TestQuoteRateLimit:
    """Quote intake allows 10 requests per hour per client."""

    def test_eleventh_request_rejected(self, submit, rate_limited):
        statuses = [submit({}).status_code for _ in range(10)]
        assert statuses == [400] * 10

        response = submit({})
        assert response.status_code == 429
        body = response.json()
        assert body["success"] is False
        assert body["error"].startswith("Rate limit exceeded: 10 per 1 hour")
        assert "details" not in body

    def test_listing_limit_is_separate(self, client, base_url, submit, rate_limited):
        for _ in range(11):
            submit({})
        assert client.get(f"{base_url}/vendors").status_code == 200

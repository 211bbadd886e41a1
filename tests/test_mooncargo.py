"""
Moon Cargo Test Suite
======================
Covers: Unit | Ledger | Payments | Listing | Reporting | Ops | Errors

Run:
    pytest tests/ -v

Requirements: pytest pytest-django rest_framework unittest.mock
"""

import datetime
from decimal import Decimal
from unittest.mock import patch, MagicMock

import pytest
from django.db import DatabaseError
from rest_framework import status


# ═══════════════════════════════════════════════════════════════════════════════
# UNIT TESTS — Phone normalization / lenient numbers
# ═══════════════════════════════════════════════════════════════════════════════

class TestNormalizePhone:

    def test_strips_everything_but_digits(self):
        from apps.common.phones import normalize_phone
        assert normalize_phone("+976 9920-5050") == "97699205050"

    def test_none_and_blank_become_empty(self):
        from apps.common.phones import normalize_phone
        assert normalize_phone(None) == ""
        assert normalize_phone("  ") == ""

    def test_numbers_are_accepted(self):
        from apps.common.phones import normalize_phone
        assert normalize_phone(99205050) == "99205050"


class TestLenientFields:
    """Invalid numeric input turns into None instead of failing the request."""

    def setup_method(self):
        from apps.common.fields import LenientDecimalField, LenientIntegerField
        self.money = LenientDecimalField()
        self.signed = LenientDecimalField(allow_negative=True)
        self.count = LenientIntegerField()

    def test_valid_decimal_is_quantized_to_cents(self):
        assert self.money.to_internal_value("12.5") == Decimal("12.50")
        assert self.money.to_internal_value(4000) == Decimal("4000.00")

    @pytest.mark.parametrize("raw", ["abc", "", "NaN", "Infinity", "1e11", True, "-1"])
    def test_garbage_becomes_none(self, raw):
        assert self.money.to_internal_value(raw) is None

    def test_rounding_up_to_the_limit_is_rejected(self):
        assert self.money.to_internal_value("9999999999.999") is None
        assert self.money.to_internal_value("9999999999.99") == Decimal("9999999999.99")

    def test_negative_kept_when_allowed(self):
        assert self.signed.to_internal_value("-5") == Decimal("-5.00")

    def test_quantity_must_be_at_least_one(self):
        assert self.count.to_internal_value("3") == 3
        assert self.count.to_internal_value("0") is None
        assert self.count.to_internal_value("x") is None


class TestCargoConfig:

    def test_reads_project_settings(self):
        from apps.common.config import CargoConfig
        cfg = CargoConfig.from_settings()
        assert cfg.pin_secret == "test-pin-secret"
        assert cfg.admin_secret == "test-admin-secret"
        assert cfg.pin_hotline == "99205050"
        assert (cfg.default_page_size, cfg.max_page_size) == (20, 200)

    def test_admin_secret_falls_back_to_pin_secret(self, settings):
        from apps.common.config import CargoConfig
        settings.ADMIN_PIN_SECRET = ""
        assert CargoConfig.from_settings().admin_secret == "test-pin-secret"


# ═══════════════════════════════════════════════════════════════════════════════
# UNIT TESTS — Error bodies
# ═══════════════════════════════════════════════════════════════════════════════

class TestErrorBodies:

    def test_pin_required_carries_pin_created(self):
        from apps.common.exceptions import PinRequired
        exc = PinRequired("Call us", pin_created=True)
        assert exc.status_code == 403
        assert exc.as_body() == {"message": "Call us", "code": "PIN_REQUIRED", "pinCreated": True}

    def test_extra_keywords_merge_into_body(self):
        from apps.common.exceptions import ValidationError
        body = ValidationError("Barcode is required.", field="barcode").as_body()
        assert body == {"message": "Barcode is required.", "code": "VALIDATION_ERROR", "field": "barcode"}

    def test_default_messages(self):
        from apps.common.exceptions import InvalidAmount, MissingPhone, NotFound
        assert InvalidAmount().as_body()["code"] == "INVALID_AMOUNT"
        assert MissingPhone().status_code == 400
        assert NotFound().status_code == 404


# ═══════════════════════════════════════════════════════════════════════════════
# LEDGER — create / update / patch_status
# ═══════════════════════════════════════════════════════════════════════════════

@pytest.mark.django_db
class TestShipmentCreate:

    def test_create_computes_balance_and_normalizes_phone(self, api_client):
        resp = api_client.post("/api/shipments", {
            "barcode": "MC-1", "phone": "9920 5050", "price": 10000, "paid_amount": 2500,
        }, format="json")
        assert resp.status_code == status.HTTP_201_CREATED
        assert resp.data["phone"] == "99205050"
        assert resp.data["balance"] == Decimal("7500.00")
        assert resp.data["status"] == "pending"
        assert resp.data["location"] == "warehouse"
        assert resp.data["delivery_status"] == "warehouse"
        assert resp.data["quantity"] == 1

    def test_create_issues_pin_for_new_phone(self, api_client):
        from apps.pins.models import CustomerPin
        resp = api_client.post("/api/shipments", {"barcode": "MC-2", "phone": "88112233"}, format="json")
        assert resp.status_code == 201
        stored = CustomerPin.objects.get(phone="88112233")
        assert resp.data["pin"] == stored.pin_plain
        assert len(resp.data["pin"]) == 4

    def test_create_without_phone_has_empty_pin(self, api_client):
        resp = api_client.post("/api/shipments", {"barcode": "MC-3"}, format="json")
        assert resp.status_code == 201
        assert resp.data["pin"] == ""
        assert resp.data["arrival_date"] is not None

    def test_missing_barcode_rejected(self, api_client):
        from apps.shipments.models import Shipment
        resp = api_client.post("/api/shipments", {"phone": "99205050", "price": 100}, format="json")
        assert resp.status_code == status.HTTP_400_BAD_REQUEST
        assert resp.data["code"] == "VALIDATION_ERROR"
        assert resp.data["field"] == "barcode"
        assert Shipment.objects.count() == 0

    def test_invalid_numbers_fall_back_to_defaults(self, api_client):
        resp = api_client.post("/api/shipments", {
            "barcode": "MC-4", "price": "lots", "weight": -3, "quantity": "zero",
        }, format="json")
        assert resp.status_code == 201
        assert resp.data["price"] == Decimal("0.00")
        assert resp.data["weight"] == Decimal("0.00")
        assert resp.data["quantity"] == 1


@pytest.mark.django_db
class TestShipmentUpdate:

    def test_update_recomputes_balance(self, api_client, make_shipment):
        shipment = make_shipment(price="10000", paid_amount="4000")
        resp = api_client.put(f"/api/shipments/{shipment.id}", {"price": 12000}, format="json")
        assert resp.status_code == 200
        assert resp.data["balance"] == Decimal("8000.00")
        shipment.refresh_from_db()
        assert shipment.balance == shipment.price - shipment.paid_amount

    def test_absent_and_invalid_fields_keep_stored_value(self, api_client, make_shipment):
        shipment = make_shipment(price="10000", notes="Sukhbaatar district")
        resp = api_client.put(f"/api/shipments/{shipment.id}", {"price": "abc"}, format="json")
        assert resp.status_code == 200
        assert resp.data["price"] == Decimal("10000.00")
        assert resp.data["notes"] == "Sukhbaatar district"
        assert resp.data["barcode"] == "MC-1"

    def test_blank_barcode_rejected(self, api_client, make_shipment):
        shipment = make_shipment()
        resp = api_client.put(f"/api/shipments/{shipment.id}", {"barcode": "  "}, format="json")
        assert resp.status_code == 400
        shipment.refresh_from_db()
        assert shipment.barcode == "MC-1"

    def test_update_missing_shipment_is_404(self, api_client, db):
        resp = api_client.put("/api/shipments/999", {"price": 1}, format="json")
        assert resp.status_code == status.HTTP_404_NOT_FOUND
        assert resp.data == {"message": "Shipment not found.", "code": "NOT_FOUND"}

    def test_get_missing_shipment_is_404(self, api_client, db):
        resp = api_client.get("/api/shipments/999")
        assert resp.status_code == 404
        assert resp.data["code"] == "NOT_FOUND"

    def test_unknown_location_rejected(self, api_client, make_shipment):
        shipment = make_shipment()
        resp = api_client.put(f"/api/shipments/{shipment.id}", {"location": "moon"}, format="json")
        assert resp.status_code == 400
        assert resp.data["code"] == "VALIDATION_ERROR"
        assert "location" in resp.data["errors"]


@pytest.mark.django_db
class TestPatchStatus:

    def test_back_to_pending_voids_payments(self, api_client, make_shipment):
        shipment = make_shipment(price="10000", paid_amount="10000", status="paid")
        resp = api_client.patch(f"/api/shipments/{shipment.id}/status", {"status": "pending"}, format="json")
        assert resp.status_code == 200
        assert resp.data["paid_amount"] == Decimal("0.00")
        assert resp.data["balance"] == Decimal("10000.00")

    def test_status_change_does_not_recompute_balance(self, api_client, make_shipment):
        shipment = make_shipment(price="10000", paid_amount="4000", status="paid")
        shipment.balance = Decimal("1.00")
        shipment.save()
        resp = api_client.patch(f"/api/shipments/{shipment.id}/status", {"status": "delayed"}, format="json")
        assert resp.status_code == 200
        assert resp.data["balance"] == Decimal("1.00")

    def test_moves_into_delivery_without_pin(self, api_client, make_shipment):
        from apps.pins.models import CustomerPin
        shipment = make_shipment(phone="99205050", status="paid")
        resp = api_client.patch(f"/api/shipments/{shipment.id}/status", {"location": "delivery"}, format="json")
        assert resp.status_code == 200
        assert resp.data["location"] == "delivery"
        assert resp.data["delivery_status"] == "delivery"
        # the pin attached to the response is the only one issued
        assert CustomerPin.objects.filter(phone="99205050").count() == 1

    def test_delivered_stamps_and_canceled_clears(self, api_client, make_shipment):
        shipment = make_shipment(status="paid", location="delivery", delivery_status="delivery")
        url = f"/api/shipments/{shipment.id}/status"

        resp = api_client.patch(url, {"delivery_status": "Delivered"}, format="json")
        assert resp.data["delivery_status"] == "delivered"
        assert resp.data["delivered_at"] is not None

        resp = api_client.patch(url, {"delivery_status": "canceled"}, format="json")
        assert resp.data["delivered_at"] is None

    def test_pending_delivery_clears_stamp(self, api_client, make_shipment):
        shipment = make_shipment(status="paid", location="delivery", delivery_status="delivery")
        url = f"/api/shipments/{shipment.id}/status"

        api_client.patch(url, {"delivery_status": "delivered"}, format="json")
        resp = api_client.patch(url, {"delivery_status": "pending"}, format="json")
        assert resp.data["delivery_status"] == "pending"
        assert resp.data["delivered_at"] is None

    def test_missing_shipment_is_404(self, api_client, db):
        resp = api_client.patch("/api/shipments/999/status", {"status": "paid"}, format="json")
        assert resp.status_code == 404


# ═══════════════════════════════════════════════════════════════════════════════
# PAYMENTS — journal
# ═══════════════════════════════════════════════════════════════════════════════

@pytest.mark.django_db
class TestPayments:

    def test_partial_payment_keeps_status(self, api_client, make_shipment):
        shipment = make_shipment(price="10000")
        resp = api_client.post(f"/api/shipments/{shipment.id}/payments", {"amount": 4000}, format="json")
        assert resp.status_code == status.HTTP_201_CREATED
        assert resp.data["shipment"]["paid_amount"] == Decimal("4000.00")
        assert resp.data["shipment"]["balance"] == Decimal("6000.00")
        assert resp.data["shipment"]["status"] == "pending"
        assert len(resp.data["payments"]) == 1
        assert resp.data["payments"][0]["method"] == "cash"

    def test_exact_payment_marks_paid(self, api_client, make_shipment):
        shipment = make_shipment(price="5000")
        resp = api_client.post(f"/api/shipments/{shipment.id}/payments",
                               {"amount": "5000", "method": "card"}, format="json")
        assert resp.data["shipment"]["balance"] == Decimal("0.00")
        assert resp.data["shipment"]["status"] == "paid"
        assert resp.data["payments"][0]["method"] == "card"

    @pytest.mark.parametrize("amount", [0, -5, "abc", None])
    def test_non_positive_amount_rejected_without_mutation(self, api_client, make_shipment, amount):
        from apps.payments.models import Payment
        shipment = make_shipment(price="10000", paid_amount="1000")
        resp = api_client.post(f"/api/shipments/{shipment.id}/payments", {"amount": amount}, format="json")
        assert resp.status_code == status.HTTP_400_BAD_REQUEST
        assert resp.data["code"] == "INVALID_AMOUNT"
        assert Payment.objects.count() == 0
        shipment.refresh_from_db()
        assert shipment.paid_amount == Decimal("1000.00")
        assert shipment.balance == Decimal("9000.00")

    def test_paid_total_cannot_pass_column_limit(self, api_client, make_shipment):
        from apps.payments.models import Payment
        shipment = make_shipment(price="9999999999")
        url = f"/api/shipments/{shipment.id}/payments"

        first = api_client.post(url, {"amount": 9999999999}, format="json")
        assert first.status_code == 201
        second = api_client.post(url, {"amount": 9999999999}, format="json")
        assert second.status_code == status.HTTP_400_BAD_REQUEST
        assert second.data["code"] == "INVALID_AMOUNT"

        assert Payment.objects.count() == 1
        resp = api_client.get(f"/api/shipments/{shipment.id}")
        assert resp.status_code == 200
        assert resp.data["paid_amount"] == Decimal("9999999999.00")

    def test_payment_for_missing_shipment_is_404(self, api_client, db):
        resp = api_client.post("/api/shipments/999/payments", {"amount": 100}, format="json")
        assert resp.status_code == 404

    def test_history_is_newest_first(self, api_client, make_shipment):
        shipment = make_shipment(price="10000")
        url = f"/api/shipments/{shipment.id}/payments"
        api_client.post(url, {"amount": 100}, format="json")
        api_client.post(url, {"amount": 200}, format="json")

        resp = api_client.get(url)
        assert resp.status_code == 200
        assert [p["amount"] for p in resp.data] == [Decimal("200.00"), Decimal("100.00")]
        assert all(p["shipment_id"] == shipment.id for p in resp.data)

    def test_history_for_missing_shipment_is_empty(self, api_client, db):
        assert api_client.get("/api/shipments/999/payments").data == []

    def test_journal_returns_shipment_with_pin(self, make_shipment):
        from apps.payments.service import PaymentJournal
        shipment = make_shipment(price="300", phone="99001122")
        updated, payments = PaymentJournal().record(shipment.id, Decimal("300.00"))
        assert updated.status == "paid"
        assert len(updated.pin) == 4
        assert len(payments) == 1


@pytest.mark.django_db
class TestEndToEnd:
    """MC-1: register → pay part → pay the rest."""

    def test_register_and_settle(self, api_client):
        resp = api_client.post("/api/shipments", {
            "barcode": "MC-1", "phone": "99205050", "price": 10000,
        }, format="json")
        assert resp.status_code == 201
        sid = resp.data["id"]

        resp = api_client.post(f"/api/shipments/{sid}/payments", {"amount": 4000}, format="json")
        assert resp.data["shipment"]["balance"] == Decimal("6000.00")
        assert resp.data["shipment"]["status"] == "pending"

        resp = api_client.post(f"/api/shipments/{sid}/payments", {"amount": 6000}, format="json")
        assert resp.data["shipment"]["balance"] == Decimal("0.00")
        assert resp.data["shipment"]["status"] == "paid"
        assert len(resp.data["payments"]) == 2

        resp = api_client.get(f"/api/shipments/{sid}")
        assert resp.data["paid_amount"] == Decimal("10000.00")


# ═══════════════════════════════════════════════════════════════════════════════
# LISTING — filters, ordering, pagination
# ═══════════════════════════════════════════════════════════════════════════════

@pytest.fixture
def three_shipments(make_shipment):
    return [
        make_shipment(barcode="MC-A", phone="99205050", arrival_date=datetime.date(2024, 1, 1),
                      notes="Bayanzurkh 3"),
        make_shipment(barcode="MC-B", phone="88110000", arrival_date=datetime.date(2024, 1, 2),
                      status="paid"),
        make_shipment(barcode="MC-C", phone="99001111", arrival_date=datetime.date(2024, 1, 3),
                      location="delivery", delivery_status="delivery"),
    ]


@pytest.mark.django_db
class TestShipmentList:

    def test_second_page_of_one(self, api_client, three_shipments):
        resp = api_client.get("/api/shipments", {"page": 2, "limit": 1})
        assert resp.status_code == 200
        assert [row["barcode"] for row in resp.data["data"]] == ["MC-B"]
        assert resp.data["meta"] == {"page": 2, "limit": 1, "total": 3}

    def test_newest_arrival_first_and_undated_last(self, api_client, three_shipments, make_shipment):
        make_shipment(barcode="MC-X", arrival_date=None)
        resp = api_client.get("/api/shipments")
        assert [row["barcode"] for row in resp.data["data"]] == ["MC-C", "MC-B", "MC-A", "MC-X"]

    @pytest.mark.parametrize("page,limit,expected", [
        ("0", "0", (1, 20)),
        ("abc", "xyz", (1, 20)),
        ("-3", "500", (1, 200)),
        ("1", "-5", (1, 1)),
    ])
    def test_pagination_inputs_are_clamped(self, api_client, three_shipments, page, limit, expected):
        resp = api_client.get("/api/shipments", {"page": page, "limit": limit})
        assert resp.status_code == 200
        assert (resp.data["meta"]["page"], resp.data["meta"]["limit"]) == expected

    def test_filter_by_partial_phone(self, api_client, three_shipments):
        resp = api_client.get("/api/shipments", {"phone": "9920-50"})
        assert [row["barcode"] for row in resp.data["data"]] == ["MC-A"]

    def test_filter_by_status_and_location(self, api_client, three_shipments):
        assert api_client.get("/api/shipments", {"status": "paid"}).data["meta"]["total"] == 1
        resp = api_client.get("/api/shipments", {"location": "delivery"})
        assert [row["barcode"] for row in resp.data["data"]] == ["MC-C"]

    def test_filter_by_arrival_window(self, api_client, three_shipments):
        resp = api_client.get("/api/shipments", {"dateFrom": "2024-01-02", "dateTo": "2024-01-02"})
        assert [row["barcode"] for row in resp.data["data"]] == ["MC-B"]

    def test_search_matches_address_and_barcode(self, api_client, three_shipments):
        assert [r["barcode"] for r in api_client.get("/api/shipments", {"search": "bayan"}).data["data"]] == ["MC-A"]
        assert api_client.get("/api/shipments", {"search": "mc-"}).data["meta"]["total"] == 3

    def test_barcode_partial_match(self, api_client, three_shipments):
        resp = api_client.get("/api/shipments", {"barcode": "c-c"})
        assert [row["barcode"] for row in resp.data["data"]] == ["MC-C"]

    def test_invalid_filter_value_rejected(self, api_client, three_shipments):
        resp = api_client.get("/api/shipments", {"location": "moon"})
        assert resp.status_code == 400
        assert "location" in resp.data["errors"]

    def test_rows_carry_pins(self, api_client, three_shipments):
        from apps.pins.models import CustomerPin
        resp = api_client.get("/api/shipments")
        pins = {row["phone"]: row["pin"] for row in resp.data["data"]}
        for phone, pin in pins.items():
            assert CustomerPin.objects.get(phone=phone).pin_plain == pin


# ═══════════════════════════════════════════════════════════════════════════════
# REPORTING / CONTENT
# ═══════════════════════════════════════════════════════════════════════════════

@pytest.mark.django_db
class TestStatsSummary:

    def test_empty_database(self, api_client):
        resp = api_client.get("/api/stats/summary")
        assert resp.status_code == 200
        assert resp.data["total_shipments"] == 0
        assert resp.data["total_price"] == Decimal("0")
        assert resp.data["by_status"] == {}

    def test_totals_and_breakdown(self, api_client, make_shipment):
        make_shipment(barcode="A", price="1000", paid_amount="200")
        make_shipment(barcode="B", price="500", status="paid", paid_amount="500")
        make_shipment(barcode="C", price="250")
        resp = api_client.get("/api/stats/summary")
        assert resp.data["total_shipments"] == 3
        assert resp.data["total_price"] == Decimal("1750.00")
        assert resp.data["total_balance"] == Decimal("1050.00")
        assert resp.data["by_status"] == {"pending": 2, "paid": 1}


@pytest.mark.django_db
class TestSiteContent:

    def test_unset_content_is_empty_list(self, api_client):
        assert api_client.get("/api/content").data == {"sections": []}

    def test_put_then_get(self, api_client):
        sections = [{"title": "Hours", "body": "09:00-18:00"}, {"title": "Rates"}]
        resp = api_client.put("/api/content", {"sections": sections}, format="json")
        assert resp.status_code == 200
        assert resp.data["sections"] == sections
        assert api_client.get("/api/content").data["sections"] == sections

    def test_non_list_is_stored_as_empty(self, api_client):
        api_client.put("/api/content", {"sections": [{"title": "old"}]}, format="json")
        resp = api_client.put("/api/content", {"sections": "oops"}, format="json")
        assert resp.data == {"sections": []}
        assert api_client.get("/api/content").data == {"sections": []}


# ═══════════════════════════════════════════════════════════════════════════════
# OPS — health, metrics, schema, unexpected errors
# ═══════════════════════════════════════════════════════════════════════════════

@pytest.mark.django_db
class TestOps:

    def test_health_ok(self, api_client):
        resp = api_client.get("/health")
        assert resp.status_code == 200
        assert resp.data == {"ok": True, "checks": {"database": "ok"}}

    def test_health_reports_database_failure(self, api_client):
        with patch("apps.ops.views.connection") as conn:
            conn.cursor.side_effect = DatabaseError("connection refused")
            resp = api_client.get("/health")
        assert resp.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert resp.data["ok"] is False
        assert resp.data["checks"]["database"].startswith("error")

    def test_metrics_exposed(self, api_client):
        resp = api_client.get("/metrics")
        assert resp.status_code == 200

    def test_openapi_schema_served(self, api_client):
        resp = api_client.get("/api/schema")
        assert resp.status_code == 200

    def test_unexpected_error_becomes_500_body(self, api_client):
        from apps.shipments import views
        with patch.object(views.ledger, "get", MagicMock(side_effect=RuntimeError("boom"))):
            resp = api_client.get("/api/shipments/1")
        assert resp.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert resp.data == {"message": "Internal server error.", "code": "INTERNAL_ERROR"}

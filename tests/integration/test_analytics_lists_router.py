# tests/integration/test_analytics_lists_router.py
from __future__ import annotations

from datetime import date
from decimal import Decimal

from salesledger_api.domain.entities.ledger_rows import (
    CustomerPurchaseTotal,
    DocumentPrefixTotal,
    ProductSalesTotal,
)


def test_products_envelope_and_camel_case(client, fake_ledger) -> None:
    fake_ledger.products = [
        ProductSalesTotal("L3-8G", "Lamp", Decimal("1234.565"), Decimal("12.5")),
        ProductSalesTotal("A1-40G", "Bulb", Decimal("10"), Decimal("1")),
    ]

    resp = client.get(
        "/api/analytics/products",
        params={"startDate": "2024-08-01", "endDate": "2024-08-31", "limit": "1"},
        headers={"X-Request-ID": "req-products"},
    )

    assert resp.status_code == 200
    assert resp.headers["X-Request-ID"] == "req-products"
    body = resp.json()
    assert body["success"] is True
    assert body["data"] == [
        {
            "productCode": "L3-8G",
            "productName": "Lamp",
            "totalSales": 1234.57,
            "totalQuantity": 12.5,
        }
    ]
    assert fake_ledger.calls == [("product_sales", (date(2024, 8, 1), date(2024, 9, 1), 1))]


def test_products_without_range_uses_all_history(client, fake_ledger) -> None:
    resp = client.get("/api/analytics/products")
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "data": []}
    assert fake_ledger.calls == [("product_sales", (None, None, None))]


def test_lone_start_date_is_rejected(client, fake_ledger) -> None:
    resp = client.get("/api/analytics/products", params={"startDate": "2024-08-01"})
    body = resp.json()
    assert resp.status_code == 400
    assert body["success"] is False
    assert body["code"] == "VALIDATION_ERROR"
    assert "together" in body["error"]
    assert body["trace_id"]
    assert fake_ledger.calls == []


def test_bad_limit_and_bad_date(client) -> None:
    assert client.get("/api/analytics/products", params={"limit": "0"}).status_code == 400
    assert client.get("/api/analytics/products", params={"limit": "ten"}).status_code == 400
    resp = client.get(
        "/api/analytics/customers", params={"startDate": "2024-02-30", "endDate": "2024-03-01"}
    )
    assert resp.status_code == 400
    assert "startDate" in resp.json()["error"]


def test_reversed_range_is_rejected(client) -> None:
    resp = client.get(
        "/api/analytics/sales-summary", params={"startDate": "2024-09-01", "endDate": "2024-08-01"}
    )
    assert resp.status_code == 400


def test_last_calendar_day_as_end_date_is_rejected(client, fake_ledger) -> None:
    resp = client.get(
        "/api/analytics/products", params={"startDate": "9999-12-01", "endDate": "9999-12-31"}
    )
    body = resp.json()
    assert resp.status_code == 400
    assert body["code"] == "VALIDATION_ERROR"
    assert "endDate" in body["error"]
    assert fake_ledger.calls == []

    resp = client.get(
        "/api/analytics/reconciliation",
        params={"startDate": "9999-01-01", "endDate": "9999-12-31"},
    )
    assert resp.status_code == 400


def test_customers(client, fake_ledger) -> None:
    fake_ledger.customers = [CustomerPurchaseTotal("AR1", "Acme", Decimal("99.999"), 3)]
    data = client.get("/api/analytics/customers").json()["data"]
    assert data == [{"arcode": "AR1", "arname": "Acme", "totalPurchases": 100.0, "orderCount": 3}]


def test_sales_summary(client, fake_ledger) -> None:
    fake_ledger.prefix_totals = [
        DocumentPrefixTotal("SA", Decimal("1000"), 10),
        DocumentPrefixTotal("CN", Decimal("125.5"), 2),
    ]
    data = client.get("/api/analytics/sales-summary").json()["data"]
    assert data == {
        "sales": {"amount": 1000.0, "count": 10, "docType": "SA"},
        "creditNote": {"amount": 125.5, "count": 2, "docType": "CS/CN"},
        "net": {"amount": 874.5, "count": 12, "percentage": 12.55},
    }


def test_ledger_failure_maps_to_500(client, fake_ledger, ledger_down) -> None:
    fake_ledger.fail_with = ledger_down
    resp = client.get("/api/analytics/customers")
    body = resp.json()
    assert resp.status_code == 500
    assert body["success"] is False
    assert body["code"] == "LEDGER_UNAVAILABLE"
    assert "login timeout" in body["error"]

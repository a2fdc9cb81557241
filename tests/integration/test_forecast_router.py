# tests/integration/test_forecast_router.py
from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from salesledger_api.adapters.routers import analytics_router
from salesledger_api.config.settings import get_settings
from salesledger_api.domain.entities.sales_line import RawSalesLine


def _line(docno: str, code: str, qty: str, day: date) -> RawSalesLine:
    return RawSalesLine(
        document_number=docno,
        product_code=code,
        product_name=f"{code} name",
        quantity=Decimal(qty),
        document_date=day,
    )


@pytest.fixture
def frozen_today(monkeypatch: pytest.MonkeyPatch) -> date:
    today = date(2024, 9, 15)
    monkeypatch.setattr(analytics_router, "_today", lambda: today)
    return today


def test_product_forecast_expands_variants(client, fake_ledger) -> None:
    fake_ledger.lines = [
        _line("SA-1", "L3-8G", "5", date(2024, 8, 5)),
        _line("SA-2", "L3-8GX6", "2", date(2024, 8, 6)),
        _line("CN-1", "L3-8G", "1", date(2024, 8, 7)),
    ]

    resp = client.get(
        "/api/analytics/product-forecast",
        params={"startDate": "2024-08-01", "endDate": "2024-08-31"},
    )

    assert resp.status_code == 200
    (item,) = resp.json()["data"]
    assert item["baseCode"] == "L3-8G"
    assert item["baseName"] == "L3-8G name"
    assert item["totalQty"] == 16.0
    assert {d["originalCode"]: (d["rawQty"], d["multiplier"], d["actualQty"]) for d in item["details"]} == {
        "L3-8G": (4.0, 1, 4.0),
        "L3-8GX6": (2.0, 6, 12.0),
    }


def test_product_forecast_defaults_to_trailing_three_months(client, fake_ledger, frozen_today) -> None:
    assert client.get("/api/analytics/product-forecast").status_code == 200
    assert fake_ledger.calls == [("sales_lines", (date(2024, 7, 1), date(2024, 9, 16)))]


def test_prediction_with_target_month(client, fake_ledger) -> None:
    fake_ledger.lines = [
        _line("SA-1", "A1-40G", "100", date(2024, 5, 10)),
        _line("SA-2", "A1-40G", "200", date(2024, 6, 10)),
        _line("SA-3", "A1-40GX12", "25", date(2024, 7, 10)),
    ]

    resp = client.get(
        "/api/analytics/product-forecast-prediction",
        params={"targetMonth": "2024-08", "lookbackMonths": "3"},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["metadata"] == {
        "targetMonth": "2024-08",
        "lookbackMonths": 3,
        "startDate": "2024-05-01",
        "endDate": "2024-07-31",
        "totalBaseCodes": 1,
    }
    (item,) = body["data"]
    assert [h["qty"] for h in item["historicalData"]] == [100.0, 200.0, 300.0]
    assert item["historicalData"][0]["monthName"] == "May 2024"
    assert item["averageQty"] == 200.0
    assert item["forecastQty"] == 200.0
    variant = next(d for d in item["details"] if d["originalCode"] == "A1-40GX12")
    assert variant["monthlyData"] == [
        {"month": "2024-07", "monthName": "Jul 2024", "qty": 25.0, "actualQty": 300.0}
    ]


def test_prediction_defaults(client, fake_ledger, frozen_today, monkeypatch) -> None:
    monkeypatch.setenv("FORECAST_LOOKBACK_MONTHS", "2")
    get_settings.cache_clear()
    meta = client.get("/api/analytics/product-forecast-prediction").json()["metadata"]
    assert meta["targetMonth"] == "2024-10"
    assert meta["lookbackMonths"] == 2
    assert meta["startDate"] == "2024-08-01"
    assert meta["endDate"] == "2024-09-30"


def test_prediction_explicit_range_wins(client, fake_ledger) -> None:
    meta = client.get(
        "/api/analytics/product-forecast-prediction",
        params={
            "targetMonth": "2030-01",
            "lookbackMonths": "12",
            "startDate": "2024-03-15",
            "endDate": "2024-05-20",
        },
    ).json()["metadata"]
    assert meta["targetMonth"] == "2024-06"
    assert meta["lookbackMonths"] == 3
    assert fake_ledger.calls == [("sales_lines", (date(2024, 3, 15), date(2024, 5, 21)))]


@pytest.mark.parametrize(
    "params",
    [
        {"targetMonth": "2024-13"},
        {"targetMonth": "Aug-2024"},
        {"lookbackMonths": "0"},
        {"lookbackMonths": "37"},
        {"lookbackMonths": "three"},
        {"startDate": "2020-01-01", "endDate": "2024-01-01"},
    ],
)
def test_prediction_rejects_bad_parameters(client, fake_ledger, params) -> None:
    resp = client.get("/api/analytics/product-forecast-prediction", params=params)
    assert resp.status_code == 400
    assert resp.json()["code"] == "VALIDATION_ERROR"
    assert fake_ledger.calls == []

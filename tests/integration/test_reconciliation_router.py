# tests/integration/test_reconciliation_router.py
from __future__ import annotations

from decimal import Decimal

import pytest

RANGE = {"startDate": "2024-08-01", "endDate": "2024-08-31"}


@pytest.fixture(autouse=True)
def _two_candidates(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RECONCILIATION_FIELDS", "header_total_amount,line_net_amount,line_discount")


def test_reconciliation_ranks_candidates(client, fake_ledger) -> None:
    fake_ledger.candidate_values = {
        "header_total_amount": Decimal("1070.00"),
        "line_net_amount": Decimal("1000.004"),
        "line_discount": None,
    }

    resp = client.get("/api/analytics/reconciliation", params=RANGE)

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["dateRange"] == {"startDate": "2024-08-01", "endDate": "2024-08-31"}
    assert body["externalAPITarget"] == {"value": 1000.0, "source": "fake_report", "error": None}
    assert [(f["fieldName"], f["rank"]) for f in body["allFields"]] == [
        ("line_net_amount", 1),
        ("header_total_amount", 2),
    ]
    assert body["allFields"][1]["differenceFromReference"] == 70.0
    assert body["allFields"][1]["percentDifference"] == 7.0
    assert body["summary"] == {
        "closestField": "line_net_amount",
        "closestValue": 1000.0,
        "differenceFromReference": 0.0,
        "percentDifference": 0.0,
        "candidatesEvaluated": 2,
        "candidatesExcluded": 1,
        "referenceAvailable": True,
    }


def test_reference_outage_still_returns_candidates(client, fake_ledger, fake_reference) -> None:
    fake_reference.error = "Sales report request timed out after 10s"
    fake_ledger.candidate_values = {"header_total_amount": Decimal("5")}

    resp = client.get("/api/analytics/reconciliation", params=RANGE)

    assert resp.status_code == 200
    body = resp.json()
    assert body["externalAPITarget"]["value"] is None
    assert body["externalAPITarget"]["error"] == "Sales report request timed out after 10s"
    assert body["allFields"] == [
        {
            "fieldName": "header_total_amount",
            "sourceDescription": "CSSALE.TOTALAMOUNT, active documents",
            "value": 5.0,
            "differenceFromReference": None,
            "percentDifference": None,
            "rank": None,
        }
    ]
    assert body["summary"]["closestField"] is None
    assert body["summary"]["referenceAvailable"] is False


@pytest.mark.parametrize("params", [{}, {"startDate": "2024-08-01"}, {"endDate": "2024-08-31"}])
def test_reconciliation_requires_both_dates(client, fake_ledger, params) -> None:
    resp = client.get("/api/analytics/reconciliation", params=params)
    assert resp.status_code == 400
    assert fake_ledger.calls == []


def test_reconciliation_ledger_failure(client, fake_ledger, ledger_down) -> None:
    fake_ledger.fail_with = ledger_down
    resp = client.get("/api/analytics/reconciliation", params=RANGE)
    assert resp.status_code == 500
    assert resp.json()["code"] == "LEDGER_UNAVAILABLE"

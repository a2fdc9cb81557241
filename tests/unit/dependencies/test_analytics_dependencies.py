# tests/unit/dependencies/test_analytics_dependencies.py
from __future__ import annotations

import pytest

from salesledger_api.dependencies import analytics as dep


def test_reconciliation_candidates_follow_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RECONCILIATION_FIELDS", "line_discount")
    assert [c.name for c in dep.get_reconciliation_candidates()] == ["line_discount"]


def test_forecast_lookback_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FORECAST_LOOKBACK_MONTHS", "12")
    assert dep.get_forecast_lookback_default() == 12


def test_sales_report_settings_are_cached() -> None:
    assert dep.get_sales_report_settings() is dep.get_sales_report_settings()

# tests/unit/config/test_app_settings.py
from __future__ import annotations

import pytest
from pydantic import ValidationError

from salesledger_api.config.settings import Environment, Settings, get_settings


def test_settings_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "staging")
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("API_PREFIX", "v1/")
    monkeypatch.setenv("FORECAST_LOOKBACK_MONTHS", "6")

    s = Settings()  # type: ignore[call-arg]

    assert s.environment is Environment.STAGING
    assert s.database_url.startswith("mssql+aioodbc://")
    assert s.cors_allow_origins == ["https://a.example", "https://b.example"]
    assert s.api_prefix == "/v1"
    assert s.forecast_lookback_months == 6


def test_cors_accepts_json_array(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ALLOWED_ORIGINS", '["https://x.example"]')
    assert Settings().cors_allow_origins == ["https://x.example"]  # type: ignore[call-arg]


def test_wildcard_cors_rejected_in_production(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("ALLOWED_ORIGINS", "*")
    with pytest.raises(ValidationError):
        Settings()  # type: ignore[call-arg]


def test_reconciliation_fields_select_registry_subset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RECONCILIATION_FIELDS", "line_net_amount,header_total_amount")
    names = [c.name for c in Settings().reconciliation_candidates()]  # type: ignore[call-arg]
    assert names == ["header_total_amount", "line_net_amount"]


def test_unknown_reconciliation_field_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RECONCILIATION_FIELDS", "header_total_amount,bogus")
    with pytest.raises(ValidationError):
        Settings()  # type: ignore[call-arg]


@pytest.mark.parametrize("raw", ["0", "37"])
def test_lookback_bounds(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("FORECAST_LOOKBACK_MONTHS", raw)
    with pytest.raises(ValidationError):
        Settings()  # type: ignore[call-arg]


def test_get_settings_wraps_invalid_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_POOL_SIZE", "0")
    with pytest.raises(RuntimeError, match="Invalid configuration"):
        get_settings()


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()

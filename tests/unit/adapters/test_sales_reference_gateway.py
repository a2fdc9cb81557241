# tests/unit/adapters/test_sales_reference_gateway.py
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any

import pytest

from salesledger_api.adapters.gateways.sales_reference_gateway import (
    HttpSalesReferenceGateway,
    extract_path,
    to_decimal,
)
from salesledger_api.domain.exceptions.sales_ledger import ExternalReferenceError


class _StubClient:
    def __init__(self, body: dict[str, Any]) -> None:
        self.body = body
        self.calls: list[tuple[date, date]] = []

    async def fetch_summary(self, start: date, end: date) -> dict[str, Any]:
        self.calls.append((start, end))
        return self.body


def test_extract_path_walks_nested_objects() -> None:
    assert extract_path({"data": {"net": {"amount": 5}}}, "data.net.amount") == 5


@pytest.mark.parametrize(
    "body",
    [{}, {"data": {}}, {"data": {"net": 12}}, {"data": [{"net": {"amount": 1}}]}],
)
def test_extract_path_missing_segment(body: dict[str, Any]) -> None:
    with pytest.raises(ExternalReferenceError, match="data.net.amount"):
        extract_path(body, "data.net.amount")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(1234.5, Decimal("1234.5")), ("99.10", Decimal("99.10")), (7, Decimal("7"))],
)
def test_to_decimal_accepts_numbers_and_numeric_strings(raw: Any, expected: Decimal) -> None:
    assert to_decimal(raw, path="p") == expected


@pytest.mark.parametrize("raw", [None, True, "n/a", "NaN", "Infinity", {}])
def test_to_decimal_rejects_non_numeric(raw: Any) -> None:
    with pytest.raises(ExternalReferenceError):
        to_decimal(raw, path="p")


@pytest.mark.asyncio
async def test_gateway_reads_configured_path() -> None:
    client = _StubClient({"summary": {"net": "2500.75"}})
    gateway = HttpSalesReferenceGateway(client, value_path="summary.net")  # type: ignore[arg-type]

    value = await gateway.net_sales_total(date(2024, 8, 1), date(2024, 8, 31))

    assert value == Decimal("2500.75")
    assert gateway.source_name == "sales_report"
    assert client.calls == [(date(2024, 8, 1), date(2024, 8, 31))]

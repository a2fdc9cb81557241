# tests/unit/application/use_cases/test_list_sales.py
from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from salesledger_api.application.schemas.dto.analytics import DateRangeDTO
from salesledger_api.application.use_cases.analytics.list_sales import (
    ListCustomerPurchasesUseCase,
    ListProductSalesUseCase,
)
from salesledger_api.domain.entities.ledger_rows import CustomerPurchaseTotal, ProductSalesTotal
from salesledger_api.domain.exceptions.sales_ledger import LedgerUnavailableError


@pytest.mark.asyncio
async def test_product_list_passes_half_open_window_and_limit(fake_ledger) -> None:
    fake_ledger.products = [
        ProductSalesTotal("P1", "One", Decimal("300"), Decimal("3")),
        ProductSalesTotal("P2", "Two", Decimal("200"), Decimal("2")),
    ]
    window = DateRangeDTO(start=date(2024, 8, 1), end=date(2024, 8, 31))

    out = await ListProductSalesUseCase(fake_ledger).execute(window, limit=1)

    assert [p.product_code for p in out.items] == ["P1"]
    assert fake_ledger.calls == [("product_sales", (date(2024, 8, 1), date(2024, 9, 1), 1))]


@pytest.mark.asyncio
async def test_product_list_without_window(fake_ledger) -> None:
    await ListProductSalesUseCase(fake_ledger).execute()
    assert fake_ledger.calls == [("product_sales", (None, None, None))]


@pytest.mark.asyncio
async def test_customer_list(fake_ledger) -> None:
    fake_ledger.customers = [CustomerPurchaseTotal("AR1", "Acme", Decimal("50"), 2)]
    out = await ListCustomerPurchasesUseCase(fake_ledger).execute(None)
    assert out.items[0].arname == "Acme"


@pytest.mark.asyncio
async def test_ledger_failure_propagates(fake_ledger, ledger_down) -> None:
    fake_ledger.fail_with = ledger_down
    with pytest.raises(LedgerUnavailableError):
        await ListCustomerPurchasesUseCase(fake_ledger).execute()

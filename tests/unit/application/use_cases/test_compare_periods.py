# tests/unit/application/use_cases/test_compare_periods.py
from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from salesledger_api.application.schemas.dto.analytics import (
    DateRangeDTO,
    PeriodComparisonRequestDTO,
)
from salesledger_api.application.use_cases.analytics.compare_periods import (
    TOP_N,
    CompareCustomerPeriodsUseCase,
    CompareProductPeriodsUseCase,
)
from salesledger_api.domain.entities.ledger_rows import DailyActivityRow, PartyTotal

CUR = DateRangeDTO(start=date(2024, 8, 1), end=date(2024, 8, 31))
PREV = DateRangeDTO(start=date(2024, 7, 1), end=date(2024, 7, 31))


def _row(d: date, amount: str, party: str) -> DailyActivityRow:
    return DailyActivityRow(
        activity_date=d, amount=Decimal(amount), quantity=Decimal("1"), party_code=party
    )


@pytest.mark.asyncio
async def test_product_comparison(fake_ledger) -> None:
    fake_ledger.activity[("L3-8G", CUR.start)] = [
        _row(date(2024, 8, 1), "100", "AR1"),
        _row(date(2024, 8, 1), "50", "AR2"),
    ]
    fake_ledger.activity[("L3-8G", PREV.start)] = [_row(date(2024, 7, 3), "75", "AR1")]
    fake_ledger.top = [PartyTotal(f"AR{i}", f"C{i}", Decimal("1"), Decimal("1")) for i in range(8)]

    out = await CompareProductPeriodsUseCase(fake_ledger).execute(
        PeriodComparisonRequestDTO(subject="L3-8G", current=CUR, previous=PREV)
    )

    assert out.current.total_amount == Decimal("150")
    assert out.current.order_count == 2
    assert out.previous.order_count == 1
    assert out.growth.amount_growth == Decimal("100")
    assert len(out.top_parties) == TOP_N
    assert [(p.day, p.previous) for p in out.daily_comparison] == [(date(2024, 8, 1), Decimal("0"))]
    assert ("top_customers_for_product", ("L3-8G", CUR.start, date(2024, 9, 1), TOP_N)) in (
        fake_ledger.calls
    )


@pytest.mark.asyncio
async def test_customer_comparison_counts_documents(fake_ledger) -> None:
    fake_ledger.activity[("AR1", CUR.start)] = [
        _row(date(2024, 8, 2), "10", "SA-1"),
        _row(date(2024, 8, 2), "30", "SA-2"),
    ]

    out = await CompareCustomerPeriodsUseCase(fake_ledger).execute(
        PeriodComparisonRequestDTO(subject="AR1", current=CUR, previous=PREV)
    )

    assert out.current.order_count == 2
    assert out.current.avg_order_value == Decimal("20")
    assert out.previous.total_amount == Decimal("0")
    assert out.growth.amount_growth == Decimal("100")
    names = {name for name, _ in fake_ledger.calls}
    assert names == {"customer_daily_activity", "top_products_for_customer"}

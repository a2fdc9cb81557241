# tests/unit/application/use_cases/test_reconcile_sales.py
from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from salesledger_api.application.schemas.dto.analytics import DateRangeDTO
from salesledger_api.application.use_cases.analytics.reconcile_sales import ReconcileSalesUseCase
from salesledger_api.domain.exceptions.sales_ledger import LedgerUnavailableError
from salesledger_api.domain.services.reconciliation_candidates import select_candidates

WINDOW = DateRangeDTO(start=date(2024, 8, 1), end=date(2024, 8, 31))
NAMES = ["header_total_amount", "header_net_amount", "line_net_amount", "line_discount"]


def _uc(ledger, reference) -> ReconcileSalesUseCase:
    return ReconcileSalesUseCase(ledger, reference, select_candidates(NAMES))


@pytest.mark.asyncio
async def test_candidates_ranked_against_reference(fake_ledger, fake_reference) -> None:
    fake_ledger.candidate_values = {
        "header_total_amount": Decimal("1070"),
        "header_net_amount": Decimal("1000.50"),
        "line_net_amount": Decimal("990"),
        "line_discount": Decimal("0"),
    }

    out = await _uc(fake_ledger, fake_reference).execute(WINDOW)

    assert [c.field_name for c in out.candidates] == [
        "header_net_amount",
        "line_net_amount",
        "header_total_amount",
    ]
    assert out.closest is not None
    assert out.closest.difference_from_reference == Decimal("0.50")
    assert out.evaluated == 3
    assert out.excluded == 1
    assert out.reference.value == Decimal("1000")
    assert out.reference.source == "fake_report"
    # reference gets the inclusive range, the ledger the half-open one
    assert fake_reference.calls == [(date(2024, 8, 1), date(2024, 8, 31))]
    assert ("candidate_total", ("line_net_amount", date(2024, 8, 1), date(2024, 9, 1))) in (
        fake_ledger.calls
    )


@pytest.mark.asyncio
async def test_reference_failure_returns_unranked_candidates(fake_ledger, fake_reference) -> None:
    fake_reference.error = "Sales report returned HTTP 503"
    fake_ledger.candidate_values = {"header_total_amount": Decimal("5"), "line_net_amount": None}

    out = await _uc(fake_ledger, fake_reference).execute(WINDOW)

    assert out.reference.value is None
    assert out.reference.error == "Sales report returned HTTP 503"
    assert [(c.field_name, c.rank) for c in out.candidates] == [("header_total_amount", None)]
    assert out.closest is None
    assert out.excluded == 3


@pytest.mark.asyncio
async def test_ledger_failure_is_fatal(fake_ledger, fake_reference, ledger_down) -> None:
    fake_ledger.fail_with = ledger_down
    with pytest.raises(LedgerUnavailableError):
        await _uc(fake_ledger, fake_reference).execute(WINDOW)

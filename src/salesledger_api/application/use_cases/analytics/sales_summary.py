# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""
Use Case: Sales summary

Purpose:
    Split header totals into sales (``SA``) and credit notes (``CN``/``CS``)
    and derive the net figure and the credit-note ratio.

Layer: application/use_cases
"""

from __future__ import annotations

from decimal import Decimal

from salesledger_api.application.schemas.dto.analytics import (
    DateRangeDTO,
    DocumentClassTotalDTO,
    SalesSummaryDTO,
)
from salesledger_api.domain.interfaces.sales_ledger import SalesLedgerRepository
from salesledger_api.domain.services.numeric import ZERO, percent_of
from salesledger_api.domain.services.sign_convention import CREDIT_PREFIXES, SALES_PREFIX


class GetSalesSummaryUseCase:
    """Summarise sales against credit notes.

    Document classes other than ``SA``, ``CN`` and ``CS`` are ignored.

    Raises:
        LedgerUnavailableError: If the ledger query fails.
    """

    def __init__(self, ledger: SalesLedgerRepository) -> None:
        self._ledger = ledger

    async def execute(self, window: DateRangeDTO | None = None) -> SalesSummaryDTO:
        """Build the summary.

        Args:
            window: Optional inclusive date range.

        Returns:
            SalesSummaryDTO: Sales, credit notes, net amount and credit ratio.
        """
        start, end = window.half_open() if window is not None else (None, None)
        rows = await self._ledger.document_prefix_totals(start, end)

        sales_amount, sales_count = ZERO, 0
        credit_amount, credit_count = ZERO, 0
        for row in rows:
            prefix = row.prefix.strip().upper()
            if prefix == SALES_PREFIX:
                sales_amount += row.total_amount
                sales_count += row.document_count
            elif prefix in CREDIT_PREFIXES:
                credit_amount += row.total_amount
                credit_count += row.document_count

        return SalesSummaryDTO(
            sales=DocumentClassTotalDTO(amount=sales_amount, count=sales_count),
            credit_note=DocumentClassTotalDTO(amount=credit_amount, count=credit_count),
            net_amount=sales_amount - credit_amount,
            net_count=sales_count + credit_count,
            credit_percentage=(
                percent_of(credit_amount, sales_amount) if sales_amount > 0 else Decimal("0")
            ),
        )

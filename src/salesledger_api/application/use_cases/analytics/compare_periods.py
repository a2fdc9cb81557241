# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""
Use Cases: Period-over-period comparison

Purpose:
    Compare a product (by customer activity) or a customer (by document
    activity) across a current and a previous period. The three ledger
    queries of a comparison are independent and run concurrently.

Layer: application/use_cases
"""

from __future__ import annotations

import asyncio

from salesledger_api.application.schemas.dto.analytics import (
    PeriodComparisonDTO,
    PeriodComparisonRequestDTO,
)
from salesledger_api.domain.entities.ledger_rows import DailyActivityRow
from salesledger_api.domain.interfaces.sales_ledger import SalesLedgerRepository
from salesledger_api.domain.services.period_comparison import (
    daily_comparison,
    growth_between,
    summarize_period,
)

TOP_N = 5


def _per_document(row: DailyActivityRow) -> str:
    return row.party_code


class CompareProductPeriodsUseCase:
    """Compare one product code across two periods.

    Orders are counted as distinct (day, customer) pairs; the top customers
    are taken from the current period.

    Raises:
        LedgerUnavailableError: If any ledger query fails.
    """

    def __init__(self, ledger: SalesLedgerRepository) -> None:
        self._ledger = ledger

    async def execute(self, req: PeriodComparisonRequestDTO) -> PeriodComparisonDTO:
        cur_start, cur_end = req.current.half_open()
        prev_start, prev_end = req.previous.half_open()

        current_rows, previous_rows, top = await asyncio.gather(
            self._ledger.product_daily_activity(req.subject, cur_start, cur_end),
            self._ledger.product_daily_activity(req.subject, prev_start, prev_end),
            self._ledger.top_customers_for_product(req.subject, cur_start, cur_end, TOP_N),
        )

        current = summarize_period(current_rows)
        previous = summarize_period(previous_rows)
        return PeriodComparisonDTO(
            current=current,
            previous=previous,
            growth=growth_between(current, previous),
            top_parties=tuple(top),
            daily_comparison=daily_comparison(current, previous),
        )


class CompareCustomerPeriodsUseCase:
    """Compare one customer (AR code) across two periods.

    Each activity row is one document, so the order count is the number of
    documents in the period.

    Args:
        ledger: Sales ledger repository.

    Raises:
        LedgerUnavailableError: If any ledger query fails.
    """

    def __init__(self, ledger: SalesLedgerRepository) -> None:
        self._ledger = ledger

    async def execute(self, req: PeriodComparisonRequestDTO) -> PeriodComparisonDTO:
        cur_start, cur_end = req.current.half_open()
        prev_start, prev_end = req.previous.half_open()

        current_rows, previous_rows, top = await asyncio.gather(
            self._ledger.customer_daily_activity(req.subject, cur_start, cur_end),
            self._ledger.customer_daily_activity(req.subject, prev_start, prev_end),
            self._ledger.top_products_for_customer(req.subject, cur_start, cur_end, TOP_N),
        )

        current = summarize_period(current_rows, order_key=_per_document)
        previous = summarize_period(previous_rows, order_key=_per_document)
        return PeriodComparisonDTO(
            current=current,
            previous=previous,
            growth=growth_between(current, previous),
            top_parties=tuple(top),
            daily_comparison=daily_comparison(current, previous),
        )

# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Sales ledger repository interface.

Purpose:
    Read-only contract for the relational sales ledger. Implementations run
    parameterised queries and return typed domain rows. Windows are
    half-open: ``start <= DOCDATE < end``.

Layer:
    domain/interfaces
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from decimal import Decimal
from typing import Protocol

from salesledger_api.domain.entities.ledger_rows import (
    CustomerPurchaseTotal,
    DailyActivityRow,
    DocumentPrefixTotal,
    PartyTotal,
    ProductSalesTotal,
)
from salesledger_api.domain.entities.reconciliation import CandidateDescriptor
from salesledger_api.domain.entities.sales_line import RawSalesLine


class SalesLedgerRepository(Protocol):
    """Protocol for ledger queries used by the analytics use cases.

    Implementations raise
    :class:`~salesledger_api.domain.exceptions.sales_ledger.LedgerUnavailableError`
    on connectivity or query failures.
    """

    async def product_sales(
        self, start: date | None, end: date | None, limit: int | None = None
    ) -> Sequence[ProductSalesTotal]:
        """Net sales per product code, positive totals only, highest first."""
        ...

    async def customer_purchases(
        self, start: date | None, end: date | None
    ) -> Sequence[CustomerPurchaseTotal]:
        """Header totals per customer, positive totals only, highest first."""
        ...

    async def product_daily_activity(
        self, product_code: str, start: date, end: date
    ) -> Sequence[DailyActivityRow]:
        """Rows for one product grouped by (day, customer)."""
        ...

    async def top_customers_for_product(
        self, product_code: str, start: date, end: date, limit: int = 5
    ) -> Sequence[PartyTotal]:
        ...

    async def customer_daily_activity(
        self, arcode: str, start: date, end: date
    ) -> Sequence[DailyActivityRow]:
        """Rows for one customer, one per document."""
        ...

    async def top_products_for_customer(
        self, arcode: str, start: date, end: date, limit: int = 5
    ) -> Sequence[PartyTotal]:
        ...

    async def document_prefix_totals(
        self, start: date | None, end: date | None
    ) -> Sequence[DocumentPrefixTotal]:
        """Header totals grouped by two-letter document prefix."""
        ...

    async def sales_lines(self, start: date, end: date) -> Sequence[RawSalesLine]:
        """Raw lines in the window, cancelled headers included and flagged."""
        ...

    async def candidate_total(
        self, descriptor: CandidateDescriptor, start: date, end: date
    ) -> Decimal | None:
        """Sum described by ``descriptor``; ``None`` when no rows matched."""
        ...

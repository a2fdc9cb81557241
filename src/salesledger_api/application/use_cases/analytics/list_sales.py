# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""
Use Cases: Product and customer sales lists

Purpose:
    Return per-product net sales and per-customer purchase totals for an
    optional inclusive date range.

Layer: application/use_cases
"""

from __future__ import annotations

from datetime import date

from salesledger_api.application.schemas.dto.analytics import (
    CustomerPurchaseListDTO,
    DateRangeDTO,
    ProductSalesListDTO,
)
from salesledger_api.domain.interfaces.sales_ledger import SalesLedgerRepository


def _bounds(window: DateRangeDTO | None) -> tuple[date | None, date | None]:
    if window is None:
        return None, None
    return window.half_open()


class ListProductSalesUseCase:
    """List products with positive net sales, highest first.

    Args:
        ledger: Sales ledger repository.

    Raises:
        LedgerUnavailableError: If the ledger query fails.
    """

    def __init__(self, ledger: SalesLedgerRepository) -> None:
        self._ledger = ledger

    async def execute(
        self, window: DateRangeDTO | None = None, limit: int | None = None
    ) -> ProductSalesListDTO:
        """Fetch the product list.

        Args:
            window: Optional inclusive date range; ``None`` means all history.
            limit: Optional maximum number of products.

        Returns:
            ProductSalesListDTO: Products ordered by descending net sales.
        """
        start, end = _bounds(window)
        rows = await self._ledger.product_sales(start, end, limit)
        return ProductSalesListDTO(items=tuple(rows))


class ListCustomerPurchasesUseCase:
    """List customers with positive purchase totals, highest first.

    Args:
        ledger: Sales ledger repository.

    Raises:
        LedgerUnavailableError: If the ledger query fails.
    """

    def __init__(self, ledger: SalesLedgerRepository) -> None:
        self._ledger = ledger

    async def execute(self, window: DateRangeDTO | None = None) -> CustomerPurchaseListDTO:
        start, end = _bounds(window)
        rows = await self._ledger.customer_purchases(start, end)
        return CustomerPurchaseListDTO(items=tuple(rows))

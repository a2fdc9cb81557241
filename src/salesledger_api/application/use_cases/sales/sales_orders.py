# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""
Use Cases: Sales order browsing

Purpose:
    List ledger documents, fetch one document with its lines, and build the
    warehouse packing list.

Layer: application/use_cases
"""

from __future__ import annotations

import logging
from datetime import date

from salesledger_api.application.schemas.dto.sales_orders import (
    PackingListDTO,
    SalesOrderDTO,
    SalesOrderLinesDTO,
    SalesOrderListDTO,
    SalesOrderQueryDTO,
)
from salesledger_api.domain.entities.sales_order import SalesOrder
from salesledger_api.domain.exceptions.sales_ledger import SalesOrderNotFoundError
from salesledger_api.domain.interfaces.sales_orders import SalesOrderRepository

logger = logging.getLogger(__name__)


class ListSalesOrdersUseCase:
    """List document headers, newest first.

    Args:
        orders: Sales order repository.

    Raises:
        LedgerUnavailableError: If the ledger query fails.
    """

    def __init__(self, orders: SalesOrderRepository) -> None:
        self._orders = orders

    async def execute(self, query: SalesOrderQueryDTO) -> SalesOrderListDTO:
        """Fetch one page of headers.

        Args:
            query: Date window, customer and paging filters.

        Returns:
            SalesOrderListDTO: Matching headers ordered by date then number, descending.
        """
        start, end = query.window.half_open() if query.window is not None else (None, None)
        rows = await self._orders.list_orders(start, end, query.arcode, query.limit, query.offset)
        return SalesOrderListDTO(items=tuple(rows))


class GetSalesOrderUseCase:
    """Fetch one document header together with its lines.

    Args:
        orders: Sales order repository.

    Raises:
        SalesOrderNotFoundError: If no header has the document number.
        LedgerUnavailableError: If a ledger query fails.
    """

    def __init__(self, orders: SalesOrderRepository) -> None:
        self._orders = orders

    async def execute(self, docno: str) -> SalesOrderDTO:
        header = await self._orders.order_header(docno)
        if header is None:
            logger.info("sales_order.not_found", extra={"extra": {"docno": docno}})
            raise SalesOrderNotFoundError(
                f"Sales order {docno} not found", details={"docno": docno}
            )
        lines = await self._orders.order_lines(docno)
        return SalesOrderDTO(order=SalesOrder(header=header, items=tuple(lines)))


class ListSalesOrderLinesUseCase:
    """Return the lines of one document.

    An unknown document number yields an empty list rather than an error.

    Args:
        orders: Sales order repository.

    Raises:
        LedgerUnavailableError: If the ledger query fails.
    """

    def __init__(self, orders: SalesOrderRepository) -> None:
        self._orders = orders

    async def execute(self, docno: str) -> SalesOrderLinesDTO:
        lines = await self._orders.order_lines(docno)
        return SalesOrderLinesDTO(docno=docno, items=tuple(lines))


class BuildPackingListUseCase:
    """Build the packing list, optionally for a single tax-invoice day.

    Args:
        orders: Sales order repository.

    Returns:
        PackingListDTO from :meth:`execute`, ordered by tax number then document.

    Raises:
        LedgerUnavailableError: If a ledger query fails.
    """

    def __init__(self, orders: SalesOrderRepository) -> None:
        self._orders = orders

    async def execute(self, tax_date: date | None = None) -> PackingListDTO:
        entries = await self._orders.packing_list(tax_date)
        return PackingListDTO(tax_date=tax_date, entries=tuple(entries))

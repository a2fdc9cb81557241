# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Sales order repository interface.

Purpose:
    Read-only access to individual ledger documents (headers and lines),
    as opposed to the grouped totals of :mod:`.sales_ledger`.

Layer:
    domain/interfaces
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from typing import Protocol

from salesledger_api.domain.entities.sales_order import (
    PackingListEntry,
    SalesOrderHeader,
    SalesOrderLine,
)


class SalesOrderRepository(Protocol):
    """Protocol for the order browsing queries.

    Implementations raise
    :class:`~salesledger_api.domain.exceptions.sales_ledger.LedgerUnavailableError`
    on connectivity or query failures.
    """

    async def list_orders(
        self,
        start: date | None,
        end: date | None,
        arcode: str | None,
        limit: int | None,
        offset: int,
    ) -> Sequence[SalesOrderHeader]:
        """Headers in ``start <= DOCDATE < end``, newest first.

        ``offset`` only applies together with ``limit``.
        """
        ...

    async def order_header(self, docno: str) -> SalesOrderHeader | None:
        ...

    async def order_lines(self, docno: str) -> Sequence[SalesOrderLine]:
        """Lines of one document in ``LINEID`` order; empty if it does not exist."""
        ...

    async def packing_list(self, tax_date: date | None) -> Sequence[PackingListEntry]:
        """Documents with their lines, ordered by tax number then document number."""
        ...

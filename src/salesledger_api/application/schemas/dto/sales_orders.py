# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Application DTOs for order browsing and the packing list.

Layer:
    application/schemas/dto
"""

from __future__ import annotations

from datetime import date

from pydantic import Field

from salesledger_api.application.schemas.dto.analytics import DateRangeDTO
from salesledger_api.application.schemas.dto.base import BaseDTO
from salesledger_api.domain.entities.sales_order import (
    PackingListEntry,
    SalesOrder,
    SalesOrderHeader,
    SalesOrderLine,
)


class SalesOrderQueryDTO(BaseDTO):
    """Filters for the order list.

    Attributes:
        window: Optional inclusive document-date range.
        arcode: Optional customer code.
        limit: Page size; ``None`` returns every matching header.
        offset: Headers to skip; only meaningful with ``limit``.
    """

    window: DateRangeDTO | None = None
    arcode: str | None = None
    limit: int | None = Field(default=None, ge=1)
    offset: int = Field(default=0, ge=0)


class SalesOrderListDTO(BaseDTO):
    items: tuple[SalesOrderHeader, ...]


class SalesOrderDTO(BaseDTO):
    order: SalesOrder


class SalesOrderLinesDTO(BaseDTO):
    docno: str
    items: tuple[SalesOrderLine, ...]


class PackingListDTO(BaseDTO):
    tax_date: date | None
    entries: tuple[PackingListEntry, ...]

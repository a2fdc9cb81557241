# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Sales order documents as recorded on the ledger.

Purpose:
    Read-only views of ``CSSALE`` headers and their ``CSSALESUB`` lines, used
    by the order browsing and packing-list endpoints. Unlike the analytics
    rows these are not aggregated: one header per document, one line per
    ``LINEID``.

Layer:
    domain/entities
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from salesledger_api.domain.entities.base import BaseEntity


@dataclass(frozen=True, slots=True)
class SalesOrderHeader(BaseEntity):
    """Header of one sales document."""

    docno: str
    docdate: date | None
    taxno: str
    arcode: str
    arname: str
    total_amount: Decimal

    def __post_init__(self) -> None:
        self.require(bool(self.docno), "docno must not be empty")


@dataclass(frozen=True, slots=True)
class SalesOrderLine(BaseEntity):
    """One line of a sales document.

    ``unit_price`` and ``net_amount`` are ``None`` on packing-list lines,
    which only carry what the warehouse needs.
    """

    line_id: int
    product_code: str
    product_name: str
    quantity: Decimal
    unit_name: str = ""
    unit_price: Decimal | None = None
    net_amount: Decimal | None = None


@dataclass(frozen=True, slots=True)
class SalesOrder(BaseEntity):
    header: SalesOrderHeader
    items: tuple[SalesOrderLine, ...] = ()


@dataclass(frozen=True, slots=True)
class PackingListEntry(BaseEntity):
    """A document to pick, grouped under its tax invoice.

    Attributes:
        header: Document header.
        taxdate: Tax invoice date, if issued.
        close_flag: Raw ``CLOSEFLAG`` value of the header.
        items: Lines to pick, in ``LINEID`` order.
    """

    header: SalesOrderHeader
    taxdate: date | None
    close_flag: str
    items: tuple[SalesOrderLine, ...] = field(default=())

    @property
    def item_count(self) -> int:
        return len(self.items)

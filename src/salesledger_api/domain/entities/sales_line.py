# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Raw sales ledger lines.

Purpose:
    Immutable view of one ledger detail row joined with its document header.
    Instances are produced fresh for every query and never mutated.

Layer:
    domain/entities
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from salesledger_api.domain.entities.base import BaseEntity


@dataclass(frozen=True, slots=True)
class RawSalesLine(BaseEntity):
    """One ledger detail row.

    Attributes:
        document_number: Document number; its first two characters carry the
            document class (``SA`` sale, ``CN``/``CS`` credit note, ...).
        product_code: Product code as sold, possibly with a pack suffix.
        product_name: Product name recorded on the line.
        quantity: Units sold, in the code's own pack size.
        document_date: Calendar date of the document header.
        net_amount: Line net amount.
        amount: Line gross amount.
        is_cancelled: True when the header carries a cancellation timestamp.
        customer_code: Customer (AR) code of the header.
    """

    document_number: str
    product_code: str
    product_name: str
    quantity: Decimal
    document_date: date
    net_amount: Decimal = Decimal("0")
    amount: Decimal = Decimal("0")
    is_cancelled: bool = False
    customer_code: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.quantity, Decimal):
            raise TypeError("RawSalesLine.quantity must be a Decimal")
        if not isinstance(self.document_date, date):
            raise TypeError("RawSalesLine.document_date must be a date")

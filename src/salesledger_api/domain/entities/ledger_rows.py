# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Aggregated ledger rows returned by the sales ledger repository.

Purpose:
    Typed, immutable shapes for the grouped queries behind the list,
    comparison and summary endpoints. Monetary and quantity values are
    :class:`decimal.Decimal`.

Layer:
    domain/entities
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from salesledger_api.domain.entities.base import BaseEntity


@dataclass(frozen=True, slots=True)
class ProductSalesTotal(BaseEntity):
    """Net sales and quantity for one product code over a window."""

    product_code: str
    product_name: str
    total_sales: Decimal
    total_quantity: Decimal


@dataclass(frozen=True, slots=True)
class CustomerPurchaseTotal(BaseEntity):
    """Purchases and order count for one customer over a window."""

    arcode: str
    arname: str
    total_purchases: Decimal
    order_count: int


@dataclass(frozen=True, slots=True)
class DailyActivityRow(BaseEntity):
    """One grouped activity row within a comparison period.

    For product comparisons a row groups one product by (day, customer); for
    customer comparisons a row is a single document of that customer.

    Attributes:
        activity_date: Document day.
        amount: Monetary total for the row.
        quantity: Quantity total for the row.
        party_code: Customer code (product comparison) or document number
            (customer comparison); used to count orders.
        party_name: Display name for the party, if any.
    """

    activity_date: date
    amount: Decimal
    quantity: Decimal
    party_code: str
    party_name: str = ""


@dataclass(frozen=True, slots=True)
class PartyTotal(BaseEntity):
    """Top-N entry: a customer (for a product) or a product (for a customer)."""

    code: str
    name: str
    total_amount: Decimal
    quantity: Decimal


@dataclass(frozen=True, slots=True)
class DocumentPrefixTotal(BaseEntity):
    """Header totals grouped by document prefix (``SA``, ``CN``, ...)."""

    prefix: str
    total_amount: Decimal
    document_count: int

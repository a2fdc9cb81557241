# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""HTTP Schemas: Sales orders and packing list.

Synopsis:
    Response contracts for the ``/sales`` endpoints. Dates are ISO strings
    (``YYYY-MM-DD``), or ``null`` when the ledger has none.

Layer:
    adapters/schemas/http
"""

from __future__ import annotations

from pydantic import Field

from salesledger_api.adapters.schemas.http.base import BaseHTTPSchema, Money, Quantity


class SalesOrderHeaderHTTP(BaseHTTPSchema):
    docno: str = Field(examples=["SA6801-0001"])
    docdate: str | None
    taxno: str
    arcode: str
    arname: str
    total_amount: Money


class SalesOrderLineHTTP(BaseHTTPSchema):
    line_id: int
    product_code: str = Field(examples=["L3-8GX6"])
    product_name: str
    quantity: Quantity
    unit_name: str
    unit_price: Money
    net_amount: Money


class SalesOrderHTTP(SalesOrderHeaderHTTP):
    items: list[SalesOrderLineHTTP]


class PackingItemHTTP(BaseHTTPSchema):
    line_id: int
    product_code: str
    product_name: str
    quantity: Quantity
    unit: str = Field(description="Unit name, or '-' when the line has none.")


class PackingListEntryHTTP(BaseHTTPSchema):
    """One document on the packing list."""

    taxno: str
    taxdate: str | None
    docno: str
    docdate: str | None
    arcode: str
    arname: str
    total_amount: Money
    close_flag: str
    item_count: int
    items: list[PackingItemHTTP]

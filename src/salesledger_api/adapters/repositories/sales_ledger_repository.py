# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""
SQL implementation of the sales ledger repository.

Purpose:
    Run the analytics queries against the legacy ledger tables:

      * ``CSSALE``    document headers (DOCNO, DOCDATE, ARCODE, ARNAME,
                      TOTALAMOUNT, NETAMOUNT, BEFOREVAT, VATAMOUNT, CANCELDATE)
      * ``CSSALESUB`` document lines   (DOCNO, LINEID, PRODUCTCODE, PRODUCTNAME,
                      QUANTITY, UNITPRICE, AMOUNT, DISCAMOUNT, NETAMOUNT,
                      PRODUCTSET)

Rules shared by every query unless a candidate descriptor opts out:
    * Headers with a CANCELDATE are excluded.
    * Lines with PRODUCTSET = 2 (set components, already counted by their
      parent set line) are excluded.
    * Windows are half-open: ``start <= DOCDATE < end``.

Layer: adapters / repositories
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from decimal import Decimal
from typing import Any, Final

from sqlalchemy import bindparam, text

from salesledger_api.adapters.repositories.base_repository import BaseRepository
from salesledger_api.domain.entities.ledger_rows import (
    CustomerPurchaseTotal,
    DailyActivityRow,
    DocumentPrefixTotal,
    PartyTotal,
    ProductSalesTotal,
)
from salesledger_api.domain.entities.reconciliation import CandidateDescriptor, CandidateLevel
from salesledger_api.domain.entities.sales_line import RawSalesLine
from salesledger_api.domain.services.sign_convention import CREDIT_PREFIXES

_ACTIVE: Final[str] = "h.CANCELDATE IS NULL"
_NOT_SET_COMPONENT: Final[str] = "(d.PRODUCTSET IS NULL OR d.PRODUCTSET <> 2)"
_PREFIX: Final[str] = "SUBSTRING(h.DOCNO, 1, 2)"
_LINE_JOIN: Final[str] = "FROM CSSALESUB d INNER JOIN CSSALE h ON d.DOCNO = h.DOCNO"


def _money(expr: str) -> str:
    return f"CAST({expr} AS DECIMAL(18, 2))"


def _window(start: date | None, end: date | None) -> tuple[str, dict[str, Any]]:
    """Return an ``AND ...`` window clause and its parameters (empty when unbounded)."""
    if start is None or end is None:
        return "", {}
    return "AND h.DOCDATE >= :start AND h.DOCDATE < :end", {"start": start, "end": end}


def build_candidate_statement(
    descriptor: CandidateDescriptor,
) -> tuple[Any, dict[str, Any]]:
    """Build the ``SUM`` statement for one reconciliation candidate.

    Column names come from the descriptor whitelist; every value is bound.

    Returns:
        ``(statement, extra_params)``; the caller adds ``start`` and ``end``.
    """
    alias = "h" if descriptor.level is CandidateLevel.HEADER else "d"
    value = _money(f"{alias}.{descriptor.column}")
    if descriptor.signed:
        value = f"(CASE WHEN {_PREFIX} IN :credit_prefixes THEN -1 ELSE 1 END) * {value}"

    source = "FROM CSSALE h" if descriptor.level is CandidateLevel.HEADER else _LINE_JOIN
    where = ["h.DOCDATE >= :start", "h.DOCDATE < :end"]
    if not descriptor.include_cancelled:
        where.append(_ACTIVE)
    if descriptor.level is CandidateLevel.LINE and not descriptor.include_set_components:
        where.append(_NOT_SET_COMPONENT)
    if descriptor.prefixes:
        where.append(f"{_PREFIX} IN :prefixes")

    stmt = text(f"SELECT SUM({value}) AS total {source} WHERE {' AND '.join(where)}")
    params: dict[str, Any] = {}
    if descriptor.signed:
        stmt = stmt.bindparams(bindparam("credit_prefixes", expanding=True))
        params["credit_prefixes"] = sorted(CREDIT_PREFIXES)
    if descriptor.prefixes:
        stmt = stmt.bindparams(bindparam("prefixes", expanding=True))
        params["prefixes"] = list(descriptor.prefixes)
    return stmt, params


class SqlSalesLedgerRepository(BaseRepository):
    """Ledger queries backing the analytics endpoints."""

    async def product_sales(
        self, start: date | None, end: date | None, limit: int | None = None
    ) -> Sequence[ProductSalesTotal]:
        window, params = _window(start, end)
        total = f"SUM({_money('d.NETAMOUNT')})"
        stmt = text(
            f"""
            SELECT d.PRODUCTCODE AS product_code,
                   MAX(d.PRODUCTNAME) AS product_name,
                   {total} AS total_sales,
                   SUM({_money('d.QUANTITY')}) AS total_quantity
            {_LINE_JOIN}
            WHERE {_ACTIVE} AND {_NOT_SET_COMPONENT} {window}
            GROUP BY d.PRODUCTCODE
            HAVING {total} > 0
            ORDER BY {total} DESC, d.PRODUCTCODE
            """
        )
        rows = await self.fetch_all("product_sales", stmt, params, limit=limit)
        return [
            ProductSalesTotal(
                product_code=self.as_text(r["product_code"]),
                product_name=self.as_text(r["product_name"]),
                total_sales=self.as_decimal(r["total_sales"]),
                total_quantity=self.as_decimal(r["total_quantity"]),
            )
            for r in rows
        ]

    async def customer_purchases(
        self, start: date | None, end: date | None
    ) -> Sequence[CustomerPurchaseTotal]:
        window, params = _window(start, end)
        total = f"SUM({_money('h.TOTALAMOUNT')})"
        stmt = text(
            f"""
            SELECT h.ARCODE AS arcode,
                   MAX(h.ARNAME) AS arname,
                   {total} AS total_purchases,
                   COUNT(DISTINCT h.DOCNO) AS order_count
            FROM CSSALE h
            WHERE {_ACTIVE} {window}
            GROUP BY h.ARCODE
            HAVING {total} > 0
            ORDER BY {total} DESC, h.ARCODE
            """
        )
        rows = await self.fetch_all("customer_purchases", stmt, params)
        return [
            CustomerPurchaseTotal(
                arcode=self.as_text(r["arcode"]),
                arname=self.as_text(r["arname"]),
                total_purchases=self.as_decimal(r["total_purchases"]),
                order_count=int(r["order_count"] or 0),
            )
            for r in rows
        ]

    async def product_daily_activity(
        self, product_code: str, start: date, end: date
    ) -> Sequence[DailyActivityRow]:
        stmt = text(
            f"""
            SELECT CAST(h.DOCDATE AS DATE) AS activity_date,
                   h.ARCODE AS party_code,
                   MAX(h.ARNAME) AS party_name,
                   SUM({_money('d.NETAMOUNT')}) AS amount,
                   SUM({_money('d.QUANTITY')}) AS quantity
            {_LINE_JOIN}
            WHERE d.PRODUCTCODE = :code
              AND h.DOCDATE >= :start AND h.DOCDATE < :end
              AND {_ACTIVE} AND {_NOT_SET_COMPONENT}
            GROUP BY CAST(h.DOCDATE AS DATE), h.ARCODE
            ORDER BY CAST(h.DOCDATE AS DATE), h.ARCODE
            """
        )
        rows = await self.fetch_all(
            "product_daily_activity", stmt, {"code": product_code, "start": start, "end": end}
        )
        return [self._activity(r) for r in rows]

    async def top_customers_for_product(
        self, product_code: str, start: date, end: date, limit: int = 5
    ) -> Sequence[PartyTotal]:
        total = f"SUM({_money('d.NETAMOUNT')})"
        stmt = text(
            f"""
            SELECT h.ARCODE AS code,
                   MAX(h.ARNAME) AS name,
                   {total} AS total_amount,
                   SUM({_money('d.QUANTITY')}) AS quantity
            {_LINE_JOIN}
            WHERE d.PRODUCTCODE = :code
              AND h.DOCDATE >= :start AND h.DOCDATE < :end
              AND {_ACTIVE} AND {_NOT_SET_COMPONENT}
            GROUP BY h.ARCODE
            ORDER BY {total} DESC, h.ARCODE
            """
        )
        rows = await self.fetch_all(
            "top_customers_for_product",
            stmt,
            {"code": product_code, "start": start, "end": end},
            limit=limit,
        )
        return [self._party(r) for r in rows]

    async def customer_daily_activity(
        self, arcode: str, start: date, end: date
    ) -> Sequence[DailyActivityRow]:
        stmt = text(
            f"""
            SELECT CAST(h.DOCDATE AS DATE) AS activity_date,
                   h.DOCNO AS party_code,
                   MAX(h.ARNAME) AS party_name,
                   {_money('h.TOTALAMOUNT')} AS amount,
                   COALESCE(SUM({_money('d.QUANTITY')}), 0) AS quantity
            FROM CSSALE h
            LEFT JOIN CSSALESUB d
              ON h.DOCNO = d.DOCNO AND {_NOT_SET_COMPONENT}
            WHERE h.ARCODE = :code
              AND h.DOCDATE >= :start AND h.DOCDATE < :end
              AND {_ACTIVE}
            GROUP BY CAST(h.DOCDATE AS DATE), h.DOCNO, h.TOTALAMOUNT
            ORDER BY CAST(h.DOCDATE AS DATE), h.DOCNO
            """
        )
        rows = await self.fetch_all(
            "customer_daily_activity", stmt, {"code": arcode, "start": start, "end": end}
        )
        return [self._activity(r) for r in rows]

    async def top_products_for_customer(
        self, arcode: str, start: date, end: date, limit: int = 5
    ) -> Sequence[PartyTotal]:
        total = f"SUM({_money('d.NETAMOUNT')})"
        stmt = text(
            f"""
            SELECT d.PRODUCTCODE AS code,
                   MAX(d.PRODUCTNAME) AS name,
                   {total} AS total_amount,
                   SUM({_money('d.QUANTITY')}) AS quantity
            {_LINE_JOIN}
            WHERE h.ARCODE = :code
              AND h.DOCDATE >= :start AND h.DOCDATE < :end
              AND {_ACTIVE} AND {_NOT_SET_COMPONENT}
            GROUP BY d.PRODUCTCODE
            ORDER BY {total} DESC, d.PRODUCTCODE
            """
        )
        rows = await self.fetch_all(
            "top_products_for_customer",
            stmt,
            {"code": arcode, "start": start, "end": end},
            limit=limit,
        )
        return [self._party(r) for r in rows]

    async def document_prefix_totals(
        self, start: date | None, end: date | None
    ) -> Sequence[DocumentPrefixTotal]:
        window, params = _window(start, end)
        stmt = text(
            f"""
            SELECT {_PREFIX} AS prefix,
                   SUM({_money('h.TOTALAMOUNT')}) AS total_amount,
                   COUNT(DISTINCT h.DOCNO) AS document_count
            FROM CSSALE h
            WHERE {_ACTIVE} {window}
            GROUP BY {_PREFIX}
            ORDER BY {_PREFIX}
            """
        )
        rows = await self.fetch_all("document_prefix_totals", stmt, params)
        return [
            DocumentPrefixTotal(
                prefix=self.as_text(r["prefix"]).upper(),
                total_amount=self.as_decimal(r["total_amount"]),
                document_count=int(r["document_count"] or 0),
            )
            for r in rows
        ]

    async def sales_lines(self, start: date, end: date) -> Sequence[RawSalesLine]:
        stmt = text(
            f"""
            SELECT h.DOCNO AS document_number,
                   d.PRODUCTCODE AS product_code,
                   d.PRODUCTNAME AS product_name,
                   {_money('d.QUANTITY')} AS quantity,
                   h.DOCDATE AS document_date,
                   {_money('d.NETAMOUNT')} AS net_amount,
                   {_money('d.AMOUNT')} AS amount,
                   CASE WHEN h.CANCELDATE IS NULL THEN 0 ELSE 1 END AS is_cancelled,
                   h.ARCODE AS customer_code
            {_LINE_JOIN}
            WHERE h.DOCDATE >= :start AND h.DOCDATE < :end
              AND {_NOT_SET_COMPONENT}
            ORDER BY h.DOCDATE, h.DOCNO, d.LINEID
            """
        )
        rows = await self.fetch_all("sales_lines", stmt, {"start": start, "end": end})
        return [
            RawSalesLine(
                document_number=self.as_text(r["document_number"]),
                product_code=self.as_text(r["product_code"]),
                product_name=self.as_text(r["product_name"]),
                quantity=self.as_decimal(r["quantity"]),
                document_date=self.as_date(r["document_date"]),
                net_amount=self.as_decimal(r["net_amount"]),
                amount=self.as_decimal(r["amount"]),
                is_cancelled=bool(r["is_cancelled"]),
                customer_code=self.as_text(r["customer_code"]),
            )
            for r in rows
        ]

    async def candidate_total(
        self, descriptor: CandidateDescriptor, start: date, end: date
    ) -> Decimal | None:
        stmt, params = build_candidate_statement(descriptor)
        value = await self.fetch_scalar(
            f"candidate:{descriptor.name}", stmt, {**params, "start": start, "end": end}
        )
        return None if value is None else self.as_decimal(value)

    # ------------------------------------------------------------------
    # Row mappers
    # ------------------------------------------------------------------

    def _activity(self, r: Any) -> DailyActivityRow:
        return DailyActivityRow(
            activity_date=self.as_date(r["activity_date"]),
            amount=self.as_decimal(r["amount"]),
            quantity=self.as_decimal(r["quantity"]),
            party_code=self.as_text(r["party_code"]),
            party_name=self.as_text(r["party_name"]),
        )

    def _party(self, r: Any) -> PartyTotal:
        return PartyTotal(
            code=self.as_text(r["code"]),
            name=self.as_text(r["name"]),
            total_amount=self.as_decimal(r["total_amount"]),
            quantity=self.as_decimal(r["quantity"]),
        )

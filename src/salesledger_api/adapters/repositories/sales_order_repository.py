# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""
SQL implementation of the sales order repository.

Purpose:
    Browse individual ledger documents for the order and packing-list
    endpoints. These are document views, not analytics: cancelled headers
    and set-component lines are returned as recorded.

Notes:
    * The packing list reads headers and lines with two queries sharing the
      same filter, then groups lines by ``DOCNO`` in memory.
    * Pagination uses ``OFFSET ... FETCH NEXT`` and only applies when a
      limit is given.

Layer: adapters / repositories
"""

from __future__ import annotations

import asyncio
from collections import defaultdict
from collections.abc import Mapping, Sequence
from datetime import date
from typing import Any, Final

from sqlalchemy import text

from salesledger_api.adapters.repositories.base_repository import BaseRepository
from salesledger_api.domain.entities.sales_order import (
    PackingListEntry,
    SalesOrderHeader,
    SalesOrderLine,
)

_HEADER_COLUMNS: Final[str] = (
    "h.DOCNO AS docno, h.DOCDATE AS docdate, h.TAXNO AS taxno, "
    "h.ARCODE AS arcode, h.ARNAME AS arname, "
    "CAST(h.TOTALAMOUNT AS DECIMAL(18, 2)) AS total_amount"
)


def _order_filter(
    start: date | None, end: date | None, arcode: str | None
) -> tuple[str, dict[str, Any]]:
    clauses = ["1 = 1"]
    params: dict[str, Any] = {}
    if start is not None and end is not None:
        clauses.append("h.DOCDATE >= :start AND h.DOCDATE < :end")
        params.update(start=start, end=end)
    if arcode:
        clauses.append("h.ARCODE = :arcode")
        params["arcode"] = arcode
    return " AND ".join(clauses), params


def _packing_filter(tax_date: date | None) -> tuple[str, dict[str, Any]]:
    if tax_date is None:
        return "1 = 1", {}
    return "CAST(h.TAXDATE AS DATE) = :tax_date", {"tax_date": tax_date}


class SqlSalesOrderRepository(BaseRepository):
    """Document queries backing the ``/sales`` endpoints."""

    async def list_orders(
        self,
        start: date | None,
        end: date | None,
        arcode: str | None,
        limit: int | None,
        offset: int,
    ) -> Sequence[SalesOrderHeader]:
        where, params = _order_filter(start, end, arcode)
        page = ""
        if limit is not None:
            page = "OFFSET :offset ROWS FETCH NEXT :limit ROWS ONLY"
            params.update(offset=offset, limit=limit)
        stmt = text(
            f"""
            SELECT {_HEADER_COLUMNS}
            FROM CSSALE h
            WHERE {where}
            ORDER BY h.DOCDATE DESC, h.DOCNO DESC
            {page}
            """
        )
        rows = await self.fetch_all("list_orders", stmt, params)
        return [self._header(r) for r in rows]

    async def order_header(self, docno: str) -> SalesOrderHeader | None:
        stmt = text(f"SELECT {_HEADER_COLUMNS} FROM CSSALE h WHERE h.DOCNO = :docno")
        rows = await self.fetch_all("order_header", stmt, {"docno": docno}, limit=1)
        return self._header(rows[0]) if rows else None

    async def order_lines(self, docno: str) -> Sequence[SalesOrderLine]:
        stmt = text(
            """
            SELECT d.LINEID AS line_id,
                   d.PRODUCTCODE AS product_code,
                   d.PRODUCTNAME AS product_name,
                   d.QUANTITY AS quantity,
                   d.UNITNAME AS unit_name,
                   CAST(d.UNITPRICE AS DECIMAL(18, 2)) AS unit_price,
                   CAST(d.NETAMOUNT AS DECIMAL(18, 2)) AS net_amount
            FROM CSSALESUB d
            WHERE d.DOCNO = :docno
            ORDER BY d.LINEID
            """
        )
        rows = await self.fetch_all("order_lines", stmt, {"docno": docno})
        return [
            SalesOrderLine(
                line_id=int(r["line_id"] or 0),
                product_code=self.as_text(r["product_code"]),
                product_name=self.as_text(r["product_name"]),
                quantity=self.as_decimal(r["quantity"]),
                unit_name=self.as_text(r["unit_name"]),
                unit_price=self.as_decimal(r["unit_price"]),
                net_amount=self.as_decimal(r["net_amount"]),
            )
            for r in rows
        ]

    async def packing_list(self, tax_date: date | None) -> Sequence[PackingListEntry]:
        where, params = _packing_filter(tax_date)
        headers_stmt = text(
            f"""
            SELECT {_HEADER_COLUMNS}, h.TAXDATE AS taxdate, h.CLOSEFLAG AS close_flag
            FROM CSSALE h
            WHERE {where}
            ORDER BY h.TAXNO, h.DOCNO
            """
        )
        lines_stmt = text(
            f"""
            SELECT d.DOCNO AS docno,
                   d.LINEID AS line_id,
                   d.PRODUCTCODE AS product_code,
                   d.PRODUCTNAME AS product_name,
                   d.QUANTITY AS quantity,
                   d.UNITNAME AS unit_name
            FROM CSSALESUB d
            INNER JOIN CSSALE h ON d.DOCNO = h.DOCNO
            WHERE {where}
            ORDER BY d.DOCNO, d.LINEID
            """
        )
        header_rows, line_rows = await asyncio.gather(
            self.fetch_all("packing_list_headers", headers_stmt, params),
            self.fetch_all("packing_list_lines", lines_stmt, params),
        )

        lines_by_doc: dict[str, list[SalesOrderLine]] = defaultdict(list)
        for r in line_rows:
            lines_by_doc[self.as_text(r["docno"])].append(
                SalesOrderLine(
                    line_id=int(r["line_id"] or 0),
                    product_code=self.as_text(r["product_code"]),
                    product_name=self.as_text(r["product_name"]),
                    quantity=self.as_decimal(r["quantity"]),
                    unit_name=self.as_text(r["unit_name"]),
                )
            )

        entries = []
        for r in header_rows:
            header = self._header(r)
            entries.append(
                PackingListEntry(
                    header=header,
                    taxdate=None if r["taxdate"] is None else self.as_date(r["taxdate"]),
                    close_flag=self.as_text(r["close_flag"]),
                    items=tuple(lines_by_doc.get(header.docno, ())),
                )
            )
        return entries

    def _header(self, r: Mapping[str, Any]) -> SalesOrderHeader:
        return SalesOrderHeader(
            docno=self.as_text(r["docno"]),
            docdate=None if r["docdate"] is None else self.as_date(r["docdate"]),
            taxno=self.as_text(r["taxno"]),
            arcode=self.as_text(r["arcode"]),
            arname=self.as_text(r["arname"]),
            total_amount=self.as_decimal(r["total_amount"]),
        )

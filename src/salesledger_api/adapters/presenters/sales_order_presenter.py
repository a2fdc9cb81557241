# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Presenter: sales order DTOs → HTTP envelopes.

Lists are wrapped in :class:`CountedEnvelope`; a single order uses the plain
success envelope. Missing dates become ``null`` and a line without a unit
name is packed as ``"-"``.

Layer:
    adapters/presenters
"""

from __future__ import annotations

from datetime import date
from typing import Any

from salesledger_api.adapters.presenters.base_presenter import (
    BasePresenter,
    PresentResult,
    money,
    quantity,
)
from salesledger_api.adapters.schemas.http.envelopes import CountedEnvelope, SuccessEnvelope
from salesledger_api.adapters.schemas.http.sales_orders import (
    PackingItemHTTP,
    PackingListEntryHTTP,
    SalesOrderHeaderHTTP,
    SalesOrderHTTP,
    SalesOrderLineHTTP,
)
from salesledger_api.application.schemas.dto.sales_orders import (
    PackingListDTO,
    SalesOrderDTO,
    SalesOrderLinesDTO,
    SalesOrderListDTO,
)

MISSING_UNIT = "-"


def _iso_or_none(day: date | None) -> str | None:
    return None if day is None else day.isoformat()


def _header_fields(header: Any) -> dict[str, Any]:
    return {
        "docno": header.docno,
        "docdate": _iso_or_none(header.docdate),
        "taxno": header.taxno,
        "arcode": header.arcode,
        "arname": header.arname,
        "total_amount": money(header.total_amount),
    }


def _line(item: Any) -> SalesOrderLineHTTP:
    return SalesOrderLineHTTP(
        line_id=item.line_id,
        product_code=item.product_code,
        product_name=item.product_name,
        quantity=quantity(item.quantity),
        unit_name=item.unit_name,
        unit_price=money(item.unit_price),
        net_amount=money(item.net_amount),
    )


class SalesOrderPresenter(BasePresenter):
    """Shape sales order DTOs for the ``/sales`` endpoints."""

    def _counted(
        self, data: list[Any], trace_id: str | None
    ) -> PresentResult[CountedEnvelope[Any]]:
        return PresentResult(
            body=CountedEnvelope[Any](data=data, count=len(data)),
            headers=self.trace_headers(trace_id),
        )

    def present_orders(
        self, dto: SalesOrderListDTO, *, trace_id: str | None = None
    ) -> PresentResult[CountedEnvelope[Any]]:
        data = [SalesOrderHeaderHTTP(**_header_fields(h)) for h in dto.items]
        return self._counted(data, trace_id)

    def present_order(
        self, dto: SalesOrderDTO, *, trace_id: str | None = None
    ) -> PresentResult[SuccessEnvelope[Any]]:
        order = dto.order
        data = SalesOrderHTTP(
            **_header_fields(order.header),
            items=[_line(item) for item in order.items],
        )
        return self.present_success(data=data, trace_id=trace_id)

    def present_order_lines(
        self, dto: SalesOrderLinesDTO, *, trace_id: str | None = None
    ) -> PresentResult[CountedEnvelope[Any]]:
        return self._counted([_line(item) for item in dto.items], trace_id)

    def present_packing_list(
        self, dto: PackingListDTO, *, trace_id: str | None = None
    ) -> PresentResult[CountedEnvelope[Any]]:
        data = [
            PackingListEntryHTTP(
                **_header_fields(entry.header),
                taxdate=_iso_or_none(entry.taxdate),
                close_flag=entry.close_flag,
                item_count=entry.item_count,
                items=[
                    PackingItemHTTP(
                        line_id=item.line_id,
                        product_code=item.product_code,
                        product_name=item.product_name,
                        quantity=quantity(item.quantity),
                        unit=item.unit_name or MISSING_UNIT,
                    )
                    for item in entry.items
                ],
            )
            for entry in dto.entries
        ]
        return self._counted(data, trace_id)

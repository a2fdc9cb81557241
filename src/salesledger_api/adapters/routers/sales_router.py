# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""
Sales Router.

Summary:
    Read-only browsing of ledger documents: the order list, a single order
    with its lines, the lines alone, and the warehouse packing list.

Layer:
    adapters/routers

Errors:
    * Malformed query parameters → 400 ``VALIDATION_ERROR``.
    * Unknown document number on ``/{docno}`` → 404 ``NOT_FOUND``.
    * Ledger failures → 500 ``LEDGER_UNAVAILABLE``.
"""

from __future__ import annotations

from datetime import date
from typing import Annotated, Any

from fastapi import Depends, Query, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from salesledger_api.adapters.presenters.sales_order_presenter import SalesOrderPresenter
from salesledger_api.adapters.routers.base_router import BaseRouter
from salesledger_api.adapters.schemas.http.envelopes import (
    CountedEnvelope,
    ErrorEnvelope,
    SuccessEnvelope,
)
from salesledger_api.adapters.schemas.http.sales_orders import (
    PackingListEntryHTTP,
    SalesOrderHeaderHTTP,
    SalesOrderHTTP,
    SalesOrderLineHTTP,
)
from salesledger_api.application.schemas.dto.sales_orders import SalesOrderQueryDTO
from salesledger_api.application.use_cases.sales.sales_orders import (
    BuildPackingListUseCase,
    GetSalesOrderUseCase,
    ListSalesOrderLinesUseCase,
    ListSalesOrdersUseCase,
)
from salesledger_api.dependencies.sales_orders import (
    get_list_sales_orders_uc,
    get_packing_list_uc,
    get_sales_order_lines_uc,
    get_sales_order_uc,
)
from salesledger_api.domain.exceptions.base import DomainError
from salesledger_api.domain.exceptions.sales_ledger import (
    InvalidQueryParameterError,
    LedgerUnavailableError,
    SalesOrderNotFoundError,
)
from salesledger_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)

router = BaseRouter(resource="sales", tags=["Sales"])
presenter = SalesOrderPresenter()

_STATUS_BY_ERROR: dict[type[DomainError], int] = {
    InvalidQueryParameterError: status.HTTP_400_BAD_REQUEST,
    SalesOrderNotFoundError: status.HTTP_404_NOT_FOUND,
    LedgerUnavailableError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}
_HANDLED = tuple(_STATUS_BY_ERROR)


def _error_response(exc: DomainError, trace_id: str | None) -> JSONResponse:
    http_status = _STATUS_BY_ERROR[type(exc)]
    if http_status >= 500:
        logger.warning("sales.ledger_unavailable", extra={"extra": exc.log_context()})
    result = presenter.present_error(
        code=exc.code, http_status=http_status, message=exc.message, trace_id=trace_id
    )
    return JSONResponse(
        status_code=http_status,
        content=result.body.model_dump_http(exclude_none=True),
        headers=dict(result.headers),
    )


def _parse_int(name: str, raw: str | None, *, minimum: int) -> int | None:
    if raw is None or not raw.strip():
        return None
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise InvalidQueryParameterError(
            f"{name} must be an integer", details={"param": name, "value": raw}
        ) from exc
    if value < minimum:
        raise InvalidQueryParameterError(
            f"{name} must be >= {minimum}", details={"param": name, "value": raw}
        )
    return value


def _order_query(
    start_raw: str | None,
    end_raw: str | None,
    arcode: str | None,
    limit_raw: str | None,
    offset_raw: str | None,
) -> SalesOrderQueryDTO:
    try:
        return SalesOrderQueryDTO(
            window=BaseRouter.optional_date_range(start_raw, end_raw),
            arcode=(arcode or "").strip() or None,
            limit=_parse_int("limit", limit_raw, minimum=1),
            offset=_parse_int("offset", offset_raw, minimum=0) or 0,
        )
    except ValidationError as exc:
        raise InvalidQueryParameterError(f"Invalid order filter: {exc}") from exc


def _docno(raw: str) -> str:
    return BaseRouter.require("docno", raw)


def _responses(*, not_found: bool = False) -> dict[int | str, dict[str, Any]]:
    responses = BaseRouter.std_error_responses()
    if not_found:
        responses[404] = {"model": ErrorEnvelope, "description": "Unknown document number."}
    return responses


@router.get(
    "",
    response_model=CountedEnvelope[SalesOrderHeaderHTTP],
    responses=_responses(),
    summary="List sales orders",
)
async def list_orders(
    request: Request,
    response: Response,
    uc: Annotated[ListSalesOrdersUseCase, Depends(get_list_sales_orders_uc)],
    start_date: Annotated[str | None, Query(alias="startDate")] = None,
    end_date: Annotated[str | None, Query(alias="endDate")] = None,
    arcode: Annotated[str | None, Query(alias="arcode")] = None,
    limit: Annotated[str | None, Query(alias="limit")] = None,
    offset: Annotated[str | None, Query(alias="offset")] = None,
) -> Any:
    """Headers filtered by document date and customer, newest first.

    ``offset`` is applied only together with ``limit``.
    """
    trace_id = BaseRouter.trace_id(request)
    try:
        dto = await uc.execute(_order_query(start_date, end_date, arcode, limit, offset))
    except _HANDLED as exc:
        return _error_response(exc, trace_id)
    return BaseRouter.send(response, presenter.present_orders(dto, trace_id=trace_id))


# Declared before "/{docno}" so the literal segment wins.
@router.get(
    "/packing-list",
    response_model=CountedEnvelope[PackingListEntryHTTP],
    responses=_responses(),
    summary="Warehouse packing list",
)
async def packing_list(
    request: Request,
    response: Response,
    uc: Annotated[BuildPackingListUseCase, Depends(get_packing_list_uc)],
    tax_date: Annotated[str | None, Query(alias="tax_date")] = None,
) -> Any:
    """Documents with their lines, grouped by tax invoice; ``tax_date`` narrows to one day."""
    trace_id = BaseRouter.trace_id(request)
    try:
        day: date | None = None
        if tax_date is not None and tax_date.strip():
            day = BaseRouter.parse_date("tax_date", tax_date)
        dto = await uc.execute(day)
    except _HANDLED as exc:
        return _error_response(exc, trace_id)
    return BaseRouter.send(response, presenter.present_packing_list(dto, trace_id=trace_id))


@router.get(
    "/{docno}",
    response_model=SuccessEnvelope[SalesOrderHTTP],
    responses=_responses(not_found=True),
    summary="Sales order with lines",
)
async def get_order(
    docno: str,
    request: Request,
    response: Response,
    uc: Annotated[GetSalesOrderUseCase, Depends(get_sales_order_uc)],
) -> Any:
    trace_id = BaseRouter.trace_id(request)
    try:
        dto = await uc.execute(_docno(docno))
    except _HANDLED as exc:
        return _error_response(exc, trace_id)
    return BaseRouter.send(response, presenter.present_order(dto, trace_id=trace_id))


@router.get(
    "/{docno}/items",
    response_model=CountedEnvelope[SalesOrderLineHTTP],
    responses=_responses(),
    summary="Lines of a sales order",
)
async def get_order_items(
    docno: str,
    request: Request,
    response: Response,
    uc: Annotated[ListSalesOrderLinesUseCase, Depends(get_sales_order_lines_uc)],
) -> Any:
    """Lines in ``LINEID`` order; an unknown document yields an empty list."""
    trace_id = BaseRouter.trace_id(request)
    try:
        dto = await uc.execute(_docno(docno))
    except _HANDLED as exc:
        return _error_response(exc, trace_id)
    return BaseRouter.send(response, presenter.present_order_lines(dto, trace_id=trace_id))

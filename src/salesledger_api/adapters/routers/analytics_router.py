# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""
Analytics Router.

Summary:
    Read-only sales analytics over the ledger: product and customer lists,
    period comparisons, the sales/credit-note summary, variant-aware product
    totals and forecasts, and reconciliation against the external sales report.

Layer:
    adapters/routers

Errors:
    * Missing or malformed query parameters → 400 ``VALIDATION_ERROR``.
    * Ledger failures → 500 ``LEDGER_UNAVAILABLE`` with the driver message.
    * Anything else reaches the global handler → 500 ``INTERNAL_ERROR``.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Annotated, Any

from fastapi import Depends, Query, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from salesledger_api.adapters.presenters.analytics_presenter import AnalyticsPresenter
from salesledger_api.adapters.routers.base_router import BaseRouter
from salesledger_api.adapters.schemas.http.analytics import (
    CustomerComparisonHTTP,
    CustomerPurchaseHTTP,
    ForecastPredictionEnvelope,
    ProductComparisonHTTP,
    ProductForecastHTTP,
    ProductSalesHTTP,
    ReconciliationEnvelope,
    SalesSummaryHTTP,
)
from salesledger_api.adapters.schemas.http.envelopes import SuccessEnvelope
from salesledger_api.application.schemas.dto.analytics import (
    DateRangeDTO,
    ForecastPredictionRequestDTO,
    PeriodComparisonRequestDTO,
)
from salesledger_api.application.use_cases.analytics.compare_periods import (
    CompareCustomerPeriodsUseCase,
    CompareProductPeriodsUseCase,
)
from salesledger_api.application.use_cases.analytics.forecast import (
    GetProductForecastUseCase,
    PredictProductForecastUseCase,
    default_target,
    prediction_for_month,
    prediction_for_range,
    prediction_for_target,
    trailing_window,
)
from salesledger_api.application.use_cases.analytics.list_sales import (
    ListCustomerPurchasesUseCase,
    ListProductSalesUseCase,
)
from salesledger_api.application.use_cases.analytics.reconcile_sales import (
    ReconcileSalesUseCase,
)
from salesledger_api.application.use_cases.analytics.sales_summary import GetSalesSummaryUseCase
from salesledger_api.dependencies.analytics import (
    get_compare_customer_periods_uc,
    get_compare_product_periods_uc,
    get_forecast_lookback_default,
    get_list_customer_purchases_uc,
    get_list_product_sales_uc,
    get_predict_product_forecast_uc,
    get_product_forecast_uc,
    get_reconcile_sales_uc,
    get_sales_summary_uc,
)
from salesledger_api.domain.exceptions.sales_ledger import (
    InvalidQueryParameterError,
    LedgerUnavailableError,
)
from salesledger_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)

router = BaseRouter(resource="analytics", tags=["Analytics"])
presenter = AnalyticsPresenter()

MAX_LOOKBACK_MONTHS = 36


def _today() -> date:
    return datetime.now(UTC).date()


def _error_response(
    exc: InvalidQueryParameterError | LedgerUnavailableError, trace_id: str | None
) -> JSONResponse:
    if isinstance(exc, InvalidQueryParameterError):
        http_status = status.HTTP_400_BAD_REQUEST
    else:
        http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
        logger.warning(
            "analytics.ledger_unavailable",
            extra={"extra": exc.log_context()},
        )
    result = presenter.present_error(
        code=exc.code, http_status=http_status, message=exc.message, trace_id=trace_id
    )
    return JSONResponse(
        status_code=http_status,
        content=result.body.model_dump_http(exclude_none=True),
        headers=dict(result.headers),
    )


def _parse_positive_int(name: str, raw: str | None, *, maximum: int | None = None) -> int | None:
    if raw is None or not raw.strip():
        return None
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise InvalidQueryParameterError(
            f"{name} must be a positive integer", details={"param": name}
        ) from exc
    if value < 1 or (maximum is not None and value > maximum):
        bound = f" between 1 and {maximum}" if maximum is not None else " (>= 1)"
        raise InvalidQueryParameterError(f"{name} must be{bound}", details={"param": name})
    return value


def _comparison_request(
    subject_name: str,
    subject: str | None,
    current_start: str | None,
    current_end: str | None,
    previous_start: str | None,
    previous_end: str | None,
) -> PeriodComparisonRequestDTO:
    code = BaseRouter.require(subject_name, subject)
    current = BaseRouter.date_range(
        current_start, current_end, start_name="currentStart", end_name="currentEnd"
    )
    previous = BaseRouter.date_range(
        previous_start, previous_end, start_name="previousStart", end_name="previousEnd"
    )
    return PeriodComparisonRequestDTO(subject=code, current=current, previous=previous)


def _prediction_request(
    target_month: str | None,
    lookback_raw: str | None,
    start_raw: str | None,
    end_raw: str | None,
    default_lookback: int,
) -> ForecastPredictionRequestDTO:
    """Resolve the forecast window.

    An explicit ``startDate``/``endDate`` pair wins over ``targetMonth`` and
    ``lookbackMonths``.
    """
    window = BaseRouter.optional_date_range(start_raw, end_raw)
    try:
        if window is not None:
            return prediction_for_range(window)

        lookback = (
            _parse_positive_int("lookbackMonths", lookback_raw, maximum=MAX_LOOKBACK_MONTHS)
            or default_lookback
        )
        if target_month is None or not target_month.strip():
            return prediction_for_target(default_target(_today()), lookback)
        try:
            return prediction_for_month(target_month, lookback)
        except ValueError as exc:
            raise InvalidQueryParameterError(
                "targetMonth must be in YYYY-MM format",
                details={"param": "targetMonth", "value": target_month},
            ) from exc
    except (ValidationError, ValueError) as exc:
        raise InvalidQueryParameterError(
            f"Invalid forecast window: {exc}", details={"param": "lookbackMonths"}
        ) from exc


# =============================================================================
# Lists
# =============================================================================


@router.get(
    "/products",
    response_model=SuccessEnvelope[list[ProductSalesHTTP]],
    responses=BaseRouter.std_error_responses(),
    summary="Products by net sales",
)
async def list_products(
    request: Request,
    response: Response,
    uc: Annotated[ListProductSalesUseCase, Depends(get_list_product_sales_uc)],
    start_date: Annotated[str | None, Query(alias="startDate")] = None,
    end_date: Annotated[str | None, Query(alias="endDate")] = None,
    limit: Annotated[str | None, Query(alias="limit")] = None,
) -> Any:
    """Return products with positive net sales, highest first."""
    trace_id = BaseRouter.trace_id(request)
    try:
        window = BaseRouter.optional_date_range(start_date, end_date)
        dto = await uc.execute(window, _parse_positive_int("limit", limit))
    except (InvalidQueryParameterError, LedgerUnavailableError) as exc:
        return _error_response(exc, trace_id)
    return BaseRouter.send(response, presenter.present_products(dto, trace_id=trace_id))


@router.get(
    "/customers",
    response_model=SuccessEnvelope[list[CustomerPurchaseHTTP]],
    responses=BaseRouter.std_error_responses(),
    summary="Customers by purchase total",
)
async def list_customers(
    request: Request,
    response: Response,
    uc: Annotated[ListCustomerPurchasesUseCase, Depends(get_list_customer_purchases_uc)],
    start_date: Annotated[str | None, Query(alias="startDate")] = None,
    end_date: Annotated[str | None, Query(alias="endDate")] = None,
) -> Any:
    trace_id = BaseRouter.trace_id(request)
    try:
        dto = await uc.execute(BaseRouter.optional_date_range(start_date, end_date))
    except (InvalidQueryParameterError, LedgerUnavailableError) as exc:
        return _error_response(exc, trace_id)
    return BaseRouter.send(response, presenter.present_customers(dto, trace_id=trace_id))


# =============================================================================
# Period comparisons
# =============================================================================


@router.get(
    "/product-comparison",
    response_model=SuccessEnvelope[ProductComparisonHTTP],
    responses=BaseRouter.std_error_responses(),
    summary="Compare a product across two periods",
)
async def compare_product(
    request: Request,
    response: Response,
    uc: Annotated[CompareProductPeriodsUseCase, Depends(get_compare_product_periods_uc)],
    product_code: Annotated[str | None, Query(alias="productCode")] = None,
    current_start: Annotated[str | None, Query(alias="currentStart")] = None,
    current_end: Annotated[str | None, Query(alias="currentEnd")] = None,
    previous_start: Annotated[str | None, Query(alias="previousStart")] = None,
    previous_end: Annotated[str | None, Query(alias="previousEnd")] = None,
) -> Any:
    """Compare sales of one product code between a current and a previous period.

    All five parameters are required.
    """
    trace_id = BaseRouter.trace_id(request)
    try:
        req = _comparison_request(
            "productCode", product_code, current_start, current_end, previous_start, previous_end
        )
        dto = await uc.execute(req)
    except (InvalidQueryParameterError, LedgerUnavailableError) as exc:
        return _error_response(exc, trace_id)
    return BaseRouter.send(response, presenter.present_product_comparison(dto, trace_id=trace_id))


@router.get(
    "/customer-comparison",
    response_model=SuccessEnvelope[CustomerComparisonHTTP],
    responses=BaseRouter.std_error_responses(),
    summary="Compare a customer across two periods",
)
async def compare_customer(
    request: Request,
    response: Response,
    uc: Annotated[CompareCustomerPeriodsUseCase, Depends(get_compare_customer_periods_uc)],
    arcode: Annotated[str | None, Query(alias="arcode")] = None,
    current_start: Annotated[str | None, Query(alias="currentStart")] = None,
    current_end: Annotated[str | None, Query(alias="currentEnd")] = None,
    previous_start: Annotated[str | None, Query(alias="previousStart")] = None,
    previous_end: Annotated[str | None, Query(alias="previousEnd")] = None,
) -> Any:
    trace_id = BaseRouter.trace_id(request)
    try:
        req = _comparison_request(
            "arcode", arcode, current_start, current_end, previous_start, previous_end
        )
        dto = await uc.execute(req)
    except (InvalidQueryParameterError, LedgerUnavailableError) as exc:
        return _error_response(exc, trace_id)
    return BaseRouter.send(
        response, presenter.present_customer_comparison(dto, trace_id=trace_id)
    )


# =============================================================================
# Summary
# =============================================================================


@router.get(
    "/sales-summary",
    response_model=SuccessEnvelope[SalesSummaryHTTP],
    responses=BaseRouter.std_error_responses(),
    summary="Sales vs credit notes",
)
async def sales_summary(
    request: Request,
    response: Response,
    uc: Annotated[GetSalesSummaryUseCase, Depends(get_sales_summary_uc)],
    start_date: Annotated[str | None, Query(alias="startDate")] = None,
    end_date: Annotated[str | None, Query(alias="endDate")] = None,
) -> Any:
    trace_id = BaseRouter.trace_id(request)
    try:
        dto = await uc.execute(BaseRouter.optional_date_range(start_date, end_date))
    except (InvalidQueryParameterError, LedgerUnavailableError) as exc:
        return _error_response(exc, trace_id)
    return BaseRouter.send(response, presenter.present_sales_summary(dto, trace_id=trace_id))


# =============================================================================
# Forecasts
# =============================================================================


@router.get(
    "/product-forecast",
    response_model=SuccessEnvelope[list[ProductForecastHTTP]],
    responses=BaseRouter.std_error_responses(),
    summary="Variant-aware quantity per base code",
)
async def product_forecast(
    request: Request,
    response: Response,
    uc: Annotated[GetProductForecastUseCase, Depends(get_product_forecast_uc)],
    start_date: Annotated[str | None, Query(alias="startDate")] = None,
    end_date: Annotated[str | None, Query(alias="endDate")] = None,
) -> Any:
    """Base-unit quantities per base code; defaults to the trailing three months."""
    trace_id = BaseRouter.trace_id(request)
    try:
        window: DateRangeDTO = BaseRouter.optional_date_range(
            start_date, end_date
        ) or trailing_window(_today())
        dto = await uc.execute(window)
    except (InvalidQueryParameterError, LedgerUnavailableError) as exc:
        return _error_response(exc, trace_id)
    return BaseRouter.send(response, presenter.present_product_forecast(dto, trace_id=trace_id))


@router.get(
    "/product-forecast-prediction",
    response_model=ForecastPredictionEnvelope,
    responses=BaseRouter.std_error_responses(),
    summary="Trailing-average forecast per base code",
)
async def product_forecast_prediction(
    request: Request,
    response: Response,
    uc: Annotated[PredictProductForecastUseCase, Depends(get_predict_product_forecast_uc)],
    default_lookback: Annotated[int, Depends(get_forecast_lookback_default)],
    target_month: Annotated[str | None, Query(alias="targetMonth")] = None,
    lookback_months: Annotated[str | None, Query(alias="lookbackMonths")] = None,
    start_date: Annotated[str | None, Query(alias="startDate")] = None,
    end_date: Annotated[str | None, Query(alias="endDate")] = None,
) -> Any:
    """Forecast next-month quantities from the trailing monthly average.

    Either ``targetMonth`` (default: next month) with ``lookbackMonths``
    (default: ``FORECAST_LOOKBACK_MONTHS``), or an explicit
    ``startDate``/``endDate`` history window.
    """
    trace_id = BaseRouter.trace_id(request)
    try:
        req = _prediction_request(
            target_month, lookback_months, start_date, end_date, default_lookback
        )
        dto = await uc.execute(req)
    except (InvalidQueryParameterError, LedgerUnavailableError) as exc:
        return _error_response(exc, trace_id)
    return BaseRouter.send(
        response, presenter.present_forecast_prediction(dto, trace_id=trace_id)
    )


# =============================================================================
# Reconciliation
# =============================================================================


@router.get(
    "/reconciliation",
    response_model=ReconciliationEnvelope,
    responses=BaseRouter.std_error_responses(),
    summary="Rank ledger totals against the external sales report",
)
async def reconciliation(
    request: Request,
    response: Response,
    uc: Annotated[ReconcileSalesUseCase, Depends(get_reconcile_sales_uc)],
    start_date: Annotated[str | None, Query(alias="startDate")] = None,
    end_date: Annotated[str | None, Query(alias="endDate")] = None,
) -> Any:
    """Compare every configured ledger total with the external net-sales figure.

    An unavailable reference does not fail the request: its value is
    ``null``, ``externalAPITarget.error`` says why, and the candidates are
    listed unranked.
    """
    trace_id = BaseRouter.trace_id(request)
    try:
        dto = await uc.execute(BaseRouter.date_range(start_date, end_date))
    except (InvalidQueryParameterError, LedgerUnavailableError) as exc:
        return _error_response(exc, trace_id)
    return BaseRouter.send(response, presenter.present_reconciliation(dto, trace_id=trace_id))

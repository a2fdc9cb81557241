# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Application DTOs for the sales analytics use cases.

Purpose:
    Request and response DTOs exchanged between routers, use cases and
    presenters. Values stay as :class:`decimal.Decimal`; rounding for
    transport happens in presenters.

Layer:
    application/schemas/dto
"""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from pydantic import Field, model_validator

from salesledger_api.application.schemas.dto.base import BaseDTO
from salesledger_api.domain.entities.comparison import (
    DailyComparisonPoint,
    GrowthRates,
    PeriodMetrics,
)
from salesledger_api.domain.entities.ledger_rows import (
    CustomerPurchaseTotal,
    PartyTotal,
    ProductSalesTotal,
)
from salesledger_api.domain.entities.reconciliation import ReconciliationCandidate

# --------------------------------------------------------------------------- #
# Requests                                                                    #
# --------------------------------------------------------------------------- #


class DateRangeDTO(BaseDTO):
    """Inclusive calendar date range."""

    start: date
    end: date

    @model_validator(mode="after")
    def _ordered(self) -> DateRangeDTO:
        if self.end < self.start:
            raise ValueError("end date must not precede start date")
        if self.end == date.max:
            raise ValueError("end date must be earlier than 9999-12-31")
        return self

    def half_open(self) -> tuple[date, date]:
        """Return ``(start, end + 1 day)`` for ``start <= DOCDATE < end`` queries."""
        return self.start, self.end + timedelta(days=1)


class PeriodComparisonRequestDTO(BaseDTO):
    """Compare one product or customer across two periods."""

    subject: str = Field(min_length=1)
    current: DateRangeDTO
    previous: DateRangeDTO


class ForecastPredictionRequestDTO(BaseDTO):
    """Trailing-average forecast over an explicit lookback window."""

    target_month: str
    lookback_months: int = Field(ge=1, le=36)
    window: DateRangeDTO


# --------------------------------------------------------------------------- #
# Responses                                                                   #
# --------------------------------------------------------------------------- #


class ProductSalesListDTO(BaseDTO):
    items: tuple[ProductSalesTotal, ...]


class CustomerPurchaseListDTO(BaseDTO):
    items: tuple[CustomerPurchaseTotal, ...]


class PeriodComparisonDTO(BaseDTO):
    """Outcome of a period-over-period comparison.

    Attributes:
        current: Metrics of the current period.
        previous: Metrics of the previous period.
        growth: Growth of current over previous.
        top_parties: Top customers (product comparison) or top products
            (customer comparison) in the current period.
        daily_comparison: Current days paired with the previous period.
    """

    current: PeriodMetrics
    previous: PeriodMetrics
    growth: GrowthRates
    top_parties: tuple[PartyTotal, ...]
    daily_comparison: tuple[DailyComparisonPoint, ...]


class DocumentClassTotalDTO(BaseDTO):
    amount: Decimal
    count: int


class SalesSummaryDTO(BaseDTO):
    """Sales vs credit-note split over a window."""

    sales: DocumentClassTotalDTO
    credit_note: DocumentClassTotalDTO
    net_amount: Decimal
    net_count: int
    credit_percentage: Decimal


class ForecastDetailDTO(BaseDTO):
    """Contribution of one original code to a base code."""

    original_code: str
    original_name: str
    raw_quantity: Decimal
    multiplier: int
    actual_quantity: Decimal


class ProductForecastItemDTO(BaseDTO):
    base_code: str
    base_name: str
    total_quantity: Decimal
    details: tuple[ForecastDetailDTO, ...]


class ProductForecastDTO(BaseDTO):
    window: DateRangeDTO
    items: tuple[ProductForecastItemDTO, ...]


class MonthQuantityDTO(BaseDTO):
    month: str
    month_name: str
    quantity: Decimal


class DetailMonthDTO(BaseDTO):
    month: str
    month_name: str
    quantity: Decimal
    actual_quantity: Decimal


class PredictionDetailDTO(BaseDTO):
    original_code: str
    original_name: str
    multiplier: int
    monthly: tuple[DetailMonthDTO, ...]


class ForecastPredictionItemDTO(BaseDTO):
    base_code: str
    base_name: str
    historical: tuple[MonthQuantityDTO, ...]
    average_quantity: Decimal
    forecast_quantity: Decimal
    details: tuple[PredictionDetailDTO, ...]


class ForecastPredictionDTO(BaseDTO):
    target_month: str
    lookback_months: int
    window: DateRangeDTO
    items: tuple[ForecastPredictionItemDTO, ...]


class ReferenceValueDTO(BaseDTO):
    """External reference figure, or the reason it is missing."""

    value: Decimal | None
    source: str
    error: str | None = None


class ReconciliationDTO(BaseDTO):
    """Ranked comparison of ledger candidates against the external reference.

    ``excluded`` counts candidates dropped for a zero or missing value.
    """

    window: DateRangeDTO
    reference: ReferenceValueDTO
    candidates: tuple[ReconciliationCandidate, ...]
    evaluated: int
    excluded: int

    @property
    def closest(self) -> ReconciliationCandidate | None:
        if self.reference.value is None or not self.candidates:
            return None
        return self.candidates[0]

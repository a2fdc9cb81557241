# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""
Use Cases: Variant-aware product totals and forecasts

Purpose:
    Fold raw ledger lines into base-unit quantities per base code (pack
    variants such as ``X6``/``X12`` expanded, credit notes subtracted,
    cancelled documents dropped) and derive trailing-average forecasts.

Layer: application/use_cases
"""

from __future__ import annotations

from datetime import date

from salesledger_api.application.schemas.dto.analytics import (
    DateRangeDTO,
    DetailMonthDTO,
    ForecastDetailDTO,
    ForecastPredictionDTO,
    ForecastPredictionItemDTO,
    ForecastPredictionRequestDTO,
    MonthQuantityDTO,
    PredictionDetailDTO,
    ProductForecastDTO,
    ProductForecastItemDTO,
)
from salesledger_api.domain.entities.aggregates import AggregationResult
from salesledger_api.domain.entities.period import PeriodKey
from salesledger_api.domain.interfaces.sales_ledger import SalesLedgerRepository
from salesledger_api.domain.services.forecast_engine import forecast
from salesledger_api.domain.services.monthly_aggregator import aggregate

DEFAULT_TOTALS_MONTHS = 3


# --------------------------------------------------------------------------- #
# Window helpers                                                              #
# --------------------------------------------------------------------------- #


def trailing_window(today: date, months: int = DEFAULT_TOTALS_MONTHS) -> DateRangeDTO:
    """Return the window covering ``months`` calendar months up to ``today``."""
    first = PeriodKey.from_date(today).shift(-(months - 1))
    return DateRangeDTO(start=first.first_day(), end=today)


def prediction_for_target(target: PeriodKey, lookback_months: int) -> ForecastPredictionRequestDTO:
    """Build a request averaging the ``lookback_months`` months before ``target``."""
    window = DateRangeDTO(
        start=target.shift(-lookback_months).first_day(),
        end=target.shift(-1).last_day(),
    )
    return ForecastPredictionRequestDTO(
        target_month=target.label(),
        lookback_months=lookback_months,
        window=window,
    )


def prediction_for_range(window: DateRangeDTO) -> ForecastPredictionRequestDTO:
    """Build a request whose lookback is every month the range touches.

    The forecast targets the month after ``window.end``.
    """
    first = PeriodKey.from_date(window.start)
    last = PeriodKey.from_date(window.end)
    return ForecastPredictionRequestDTO(
        target_month=last.shift(1).label(),
        lookback_months=first.months_until(last) + 1,
        window=window,
    )


def prediction_for_month(label: str, lookback_months: int) -> ForecastPredictionRequestDTO:
    """Build a request for a ``YYYY-MM`` target label.

    Raises:
        ValueError: If ``label`` is not a valid month.
    """
    return prediction_for_target(PeriodKey.parse(label), lookback_months)


def default_target(today: date) -> PeriodKey:
    """The month after ``today``."""
    return PeriodKey.from_date(today).shift(1)


async def _aggregate_window(ledger: SalesLedgerRepository, window: DateRangeDTO) -> AggregationResult:
    start, end = window.half_open()
    lines = await ledger.sales_lines(start, end)
    return aggregate(lines, start, end)


# --------------------------------------------------------------------------- #
# Use cases                                                                   #
# --------------------------------------------------------------------------- #


class GetProductForecastUseCase:
    """Base-unit totals per base code over a window.

    Raises:
        LedgerUnavailableError: If the ledger query fails.
    """

    def __init__(self, ledger: SalesLedgerRepository) -> None:
        self._ledger = ledger

    async def execute(self, window: DateRangeDTO) -> ProductForecastDTO:
        result = await _aggregate_window(self._ledger, window)
        items = tuple(
            ProductForecastItemDTO(
                base_code=base,
                base_name=result.base_names.get(base, ""),
                total_quantity=result.total_quantity(base),
                details=tuple(
                    ForecastDetailDTO(
                        original_code=b.original_code,
                        original_name=b.original_name,
                        raw_quantity=b.raw_quantity,
                        multiplier=b.multiplier,
                        actual_quantity=b.actual_quantity,
                    )
                    for b in result.breakdowns.get(base, ())
                ),
            )
            for base in result.base_codes
        )
        return ProductForecastDTO(window=window, items=items)


class PredictProductForecastUseCase:
    """Trailing-average forecast per base code.

    Every base code present in the fetched lines is reported, including codes
    whose lines were all cancelled; those forecast ``0``.

    Raises:
        LedgerUnavailableError: If the ledger query fails.
    """

    def __init__(self, ledger: SalesLedgerRepository) -> None:
        self._ledger = ledger

    async def execute(self, req: ForecastPredictionRequestDTO) -> ForecastPredictionDTO:
        """Run the forecast.

        Args:
            req: Target month, lookback and the resolved history window.

        Returns:
            ForecastPredictionDTO: One item per base code, sorted by base code.
        """
        result = await _aggregate_window(self._ledger, req.window)

        items: list[ForecastPredictionItemDTO] = []
        for base in result.base_codes:
            outcome = forecast(
                result.monthly_totals(base), req.lookback_months, base_code=base
            )
            items.append(
                ForecastPredictionItemDTO(
                    base_code=base,
                    base_name=result.base_names.get(base, ""),
                    historical=tuple(
                        MonthQuantityDTO(
                            month=period.label(),
                            month_name=period.display_name(),
                            quantity=qty,
                        )
                        for period, qty in outcome.historical_monthly_totals
                    ),
                    average_quantity=outcome.average_quantity,
                    forecast_quantity=outcome.forecast_quantity,
                    details=tuple(
                        PredictionDetailDTO(
                            original_code=b.original_code,
                            original_name=b.original_name,
                            multiplier=b.multiplier,
                            monthly=tuple(
                                DetailMonthDTO(
                                    month=m.period.label(),
                                    month_name=m.period.display_name(),
                                    quantity=m.raw_quantity,
                                    actual_quantity=m.actual_quantity,
                                )
                                for m in b.monthly
                            ),
                        )
                        for b in result.breakdowns.get(base, ())
                    ),
                )
            )

        return ForecastPredictionDTO(
            target_month=req.target_month,
            lookback_months=req.lookback_months,
            window=req.window,
            items=tuple(items),
        )

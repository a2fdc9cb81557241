# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Presenter: Sales analytics DTOs → HTTP envelopes.

Synopsis:
    Maps application DTOs onto the analytics HTTP schemas. Money is rounded
    half-up to two decimals and emitted as floats; quantities are emitted as
    floats without rounding.

Layer:
    adapters/presenters
"""

from __future__ import annotations

from collections.abc import Sequence

from salesledger_api.adapters.presenters.base_presenter import (
    BasePresenter,
    PresentResult,
    iso,
    money,
    optional_money,
    quantity,
)
from salesledger_api.adapters.schemas.http.analytics import (
    CustomerComparisonHTTP,
    CustomerGrowthHTTP,
    CustomerPeriodMetricsHTTP,
    CustomerPurchaseHTTP,
    DailyComparisonHTTP,
    DailyDataHTTP,
    DateRangeHTTP,
    DetailMonthHTTP,
    DocumentClassHTTP,
    ExternalTargetHTTP,
    ForecastDetailHTTP,
    ForecastMetadataHTTP,
    ForecastPredictionEnvelope,
    ForecastPredictionHTTP,
    MonthQuantityHTTP,
    NetSalesHTTP,
    PredictionDetailHTTP,
    ProductComparisonHTTP,
    ProductForecastHTTP,
    ProductGrowthHTTP,
    ProductPeriodMetricsHTTP,
    ProductSalesHTTP,
    ReconciliationEnvelope,
    ReconciliationFieldHTTP,
    ReconciliationSummaryHTTP,
    SalesSummaryHTTP,
    TopCustomerHTTP,
    TopProductHTTP,
)
from salesledger_api.adapters.schemas.http.envelopes import SuccessEnvelope
from salesledger_api.application.schemas.dto.analytics import (
    CustomerPurchaseListDTO,
    ForecastPredictionDTO,
    PeriodComparisonDTO,
    ProductForecastDTO,
    ProductSalesListDTO,
    ReconciliationDTO,
    SalesSummaryDTO,
)
from salesledger_api.domain.entities.comparison import (
    DailyComparisonPoint,
    DailyPoint,
    PeriodMetrics,
)

SALES_DOC_TYPE = "SA"
CREDIT_DOC_TYPE = "CS/CN"


def _daily(points: Sequence[DailyPoint]) -> list[DailyDataHTTP]:
    return [
        DailyDataHTTP(date=iso(p.day), amount=money(p.amount), quantity=quantity(p.quantity))
        for p in points
    ]


def _daily_comparison(points: Sequence[DailyComparisonPoint]) -> list[DailyComparisonHTTP]:
    return [
        DailyComparisonHTTP(date=iso(p.day), current=money(p.current), previous=money(p.previous))
        for p in points
    ]


def _product_metrics(m: PeriodMetrics) -> ProductPeriodMetricsHTTP:
    return ProductPeriodMetricsHTTP(
        total_sales=money(m.total_amount),
        total_quantity=quantity(m.total_quantity),
        order_count=m.order_count,
        avg_order_value=money(m.avg_order_value),
        daily_data=_daily(m.daily),
        peak_sales_date=iso(m.peak_date),
        peak_sales_amount=money(m.peak_amount),
    )


def _customer_metrics(m: PeriodMetrics) -> CustomerPeriodMetricsHTTP:
    return CustomerPeriodMetricsHTTP(
        total_purchases=money(m.total_amount),
        total_quantity=quantity(m.total_quantity),
        order_count=m.order_count,
        avg_order_value=money(m.avg_order_value),
        daily_data=_daily(m.daily),
        peak_purchase_date=iso(m.peak_date),
        peak_purchase_amount=money(m.peak_amount),
    )


class AnalyticsPresenter(BasePresenter):
    """Presenter for the ``/analytics`` endpoints."""

    def present_products(
        self, dto: ProductSalesListDTO, *, trace_id: str | None = None
    ) -> PresentResult[SuccessEnvelope[list[ProductSalesHTTP]]]:
        items = [
            ProductSalesHTTP(
                product_code=p.product_code,
                product_name=p.product_name,
                total_sales=money(p.total_sales),
                total_quantity=quantity(p.total_quantity),
            )
            for p in dto.items
        ]
        return self.present_success(data=items, trace_id=trace_id)

    def present_customers(
        self, dto: CustomerPurchaseListDTO, *, trace_id: str | None = None
    ) -> PresentResult[SuccessEnvelope[list[CustomerPurchaseHTTP]]]:
        items = [
            CustomerPurchaseHTTP(
                arcode=c.arcode,
                arname=c.arname,
                total_purchases=money(c.total_purchases),
                order_count=c.order_count,
            )
            for c in dto.items
        ]
        return self.present_success(data=items, trace_id=trace_id)

    def present_product_comparison(
        self, dto: PeriodComparisonDTO, *, trace_id: str | None = None
    ) -> PresentResult[SuccessEnvelope[ProductComparisonHTTP]]:
        payload = ProductComparisonHTTP(
            current=_product_metrics(dto.current),
            previous=_product_metrics(dto.previous),
            growth=ProductGrowthHTTP(
                sales_growth=money(dto.growth.amount_growth),
                quantity_growth=money(dto.growth.quantity_growth),
                order_growth=money(dto.growth.order_growth),
                avg_value_growth=money(dto.growth.avg_value_growth),
            ),
            top_customers=[
                TopCustomerHTTP(
                    arcode=p.code,
                    arname=p.name,
                    total_amount=money(p.total_amount),
                    quantity=quantity(p.quantity),
                )
                for p in dto.top_parties
            ],
            daily_comparison=_daily_comparison(dto.daily_comparison),
        )
        return self.present_success(data=payload, trace_id=trace_id)

    def present_customer_comparison(
        self, dto: PeriodComparisonDTO, *, trace_id: str | None = None
    ) -> PresentResult[SuccessEnvelope[CustomerComparisonHTTP]]:
        payload = CustomerComparisonHTTP(
            current=_customer_metrics(dto.current),
            previous=_customer_metrics(dto.previous),
            growth=CustomerGrowthHTTP(
                purchases_growth=money(dto.growth.amount_growth),
                quantity_growth=money(dto.growth.quantity_growth),
                order_growth=money(dto.growth.order_growth),
                avg_value_growth=money(dto.growth.avg_value_growth),
            ),
            top_products=[
                TopProductHTTP(
                    product_code=p.code,
                    product_name=p.name,
                    total_amount=money(p.total_amount),
                    quantity=quantity(p.quantity),
                )
                for p in dto.top_parties
            ],
            daily_comparison=_daily_comparison(dto.daily_comparison),
        )
        return self.present_success(data=payload, trace_id=trace_id)

    def present_sales_summary(
        self, dto: SalesSummaryDTO, *, trace_id: str | None = None
    ) -> PresentResult[SuccessEnvelope[SalesSummaryHTTP]]:
        payload = SalesSummaryHTTP(
            sales=DocumentClassHTTP(
                amount=money(dto.sales.amount), count=dto.sales.count, doc_type=SALES_DOC_TYPE
            ),
            credit_note=DocumentClassHTTP(
                amount=money(dto.credit_note.amount),
                count=dto.credit_note.count,
                doc_type=CREDIT_DOC_TYPE,
            ),
            net=NetSalesHTTP(
                amount=money(dto.net_amount),
                count=dto.net_count,
                percentage=money(dto.credit_percentage),
            ),
        )
        return self.present_success(data=payload, trace_id=trace_id)

    def present_product_forecast(
        self, dto: ProductForecastDTO, *, trace_id: str | None = None
    ) -> PresentResult[SuccessEnvelope[list[ProductForecastHTTP]]]:
        items = [
            ProductForecastHTTP(
                base_code=item.base_code,
                base_name=item.base_name,
                total_qty=quantity(item.total_quantity),
                details=[
                    ForecastDetailHTTP(
                        original_code=d.original_code,
                        original_name=d.original_name,
                        raw_qty=quantity(d.raw_quantity),
                        multiplier=d.multiplier,
                        actual_qty=quantity(d.actual_quantity),
                    )
                    for d in item.details
                ],
            )
            for item in dto.items
        ]
        return self.present_success(data=items, trace_id=trace_id)

    def present_forecast_prediction(
        self, dto: ForecastPredictionDTO, *, trace_id: str | None = None
    ) -> PresentResult[ForecastPredictionEnvelope]:
        """Render the prediction with its ``metadata`` block.

        ``averageQty`` and ``forecastQty`` are already rounded by the
        forecast engine and are emitted as-is.
        """
        items = [
            ForecastPredictionHTTP(
                base_code=item.base_code,
                base_name=item.base_name,
                historical_data=[
                    MonthQuantityHTTP(month=h.month, month_name=h.month_name, qty=quantity(h.quantity))
                    for h in item.historical
                ],
                average_qty=quantity(item.average_quantity),
                forecast_qty=quantity(item.forecast_quantity),
                details=[
                    PredictionDetailHTTP(
                        original_code=d.original_code,
                        original_name=d.original_name,
                        multiplier=d.multiplier,
                        monthly_data=[
                            DetailMonthHTTP(
                                month=m.month,
                                month_name=m.month_name,
                                qty=quantity(m.quantity),
                                actual_qty=quantity(m.actual_quantity),
                            )
                            for m in d.monthly
                        ],
                    )
                    for d in item.details
                ],
            )
            for item in dto.items
        ]
        body = ForecastPredictionEnvelope(
            data=items,
            metadata=ForecastMetadataHTTP(
                target_month=dto.target_month,
                lookback_months=dto.lookback_months,
                start_date=iso(dto.window.start),
                end_date=iso(dto.window.end),
                total_base_codes=len(items),
            ),
        )
        return PresentResult(body=body, headers=self.trace_headers(trace_id))

    def present_reconciliation(
        self, dto: ReconciliationDTO, *, trace_id: str | None = None
    ) -> PresentResult[ReconciliationEnvelope]:
        fields = [
            ReconciliationFieldHTTP(
                field_name=c.field_name,
                source_description=c.source_description,
                value=money(c.value),
                difference_from_reference=optional_money(c.difference_from_reference),
                percent_difference=optional_money(c.percent_difference),
                rank=c.rank,
            )
            for c in dto.candidates
        ]
        closest = dto.closest
        summary = ReconciliationSummaryHTTP(
            closest_field=closest.field_name if closest else None,
            closest_value=money(closest.value) if closest else None,
            difference_from_reference=(
                optional_money(closest.difference_from_reference) if closest else None
            ),
            percent_difference=optional_money(closest.percent_difference) if closest else None,
            candidates_evaluated=dto.evaluated,
            candidates_excluded=dto.excluded,
            reference_available=dto.reference.value is not None,
        )
        body = ReconciliationEnvelope(
            date_range=DateRangeHTTP(start_date=iso(dto.window.start), end_date=iso(dto.window.end)),
            external_api_target=ExternalTargetHTTP(
                value=optional_money(dto.reference.value),
                source=dto.reference.source,
                error=dto.reference.error,
            ),
            all_fields=fields,
            summary=summary,
        )
        return PresentResult(body=body, headers=self.trace_headers(trace_id))

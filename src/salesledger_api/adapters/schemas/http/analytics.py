# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""HTTP Schemas: Sales analytics.

Synopsis:
    Response contracts for the ``/analytics`` endpoints. Wire names are the
    camelCase aliases of the field names unless an explicit alias is given
    (``productcode``/``productname`` and ``externalAPITarget`` keep the
    casing existing clients read).

Layer:
    adapters/schemas/http
"""

from __future__ import annotations

from typing import Literal

from pydantic import ConfigDict, Field

from salesledger_api.adapters.schemas.http.base import BaseHTTPSchema, Money, Percent, Quantity

# --------------------------------------------------------------------------- #
# Lists                                                                       #
# --------------------------------------------------------------------------- #


class ProductSalesHTTP(BaseHTTPSchema):
    """One product with its net sales and quantity."""

    product_code: str = Field(examples=["L3-8G"])
    product_name: str
    total_sales: Money
    total_quantity: Quantity


class CustomerPurchaseHTTP(BaseHTTPSchema):
    """One customer with its purchase total and document count."""

    arcode: str = Field(examples=["AR-0001"])
    arname: str
    total_purchases: Money
    order_count: int


# --------------------------------------------------------------------------- #
# Period comparison                                                           #
# --------------------------------------------------------------------------- #


class DailyDataHTTP(BaseHTTPSchema):
    date: str = Field(description="ISO date (YYYY-MM-DD).")
    amount: Money
    quantity: Quantity


class DailyComparisonHTTP(BaseHTTPSchema):
    date: str
    current: Money
    previous: Money


class ProductPeriodMetricsHTTP(BaseHTTPSchema):
    total_sales: Money
    total_quantity: Quantity
    order_count: int
    avg_order_value: Money
    daily_data: list[DailyDataHTTP]
    peak_sales_date: str = Field(description="Empty string when the period has no data.")
    peak_sales_amount: Money


class CustomerPeriodMetricsHTTP(BaseHTTPSchema):
    total_purchases: Money
    total_quantity: Quantity
    order_count: int
    avg_order_value: Money
    daily_data: list[DailyDataHTTP]
    peak_purchase_date: str = Field(description="Empty string when the period has no data.")
    peak_purchase_amount: Money


class ProductGrowthHTTP(BaseHTTPSchema):
    """Growth percentages; 100 when the previous value is 0 and the current is positive."""

    sales_growth: Percent
    quantity_growth: Percent
    order_growth: Percent
    avg_value_growth: Percent


class CustomerGrowthHTTP(BaseHTTPSchema):
    purchases_growth: Percent
    quantity_growth: Percent
    order_growth: Percent
    avg_value_growth: Percent


class TopCustomerHTTP(BaseHTTPSchema):
    arcode: str
    arname: str
    total_amount: Money
    quantity: Quantity


class TopProductHTTP(BaseHTTPSchema):
    product_code: str = Field(alias="productcode")
    product_name: str = Field(alias="productname")
    total_amount: Money
    quantity: Quantity


class ProductComparisonHTTP(BaseHTTPSchema):
    current: ProductPeriodMetricsHTTP
    previous: ProductPeriodMetricsHTTP
    growth: ProductGrowthHTTP
    top_customers: list[TopCustomerHTTP]
    daily_comparison: list[DailyComparisonHTTP]


class CustomerComparisonHTTP(BaseHTTPSchema):
    current: CustomerPeriodMetricsHTTP
    previous: CustomerPeriodMetricsHTTP
    growth: CustomerGrowthHTTP
    top_products: list[TopProductHTTP]
    daily_comparison: list[DailyComparisonHTTP]


# --------------------------------------------------------------------------- #
# Sales summary                                                               #
# --------------------------------------------------------------------------- #


class DocumentClassHTTP(BaseHTTPSchema):
    amount: Money
    count: int
    doc_type: str = Field(examples=["SA", "CS/CN"])


class NetSalesHTTP(BaseHTTPSchema):
    amount: Money
    count: int
    percentage: Percent = Field(description="Credit notes as a percentage of sales.")


class SalesSummaryHTTP(BaseHTTPSchema):
    sales: DocumentClassHTTP
    credit_note: DocumentClassHTTP
    net: NetSalesHTTP


# --------------------------------------------------------------------------- #
# Forecasts                                                                   #
# --------------------------------------------------------------------------- #


class ForecastDetailHTTP(BaseHTTPSchema):
    original_code: str = Field(examples=["L3-8GX6"])
    original_name: str
    raw_qty: Quantity
    multiplier: int
    actual_qty: Quantity


class ProductForecastHTTP(BaseHTTPSchema):
    base_code: str = Field(examples=["L3-8G"])
    base_name: str
    total_qty: Quantity
    details: list[ForecastDetailHTTP]


class MonthQuantityHTTP(BaseHTTPSchema):
    month: str = Field(examples=["2024-08"])
    month_name: str = Field(examples=["Aug 2024"])
    qty: Quantity


class DetailMonthHTTP(BaseHTTPSchema):
    month: str
    month_name: str
    qty: Quantity
    actual_qty: Quantity


class PredictionDetailHTTP(BaseHTTPSchema):
    original_code: str
    original_name: str
    multiplier: int
    monthly_data: list[DetailMonthHTTP]


class ForecastPredictionHTTP(BaseHTTPSchema):
    base_code: str
    base_name: str
    historical_data: list[MonthQuantityHTTP]
    average_qty: Quantity
    forecast_qty: Quantity
    details: list[PredictionDetailHTTP]


class ForecastMetadataHTTP(BaseHTTPSchema):
    target_month: str
    lookback_months: int
    start_date: str
    end_date: str = Field(description="Last day included in the history window.")
    total_base_codes: int


class ForecastPredictionEnvelope(BaseHTTPSchema):
    """``SuccessEnvelope`` plus forecast ``metadata``."""

    model_config = ConfigDict(title="ForecastPredictionEnvelope")

    success: Literal[True] = True
    data: list[ForecastPredictionHTTP]
    metadata: ForecastMetadataHTTP


# --------------------------------------------------------------------------- #
# Reconciliation                                                              #
# --------------------------------------------------------------------------- #


class DateRangeHTTP(BaseHTTPSchema):
    start_date: str
    end_date: str


class ExternalTargetHTTP(BaseHTTPSchema):
    value: Money | None
    source: str
    error: str | None = None


class ReconciliationFieldHTTP(BaseHTTPSchema):
    field_name: str = Field(examples=["header_total_amount"])
    source_description: str
    value: Money
    difference_from_reference: Money | None = None
    percent_difference: Percent | None = None
    rank: int | None = None


class ReconciliationSummaryHTTP(BaseHTTPSchema):
    closest_field: str | None = None
    closest_value: Money | None = None
    difference_from_reference: Money | None = None
    percent_difference: Percent | None = None
    candidates_evaluated: int
    candidates_excluded: int
    reference_available: bool


class ReconciliationEnvelope(BaseHTTPSchema):
    """Top-level reconciliation body (not wrapped in ``data``)."""

    model_config = ConfigDict(title="ReconciliationEnvelope")

    success: Literal[True] = True
    date_range: DateRangeHTTP
    external_api_target: ExternalTargetHTTP = Field(alias="externalAPITarget")
    all_fields: list[ReconciliationFieldHTTP]
    summary: ReconciliationSummaryHTTP

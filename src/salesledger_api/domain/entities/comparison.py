# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Period-over-period comparison entities.

Layer:
    domain/entities
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from salesledger_api.domain.entities.base import BaseEntity


@dataclass(frozen=True, slots=True)
class DailyPoint(BaseEntity):
    """Amount and quantity summed over one day."""

    day: date
    amount: Decimal
    quantity: Decimal


@dataclass(frozen=True, slots=True)
class PeriodMetrics(BaseEntity):
    """Summary of one comparison period.

    Attributes:
        total_amount: Sum of row amounts.
        total_quantity: Sum of row quantities.
        order_count: Number of distinct orders in the period.
        avg_order_value: ``total_amount / order_count`` (0 without orders).
        daily: Per-day points sorted by date.
        peak_date: First day with the highest amount, ``None`` if no data.
        peak_amount: Amount on the peak day (0 if no data).
    """

    total_amount: Decimal
    total_quantity: Decimal
    order_count: int
    avg_order_value: Decimal
    daily: tuple[DailyPoint, ...]
    peak_date: date | None
    peak_amount: Decimal


@dataclass(frozen=True, slots=True)
class GrowthRates(BaseEntity):
    """Percentage growth of the current period over the previous one."""

    amount_growth: Decimal
    quantity_growth: Decimal
    order_growth: Decimal
    avg_value_growth: Decimal


@dataclass(frozen=True, slots=True)
class DailyComparisonPoint(BaseEntity):
    """Current-period day amount next to the same date in the previous period."""

    day: date
    current: Decimal
    previous: Decimal

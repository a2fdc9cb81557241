# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Period-over-period comparison metrics.

Purpose:
    Summarise grouped activity rows of two periods and derive growth rates
    and a day-by-day comparison.

Layer:
    domain/services
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Sequence
from datetime import date
from decimal import Decimal

from salesledger_api.domain.entities.comparison import (
    DailyComparisonPoint,
    DailyPoint,
    GrowthRates,
    PeriodMetrics,
)
from salesledger_api.domain.entities.ledger_rows import DailyActivityRow
from salesledger_api.domain.services.numeric import ZERO, growth_rate


def _order_by_day_and_party(row: DailyActivityRow) -> Hashable:
    return (row.activity_date, row.party_code)


def summarize_period(
    rows: Sequence[DailyActivityRow],
    *,
    order_key: Callable[[DailyActivityRow], Hashable] = _order_by_day_and_party,
) -> PeriodMetrics:
    """Summarise one comparison period.

    Args:
        rows: Grouped activity rows of the period.
        order_key: Identity of an "order"; distinct keys are counted. Product
            comparisons count (day, customer) pairs, customer comparisons
            count documents.

    Returns:
        Period metrics with per-day points sorted by date.
    """
    total_amount = sum((r.amount for r in rows), ZERO)
    total_quantity = sum((r.quantity for r in rows), ZERO)
    order_count = len({order_key(r) for r in rows})
    avg_order_value = total_amount / order_count if order_count else ZERO

    days: dict[date, tuple[Decimal, Decimal]] = {}
    for r in rows:
        amount, quantity = days.get(r.activity_date, (ZERO, ZERO))
        days[r.activity_date] = (amount + r.amount, quantity + r.quantity)
    daily = tuple(
        DailyPoint(day=day, amount=amount, quantity=quantity)
        for day, (amount, quantity) in sorted(days.items())
    )

    peak: DailyPoint | None = None
    for point in daily:
        if peak is None or point.amount > peak.amount:
            peak = point

    return PeriodMetrics(
        total_amount=total_amount,
        total_quantity=total_quantity,
        order_count=order_count,
        avg_order_value=avg_order_value,
        daily=daily,
        peak_date=peak.day if peak else None,
        peak_amount=peak.amount if peak else ZERO,
    )


def growth_between(current: PeriodMetrics, previous: PeriodMetrics) -> GrowthRates:
    return GrowthRates(
        amount_growth=growth_rate(current.total_amount, previous.total_amount),
        quantity_growth=growth_rate(current.total_quantity, previous.total_quantity),
        order_growth=growth_rate(Decimal(current.order_count), Decimal(previous.order_count)),
        avg_value_growth=growth_rate(current.avg_order_value, previous.avg_order_value),
    )


def daily_comparison(
    current: PeriodMetrics,
    previous: PeriodMetrics,
) -> tuple[DailyComparisonPoint, ...]:
    """Pair each current-period day with the same calendar date of the previous period.

    The previous period is matched on the exact date, so the comparison is
    only non-zero where both periods share dates.
    """
    previous_by_day = {p.day: p.amount for p in previous.daily}
    return tuple(
        DailyComparisonPoint(
            day=point.day,
            current=point.amount,
            previous=previous_by_day.get(point.day, ZERO),
        )
        for point in current.daily
    )

# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Monthly aggregation results keyed by base product code.

Purpose:
    Immutable outputs of one aggregation pass: per (base code, month) totals
    and the per-original-code breakdown used by detail responses.

Layer:
    domain/entities
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal

from salesledger_api.domain.entities.base import BaseEntity
from salesledger_api.domain.entities.period import PeriodKey

BucketKey = tuple[str, PeriodKey]


@dataclass(frozen=True, slots=True)
class BaseCodeMonthlyAggregate(BaseEntity):
    """Total base-unit quantity for one base code in one month.

    Attributes:
        base_code: Base product code.
        period: Calendar month of the bucket.
        total_quantity: Sum of ``quantity * multiplier * sign`` over the
            contributing lines.
        contributing_lines: Number of ledger lines folded into the bucket.
    """

    base_code: str
    period: PeriodKey
    total_quantity: Decimal
    contributing_lines: int

    def __post_init__(self) -> None:
        self.require(self.contributing_lines >= 0, "contributing_lines must be >= 0")


@dataclass(frozen=True, slots=True)
class OriginalCodeMonth(BaseEntity):
    """Monthly slice of an original code's contribution.

    ``raw_quantity`` is signed but not multiplied;
    ``actual_quantity == raw_quantity * multiplier``.
    """

    period: PeriodKey
    raw_quantity: Decimal
    actual_quantity: Decimal


@dataclass(frozen=True, slots=True)
class OriginalCodeBreakdown(BaseEntity):
    """Contribution of one original (possibly variant) code to its base code.

    Attributes:
        original_code: Code as it appeared on the ledger.
        original_name: First product name seen for the code.
        multiplier: Pack multiplier resolved from the code.
        raw_quantity: Signed quantity in the code's own pack size.
        actual_quantity: Signed quantity in base units.
        monthly: Per-month slices in chronological order.
    """

    original_code: str
    original_name: str
    multiplier: int
    raw_quantity: Decimal
    actual_quantity: Decimal
    monthly: tuple[OriginalCodeMonth, ...] = ()


@dataclass(frozen=True, slots=True)
class AggregationResult(BaseEntity):
    """Outcome of one aggregation pass.

    Attributes:
        buckets: Aggregates keyed by ``(base_code, period)``.
        breakdowns: Per base code, the original-code breakdown in first-seen order.
        base_names: Display name chosen for each base code.
        base_codes: Every base code observed in the input, sorted. Codes whose
            lines were all filtered out are present with no buckets.
    """

    buckets: Mapping[BucketKey, BaseCodeMonthlyAggregate]
    breakdowns: Mapping[str, tuple[OriginalCodeBreakdown, ...]]
    base_names: Mapping[str, str]
    base_codes: tuple[str, ...] = field(default_factory=tuple)

    def monthly_totals(self, base_code: str) -> tuple[tuple[PeriodKey, Decimal], ...]:
        """Return ``(period, total_quantity)`` pairs for a base code, oldest first."""
        rows = [
            (agg.period, agg.total_quantity)
            for (code, _), agg in self.buckets.items()
            if code == base_code
        ]
        return tuple(sorted(rows, key=lambda item: item[0]))

    def total_quantity(self, base_code: str) -> Decimal:
        """Return the all-period total for a base code."""
        return sum(
            (agg.total_quantity for (code, _), agg in self.buckets.items() if code == base_code),
            Decimal("0"),
        )

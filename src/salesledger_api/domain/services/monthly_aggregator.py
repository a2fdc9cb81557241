# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Monthly aggregator for variant-aware base-unit quantities.

Purpose:
    Fold raw ledger lines into per (base code, month) totals expressed in
    base units, expanding pack variants and applying the credit-note sign.

Algorithm:
    1. Keep lines dated within ``[start, end)`` whose header is not cancelled.
    2. For each kept line compute
       ``actual = signed(quantity, document_number) * multiplier``.
    3. Accumulate ``actual`` into the ``(base_code, PeriodKey)`` bucket and
       into the per-original-code breakdown of that base code.

Invariant:
    For every base code, the sum of its bucket totals equals the sum of its
    breakdown ``actual_quantity`` values and the sum of ``actual`` over every
    contributing line.

Design:
    * Pure and synchronous. No logging.
    * Each call builds a fresh :class:`_Accumulator`; nothing is shared
      between calls.

Layer:
    domain/services
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from salesledger_api.domain.entities.aggregates import (
    AggregationResult,
    BaseCodeMonthlyAggregate,
    BucketKey,
    OriginalCodeBreakdown,
    OriginalCodeMonth,
)
from salesledger_api.domain.entities.period import PeriodKey
from salesledger_api.domain.entities.sales_line import RawSalesLine
from salesledger_api.domain.services.sign_convention import signed
from salesledger_api.domain.services.variant_codes import decompose


# ------------------------------------------------------------------ #
# Accumulator state                                                   #
# ------------------------------------------------------------------ #


@dataclass(slots=True)
class _Bucket:
    total: Decimal = Decimal("0")
    lines: int = 0


@dataclass(slots=True)
class _OriginalCodeState:
    original_code: str
    original_name: str
    multiplier: int
    raw: Decimal = Decimal("0")
    actual: Decimal = Decimal("0")
    monthly: dict[PeriodKey, tuple[Decimal, Decimal]] = field(default_factory=dict)


@dataclass(slots=True)
class _Accumulator:
    """Mutable state owned by exactly one aggregation pass."""

    buckets: dict[BucketKey, _Bucket] = field(default_factory=dict)
    originals: dict[str, dict[str, _OriginalCodeState]] = field(default_factory=dict)
    base_names: dict[str, str] = field(default_factory=dict)
    named_from_plain: set[str] = field(default_factory=set)

    def observe(self, line: RawSalesLine) -> tuple[str, int]:
        """Register the line's codes and name without adding any quantity."""
        decomposition = decompose(line.product_code)
        base = decomposition.base_code
        per_base = self.originals.setdefault(base, {})
        if line.product_code not in per_base:
            per_base[line.product_code] = _OriginalCodeState(
                original_code=line.product_code,
                original_name=line.product_name,
                multiplier=decomposition.multiplier,
            )

        # Prefer the name of an unsuffixed line for the base item.
        if base not in self.base_names:
            self.base_names[base] = line.product_name
        if not decomposition.is_variant and base not in self.named_from_plain:
            self.base_names[base] = line.product_name
            self.named_from_plain.add(base)
        return base, decomposition.multiplier

    def add(self, line: RawSalesLine, base: str, multiplier: int) -> None:
        raw = signed(line.quantity, line.document_number)
        actual = raw * multiplier
        period = PeriodKey.from_date(line.document_date)

        bucket = self.buckets.setdefault((base, period), _Bucket())
        bucket.total += actual
        bucket.lines += 1

        state = self.originals[base][line.product_code]
        state.raw += raw
        state.actual += actual
        prev_raw, prev_actual = state.monthly.get(period, (Decimal("0"), Decimal("0")))
        state.monthly[period] = (prev_raw + raw, prev_actual + actual)

    def freeze(self) -> AggregationResult:
        buckets = {
            key: BaseCodeMonthlyAggregate(
                base_code=key[0],
                period=key[1],
                total_quantity=bucket.total,
                contributing_lines=bucket.lines,
            )
            for key, bucket in sorted(self.buckets.items(), key=lambda item: item[0])
        }
        breakdowns = {
            base: tuple(
                OriginalCodeBreakdown(
                    original_code=state.original_code,
                    original_name=state.original_name,
                    multiplier=state.multiplier,
                    raw_quantity=state.raw,
                    actual_quantity=state.actual,
                    monthly=tuple(
                        OriginalCodeMonth(period=period, raw_quantity=raw, actual_quantity=actual)
                        for period, (raw, actual) in sorted(state.monthly.items())
                    ),
                )
                for state in states.values()
            )
            for base, states in self.originals.items()
        }
        return AggregationResult(
            buckets=buckets,
            breakdowns=breakdowns,
            base_names=dict(self.base_names),
            base_codes=tuple(sorted(self.originals)),
        )


# ------------------------------------------------------------------ #
# Public API                                                          #
# ------------------------------------------------------------------ #


def in_window(line: RawSalesLine, start: date, end: date) -> bool:
    """Return True when the line is active and dated within ``[start, end)``."""
    day = line.document_date
    if isinstance(day, datetime):
        day = day.date()
    return not line.is_cancelled and start <= day < end


def aggregate(lines: Iterable[RawSalesLine], start: date, end: date) -> AggregationResult:
    """Aggregate ledger lines into monthly base-unit totals.

    Every base code seen in ``lines`` appears in the result, even when all of
    its lines fall outside the window or are cancelled, so callers can report
    products without recent activity.

    Args:
        lines: Raw ledger lines in any order.
        start: Inclusive window start.
        end: Exclusive window end.

    Returns:
        The frozen aggregation result.

    Raises:
        ValueError: If ``end`` is before ``start``.
    """
    if end < start:
        raise ValueError("aggregate() window end must not precede its start")

    acc = _Accumulator()
    for line in lines:
        base, multiplier = acc.observe(line)
        if in_window(line, start, end):
            acc.add(line, base, multiplier)
    return acc.freeze()

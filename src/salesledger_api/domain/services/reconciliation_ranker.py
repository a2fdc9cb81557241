# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Reconciliation ranker.

Purpose:
    Compare named ledger totals against one external reference total and
    order them by closeness.

Rules:
    * Candidates whose value is ``None`` or zero are treated as "field not
      populated" and excluded before ranking.
    * ``difference = value - reference``;
      ``percent = difference / reference * 100`` (``0`` when the reference is 0).
    * Ordering is by absolute difference, ascending. The sort is stable, so
      ties keep input order. Ranks start at 1.

Design:
    Pure domain logic. No logging, no I/O. Numeric validation happens at the
    boundary before values reach this module.

Layer:
    domain/services
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal

from salesledger_api.domain.entities.reconciliation import (
    CandidateTotal,
    ReconciliationCandidate,
)
from salesledger_api.domain.services.numeric import percent_of


def populated(candidates: Iterable[CandidateTotal]) -> list[tuple[CandidateTotal, Decimal]]:
    """Return ``(candidate, value)`` for candidates with a non-zero value, in input order."""
    return [(c, c.value) for c in candidates if c.value is not None and c.value != 0]


def rank(
    candidates: Sequence[CandidateTotal],
    reference: Decimal,
) -> tuple[ReconciliationCandidate, ...]:
    """Rank candidate totals by distance to ``reference``.

    Args:
        candidates: Named totals in their configured order.
        reference: External reference total.

    Returns:
        Ranked candidates, closest first.
    """
    scored: list[ReconciliationCandidate] = []
    for candidate, value in populated(candidates):
        difference = value - reference
        scored.append(
            ReconciliationCandidate(
                field_name=candidate.field_name,
                source_description=candidate.source_description,
                value=value,
                difference_from_reference=difference,
                percent_difference=percent_of(difference, reference),
            )
        )

    ordered = sorted(scored, key=lambda c: abs(c.difference_from_reference or Decimal("0")))
    return tuple(
        ReconciliationCandidate(
            field_name=c.field_name,
            source_description=c.source_description,
            value=c.value,
            difference_from_reference=c.difference_from_reference,
            percent_difference=c.percent_difference,
            rank=position,
        )
        for position, c in enumerate(ordered, start=1)
    )


def unranked(candidates: Sequence[CandidateTotal]) -> tuple[ReconciliationCandidate, ...]:
    """List populated candidates without a reference to compare against."""
    return tuple(
        ReconciliationCandidate(
            field_name=c.field_name,
            source_description=c.source_description,
            value=value,
        )
        for c, value in populated(candidates)
    )

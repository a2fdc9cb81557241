# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Decimal helpers shared by the analytics services.

Layer:
    domain/services
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Final

ZERO: Final[Decimal] = Decimal("0")
HUNDRED: Final[Decimal] = Decimal("100")
_CENTS: Final[Decimal] = Decimal("0.01")


def round_half_up(value: Decimal, places: int = 2) -> Decimal:
    """Round ``value`` to ``places`` decimals using round-half-up."""
    exponent = _CENTS if places == 2 else Decimal(1).scaleb(-places)
    return value.quantize(exponent, rounding=ROUND_HALF_UP)


def percent_of(part: Decimal, whole: Decimal) -> Decimal:
    """Return ``part / whole * 100``, or ``0`` when ``whole`` is zero."""
    if whole == 0:
        return ZERO
    return part / whole * HUNDRED


def growth_rate(current: Decimal, previous: Decimal) -> Decimal:
    """Return the percentage change from ``previous`` to ``current``.

    A zero ``previous`` yields ``100`` when ``current`` is positive, else ``0``.
    """
    if previous == 0:
        return HUNDRED if current > 0 else ZERO
    return (current - previous) / previous * HUNDRED

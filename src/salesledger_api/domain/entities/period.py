# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Calendar month keys used to bucket ledger activity.

Layer:
    domain/entities
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Final

_MONTH_RE: Final[re.Pattern[str]] = re.compile(r"^(\d{4})-(\d{2})$")


@dataclass(frozen=True, slots=True, order=True)
class PeriodKey:
    """A (year, month) pair.

    Ordering is chronological and matches the lexicographic order of
    :meth:`label`.

    Attributes:
        year: Four-digit calendar year.
        month: Calendar month in ``1..12``.
    """

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.year <= 9999:
            raise ValueError(f"PeriodKey.year out of range: {self.year}")
        if not 1 <= self.month <= 12:
            raise ValueError(f"PeriodKey.month out of range: {self.month}")

    @classmethod
    def from_date(cls, value: date | datetime) -> PeriodKey:
        """Return the month containing ``value``."""
        return cls(value.year, value.month)

    @classmethod
    def parse(cls, raw: str) -> PeriodKey:
        """Parse a ``YYYY-MM`` label.

        Raises:
            ValueError: If ``raw`` is not a valid month label.
        """
        match = _MONTH_RE.match(raw.strip())
        if match is None:
            raise ValueError(f"Invalid month label: {raw!r} (expected YYYY-MM)")
        return cls(int(match.group(1)), int(match.group(2)))

    def label(self) -> str:
        """Return the sortable ``YYYY-MM`` form."""
        return f"{self.year:04d}-{self.month:02d}"

    def display_name(self) -> str:
        """Return a short human label such as ``Aug 2024``."""
        return f"{calendar.month_abbr[self.month]} {self.year}"

    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    def last_day(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    def shift(self, months: int) -> PeriodKey:
        """Return the key ``months`` months away (negative moves backwards)."""
        index = self.year * 12 + (self.month - 1) + months
        return PeriodKey(index // 12, index % 12 + 1)

    def months_until(self, other: PeriodKey) -> int:
        """Return the signed number of months from ``self`` to ``other``."""
        return (other.year * 12 + other.month) - (self.year * 12 + self.month)

# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Reconciliation entities.

Purpose:
    Describe the competing ledger totals compared against an external
    reference figure, and the ranked outcome of that comparison.

Layer:
    domain/entities
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Final

from salesledger_api.domain.entities.base import BaseEntity


class CandidateLevel(str, Enum):
    """Ledger table a candidate total is summed from."""

    HEADER = "header"
    LINE = "line"


HEADER_COLUMNS: Final[frozenset[str]] = frozenset(
    {"TOTALAMOUNT", "NETAMOUNT", "BEFOREVAT", "VATAMOUNT"}
)
LINE_COLUMNS: Final[frozenset[str]] = frozenset({"NETAMOUNT", "AMOUNT", "DISCAMOUNT"})


@dataclass(frozen=True, slots=True)
class CandidateDescriptor(BaseEntity):
    """Declarative definition of one candidate ledger total.

    Attributes:
        name: Stable identifier, reported as ``fieldName``.
        description: Human-readable description of the source.
        level: Header or line table.
        column: Monetary column to sum; must be whitelisted for the level.
        signed: Apply the credit-note sign convention per document.
        prefixes: Optional allow-list of two-letter document prefixes.
        include_cancelled: Include headers carrying a cancellation date.
        include_set_components: Include set-component lines (line level only).
    """

    name: str
    description: str
    level: CandidateLevel
    column: str
    signed: bool = False
    prefixes: tuple[str, ...] | None = None
    include_cancelled: bool = False
    include_set_components: bool = False

    def __post_init__(self) -> None:
        self.require(bool(self.name), "name must be non-empty")
        allowed = HEADER_COLUMNS if self.level is CandidateLevel.HEADER else LINE_COLUMNS
        self.require(
            self.column in allowed,
            f"column {self.column!r} is not allowed for {self.level.value}-level candidates",
        )
        if self.prefixes is not None:
            self.require(bool(self.prefixes), "prefixes must be None or non-empty")
            for prefix in self.prefixes:
                self.require(
                    len(prefix) == 2 and prefix.isalnum(), f"invalid document prefix {prefix!r}"
                )


@dataclass(frozen=True, slots=True)
class CandidateTotal(BaseEntity):
    """A named ledger total before ranking.

    ``value`` is ``None`` when the query produced no rows.
    """

    field_name: str
    value: Decimal | None
    source_description: str = ""


@dataclass(frozen=True, slots=True)
class ReconciliationCandidate(BaseEntity):
    """A candidate total compared against the reference.

    Attributes:
        field_name: Candidate identifier.
        source_description: Where the figure was summed from.
        value: Candidate total.
        difference_from_reference: ``value - reference``; ``None`` when no
            reference was available.
        percent_difference: Difference as a percentage of the reference
            (``0`` when the reference is zero); ``None`` without a reference.
        rank: 1 for the closest candidate; ``None`` without a reference.
    """

    field_name: str
    source_description: str
    value: Decimal
    difference_from_reference: Decimal | None = None
    percent_difference: Decimal | None = None
    rank: int | None = None

    def __post_init__(self) -> None:
        self.require(self.rank is None or self.rank >= 1, "rank must start at 1")

    @property
    def abs_difference(self) -> Decimal | None:
        if self.difference_from_reference is None:
            return None
        return abs(self.difference_from_reference)

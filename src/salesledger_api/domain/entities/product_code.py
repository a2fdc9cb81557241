# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Product code decomposition result.

Layer:
    domain/entities
"""

from __future__ import annotations

from dataclasses import dataclass

from salesledger_api.domain.entities.base import BaseEntity


@dataclass(frozen=True, slots=True)
class ProductCodeDecomposition(BaseEntity):
    """A product code split into its base item and pack multiplier.

    Attributes:
        base_code: Canonical product identifier with the pack suffix removed.
        multiplier: Number of base units per sold unit (``1`` for plain codes).
        original_code: The code exactly as it appeared on the ledger line.
    """

    base_code: str
    multiplier: int
    original_code: str

    def __post_init__(self) -> None:
        self.require(self.multiplier >= 1, "multiplier must be a positive integer")

    @property
    def is_variant(self) -> bool:
        return self.multiplier != 1 or self.base_code != self.original_code

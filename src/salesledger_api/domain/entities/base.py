# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Shared base for ledger, aggregate and forecast entities.

Entities are frozen, slotted dataclasses. Subclasses validate their own
invariants in ``__post_init__`` and report violations through
:meth:`BaseEntity.require`, so every entity fails with ``ValueError``.

Layer:
    domain/entities
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BaseEntity:
    """Immutable domain value."""

    def __post_init__(self) -> None:
        return

    def require(self, condition: bool, message: str) -> None:
        """Raise ``ValueError`` prefixed with the entity name unless ``condition`` holds."""
        if not condition:
            raise ValueError(f"{type(self).__name__}: {message}")

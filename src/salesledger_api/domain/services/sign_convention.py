# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Sign convention normalizer for ledger document classes.

Credit notes (``CN``) and credit sales returns (``CS``) reduce running
totals; every other document class adds to them. Cancellation is a separate
concept handled by filtering, never by sign.

Layer:
    domain/services
"""

from __future__ import annotations

from decimal import Decimal
from typing import Final, Literal

CREDIT_PREFIXES: Final[frozenset[str]] = frozenset({"CN", "CS"})
SALES_PREFIX: Final[str] = "SA"

Sign = Literal[1, -1]


def document_prefix(document_number: str) -> str:
    """Return the two-character document class prefix (upper-cased)."""
    return (document_number or "")[:2].upper()


def is_credit_document(document_number: str) -> bool:
    return document_prefix(document_number) in CREDIT_PREFIXES


def sign_for(document_number: str) -> Sign:
    """Return ``-1`` for credit documents and ``+1`` for everything else.

    Args:
        document_number: Ledger document number, e.g. ``"CN-0001"``.

    Returns:
        The multiplier to apply to quantities and amounts of the document.
    """
    return -1 if is_credit_document(document_number) else 1


def signed(value: Decimal, document_number: str) -> Decimal:
    """Apply :func:`sign_for` to ``value``."""
    return value * sign_for(document_number)

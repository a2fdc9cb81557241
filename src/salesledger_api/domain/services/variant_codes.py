# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Variant code resolver.

Purpose:
    Split a product code sold as a multi-pack (``L3-8GX6``, ``A1-40GX12``)
    into its base code and pack multiplier.

Rules:
    * A code is a variant when it ends with the letter ``X`` (any case)
      followed by one or more digits. The whole trailing digit run is the
      multiplier and the ``X<digits>`` suffix is removed exactly once.
    * Anything else resolves to itself with multiplier ``1``. The resolver
      never raises; it fails open for codes it cannot interpret:
        - a zero multiplier (``ABX0``),
        - a suffix that is the whole code (``X6``),
        - a stacked suffix (``AX2X6``), whose stripped base would itself
          still look like a variant.
      This keeps re-resolving any base code a no-op (multiplier ``1``).

Layer:
    domain/services
"""

from __future__ import annotations

import re
from typing import Final

from salesledger_api.domain.entities.product_code import ProductCodeDecomposition

_VARIANT_SUFFIX: Final[re.Pattern[str]] = re.compile(r"X(\d+)$", re.IGNORECASE)


def _plain(code: str) -> ProductCodeDecomposition:
    return ProductCodeDecomposition(base_code=code, multiplier=1, original_code=code)


def decompose(code: str) -> ProductCodeDecomposition:
    """Resolve a product code into base code and multiplier.

    Args:
        code: Product code as recorded on the ledger line.

    Returns:
        The decomposition; ``multiplier == 1`` and ``base_code == code`` when
        the code carries no usable pack suffix.
    """
    if not code:
        return _plain(code)

    match = _VARIANT_SUFFIX.search(code)
    if match is None:
        return _plain(code)

    multiplier = int(match.group(1))
    base_code = code[: match.start()]
    if multiplier < 1 or not base_code or _VARIANT_SUFFIX.search(base_code):
        return _plain(code)

    return ProductCodeDecomposition(base_code=base_code, multiplier=multiplier, original_code=code)

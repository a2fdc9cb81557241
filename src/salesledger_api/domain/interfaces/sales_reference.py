# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""External sales reference gateway interface.

Layer:
    domain/interfaces
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Protocol


class SalesReferenceGateway(Protocol):
    """Source of the independent net-sales figure used for reconciliation."""

    @property
    def source_name(self) -> str:
        """Human-readable identifier of the reference source."""
        ...

    async def net_sales_total(self, start: date, end: date) -> Decimal:
        """Return the reference total for the inclusive date range ``[start, end]``.

        Raises:
            ExternalReferenceError: On transport failure, timeout, non-2xx
                status or an unusable payload.
        """
        ...

# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""
Adapter Gateway: sales-report service → reference net-sales figure.

Purpose:
    Implement the domain ``SalesReferenceGateway`` on top of the sales-report
    HTTP client. The client returns the raw JSON document; this gateway
    walks the configured dotted path (default ``data.net.amount``) and
    normalizes the figure into a :class:`~decimal.Decimal`.

Layer:
    adapters
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

from salesledger_api.domain.exceptions.sales_ledger import ExternalReferenceError
from salesledger_api.domain.interfaces.sales_reference import SalesReferenceGateway
from salesledger_api.infrastructure.external_apis.sales_report.client import (
    SOURCE,
    SalesReportClient,
)
from salesledger_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)


def extract_path(body: Mapping[str, Any], path: str) -> Any:
    """Return the value at a dotted ``path`` inside ``body``.

    Raises:
        ExternalReferenceError: If any segment is missing.
    """
    node: Any = body
    for segment in path.split("."):
        if not isinstance(node, Mapping) or segment not in node:
            raise ExternalReferenceError(
                f"Sales report response has no value at '{path}'",
                details={"path": path, "missing": segment},
            )
        node = node[segment]
    return node


def to_decimal(value: Any, *, path: str) -> Decimal:
    """Convert a JSON scalar into a finite ``Decimal``.

    Numeric strings are accepted; booleans and ``null`` are not.
    """
    if value is None or isinstance(value, bool):
        raise ExternalReferenceError(f"Sales report value at '{path}' is not numeric")
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ExternalReferenceError(f"Sales report value at '{path}' is not numeric") from exc
    if not result.is_finite():
        raise ExternalReferenceError(f"Sales report value at '{path}' is not finite")
    return result


class HttpSalesReferenceGateway(SalesReferenceGateway):
    """Reference gateway backed by the sales-report summary endpoint."""

    def __init__(self, client: SalesReportClient, *, value_path: str = "data.net.amount") -> None:
        """Initialize the gateway.

        Args:
            client: Sales-report transport client.
            value_path: Dotted path of the net-sales figure in the response.
        """
        self._client = client
        self._value_path = value_path

    @property
    def source_name(self) -> str:
        return SOURCE

    async def net_sales_total(self, start: date, end: date) -> Decimal:
        body = await self._client.fetch_summary(start, end)
        value = to_decimal(extract_path(body, self._value_path), path=self._value_path)
        logger.debug(
            "reference.net_sales",
            extra={"extra": {"source": SOURCE, "start": start.isoformat(), "end": end.isoformat()}},
        )
        return value

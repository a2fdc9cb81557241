# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Sales-report transport client (async, instrumented).

Fetches the summary document of the external sales-report service used as
the independent reference for reconciliation.

Behavior:
    * Async HTTP (httpx) with a per-request timeout.
    * No retries; callers treat any failure as "reference unavailable".
    * Transport errors, timeouts, non-2xx statuses and non-JSON bodies are
      mapped to :class:`ExternalReferenceError` with a short reason.
    * Prometheus latency and error metrics per call.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any, Final

import httpx

from salesledger_api.domain.exceptions.sales_ledger import ExternalReferenceError
from salesledger_api.infrastructure.external_apis.sales_report.settings import (
    SalesReportSettings,
)
from salesledger_api.infrastructure.logging.logger import get_json_logger, get_request_id
from salesledger_api.infrastructure.observability.metrics import observe_reference_request

logger = get_json_logger(__name__)

SOURCE: Final[str] = "sales_report"

_DEFAULT_HEADERS: Final[dict[str, str]] = {
    "Accept": "application/json",
    "User-Agent": "salesledger-sales-report-client/1.0",
}


class SalesReportClient:
    """Transport client for the sales-report summary endpoint."""

    def __init__(
        self,
        settings: SalesReportSettings,
        *,
        http: httpx.AsyncClient | None = None,
        timeout_s: float | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Service settings loaded from environment or DI.
            http: Optional shared ``httpx.AsyncClient``. If omitted, a client
                is created and owned by this instance.
            timeout_s: Optional per-request timeout override in seconds.
        """
        self._settings = settings
        self._base_url = settings.base_url.rstrip("/")
        self._timeout = float(timeout_s if timeout_s is not None else settings.timeout_s)
        self._owns_client = http is None
        self._client = http or httpx.AsyncClient(
            timeout=self._timeout,
            headers=_DEFAULT_HEADERS.copy(),
        )

    @property
    def url(self) -> str:
        return f"{self._base_url}/{self._settings.path.lstrip('/')}"

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance owns it."""
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()

    async def fetch_summary(self, start: date, end: date) -> Mapping[str, Any]:
        """Fetch the summary document for an inclusive date range.

        Args:
            start: First day of the range.
            end: Last day of the range.

        Returns:
            The decoded JSON object.

        Raises:
            ExternalReferenceError: On timeout, transport failure, non-2xx
                status or a body that is not a JSON object.
        """
        headers: dict[str, str] = dict(_DEFAULT_HEADERS)
        if self._settings.api_key is not None:
            headers["Authorization"] = f"Bearer {self._settings.api_key.get_secret_value()}"
        rid = get_request_id()
        if rid:
            headers["X-Request-ID"] = rid
        params = {"startDate": start.isoformat(), "endDate": end.isoformat()}

        with observe_reference_request(SOURCE) as obs:
            try:
                resp = await self._client.get(
                    self.url, params=params, headers=headers, timeout=self._timeout
                )
            except httpx.TimeoutException as exc:
                obs.mark_error("timeout")
                raise ExternalReferenceError(
                    f"Sales report request timed out after {self._timeout:g}s",
                    details={"url": self.url},
                ) from exc
            except httpx.HTTPError as exc:
                obs.mark_error("transport")
                raise ExternalReferenceError(
                    f"Sales report request failed: {exc.__class__.__name__}",
                    details={"url": self.url},
                ) from exc

            if resp.status_code >= 400:
                obs.mark_error(f"http_{resp.status_code}")
                raise ExternalReferenceError(
                    f"Sales report returned HTTP {resp.status_code}",
                    details={"url": self.url, "status": resp.status_code},
                )

            try:
                body = resp.json()
            except ValueError as exc:
                obs.mark_error("non_json")
                raise ExternalReferenceError("Sales report returned a non-JSON body") from exc

            if not isinstance(body, Mapping):
                obs.mark_error("bad_shape")
                raise ExternalReferenceError("Sales report body is not a JSON object")

        logger.debug(
            "reference.fetch.ok",
            extra={"extra": {"source": SOURCE, "status": resp.status_code}},
        )
        return body

# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Shared presenter plumbing.

Routers never build envelopes or round numbers themselves. Presenters return
a :class:`PresentResult`, and :meth:`BaseRouter.send` applies its headers.
The helpers below convert ``Decimal`` and ``date`` values to their wire form.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any

from salesledger_api.adapters.schemas.http.envelopes import ErrorEnvelope, SuccessEnvelope
from salesledger_api.domain.services.numeric import round_half_up


def money(value: Decimal | None) -> float:
    """Round half-up to 2 decimals and convert to float (``None`` is 0)."""
    if value is None:
        return 0.0
    return float(round_half_up(value))


def optional_money(value: Decimal | None) -> float | None:
    return None if value is None else float(round_half_up(value))


def quantity(value: Decimal) -> float:
    return float(value)


def iso(day: date | None) -> str:
    """ISO date string, or ``""`` for a missing date."""
    return day.isoformat() if day is not None else ""


@dataclass(slots=True)
class PresentResult[T]:
    """Presentation result envelope.

    Attributes:
        body: A Pydantic envelope instance.
        headers: Extra HTTP headers to apply.
        status_code: Optional HTTP status override.
    """

    body: T
    headers: Mapping[str, str]
    status_code: int | None = None


class BasePresenter:
    """Base presenter for HTTP response shaping in adapter layers."""

    @staticmethod
    def trace_headers(trace_id: str | None) -> dict[str, str]:
        return {"X-Request-ID": trace_id} if trace_id else {}

    def present_success(
        self,
        *,
        data: Any,
        trace_id: str | None = None,
    ) -> PresentResult[SuccessEnvelope[Any]]:
        """Wrap ``data`` in a SuccessEnvelope and echo ``X-Request-ID``."""
        return PresentResult(
            body=SuccessEnvelope[Any](data=data),
            headers=self.trace_headers(trace_id),
        )

    def present_error(
        self,
        *,
        code: str,
        http_status: int,
        message: str,
        trace_id: str | None = None,
    ) -> PresentResult[ErrorEnvelope]:
        """Build an ErrorEnvelope and attach ``X-Request-ID``."""
        body = ErrorEnvelope(error=message, code=code, trace_id=trace_id)
        return PresentResult(
            body=body,
            headers=self.trace_headers(trace_id),
            status_code=int(http_status),
        )

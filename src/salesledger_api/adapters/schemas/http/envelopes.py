# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Response envelopes.

List, comparison, summary and forecast endpoints answer with
``{success: true, data}``; the sales-order lists add ``count``. Every
failure answers with ``{success: false, error, code}`` plus ``trace_id``
when the request carried an id. The forecast prediction and reconciliation
bodies have their own top-level shapes (see :mod:`.analytics`).
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from salesledger_api.adapters.schemas.http.base import BaseHTTPSchema

__all__ = ["CountedEnvelope", "ErrorEnvelope", "SuccessEnvelope"]


class ErrorEnvelope(BaseHTTPSchema):
    success: Literal[False] = False
    error: str = Field(examples=["startDate and endDate must be provided together"])
    code: str = Field(
        description=(
            "VALIDATION_ERROR, NOT_FOUND, LEDGER_UNAVAILABLE, HTTP_ERROR or INTERNAL_ERROR."
        ),
    )
    trace_id: str | None = Field(default=None, alias="trace_id")


class SuccessEnvelope[T](BaseHTTPSchema):
    success: Literal[True] = True
    data: T


class CountedEnvelope[T](BaseHTTPSchema):
    """Success envelope for the ``/sales`` lists; ``count`` is ``len(data)``."""

    success: Literal[True] = True
    data: list[T]
    count: int

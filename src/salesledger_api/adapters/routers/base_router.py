# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""
Base Router (Adapters Layer)

Purpose:
    Provide a canonical APIRouter wrapper and shared utilities for the HTTP
    endpoints:
      - Resource prefixes (e.g., "/analytics"), mounted under API_PREFIX.
      - Standard error response mapping using ErrorEnvelope.
      - Helpers to emit presenter results with headers (X-Request-ID).
      - Query-string parsing helpers that fail with a 400-mapped error.

Layer:
    adapters/routers
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from enum import Enum
from typing import Any

from fastapi import APIRouter, Request, Response

from salesledger_api.adapters.presenters.base_presenter import PresentResult
from salesledger_api.adapters.schemas.http.envelopes import ErrorEnvelope
from salesledger_api.application.schemas.dto.analytics import DateRangeDTO
from salesledger_api.domain.exceptions.sales_ledger import InvalidQueryParameterError
from salesledger_api.infrastructure.logging.logger import get_json_logger

_LOGGER = get_json_logger(__name__)

TagType = str | Enum


class BaseRouter(APIRouter):
    """Canonical router wrapper for HTTP endpoints.

    Args:
        resource: Resource segment (e.g., "analytics").
        prefix: Optional explicit prefix (overrides resource).
        tags: Default tags applied to all routes mounted on this router.
        dependencies: Optional global dependencies for all routes.
        **kwargs: Additional APIRouter kwargs.
    """

    def __init__(
        self,
        *,
        resource: str,
        prefix: str | None = None,
        tags: Sequence[TagType] | None = None,
        dependencies: Sequence[Any] | None = None,
        **kwargs: Any,
    ) -> None:
        computed_prefix = prefix if prefix is not None else f"/{resource}"
        super().__init__(
            prefix=computed_prefix,
            tags=list(tags) if tags is not None else None,
            dependencies=list(dependencies) if dependencies is not None else None,
            **kwargs,
        )
        _LOGGER.info(
            "router_initialized",
            extra={"extra": {"prefix": computed_prefix, "tags": [str(t) for t in tags or []]}},
        )

    # -------------------------------------------------------------------------
    # Response helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def trace_id(request: Request) -> str | None:
        return getattr(request.state, "request_id", None)

    @staticmethod
    def send(response: Response, result: PresentResult[Any]) -> Any:
        """Apply presenter headers and status to ``response`` and return the body."""
        response.headers.update(dict(result.headers))
        if result.status_code is not None:
            response.status_code = result.status_code
        return result.body

    # -------------------------------------------------------------------------
    # Query parsing
    # -------------------------------------------------------------------------

    @staticmethod
    def require(name: str, raw: str | None) -> str:
        """Return a non-blank parameter value or raise ``InvalidQueryParameterError``."""
        if raw is None or not raw.strip():
            raise InvalidQueryParameterError(f"{name} is required", details={"param": name})
        return raw.strip()

    @staticmethod
    def parse_date(name: str, raw: str) -> date:
        try:
            return date.fromisoformat(raw.strip())
        except ValueError as exc:
            raise InvalidQueryParameterError(
                f"{name} must be a date in YYYY-MM-DD format",
                details={"param": name, "value": raw},
            ) from exc

    @classmethod
    def date_range(
        cls,
        start_raw: str | None,
        end_raw: str | None,
        *,
        start_name: str = "startDate",
        end_name: str = "endDate",
    ) -> DateRangeDTO:
        """Parse a required inclusive date range."""
        start = cls.parse_date(start_name, cls.require(start_name, start_raw))
        end = cls.parse_date(end_name, cls.require(end_name, end_raw))
        if end < start:
            raise InvalidQueryParameterError(
                f"{end_name} must not be earlier than {start_name}",
                details={"param": end_name},
            )
        if end == date.max:
            raise InvalidQueryParameterError(
                f"{end_name} must be earlier than {date.max.isoformat()}",
                details={"param": end_name, "value": end_raw},
            )
        return DateRangeDTO(start=start, end=end)

    @classmethod
    def optional_date_range(
        cls, start_raw: str | None, end_raw: str | None
    ) -> DateRangeDTO | None:
        """Parse an optional range; ``startDate`` and ``endDate`` come as a pair."""
        if not (start_raw or "").strip() and not (end_raw or "").strip():
            return None
        if not (start_raw or "").strip() or not (end_raw or "").strip():
            raise InvalidQueryParameterError(
                "startDate and endDate must be provided together",
                details={"param": "startDate" if not (start_raw or "").strip() else "endDate"},
            )
        return cls.date_range(start_raw, end_raw)

    # -------------------------------------------------------------------------
    # OpenAPI Error Responses
    # -------------------------------------------------------------------------

    @staticmethod
    def std_error_responses() -> dict[int | str, dict[str, Any]]:
        """Return the canonical error response mapping for endpoints."""
        return {
            400: {"model": ErrorEnvelope, "description": "Missing or malformed query parameter."},
            500: {"model": ErrorEnvelope, "description": "Ledger unavailable or internal error."},
        }

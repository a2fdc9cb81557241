# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""App-wide exception handlers.

Routers translate domain errors themselves. These handlers cover what
reaches the app untranslated:

| Exception | Status | Code |
|---|---|---|
| ``RequestValidationError`` | 400 | ``VALIDATION_ERROR`` |
| Starlette ``HTTPException`` (unknown route, wrong method) | its own | ``HTTP_ERROR`` |
| anything else | 500 | ``INTERNAL_ERROR`` |
"""

from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.responses import Response

from salesledger_api.adapters.schemas.http.envelopes import ErrorEnvelope
from salesledger_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)

_TRANSPORT_LOCATIONS = frozenset({"query", "path", "body"})


def error_envelope(*, code: str, message: str, trace_id: str | None = None) -> dict[str, Any]:
    """Serialized :class:`ErrorEnvelope`; ``trace_id`` is omitted when unknown."""
    body = ErrorEnvelope(error=message, code=code, trace_id=trace_id)
    return body.model_dump_http(exclude_none=True)


def _trace_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _describe_validation(exc: RequestValidationError) -> str:
    problems = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ()) if p not in _TRANSPORT_LOCATIONS)
        problems.append(f"{field or 'request'}: {err.get('msg', 'invalid value')}")
    if not problems:
        return "Invalid request"
    return "Invalid request parameters: " + "; ".join(problems)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> Response:
    return JSONResponse(
        status_code=400,
        content=error_envelope(
            code="VALIDATION_ERROR",
            message=_describe_validation(exc),
            trace_id=_trace_id(request),
        ),
    )


async def handle_http_exception(request: Request, exc: HTTPException) -> Response:
    message = exc.detail if isinstance(exc.detail, str) else "HTTP error"
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(code="HTTP_ERROR", message=message, trace_id=_trace_id(request)),
        headers=exc.headers,
    )


async def handle_unhandled_exception(request: Request, exc: Exception) -> Response:
    logger.exception(
        "http.unhandled_exception",
        extra={"extra": {"path": request.url.path, "method": request.method}},
    )
    return JSONResponse(
        status_code=500,
        content=error_envelope(
            code="INTERNAL_ERROR",
            message=str(exc) or "Internal server error",
            trace_id=_trace_id(request),
        ),
    )

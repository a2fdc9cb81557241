# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Health endpoints (Adapters Layer).

Purpose:
    * ``GET /health``: liveness signal for orchestrators and load balancers.
      It touches neither the ledger nor the sales-report service.
    * ``GET /health/ledger``: ledger connectivity. Runs ``SELECT 1`` and
      answers ``connected``, or 500 with ``disconnected`` and the driver
      message.

Design:
    The connectivity check is injected through a small protocol so tests and
    app composition can replace it.
"""

from __future__ import annotations

import typing as t
from datetime import UTC, datetime
from typing import Annotated, Protocol

from fastapi import APIRouter, Depends, Response, status
from pydantic import Field

from salesledger_api.adapters.schemas.http.base import BaseHTTPSchema
from salesledger_api.config.settings import get_settings
from salesledger_api.dependencies.health import get_ledger_health_check
from salesledger_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)

router = APIRouter()

SERVICE_NAME = "salesledger-api"


class HealthResponse(BaseHTTPSchema):
    """Liveness response.

    Attributes:
        status: Always ``"ok"`` while the process serves requests.
        service: Service name.
        version: Deployed service version.
        timestamp: Server time in UTC (ISO-8601).
    """

    status: t.Literal["ok"] = "ok"
    service: str = Field(..., examples=[SERVICE_NAME])
    version: str = Field(..., examples=["0.1.0"])
    timestamp: datetime


class LedgerHealthResponse(BaseHTTPSchema):
    success: bool
    status: t.Literal["connected", "disconnected"]
    database: str = Field(..., examples=["ledger"])
    error: str | None = Field(default=None, examples=["Login timeout expired"])
    timestamp: datetime


class LedgerConnectivity(Protocol):
    """Anything that can tell whether the ledger answers."""

    database: str

    async def ledger(self) -> tuple[bool, str | None]: ...


@router.get(
    "",
    response_model=HealthResponse,
    summary="Liveness",
    operation_id="health_get",
)
async def health() -> HealthResponse:
    """Return service status, name, version and the current UTC time."""
    return HealthResponse(
        service=SERVICE_NAME,
        version=get_settings().service_version,
        timestamp=datetime.now(UTC),
    )


@router.get(
    "/ledger",
    response_model=LedgerHealthResponse,
    response_model_exclude_none=True,
    responses={500: {"description": "Ledger unreachable", "model": LedgerHealthResponse}},
    summary="Ledger connectivity",
    operation_id="health_ledger",
)
async def ledger_health(
    response: Response,
    check: Annotated[LedgerConnectivity, Depends(get_ledger_health_check)],
) -> LedgerHealthResponse:
    """Run ``SELECT 1`` against the ledger."""
    ok, detail = await check.ledger()
    if not ok:
        response.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    logger.info(
        "ledger_health",
        extra={"extra": {"connected": ok, "database": check.database}},
    )
    return LedgerHealthResponse(
        success=ok,
        status="connected" if ok else "disconnected",
        database=check.database,
        error=detail,
        timestamp=datetime.now(UTC),
    )

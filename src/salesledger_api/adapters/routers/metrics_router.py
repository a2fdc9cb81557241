# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Prometheus exposition at ``GET /metrics``.

The ledger, reference and HTTP histograms are created before the first
scrape so dashboards see every metric family even when no analytics
request has been served yet.

Layer:
    adapters/routers
"""

from __future__ import annotations

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from salesledger_api.infrastructure.observability.metrics import (
    get_http_server_request_duration_seconds,
    get_ledger_query_latency_seconds,
    get_reference_errors_total,
    get_reference_latency_seconds,
)

router = APIRouter()


@router.get("/metrics", include_in_schema=False)
async def metrics_endpoint() -> Response:
    get_ledger_query_latency_seconds()
    get_reference_latency_seconds()
    get_reference_errors_total()
    get_http_server_request_duration_seconds()
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

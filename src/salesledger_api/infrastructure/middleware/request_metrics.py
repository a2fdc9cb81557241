# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Request latency middleware (Prometheus).

Records server-side request latency to ``http_server_request_duration_seconds``
labelled by method, templated route and status. Errors in metrics code
never impact request flow.
"""

from __future__ import annotations

import time
from contextlib import suppress

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from salesledger_api.infrastructure.observability.metrics import (
    get_http_server_request_duration_seconds,
)

__all__ = ["RequestLatencyMiddleware"]


def _route_label(request: Request) -> str:
    route = request.scope.get("route")
    path = getattr(route, "path", None)
    return str(path) if path else request.url.path


class RequestLatencyMiddleware(BaseHTTPMiddleware):
    """Observe request duration for every HTTP request."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        status = "500"
        try:
            response = await call_next(request)
            status = str(response.status_code)
            return response
        finally:
            with suppress(Exception):
                get_http_server_request_duration_seconds().labels(
                    method=request.method.upper(),
                    route=_route_label(request),
                    status=status,
                ).observe(time.perf_counter() - start)

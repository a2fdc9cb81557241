# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Request correlation for analytics calls.

Each request carries one id, which is used in four places:

* ``request.state.request_id``, which routers copy into error envelopes as
  ``trace_id``;
* the logging context, so every log line of the request carries it;
* the outgoing sales-report call, which forwards it as ``X-Request-ID``;
* the ``X-Request-ID`` response header.

A caller-supplied id is reused when it is short and made of safe characters.
Otherwise a UUID4 is generated.
"""

from __future__ import annotations

import re
import uuid
from typing import Final

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from salesledger_api.infrastructure.logging.logger import (
    reset_request_context,
    set_request_context,
)

REQUEST_ID_HEADER: Final[str] = "X-Request-ID"
_ACCEPTED_ID: Final[re.Pattern[str]] = re.compile(r"[A-Za-z0-9._:@-]{1,128}")


def resolve_request_id(incoming: str | None) -> str:
    candidate = (incoming or "").strip()
    if _ACCEPTED_ID.fullmatch(candidate):
        return candidate
    return uuid.uuid4().hex


class RequestIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id
        token = set_request_context(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            reset_request_context(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

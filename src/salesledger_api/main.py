# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Salesledger API application.

``create_app()`` assembles the service:

* the ``/analytics`` and ``/sales`` endpoints under ``API_PREFIX``, plus
  ``/health``, ``/health/ledger`` and ``/metrics`` at the root;
* error handlers that render ``{success: false, error, code}`` for every
  failure, including unknown routes and malformed query strings;
* request-id and latency middleware, then CORS;
* a lifespan that opens the ledger pool and the reference HTTP client.

Run locally with ``python -m salesledger_api.main`` or
``uvicorn salesledger_api.main:create_app --factory``.
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute
from starlette.exceptions import HTTPException as StarletteHTTPException

from salesledger_api.adapters.routers import analytics, health, metrics, sales
from salesledger_api.config.settings import Settings, get_settings
from salesledger_api.dependencies.core.bootstrap import bootstrap
from salesledger_api.infrastructure.http.errors import (
    handle_http_exception,
    handle_unhandled_exception,
    handle_validation_error,
)
from salesledger_api.infrastructure.logging.logger import (
    configure_root_logging,
    get_json_logger,
)
from salesledger_api.infrastructure.middleware.request_id import (
    REQUEST_ID_HEADER,
    RequestIdMiddleware,
)
from salesledger_api.infrastructure.middleware.request_metrics import (
    RequestLatencyMiddleware,
)

configure_root_logging()
logger = get_json_logger(__name__)

SERVICE_NAME = "salesledger-api"


def _operation_id(route: APIRoute) -> str:
    """``get_api_analytics_products``-style ids, stable across releases."""
    method = "_".join(sorted(m.lower() for m in route.methods or ()))
    path = route.path_format.strip("/").replace("/", "_").replace("-", "_")
    path = path.replace("{", "").replace("}", "")
    return f"{method}_{path}"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    async with bootstrap(app) as state:
        app.state.settings = state.settings
        app.state.http_client = state.http_client
        yield


def _install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unhandled_exception)


def _install_middleware(app: FastAPI, settings: Settings) -> None:
    # Added last runs first: CORS, then request id, then latency.
    app.add_middleware(RequestLatencyMiddleware)
    app.add_middleware(RequestIdMiddleware)

    origins = settings.cors_allow_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )


def create_app() -> FastAPI:
    """Build the FastAPI application from the current settings."""
    settings = get_settings()
    app = FastAPI(
        title="Salesledger API",
        version=settings.service_version,
        description="Sales ledger analytics, variant-aware forecasting and reconciliation.",
        lifespan=lifespan,
        generate_unique_id_function=_operation_id,
    )
    _install_error_handlers(app)
    _install_middleware(app, settings)

    app.include_router(analytics, prefix=settings.api_prefix)
    app.include_router(sales, prefix=settings.api_prefix)
    app.include_router(health, prefix="/health", tags=["Health"])
    app.include_router(metrics)

    logger.info(
        "app_created",
        extra={
            "extra": {
                "service": SERVICE_NAME,
                "env": settings.environment.value,
                "version": settings.service_version,
                "api_prefix": settings.api_prefix,
            }
        },
    )
    return app


app: FastAPI = create_app()


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run(
        "salesledger_api.main:create_app",
        factory=True,
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8080")),
    )

# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Process-wide resources for the analytics service.

:func:`bootstrap` opens the ledger pool and one shared ``httpx.AsyncClient``
for the sales-report reference service. It yields both, together with the
settings, as :class:`BootstrapState`. Shutdown always runs. A failure to
release one resource is logged and does not stop the other from being
released.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx
from fastapi import FastAPI

from salesledger_api.config.settings import Settings, get_settings
from salesledger_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)


@dataclass(frozen=True, slots=True)
class BootstrapState:
    settings: Settings
    http_client: httpx.AsyncClient


async def _release(event: str, close: Callable[[], Awaitable[None]]) -> None:
    try:
        await close()
    except Exception:
        logger.exception(event)


@asynccontextmanager
async def bootstrap(app: FastAPI) -> AsyncGenerator[BootstrapState, None]:
    """Open the ledger and the reference HTTP client for the app's lifetime.

    Args:
        app: The application being started.

    Yields:
        BootstrapState: Settings and the shared reference client.
    """
    # Module attribute lookup so tests can patch the pool functions.
    import salesledger_api.infrastructure.database.session as ledger_db

    settings = get_settings()
    ledger_db.open_ledger(settings)
    http_client = httpx.AsyncClient(headers={"Accept": "application/json"})
    logger.info(
        "service_startup",
        extra={"extra": {"title": app.title, "environment": settings.environment.value}},
    )
    try:
        yield BootstrapState(settings=settings, http_client=http_client)
    finally:
        await _release("shutdown.reference_client_close_failed", http_client.aclose)
        await _release("shutdown.ledger_close_failed", ledger_db.close_ledger)
        logger.info("service_shutdown")

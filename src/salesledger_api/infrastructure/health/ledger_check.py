# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Ledger connectivity check.

Runs a trivial ``SELECT 1`` through :func:`read_session` and reports
``(connected, detail)``. Latency is recorded under the ``health`` query
label of the ledger latency histogram, whether the check succeeds or not.
"""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from salesledger_api.infrastructure.database.session import read_session
from salesledger_api.infrastructure.logging.logger import get_json_logger
from salesledger_api.infrastructure.observability.metrics import observe_ledger_query

__all__ = ["LedgerHealthCheck"]

logger = get_json_logger(__name__)


class LedgerHealthCheck:
    """Connectivity check for the sales ledger."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], database: str) -> None:
        """Initialize the check.

        Args:
            session_factory: Factory producing sessions bound to the ledger.
            database: Database name reported back to callers.
        """
        self._session_factory = session_factory
        self.database = database

    async def ledger(self) -> tuple[bool, str | None]:
        """Return ``(True, None)`` when the ledger answers, else ``(False, reason)``."""
        try:
            with observe_ledger_query("health"):
                async with read_session(self._session_factory) as session:
                    await session.execute(text("SELECT 1"))
        except Exception as exc:  # any driver or pool failure means disconnected
            detail = str(getattr(exc, "orig", None) or exc) or exc.__class__.__name__
            logger.warning(
                "ledger.health.failed",
                extra={"extra": {"database": self.database, "error_type": exc.__class__.__name__}},
            )
            return False, detail
        return True, None

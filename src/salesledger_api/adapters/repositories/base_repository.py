# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""
BaseRepository: read-only query foundation for the sales ledger.

Purpose:
    Shared mechanics for ledger repositories:
      * One short-lived session per query so independent queries can run
        concurrently (``asyncio.gather``) without sharing a connection.
      * Latency metrics per named query.
      * Translation of SQLAlchemy failures into ``LedgerUnavailableError``.
      * Value coercion helpers for driver-returned numerics and dates.

Layer: adapters / repositories

Notes:
    * No business logic, no domain decisions.
    * The ledger is never written; sessions are always rolled back.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.sql.elements import TextClause

from salesledger_api.domain.exceptions.sales_ledger import LedgerUnavailableError
from salesledger_api.infrastructure.database.session import read_session
from salesledger_api.infrastructure.logging.logger import get_json_logger
from salesledger_api.infrastructure.observability.metrics import observe_ledger_query

logger = get_json_logger(__name__)


class BaseRepository:
    """Base class for read-only ledger repositories."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize the repository.

        Args:
            session_factory: Factory producing sessions bound to the ledger.
        """
        self._session_factory = session_factory

    # ------------------------------------------------------------------
    # Fetch helpers
    # ------------------------------------------------------------------

    async def fetch_all(
        self,
        name: str,
        stmt: TextClause,
        params: Mapping[str, Any] | None = None,
        *,
        limit: int | None = None,
    ) -> Sequence[Mapping[str, Any]]:
        """Execute ``stmt`` and return its rows as mappings.

        Args:
            name: Query name used for metrics and logs.
            stmt: Parameterised text statement.
            params: Bound parameter values.
            limit: Optional maximum number of rows to read.

        Raises:
            LedgerUnavailableError: If the connection or the query fails.
        """
        try:
            with observe_ledger_query(name):
                async with read_session(self._session_factory) as session:
                    result = await session.execute(stmt, dict(params or {}))
                    rows = result.mappings()
                    return rows.fetchmany(limit) if limit is not None else rows.all()
        except SQLAlchemyError as exc:
            detail = str(getattr(exc, "orig", None) or exc)
            logger.warning(
                "ledger.query.failed",
                extra={"extra": {"query": name, "error_type": exc.__class__.__name__}},
            )
            raise LedgerUnavailableError(
                f"Ledger query '{name}' failed: {detail}",
                details={"query": name},
            ) from exc

    async def fetch_scalar(
        self,
        name: str,
        stmt: TextClause,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Return the first column of the first row, or ``None`` without rows."""
        rows = await self.fetch_all(name, stmt, params, limit=1)
        if not rows:
            return None
        return next(iter(rows[0].values()), None)

    # ------------------------------------------------------------------
    # Coercion helpers
    # ------------------------------------------------------------------

    @staticmethod
    def as_decimal(value: Any) -> Decimal:
        """Coerce a driver numeric (or ``None``) into :class:`Decimal`."""
        if value is None:
            return Decimal("0")
        if isinstance(value, Decimal):
            return value
        return Decimal(str(value))

    @staticmethod
    def as_date(value: Any) -> date:
        """Coerce a driver date/datetime/ISO string into :class:`date`."""
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        return date.fromisoformat(str(value)[:10])

    @staticmethod
    def as_text(value: Any) -> str:
        """Coerce a nullable, possibly space-padded CHAR value into ``str``."""
        return "" if value is None else str(value).strip()

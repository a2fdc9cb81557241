# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Dependency wiring for the ledger health endpoint."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from salesledger_api.dependencies.analytics import get_session_factory, get_settings
from salesledger_api.infrastructure.health.ledger_check import LedgerHealthCheck


def ledger_database_name() -> str:
    """Database name from ``DATABASE_URL``, or ``"unknown"``."""
    try:
        return make_url(get_settings().database_url).database or "unknown"
    except ArgumentError:
        return "unknown"


def get_ledger_health_check(
    session_factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)],
) -> LedgerHealthCheck:
    return LedgerHealthCheck(session_factory, database=ledger_database_name())

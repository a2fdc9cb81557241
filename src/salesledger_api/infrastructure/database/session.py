# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Ledger connection pool.

The sales ledger is read-only from this service. One process-wide
:class:`~sqlalchemy.ext.asyncio.AsyncEngine` is opened by the lifespan
(:func:`open_ledger`) and closed on shutdown (:func:`close_ledger`).
Repositories never hold a session between queries: each query runs inside
:func:`read_session`, which takes its own connection from the pool so that
queries issued through ``asyncio.gather`` never share one.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from salesledger_api.config.settings import Settings, get_settings


@dataclass(frozen=True, slots=True)
class _Ledger:
    engine: AsyncEngine
    sessions: async_sessionmaker[AsyncSession]


_ledger: _Ledger | None = None


def engine_options(settings: Settings) -> dict[str, Any]:
    """Keyword arguments for :func:`create_async_engine`."""
    options: dict[str, Any] = {"pool_pre_ping": True}
    if not settings.database_url.startswith("sqlite"):
        options["pool_size"] = settings.database_pool_size
        options["pool_timeout"] = settings.database_timeout_s
    return options


def open_ledger(settings: Settings) -> None:
    """Create the engine and sessionmaker once per process.

    Raises:
        ValueError: If ``database_url`` is empty.
    """
    global _ledger
    if _ledger is not None:
        return
    if not settings.database_url:
        raise ValueError("DATABASE_URL must be configured")
    engine = create_async_engine(settings.database_url, **engine_options(settings))
    _ledger = _Ledger(
        engine=engine,
        sessions=async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession),
    )


async def close_ledger() -> None:
    global _ledger
    if _ledger is None:
        return
    ledger, _ledger = _ledger, None
    await ledger.engine.dispose()


def ledger_sessions() -> async_sessionmaker[AsyncSession]:
    """Return the sessionmaker, opening the ledger if the lifespan did not run."""
    if _ledger is None:
        open_ledger(get_settings())
    assert _ledger is not None
    return _ledger.sessions


@asynccontextmanager
async def read_session(
    factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a session for one query; its transaction is rolled back on exit."""
    session = factory()
    try:
        yield session
    finally:
        if session.in_transaction():
            await session.rollback()
        await session.close()

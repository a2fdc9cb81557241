from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest

from salesledger_api.infrastructure.database.session import engine_options, read_session


def _settings(url: str) -> Any:
    return SimpleNamespace(database_url=url, database_pool_size=4, database_timeout_s=7.5)


def test_pool_options_follow_settings() -> None:
    opts = engine_options(_settings("mssql+aioodbc://u:p@h/ledger"))
    assert opts == {"pool_pre_ping": True, "pool_size": 4, "pool_timeout": 7.5}


def test_sqlite_urls_skip_queue_pool_options() -> None:
    assert engine_options(_settings("sqlite+aiosqlite://")) == {"pool_pre_ping": True}


class _Session:
    def __init__(self, in_tx: bool) -> None:
        self._in_tx = in_tx
        self.events: list[str] = []

    def in_transaction(self) -> bool:
        return self._in_tx

    async def rollback(self) -> None:
        self.events.append("rollback")

    async def close(self) -> None:
        self.events.append("close")


@pytest.mark.asyncio
@pytest.mark.parametrize(("in_tx", "expected"), [(True, ["rollback", "close"]), (False, ["close"])])
async def test_read_session_always_releases(in_tx: bool, expected: list[str]) -> None:
    session = _Session(in_tx)
    with pytest.raises(RuntimeError):
        async with read_session(lambda: session):  # type: ignore[arg-type]
            raise RuntimeError("query failed")
    assert session.events == expected

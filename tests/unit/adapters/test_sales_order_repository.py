# tests/unit/adapters/test_sales_order_repository.py
from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date, datetime
from decimal import Decimal
from typing import Any

import pytest
from sqlalchemy.exc import OperationalError

from salesledger_api.adapters.repositories.sales_order_repository import SqlSalesOrderRepository
from salesledger_api.domain.exceptions.sales_ledger import LedgerUnavailableError


class _Rows:
    def __init__(self, rows: Sequence[Mapping[str, Any]]) -> None:
        self._rows = list(rows)

    def all(self) -> list[Mapping[str, Any]]:
        return list(self._rows)

    def fetchmany(self, size: int) -> list[Mapping[str, Any]]:
        return self._rows[:size]


class _Result:
    def __init__(self, rows: Sequence[Mapping[str, Any]]) -> None:
        self._rows = rows

    def mappings(self) -> _Rows:
        return _Rows(self._rows)


class _Session:
    def __init__(self, owner: _Factory) -> None:
        self._owner = owner

    async def execute(self, stmt: Any, params: dict[str, Any]) -> _Result:
        sql = str(stmt)
        self._owner.executed.append((sql, params))
        if self._owner.error is not None:
            raise self._owner.error
        for marker, rows in self._owner.responses:
            if marker in sql:
                return _Result(rows)
        return _Result([])

    def in_transaction(self) -> bool:
        return False

    async def close(self) -> None:
        return None


class _Factory:
    """Answers each statement with the rows of the first marker found in its SQL."""

    def __init__(
        self,
        responses: Sequence[tuple[str, Sequence[Mapping[str, Any]]]] = (),
        error: Exception | None = None,
    ) -> None:
        self.responses = list(responses)
        self.error = error
        self.executed: list[tuple[str, dict[str, Any]]] = []

    def __call__(self) -> _Session:
        return _Session(self)


HEADER_ROW = {
    "docno": "SA6808-0001 ",
    "docdate": datetime(2024, 8, 5, 14, 30),
    "taxno": "IV6808-0001",
    "arcode": "AR1",
    "arname": "Acme ",
    "total_amount": Decimal("107.00"),
}


@pytest.mark.asyncio
async def test_list_orders_filters_and_pages() -> None:
    factory = _Factory([("FROM CSSALE h", [HEADER_ROW])])
    repo = SqlSalesOrderRepository(factory)  # type: ignore[arg-type]

    (header,) = await repo.list_orders(date(2024, 8, 1), date(2024, 9, 1), "AR1", 50, 100)

    sql, params = factory.executed[0]
    assert "h.DOCDATE >= :start AND h.DOCDATE < :end" in sql
    assert "h.ARCODE = :arcode" in sql
    assert "ORDER BY h.DOCDATE DESC, h.DOCNO DESC" in sql
    assert "OFFSET :offset ROWS FETCH NEXT :limit ROWS ONLY" in sql
    assert params == {
        "start": date(2024, 8, 1),
        "end": date(2024, 9, 1),
        "arcode": "AR1",
        "offset": 100,
        "limit": 50,
    }
    assert header.docno == "SA6808-0001"
    assert header.docdate == date(2024, 8, 5)
    assert header.arname == "Acme"


@pytest.mark.asyncio
async def test_list_orders_without_limit_reads_everything() -> None:
    factory = _Factory()
    repo = SqlSalesOrderRepository(factory)  # type: ignore[arg-type]

    assert await repo.list_orders(None, None, None, None, 20) == []

    sql, params = factory.executed[0]
    assert "OFFSET" not in sql
    assert "ARCODE = :arcode" not in sql
    assert params == {}


@pytest.mark.asyncio
async def test_order_header_missing_returns_none() -> None:
    repo = SqlSalesOrderRepository(_Factory())  # type: ignore[arg-type]
    assert await repo.order_header("SA-404") is None


@pytest.mark.asyncio
async def test_order_lines_map_money_and_units() -> None:
    factory = _Factory(
        [
            (
                "FROM CSSALESUB d",
                [
                    {
                        "line_id": 1,
                        "product_code": "L3-8GX6",
                        "product_name": "Lamp 6-pack",
                        "quantity": 2.0,
                        "unit_name": None,
                        "unit_price": Decimal("55.50"),
                        "net_amount": Decimal("111.00"),
                    }
                ],
            )
        ]
    )
    repo = SqlSalesOrderRepository(factory)  # type: ignore[arg-type]

    (line,) = await repo.order_lines("SA-1")

    sql, params = factory.executed[0]
    assert "ORDER BY d.LINEID" in sql
    assert params == {"docno": "SA-1"}
    assert line.quantity == Decimal("2.0")
    assert line.unit_name == ""
    assert line.net_amount == Decimal("111.00")


@pytest.mark.asyncio
async def test_packing_list_groups_lines_under_their_document() -> None:
    headers = [
        {**HEADER_ROW, "docno": "SA-1", "taxdate": datetime(2024, 8, 6), "close_flag": "N"},
        {**HEADER_ROW, "docno": "SA-2", "taxdate": None, "close_flag": None},
    ]
    lines = [
        {
            "docno": "SA-1",
            "line_id": 1,
            "product_code": "A",
            "product_name": "a",
            "quantity": 1,
            "unit_name": "PCS",
        },
        {
            "docno": "SA-1",
            "line_id": 2,
            "product_code": "B",
            "product_name": "b",
            "quantity": 3,
            "unit_name": None,
        },
    ]
    factory = _Factory([("FROM CSSALESUB d", lines), ("FROM CSSALE h", headers)])
    repo = SqlSalesOrderRepository(factory)  # type: ignore[arg-type]

    first, second = await repo.packing_list(date(2024, 8, 6))

    assert len(factory.executed) == 2
    for sql, params in factory.executed:
        assert "CAST(h.TAXDATE AS DATE) = :tax_date" in sql
        assert params == {"tax_date": date(2024, 8, 6)}
    assert first.header.docno == "SA-1"
    assert first.taxdate == date(2024, 8, 6)
    assert [item.product_code for item in first.items] == ["A", "B"]
    assert first.item_count == 2
    assert second.items == ()
    assert second.taxdate is None
    assert second.close_flag == ""


@pytest.mark.asyncio
async def test_driver_failure_becomes_ledger_unavailable() -> None:
    error = OperationalError("SELECT", {}, Exception("Login timeout expired"))
    repo = SqlSalesOrderRepository(_Factory(error=error))  # type: ignore[arg-type]

    with pytest.raises(LedgerUnavailableError, match="Login timeout expired"):
        await repo.order_lines("SA-1")

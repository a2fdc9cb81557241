# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Dependency wiring for the ``/sales`` order endpoints.

Tests replace :func:`get_sales_orders` through ``app.dependency_overrides``.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from salesledger_api.adapters.repositories.sales_order_repository import SqlSalesOrderRepository
from salesledger_api.application.use_cases.sales.sales_orders import (
    BuildPackingListUseCase,
    GetSalesOrderUseCase,
    ListSalesOrderLinesUseCase,
    ListSalesOrdersUseCase,
)
from salesledger_api.dependencies.analytics import get_session_factory
from salesledger_api.domain.interfaces.sales_orders import SalesOrderRepository


def get_sales_orders(
    session_factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)],
) -> SalesOrderRepository:
    return SqlSalesOrderRepository(session_factory)


OrdersDep = Annotated[SalesOrderRepository, Depends(get_sales_orders)]


def get_list_sales_orders_uc(orders: OrdersDep) -> ListSalesOrdersUseCase:
    return ListSalesOrdersUseCase(orders)


def get_sales_order_uc(orders: OrdersDep) -> GetSalesOrderUseCase:
    return GetSalesOrderUseCase(orders)


def get_sales_order_lines_uc(orders: OrdersDep) -> ListSalesOrderLinesUseCase:
    return ListSalesOrderLinesUseCase(orders)


def get_packing_list_uc(orders: OrdersDep) -> BuildPackingListUseCase:
    return BuildPackingListUseCase(orders)

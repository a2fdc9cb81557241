# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Dependency wiring for sales analytics (repository, gateway, use cases).

Overview:
    FastAPI dependency providers for the ``/analytics`` routers. Tests replace
    :func:`get_sales_ledger` and :func:`get_sales_reference` through
    ``app.dependency_overrides``; every use-case provider depends on them, so
    one override reaches all endpoints.

Layer:
    dependencies
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Sequence
from functools import lru_cache
from typing import Annotated, Any

import httpx
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from salesledger_api.adapters.gateways.sales_reference_gateway import HttpSalesReferenceGateway
from salesledger_api.adapters.repositories.sales_ledger_repository import (
    SqlSalesLedgerRepository,
)
from salesledger_api.application.use_cases.analytics.compare_periods import (
    CompareCustomerPeriodsUseCase,
    CompareProductPeriodsUseCase,
)
from salesledger_api.application.use_cases.analytics.forecast import (
    GetProductForecastUseCase,
    PredictProductForecastUseCase,
)
from salesledger_api.application.use_cases.analytics.list_sales import (
    ListCustomerPurchasesUseCase,
    ListProductSalesUseCase,
)
from salesledger_api.application.use_cases.analytics.reconcile_sales import (
    ReconcileSalesUseCase,
)
from salesledger_api.application.use_cases.analytics.sales_summary import GetSalesSummaryUseCase
from salesledger_api.domain.entities.reconciliation import CandidateDescriptor
from salesledger_api.domain.interfaces.sales_ledger import SalesLedgerRepository
from salesledger_api.domain.interfaces.sales_reference import SalesReferenceGateway
from salesledger_api.infrastructure.external_apis.sales_report.client import SalesReportClient
from salesledger_api.infrastructure.external_apis.sales_report.settings import (
    SalesReportSettings,
)


def get_settings() -> Any:
    """Shim for tests to patch settings resolution in this module."""
    from salesledger_api.config.settings import get_settings as core_get_settings

    return core_get_settings()


@lru_cache(maxsize=1)
def get_sales_report_settings() -> SalesReportSettings:
    return SalesReportSettings()


# =============================================================================
# Infrastructure collaborators
# =============================================================================


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the ledger sessionmaker (initialized lazily outside the lifespan)."""
    import salesledger_api.infrastructure.database.session as ledger_db

    return ledger_db.ledger_sessions()


def get_sales_ledger(
    session_factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)],
) -> SalesLedgerRepository:
    return SqlSalesLedgerRepository(session_factory)


async def get_sales_reference(request: Request) -> AsyncGenerator[SalesReferenceGateway, None]:
    """Yield the sales-report reference gateway.

    Reuses the application's shared ``httpx.AsyncClient`` when the lifespan
    created one; otherwise the client owns a private connection pool that is
    closed after the request.
    """
    settings = get_sales_report_settings()
    shared: httpx.AsyncClient | None = getattr(request.app.state, "http_client", None)
    client = SalesReportClient(settings, http=shared)
    try:
        yield HttpSalesReferenceGateway(client, value_path=settings.value_path)
    finally:
        await client.aclose()


def get_reconciliation_candidates() -> Sequence[CandidateDescriptor]:
    """Candidate descriptors selected by ``RECONCILIATION_FIELDS``."""
    return get_settings().reconciliation_candidates()


def get_forecast_lookback_default() -> int:
    return int(get_settings().forecast_lookback_months)


LedgerDep = Annotated[SalesLedgerRepository, Depends(get_sales_ledger)]


# =============================================================================
# Use cases
# =============================================================================


def get_list_product_sales_uc(ledger: LedgerDep) -> ListProductSalesUseCase:
    return ListProductSalesUseCase(ledger)


def get_list_customer_purchases_uc(ledger: LedgerDep) -> ListCustomerPurchasesUseCase:
    return ListCustomerPurchasesUseCase(ledger)


def get_compare_product_periods_uc(ledger: LedgerDep) -> CompareProductPeriodsUseCase:
    return CompareProductPeriodsUseCase(ledger)


def get_compare_customer_periods_uc(ledger: LedgerDep) -> CompareCustomerPeriodsUseCase:
    return CompareCustomerPeriodsUseCase(ledger)


def get_sales_summary_uc(ledger: LedgerDep) -> GetSalesSummaryUseCase:
    return GetSalesSummaryUseCase(ledger)


def get_product_forecast_uc(ledger: LedgerDep) -> GetProductForecastUseCase:
    return GetProductForecastUseCase(ledger)


def get_predict_product_forecast_uc(ledger: LedgerDep) -> PredictProductForecastUseCase:
    return PredictProductForecastUseCase(ledger)


def get_reconcile_sales_uc(
    ledger: LedgerDep,
    reference: Annotated[SalesReferenceGateway, Depends(get_sales_reference)],
    candidates: Annotated[Sequence[CandidateDescriptor], Depends(get_reconciliation_candidates)],
) -> ReconcileSalesUseCase:
    """Build the reconciliation use case with the configured candidate set."""
    return ReconcileSalesUseCase(ledger, reference, candidates)

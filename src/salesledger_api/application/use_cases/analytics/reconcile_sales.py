# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""
Use Case: Reconcile ledger totals against an external reference

Purpose:
    Compute every configured candidate ledger total and the external
    reference figure concurrently, then rank the candidates by closeness.

Failure policy:
    * A ledger failure is fatal and propagates.
    * A reference failure is not: the reference value becomes ``None``, the
      error message is reported, and the candidates are returned unranked.

Layer: application/use_cases
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from decimal import Decimal

from salesledger_api.application.schemas.dto.analytics import (
    DateRangeDTO,
    ReconciliationDTO,
    ReferenceValueDTO,
)
from salesledger_api.domain.entities.reconciliation import CandidateDescriptor, CandidateTotal
from salesledger_api.domain.exceptions.sales_ledger import ExternalReferenceError
from salesledger_api.domain.interfaces.sales_ledger import SalesLedgerRepository
from salesledger_api.domain.interfaces.sales_reference import SalesReferenceGateway
from salesledger_api.domain.services.reconciliation_ranker import rank, unranked

logger = logging.getLogger(__name__)


class ReconcileSalesUseCase:
    """Find the ledger field closest to the external net-sales figure.

    Args:
        ledger: Sales ledger repository.
        reference: External reference gateway.
        candidates: Candidate descriptors to evaluate, in reporting order.
    """

    def __init__(
        self,
        ledger: SalesLedgerRepository,
        reference: SalesReferenceGateway,
        candidates: Sequence[CandidateDescriptor],
    ) -> None:
        self._ledger = ledger
        self._reference = reference
        self._candidates = tuple(candidates)

    async def execute(self, window: DateRangeDTO) -> ReconciliationDTO:
        """Run the reconciliation for an inclusive date range.

        Raises:
            LedgerUnavailableError: If any candidate query fails.
        """
        start, end = window.half_open()

        reference_task = asyncio.ensure_future(self._fetch_reference(window))
        try:
            values = await asyncio.gather(
                *(self._ledger.candidate_total(d, start, end) for d in self._candidates)
            )
        except BaseException:
            reference_task.cancel()
            raise
        reference = await reference_task

        totals = [
            CandidateTotal(field_name=d.name, value=v, source_description=d.description)
            for d, v in zip(self._candidates, values, strict=True)
        ]
        ranked = rank(totals, reference.value) if reference.value is not None else unranked(totals)

        return ReconciliationDTO(
            window=window,
            reference=reference,
            candidates=ranked,
            evaluated=len(ranked),
            excluded=len(totals) - len(ranked),
        )

    async def _fetch_reference(self, window: DateRangeDTO) -> ReferenceValueDTO:
        source = self._reference.source_name
        try:
            value: Decimal = await self._reference.net_sales_total(window.start, window.end)
        except ExternalReferenceError as exc:
            logger.warning(
                "reconciliation.reference_unavailable",
                extra={"extra": {"source": source, **exc.log_context()}},
            )
            return ReferenceValueDTO(value=None, source=source, error=exc.message)
        return ReferenceValueDTO(value=value, source=source)

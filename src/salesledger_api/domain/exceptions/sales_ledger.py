# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""
Sales Ledger Exceptions.

Summary:
    Errors raised by ledger and reference collaborators and by request
    validation. Each carries a stable ``code`` used in error envelopes.

Layer:
    domain/exceptions
"""
from __future__ import annotations

from salesledger_api.domain.exceptions.base import DomainError


class LedgerUnavailableError(DomainError):
    """Ledger connection or query failed; fatal to the request."""

    code = "LEDGER_UNAVAILABLE"


class ExternalReferenceError(DomainError):
    """External sales-report reference failed, timed out or returned an unusable body."""

    code = "EXTERNAL_REFERENCE_ERROR"


class InvalidQueryParameterError(DomainError):
    """A required query parameter is missing or malformed."""

    code = "VALIDATION_ERROR"


class SalesOrderNotFoundError(DomainError):
    """No ledger document carries the requested document number."""

    code = "NOT_FOUND"

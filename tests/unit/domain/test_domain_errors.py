from __future__ import annotations

from decimal import Decimal

import pytest

from salesledger_api.domain.entities.product_code import ProductCodeDecomposition
from salesledger_api.domain.entities.sales_order import SalesOrderHeader
from salesledger_api.domain.exceptions.sales_ledger import (
    ExternalReferenceError,
    InvalidQueryParameterError,
    LedgerUnavailableError,
    SalesOrderNotFoundError,
)


def test_error_codes_are_stable() -> None:
    assert LedgerUnavailableError.code == "LEDGER_UNAVAILABLE"
    assert ExternalReferenceError.code == "EXTERNAL_REFERENCE_ERROR"
    assert InvalidQueryParameterError.code == "VALIDATION_ERROR"
    assert SalesOrderNotFoundError.code == "NOT_FOUND"


def test_log_context_merges_details() -> None:
    exc = InvalidQueryParameterError("limit must be >= 1", details={"param": "limit"})
    assert exc.log_context() == {
        "error_code": "VALIDATION_ERROR",
        "error_message": "limit must be >= 1",
        "param": "limit",
    }


def test_empty_message_falls_back_to_code() -> None:
    exc = ExternalReferenceError()
    assert exc.message == "EXTERNAL_REFERENCE_ERROR"
    assert str(exc) == "EXTERNAL_REFERENCE_ERROR"


def test_entity_invariant_failures_name_the_entity() -> None:
    with pytest.raises(ValueError, match="ProductCodeDecomposition: multiplier"):
        ProductCodeDecomposition(base_code="A", multiplier=0, original_code="AX0")


def test_sales_order_header_requires_docno() -> None:
    with pytest.raises(ValueError, match="SalesOrderHeader: docno"):
        SalesOrderHeader(
            docno="", docdate=None, taxno="", arcode="AR1", arname="Acme", total_amount=Decimal("0")
        )

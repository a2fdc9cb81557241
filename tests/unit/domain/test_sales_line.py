from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from salesledger_api.domain.entities.sales_line import RawSalesLine


def test_quantity_must_be_decimal() -> None:
    with pytest.raises(TypeError):
        RawSalesLine(
            document_number="SA-1",
            product_code="A",
            product_name="A",
            quantity=1.5,  # type: ignore[arg-type]
            document_date=date(2024, 1, 1),
        )


def test_defaults() -> None:
    line = RawSalesLine("SA-1", "A", "Name", Decimal("2"), date(2024, 1, 1))
    assert line.is_cancelled is False
    assert line.net_amount == Decimal("0")
    assert line.customer_code == ""

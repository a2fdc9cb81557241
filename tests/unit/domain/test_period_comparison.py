from __future__ import annotations

from datetime import date
from decimal import Decimal

from salesledger_api.domain.entities.ledger_rows import DailyActivityRow
from salesledger_api.domain.services.period_comparison import (
    daily_comparison,
    growth_between,
    summarize_period,
)


def _row(day: int, amount: str, qty: str, party: str, month: int = 8) -> DailyActivityRow:
    return DailyActivityRow(
        activity_date=date(2024, month, day),
        amount=Decimal(amount),
        quantity=Decimal(qty),
        party_code=party,
    )


def test_summarize_period_totals_and_peak() -> None:
    rows = [
        _row(2, "100", "1", "C1"),
        _row(1, "50", "2", "C1"),
        _row(2, "30", "1", "C2"),
        _row(3, "130", "1", "C1"),
    ]
    metrics = summarize_period(rows)

    assert metrics.total_amount == Decimal("310")
    assert metrics.total_quantity == Decimal("5")
    assert metrics.order_count == 4
    assert metrics.avg_order_value == Decimal("77.5")
    assert [p.day.day for p in metrics.daily] == [1, 2, 3]
    assert metrics.daily[1].amount == Decimal("130")
    # first day reaching the maximum wins
    assert metrics.peak_date == date(2024, 8, 2)
    assert metrics.peak_amount == Decimal("130")


def test_custom_order_key_counts_distinct_parties() -> None:
    rows = [_row(1, "10", "1", "DOC-1"), _row(2, "10", "1", "DOC-1")]
    metrics = summarize_period(rows, order_key=lambda r: r.party_code)
    assert metrics.order_count == 1
    assert metrics.avg_order_value == Decimal("20")


def test_empty_period() -> None:
    metrics = summarize_period([])
    assert metrics.order_count == 0
    assert metrics.avg_order_value == Decimal("0")
    assert metrics.peak_date is None
    assert metrics.daily == ()


def test_growth_between_periods() -> None:
    current = summarize_period([_row(1, "150", "3", "A"), _row(2, "50", "1", "B")])
    previous = summarize_period([_row(1, "100", "4", "A")], )
    growth = growth_between(current, previous)
    assert growth.amount_growth == Decimal("100")
    assert growth.quantity_growth == Decimal("0")
    assert growth.order_growth == Decimal("100")
    assert growth.avg_value_growth == Decimal("0")


def test_growth_from_empty_previous_period() -> None:
    current = summarize_period([_row(1, "10", "1", "A")])
    empty = summarize_period([])
    growth = growth_between(current, empty)
    assert growth.amount_growth == Decimal("100")
    assert growth_between(empty, empty).amount_growth == Decimal("0")


def test_daily_comparison_matches_exact_dates() -> None:
    current = summarize_period([_row(1, "10", "1", "A"), _row(5, "20", "1", "A")])
    previous = summarize_period([_row(5, "7", "1", "A"), _row(6, "99", "1", "A")])
    points = daily_comparison(current, previous)
    assert [(p.day.day, p.current, p.previous) for p in points] == [
        (1, Decimal("10"), Decimal("0")),
        (5, Decimal("20"), Decimal("7")),
    ]

from __future__ import annotations

from datetime import date

import pytest

from salesledger_api.domain.entities.period import PeriodKey


def test_parse_and_label() -> None:
    key = PeriodKey.parse("2024-08")
    assert key == PeriodKey(2024, 8)
    assert key.label() == "2024-08"
    assert key.display_name() == "Aug 2024"


@pytest.mark.parametrize("raw", ["2024-13", "2024-00", "2024-8", "24-08", "august", ""])
def test_parse_rejects_bad_labels(raw: str) -> None:
    with pytest.raises(ValueError):
        PeriodKey.parse(raw)


def test_shift_crosses_year_boundaries() -> None:
    assert PeriodKey(2024, 1).shift(-1) == PeriodKey(2023, 12)
    assert PeriodKey(2024, 11).shift(3) == PeriodKey(2025, 2)
    assert PeriodKey(2024, 3).months_until(PeriodKey(2025, 3)) == 12


def test_month_bounds_and_ordering() -> None:
    key = PeriodKey.from_date(date(2024, 2, 14))
    assert key.first_day() == date(2024, 2, 1)
    assert key.last_day() == date(2024, 2, 29)
    assert sorted([PeriodKey(2024, 10), PeriodKey(2024, 2)]) == [
        PeriodKey(2024, 2),
        PeriodKey(2024, 10),
    ]

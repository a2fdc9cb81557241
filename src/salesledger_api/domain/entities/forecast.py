# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Forecast result entity.

Layer:
    domain/entities
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from salesledger_api.domain.entities.base import BaseEntity
from salesledger_api.domain.entities.period import PeriodKey


@dataclass(frozen=True, slots=True)
class ForecastResult(BaseEntity):
    """Trailing-average forecast for one base code.

    Attributes:
        base_code: Base product code.
        historical_monthly_totals: ``(period, quantity)`` pairs used for the
            average, oldest first. Never longer than the lookback window and
            never zero-padded.
        average_quantity: Mean of the selected totals, 2 decimal places.
        forecast_quantity: Next-period forecast; equal to the average.
    """

    base_code: str
    historical_monthly_totals: tuple[tuple[PeriodKey, Decimal], ...]
    average_quantity: Decimal
    forecast_quantity: Decimal

    def __post_init__(self) -> None:
        periods = [period for period, _ in self.historical_monthly_totals]
        self.require(periods == sorted(periods), "history must be in chronological order")

# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Trailing simple-moving-average forecast.

The forecast for the next period is the mean of the most recent
``lookback_months`` monthly totals, rounded half-up to 2 decimals. There is
no trend or seasonality adjustment; downstream consumers rely on this
exact, auditable rule.

Layer:
    domain/services
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from salesledger_api.domain.entities.forecast import ForecastResult
from salesledger_api.domain.entities.period import PeriodKey
from salesledger_api.domain.services.numeric import ZERO, round_half_up


def forecast(
    monthly_totals: Sequence[tuple[PeriodKey, Decimal]],
    lookback_months: int,
    *,
    base_code: str = "",
) -> ForecastResult:
    """Compute the trailing-average forecast for one base code.

    Args:
        monthly_totals: ``(period, quantity)`` pairs for one base code.
        lookback_months: Maximum number of trailing months to average.
        base_code: Base code the totals belong to.

    Returns:
        The forecast. With no history the average and forecast are ``0``.

    Raises:
        ValueError: If ``lookback_months`` is less than 1.
    """
    if lookback_months < 1:
        raise ValueError("lookback_months must be >= 1")

    history = sorted(monthly_totals, key=lambda item: item[0])[-lookback_months:]
    if history:
        mean = sum((qty for _, qty in history), ZERO) / len(history)
        average = round_half_up(mean)
    else:
        average = round_half_up(ZERO)

    return ForecastResult(
        base_code=base_code,
        historical_monthly_totals=tuple(history),
        average_quantity=average,
        forecast_quantity=average,
    )

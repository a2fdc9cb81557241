# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Routers mounted by :func:`salesledger_api.main.create_app`.

``analytics`` and ``sales`` are mounted under ``API_PREFIX``; ``health`` and
``metrics`` stay at the root.
"""

from __future__ import annotations

from .analytics_router import router as analytics
from .health_router import router as health
from .metrics_router import router as metrics
from .sales_router import router as sales

__all__ = ["analytics", "health", "metrics", "sales"]

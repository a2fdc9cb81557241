# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Settings access for the sales ledger service.

Usage:
    from salesledger_api.config import get_settings
"""

from __future__ import annotations

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]

# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Sales-ledger reconciliation and variant-aware forecasting service."""

__version__ = "0.1.0"

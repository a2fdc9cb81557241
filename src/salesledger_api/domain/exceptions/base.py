# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Root of the sales ledger exception hierarchy.

Every error that crosses a use-case boundary derives from
:class:`DomainError`. Routers read ``code`` and ``message`` to build the
``{success: false, error, code}`` envelope, and ``details`` goes to logs.

Layer:
    domain/exceptions
"""
from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Error with a stable machine-readable ``code``."""

    code: str = "DOMAIN_ERROR"

    def __init__(self, message: str = "", *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message or self.code)
        self.message = message or self.code
        self.details: dict[str, Any] = dict(details) if details else {}

    def log_context(self) -> dict[str, Any]:
        """Flat mapping for ``extra={"extra": ...}`` log calls."""
        return {"error_code": self.code, "error_message": self.message, **self.details}

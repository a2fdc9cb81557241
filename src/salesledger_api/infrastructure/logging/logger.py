# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""JSON logging for the sales ledger service.

Every line is one JSON object with the keys ``ts``, ``level``, ``logger`` and
``message``. The formatter then adds:

* ``request_id``, taken from the record, the per-request context set by
  :class:`~salesledger_api.infrastructure.middleware.request_id.RequestIdMiddleware`,
  or the ``REQUEST_ID`` environment variable, in that order;
* ``exc_type`` / ``exc_message`` when the record carries an exception;
* the structured fields passed as ``extra={"extra": {...}}``. These never
  replace the four stable keys.

Call :func:`configure_root_logging` once at import of the app module and use
``get_json_logger(__name__)`` everywhere outside the domain layer.
"""

from __future__ import annotations

import json
import logging
import os
from contextvars import ContextVar, Token
from datetime import UTC, datetime
from typing import Any, Final

__all__ = [
    "configure_root_logging",
    "get_json_logger",
    "get_request_id",
    "reset_request_context",
    "set_request_context",
]

_STABLE_KEYS: Final[frozenset[str]] = frozenset({"ts", "level", "logger", "message"})
_DEFAULT_LEVEL: Final[str] = "INFO"

_request_id: ContextVar[str | None] = ContextVar("salesledger_request_id", default=None)


def set_request_context(*, request_id: str | None = None) -> Token[str | None] | None:
    """Bind ``request_id`` to the current context and return the reset token."""
    if request_id is None:
        return None
    return _request_id.set(request_id)


def reset_request_context(token: Token[str | None] | None) -> None:
    if token is not None:
        _request_id.reset(token)


def get_request_id() -> str | None:
    return _request_id.get()


def _exception_fields(record: logging.LogRecord) -> dict[str, str]:
    if not record.exc_info:
        return {}
    exc_type, exc_value, _ = record.exc_info
    fields: dict[str, str] = {}
    if exc_type is not None:
        fields["exc_type"] = exc_type.__name__
    if exc_value is not None:
        fields["exc_message"] = str(exc_value)
    return fields


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        rid = getattr(record, "request_id", None) or get_request_id() or os.getenv("REQUEST_ID")
        if rid:
            payload["request_id"] = rid
        payload.update(_exception_fields(record))

        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update({k: v for k, v in extra.items() if k not in _STABLE_KEYS})
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=str)


def _resolve_level(level: str | int | None) -> str | int:
    if level is None:
        level = os.getenv("LOG_LEVEL") or _DEFAULT_LEVEL
    return level.upper() if isinstance(level, str) else level


def configure_root_logging(level: str | int | None = None) -> None:
    """Install the JSON handler on the root logger.

    Repeated calls only adjust the level, so reloads never stack handlers.

    Args:
        level: Level name or number. Defaults to ``LOG_LEVEL`` or ``INFO``.
    """
    root = logging.getLogger()
    root.setLevel(_resolve_level(level))
    if root.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(_JsonFormatter())
    root.addHandler(handler)


def get_json_logger(name: str) -> logging.Logger:
    """Return the named logger; records propagate to the JSON root handler."""
    logger = logging.getLogger(name)
    logger.propagate = True
    return logger

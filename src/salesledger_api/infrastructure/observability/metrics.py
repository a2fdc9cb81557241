# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Prometheus metrics for ledger queries, the reference service and HTTP.

Exports
-------
Collectors (names are part of the public contract and must remain stable):

* ``salesledger_ledger_query_latency_seconds`` (Histogram; query, outcome)
* ``salesledger_reference_latency_seconds`` (Histogram; source, outcome)
* ``salesledger_reference_errors_total`` (Counter; source, reason)
* ``http_server_request_duration_seconds`` (Histogram; method, route, status)

Helpers:

* :func:`observe_ledger_query` and :func:`observe_reference_request`, context
  managers that time one call and record its outcome.

Design
------
Collectors are looked up on the *current* default registry
(:data:`prometheus_client.REGISTRY`) before being created, so module
re-imports and tests that swap the registry never raise duplicate
registration errors.
"""

from __future__ import annotations

from collections.abc import Generator, Sequence
from contextlib import contextmanager, suppress
from dataclasses import dataclass, field
from time import perf_counter
from typing import Final

import prometheus_client as prom
from prometheus_client import Counter, Histogram
from prometheus_client.registry import CollectorRegistry

_BUCKETS: Final[tuple[float, ...]] = (
    0.005,
    0.010,
    0.025,
    0.050,
    0.100,
    0.250,
    0.500,
    1.000,
    2.500,
    5.000,
    10.000,
    30.000,
)


def _get_or_create_histogram(name: str, doc: str, labelnames: Sequence[str] = ()) -> Histogram:
    """Return a histogram bound to the current default registry.

    Args:
        name: Metric name.
        doc: Human-readable metric description.
        labelnames: Label names.

    Returns:
        A :class:`Histogram` bound to :data:`prom.REGISTRY`.
    """
    registry: CollectorRegistry = prom.REGISTRY
    mapping = getattr(registry, "_names_to_collectors", {})  # internal but stable
    existing = mapping.get(name)
    if isinstance(existing, Histogram):
        return existing
    try:
        return Histogram(name, doc, tuple(labelnames), buckets=_BUCKETS, registry=registry)
    except ValueError as exc:
        if "Duplicated timeseries" in str(exc):
            again = getattr(registry, "_names_to_collectors", {}).get(name)
            if isinstance(again, Histogram):
                return again
        raise


def _get_or_create_counter(name: str, doc: str, labelnames: Sequence[str] = ()) -> Counter:
    """Counter counterpart of :func:`_get_or_create_histogram`."""
    registry: CollectorRegistry = prom.REGISTRY
    mapping = getattr(registry, "_names_to_collectors", {})
    # Counters register under both ``name`` and ``name_total``.
    existing = mapping.get(name) or mapping.get(name.removesuffix("_total"))
    if isinstance(existing, Counter):
        return existing
    try:
        return Counter(name, doc, tuple(labelnames), registry=registry)
    except ValueError as exc:
        if "Duplicated timeseries" in str(exc):
            mapping = getattr(registry, "_names_to_collectors", {})
            again = mapping.get(name) or mapping.get(name.removesuffix("_total"))
            if isinstance(again, Counter):
                return again
        raise


# ---------------------------------------------------------------------------
# Accessors
# ---------------------------------------------------------------------------


def get_ledger_query_latency_seconds() -> Histogram:
    return _get_or_create_histogram(
        "salesledger_ledger_query_latency_seconds",
        "Latency of sales ledger queries (seconds).",
        ("query", "outcome"),
    )


def get_reference_latency_seconds() -> Histogram:
    return _get_or_create_histogram(
        "salesledger_reference_latency_seconds",
        "Latency of external sales reference calls (seconds).",
        ("source", "outcome"),
    )


def get_reference_errors_total() -> Counter:
    return _get_or_create_counter(
        "salesledger_reference_errors_total",
        "Errors encountered when calling the external sales reference.",
        ("source", "reason"),
    )


def get_http_server_request_duration_seconds() -> Histogram:
    return _get_or_create_histogram(
        "http_server_request_duration_seconds",
        "Server-side HTTP request duration (seconds).",
        ("method", "route", "status"),
    )


# ---------------------------------------------------------------------------
# Observation context managers
# ---------------------------------------------------------------------------


@dataclass
class Observation:
    """State captured while observing one outbound call.

    Attributes:
        name: Query name or reference source (for labelling).
        start: Monotonic start time in seconds.
        outcome: ``"success"`` or ``"error"``.
        error_reason: Short, machine-readable error reason if any.
    """

    name: str
    start: float = field(default_factory=perf_counter)
    outcome: str = "success"
    error_reason: str | None = None

    def mark_error(self, reason: str) -> None:
        self.outcome = "error"
        self.error_reason = reason


@contextmanager
def observe_ledger_query(query: str) -> Generator[Observation, None, None]:
    """Time one ledger query; exceptions mark the outcome as ``error``."""
    obs = Observation(name=query)
    try:
        yield obs
    except Exception:
        obs.mark_error("exception")
        raise
    finally:
        with suppress(Exception):
            get_ledger_query_latency_seconds().labels(
                query=obs.name, outcome=obs.outcome
            ).observe(perf_counter() - obs.start)


@contextmanager
def observe_reference_request(source: str) -> Generator[Observation, None, None]:
    """Time one reference call and count failures by reason."""
    obs = Observation(name=source)
    try:
        yield obs
    except Exception:
        if obs.error_reason is None:
            obs.mark_error("exception")
        raise
    finally:
        with suppress(Exception):
            get_reference_latency_seconds().labels(
                source=obs.name, outcome=obs.outcome
            ).observe(perf_counter() - obs.start)
            if obs.error_reason is not None:
                get_reference_errors_total().labels(
                    source=obs.name, reason=obs.error_reason
                ).inc()

# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Registry of candidate ledger totals for reconciliation.

Purpose:
    The set of ledger figures worth comparing against an external reference
    is a discovered fact about the data source, so it is declared here as
    data rather than as individual queries. Deployments select a subset by
    name through configuration.

Layer:
    domain/services
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Final

from salesledger_api.domain.entities.reconciliation import CandidateDescriptor, CandidateLevel

_H = CandidateLevel.HEADER
_L = CandidateLevel.LINE

DEFAULT_CANDIDATES: Final[tuple[CandidateDescriptor, ...]] = (
    CandidateDescriptor(
        name="header_total_amount",
        description="CSSALE.TOTALAMOUNT, active documents",
        level=_H,
        column="TOTALAMOUNT",
    ),
    CandidateDescriptor(
        name="header_net_amount",
        description="CSSALE.NETAMOUNT, active documents",
        level=_H,
        column="NETAMOUNT",
    ),
    CandidateDescriptor(
        name="header_before_vat",
        description="CSSALE.BEFOREVAT, active documents",
        level=_H,
        column="BEFOREVAT",
    ),
    CandidateDescriptor(
        name="header_total_signed",
        description="CSSALE.TOTALAMOUNT, credit notes subtracted",
        level=_H,
        column="TOTALAMOUNT",
        signed=True,
    ),
    CandidateDescriptor(
        name="header_total_sales_only",
        description="CSSALE.TOTALAMOUNT, SA documents only",
        level=_H,
        column="TOTALAMOUNT",
        prefixes=("SA",),
    ),
    CandidateDescriptor(
        name="header_total_incl_cancelled",
        description="CSSALE.TOTALAMOUNT, including cancelled documents",
        level=_H,
        column="TOTALAMOUNT",
        include_cancelled=True,
    ),
    CandidateDescriptor(
        name="line_net_amount",
        description="CSSALESUB.NETAMOUNT, active documents, set components excluded",
        level=_L,
        column="NETAMOUNT",
    ),
    CandidateDescriptor(
        name="line_net_signed",
        description="CSSALESUB.NETAMOUNT, credit notes subtracted",
        level=_L,
        column="NETAMOUNT",
        signed=True,
    ),
    CandidateDescriptor(
        name="line_net_incl_sets",
        description="CSSALESUB.NETAMOUNT, set components included",
        level=_L,
        column="NETAMOUNT",
        include_set_components=True,
    ),
    CandidateDescriptor(
        name="line_amount",
        description="CSSALESUB.AMOUNT, active documents, set components excluded",
        level=_L,
        column="AMOUNT",
    ),
    CandidateDescriptor(
        name="line_discount",
        description="CSSALESUB.DISCAMOUNT, active documents",
        level=_L,
        column="DISCAMOUNT",
    ),
)


def select_candidates(
    names: Iterable[str] | None = None,
    *,
    registry: tuple[CandidateDescriptor, ...] = DEFAULT_CANDIDATES,
) -> tuple[CandidateDescriptor, ...]:
    """Return the descriptors named in ``names``, in registry order.

    Args:
        names: Candidate names to keep. ``None`` or empty selects everything.
        registry: Descriptor registry to select from.

    Raises:
        ValueError: If a requested name is not registered.
    """
    wanted = [n for n in (names or ()) if n]
    if not wanted:
        return registry

    known = {d.name for d in registry}
    unknown = sorted(set(wanted) - known)
    if unknown:
        raise ValueError(f"Unknown reconciliation candidates: {', '.join(unknown)}")
    keep = set(wanted)
    return tuple(d for d in registry if d.name in keep)

from __future__ import annotations

import pytest

from salesledger_api.infrastructure.middleware.request_id import resolve_request_id


@pytest.mark.parametrize("incoming", ["req-1", "a.b:c@d_e", " padded "])
def test_safe_ids_are_reused(incoming: str) -> None:
    assert resolve_request_id(incoming) == incoming.strip()


@pytest.mark.parametrize("incoming", [None, "", "has space", "x" * 129, "semi;colon"])
def test_unsafe_ids_are_replaced(incoming: str | None) -> None:
    rid = resolve_request_id(incoming)
    assert rid != incoming
    assert len(rid) == 32

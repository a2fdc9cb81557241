# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Shared base and numeric field types for analytics HTTP schemas.

Python attributes are snake_case and the wire format is camelCase. The
numeric aliases document how presenters prepare each value:

* ``Money``: half-up rounded to two decimals.
* ``Percent``: growth or difference percentage, rounded like money.
* ``Quantity``: unrounded unit count.

Application DTOs never import from here.

Layer:
    adapters/schemas/http
"""
from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Money = Annotated[float, Field(description="Amount rounded half-up to 2 decimals.")]
Percent = Annotated[float, Field(description="Percentage rounded half-up to 2 decimals.")]
Quantity = Annotated[float, Field(description="Unit quantity.")]


class BaseHTTPSchema(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
        ser_json_inf_nan="null",
    )

    def model_dump_http(self, **kwargs: Any) -> dict[str, Any]:
        """JSON-mode dump using the wire aliases."""
        return self.model_dump(mode="json", by_alias=True, **kwargs)

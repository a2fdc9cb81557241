# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Base for the DTOs passed between routers, use cases and presenters.

DTOs are immutable and reject unknown fields. Amounts stay ``Decimal`` here;
nothing in this layer rounds or knows about camelCase.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BaseDTO(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

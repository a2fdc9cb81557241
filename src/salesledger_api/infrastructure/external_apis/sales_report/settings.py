# Copyright (c) Salesledger.
# SPDX-License-Identifier: MIT
"""Pydantic settings for the external sales-report client."""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class SalesReportSettings(BaseSettings):
    """Configuration for the external sales-report reference service.

    Environment variables (with ``model_config.env_prefix``):

    * ``SALES_REPORT_BASE_URL``
    * ``SALES_REPORT_PATH``
    * ``SALES_REPORT_VALUE_PATH`` (dotted path into the JSON body)
    * ``SALES_REPORT_API_KEY`` (optional bearer token)
    * ``SALES_REPORT_TIMEOUT_S``
    """

    base_url: str = Field(
        "http://localhost:3001/api",
        description="Base URL of the sales-report service.",
    )
    path: str = Field(
        "/analytics/sales-summary",
        description="Path of the summary endpoint, relative to base_url.",
    )
    value_path: str = Field(
        "data.net.amount",
        description="Dotted path to the net-sales figure in the JSON response.",
    )
    api_key: SecretStr | None = Field(
        None,
        description="Optional bearer token sent in the Authorization header.",
    )
    timeout_s: float = Field(
        10.0,
        gt=0,
        description="Per-request timeout in seconds.",
    )

    model_config = SettingsConfigDict(
        env_prefix="SALES_REPORT_",
        env_file=".env",
        extra="ignore",
    )

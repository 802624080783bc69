from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class TokenSnapshot(BaseModel):
    """Aggregate token metadata resolved from the token-info endpoint."""

    total_supply_raw: Optional[str] = None
    decimals: int = Field(18, ge=0)
    holders_count: Optional[int] = None


class TransferRecord(BaseModel):
    """One recent transfer, value still in the token's smallest unit."""

    hash: str
    raw_value: str


class DashboardView(BaseModel):
    """Pre-formatted strings handed to the HTML template."""

    supply_display: str
    holders_display: str
    market_cap_display: str
    transfers_html: str

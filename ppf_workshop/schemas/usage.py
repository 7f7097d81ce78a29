"""Film usage ledger schema module."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from ppf_workshop.schemas.common import CamelModel, RequestModel


class UsageCreate(RequestModel):
    panel_name: str = Field(min_length=1, max_length=120)
    roll_id: str = Field(min_length=1, max_length=36)
    length_used_mm: int = Field(gt=0)
    notes: str | None = None
    image_url: str | None = None


class UsageResponse(CamelModel):
    id: str
    job_id: str
    panel_name: str
    roll_id: str
    length_used_mm: int
    notes: str | None = None
    image_url: str | None = None
    created_at: datetime

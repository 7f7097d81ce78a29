"""User schema module."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from ppf_workshop.models.enums import UserRole
from ppf_workshop.schemas.common import CamelModel, RequestModel


class UserCreate(RequestModel):
    username: str = Field(min_length=2, max_length=120)
    name: str = Field(min_length=1, max_length=255)
    role: UserRole


class UserResponse(CamelModel):
    id: str
    username: str
    name: str
    role: UserRole
    created_at: datetime

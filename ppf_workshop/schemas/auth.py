"""Auth schema module."""

from __future__ import annotations

from ppf_workshop.schemas.common import CamelModel


class IdentityResponse(CamelModel):
    id: str
    email: str
    name: str
    role: str
    username: str

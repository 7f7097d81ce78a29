"""Common schema module."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Wire models use camelCase keys and read straight from ORM rows."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class RequestModel(CamelModel):
    """Request bodies reject keys they do not declare."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        str_strip_whitespace=True,
    )

    def changes(self) -> dict[str, Any]:
        """Fields the client actually sent, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)


class ErrorBody(BaseModel):
    message: str
    kind: str
    errors: list[dict[str, Any]] | None = None
    stack: str | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
    service: str
    version: str
    database: str


class MessageResponse(BaseModel):
    message: str

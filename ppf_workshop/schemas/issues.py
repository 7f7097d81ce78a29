"""Job issue schema module."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, model_validator

from ppf_workshop.models.enums import IssueSeverity, IssueStatus, IssueType
from ppf_workshop.schemas.common import CamelModel, RequestModel


class IssueCreate(RequestModel):
    stage_id: int = Field(ge=1, le=11)
    issue_type: IssueType
    description: str = Field(min_length=1, max_length=4000)
    location: str | None = Field(default=None, max_length=255)
    severity: IssueSeverity = IssueSeverity.MEDIUM
    media_urls: list[str] = Field(default_factory=list)


class IssueUpdate(RequestModel):
    issue_type: IssueType | None = None
    description: str | None = Field(default=None, min_length=1, max_length=4000)
    location: str | None = Field(default=None, max_length=255)
    severity: IssueSeverity | None = None
    status: IssueStatus | None = None
    resolved_by: str | None = Field(default=None, max_length=255)
    resolution_notes: str | None = None
    media_urls: list[str] | None = None

    @model_validator(mode="after")
    def _required_fields_not_null(self) -> "IssueUpdate":
        for name in ("issue_type", "description", "severity", "status", "media_urls"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class IssueResponse(CamelModel):
    id: str
    job_id: str
    stage_id: int
    issue_type: IssueType
    description: str
    location: str | None = None
    severity: IssueSeverity
    status: IssueStatus
    reported_by: str
    resolved_by: str | None = None
    resolved_at: datetime | None = None
    resolution_notes: str | None = None
    media_urls: list[str]
    created_at: datetime

"""Job issue model module."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ppf_workshop.models.base import Base, CreatedAtMixin, IdMixin, enum_column
from ppf_workshop.models.enums import IssueSeverity, IssueStatus, IssueType


class JobIssue(Base, IdMixin, CreatedAtMixin):
    __tablename__ = "job_issues"
    __table_args__ = (
        Index("idx_job_issues_job", "job_id"),
        Index("idx_job_issues_job_status", "job_id", "status"),
    )

    job_id: Mapped[str] = mapped_column(ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)
    stage_id: Mapped[int] = mapped_column(Integer, nullable=False)
    issue_type: Mapped[IssueType] = mapped_column(enum_column(IssueType), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str | None] = mapped_column(String(255))
    severity: Mapped[IssueSeverity] = mapped_column(
        enum_column(IssueSeverity), default=IssueSeverity.MEDIUM, nullable=False
    )
    status: Mapped[IssueStatus] = mapped_column(enum_column(IssueStatus), default=IssueStatus.OPEN, nullable=False)
    reported_by: Mapped[str] = mapped_column(String(255), nullable=False)
    resolved_by: Mapped[str | None] = mapped_column(String(255))
    resolved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    resolution_notes: Mapped[str | None] = mapped_column(Text)
    media_urls: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)

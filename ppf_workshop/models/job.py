"""Job model module."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ppf_workshop.models.base import Base, CreatedAtMixin, IdMixin, enum_column
from ppf_workshop.models.enums import JobPriority, JobStatus


class Job(Base, IdMixin, CreatedAtMixin):
    __tablename__ = "jobs"
    __table_args__ = (
        Index("idx_jobs_status", "status"),
        Index("idx_jobs_created_at", "created_at"),
    )

    job_no: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_phone: Mapped[str | None] = mapped_column(String(64))
    vehicle_brand: Mapped[str] = mapped_column(String(120), nullable=False)
    vehicle_model: Mapped[str] = mapped_column(String(120), nullable=False)
    vehicle_year: Mapped[str | None] = mapped_column(String(16))
    vehicle_color: Mapped[str | None] = mapped_column(String(64))
    vehicle_reg_no: Mapped[str] = mapped_column(String(32), nullable=False)
    vehicle_vin: Mapped[str | None] = mapped_column(String(64))
    package: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[JobStatus] = mapped_column(enum_column(JobStatus), default=JobStatus.ACTIVE, nullable=False)
    promised_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    current_stage: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    # Whole stage list is read and written as one value together with current_stage.
    stages: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False)
    priority: Mapped[JobPriority] = mapped_column(enum_column(JobPriority), default=JobPriority.NORMAL, nullable=False)
    active_issue: Mapped[dict[str, Any] | None] = mapped_column(JSON)
    assigned_to: Mapped[str | None] = mapped_column(String(36))
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

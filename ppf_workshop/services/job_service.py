"""Job service: CRUD plus the stage-pipeline operations."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from ppf_workshop.core.exceptions import NotFoundError, ValidationError, WorkshopException
from ppf_workshop.models import Job, JobIssue, JobPpfUsage, JobStatus, ServicePackage
from ppf_workshop.schemas.jobs import JobCreate
from ppf_workshop.services.base_service import BaseService
from ppf_workshop.utils.ids import next_job_no
from ppf_workshop.workflow import engine
from ppf_workshop.workflow.stages import StageComment, build_initial_stages, dump_stages
from ppf_workshop.workflow.templates import get_template

logger = logging.getLogger(__name__)

# Fields a client may change directly; the stage list and current stage only move through the engine.
EDITABLE_JOB_FIELDS = frozenset(
    {
        "customer_name",
        "customer_phone",
        "vehicle_brand",
        "vehicle_model",
        "vehicle_year",
        "vehicle_color",
        "vehicle_reg_no",
        "vehicle_vin",
        "package",
        "promised_date",
        "priority",
        "assigned_to",
    }
)


class JobService(BaseService):
    """Service for job records and their eleven-stage pipeline."""

    def list_jobs(self, status: JobStatus | None = None) -> list[Job]:
        query = self.db.query(Job)
        if status is not None:
            query = query.filter(Job.status == status)
        return query.order_by(Job.created_at.desc(), Job.job_no.desc()).all()

    def summarize(self, status: JobStatus | None = None) -> list[dict[str, Any]]:
        """Light projection for board views (no stage list)."""
        rows = []
        for job in self.list_jobs(status=status):
            template = get_template(job.current_stage)
            rows.append(
                {
                    "id": job.id,
                    "job_no": job.job_no,
                    "customer_name": job.customer_name,
                    "vehicle_brand": job.vehicle_brand,
                    "vehicle_model": job.vehicle_model,
                    "vehicle_reg_no": job.vehicle_reg_no,
                    "package": job.package,
                    "status": job.status,
                    "current_stage": job.current_stage,
                    "current_stage_name": template.name if template else "",
                    "priority": job.priority,
                    "promised_date": job.promised_date,
                    "assigned_to": job.assigned_to,
                    "active_issue": job.active_issue,
                    "created_at": job.created_at,
                }
            )
        return rows

    def get_job(self, job_id: str) -> Job:
        job = self.db.query(Job).filter(Job.id == job_id).first()
        if job is None:
            raise NotFoundError(f"Job not found: {job_id}", job_id=job_id)
        return job

    def lock_job(self, job_id: str) -> Job:
        """Load the job row with a write lock, discarding any cached state."""
        job = (
            self.db.query(Job)
            .filter(Job.id == job_id)
            .populate_existing()
            .with_for_update()
            .first()
        )
        if job is None:
            raise NotFoundError(f"Job not found: {job_id}", job_id=job_id)
        return job

    def _require_package(self, name: str) -> None:
        exists = self.db.query(ServicePackage.id).filter(ServicePackage.name == name).first()
        if exists is None:
            raise ValidationError(
                f"Unknown service package: {name}",
                errors=[{"field": "package", "message": "must name an existing service package"}],
            )

    def _next_job_no(self, year: int) -> str:
        existing = [
            job_no for (job_no,) in self.db.query(Job.job_no).filter(Job.job_no.like(f"JOB-{year}-%")).all()
        ]
        return next_job_no(existing, year)

    def create_job(self, payload: JobCreate, now: datetime | None = None) -> Job:
        created_at = now or datetime.now(timezone.utc)
        self._require_package(payload.package)

        job = Job(
            job_no=self._next_job_no(created_at.year),
            status=JobStatus.ACTIVE,
            current_stage=1,
            stages=dump_stages(build_initial_stages(started_at=created_at.isoformat())),
            created_at=created_at,
            **payload.model_dump(),
        )
        self.db.add(job)
        self.commit()
        self.db.refresh(job)
        logger.info("job.created", extra={"event": "job.created", "job_id": job.id, "job_no": job.job_no})
        return job

    def update_job(self, job_id: str, changes: dict[str, Any]) -> Job:
        updates = dict(changes)
        unsupported = set(updates) - EDITABLE_JOB_FIELDS - {"status"}
        if unsupported:
            raise ValidationError(
                "Unsupported job field(s).",
                errors=[{"field": name, "message": "field is not editable"} for name in sorted(unsupported)],
            )

        job = self.lock_job(job_id)
        try:
            if "package" in updates:
                self._require_package(updates["package"])
            if "status" in updates:
                engine.change_status(job, updates.pop("status"))
            for name, value in updates.items():
                setattr(job, name, value)
        except WorkshopException:
            self.rollback()
            raise
        self.commit()
        self.db.refresh(job)
        logger.info("job.updated", extra={"event": "job.updated", "job_id": job.id})
        return job

    def delete_job(self, job_id: str) -> None:
        """Delete a job with its issues and usage rows; roll lengths are not restored."""
        job = self.get_job(job_id)
        self.db.query(JobIssue).filter(JobIssue.job_id == job.id).delete(synchronize_session=False)
        self.db.query(JobPpfUsage).filter(JobPpfUsage.job_id == job.id).delete(synchronize_session=False)
        self.db.delete(job)
        self.commit()
        logger.info("job.deleted", extra={"event": "job.deleted", "job_id": job_id})

    def _apply_stage_operation(self, job_id: str, operation: Callable[[Job], Any], event: str) -> tuple[Job, Any]:
        job = self.lock_job(job_id)
        try:
            result = operation(job)
        except WorkshopException:
            self.rollback()
            raise
        self.commit()
        self.db.refresh(job)
        logger.info(
            event,
            extra={"event": event, "job_id": job.id, "job_no": job.job_no, "stage_id": job.current_stage},
        )
        return job, result

    def advance(self, job_id: str) -> Job:
        job, _ = self._apply_stage_operation(job_id, engine.advance, "job.stage.advanced")
        return job

    def regress(self, job_id: str) -> Job:
        job, _ = self._apply_stage_operation(job_id, engine.regress, "job.stage.regressed")
        return job

    def deliver(self, job_id: str) -> Job:
        job, _ = self._apply_stage_operation(job_id, engine.deliver, "job.delivered")
        return job

    def update_stage(self, job_id: str, stage_id: int, changes: dict[str, Any]) -> Job:
        job, _ = self._apply_stage_operation(
            job_id,
            lambda locked: engine.update_stage_fields(locked, stage_id, changes),
            "job.stage.updated",
        )
        return job

    def add_stage_comment(self, job_id: str, stage_id: int, text: str, author: str) -> StageComment:
        _, comment = self._apply_stage_operation(
            job_id,
            lambda locked: engine.add_stage_comment(locked, stage_id, text, author),
            "job.stage.commented",
        )
        return comment

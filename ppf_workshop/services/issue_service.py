"""Issue tracker service for defects found on a job."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import Session

from ppf_workshop.core.exceptions import NotFoundError, WorkshopException
from ppf_workshop.models import IssueStatus, JobIssue
from ppf_workshop.schemas.issues import IssueCreate
from ppf_workshop.services.base_service import BaseService
from ppf_workshop.services.job_service import JobService
from ppf_workshop.utils.ids import new_id
from ppf_workshop.workflow import engine

logger = logging.getLogger(__name__)


class IssueService(BaseService):
    """Create, list, update and delete job issues.

    An issue raised on the stage a job is currently in puts the job on hold;
    resolving or deleting that issue releases it again. Both rows change in
    one transaction.
    """

    def __init__(self, db: Session) -> None:
        super().__init__(db)
        self.jobs = JobService(db)

    def list_issues(self, job_id: str) -> list[JobIssue]:
        self.jobs.get_job(job_id)
        return (
            self.db.query(JobIssue)
            .filter(JobIssue.job_id == job_id)
            .order_by(JobIssue.created_at.desc())
            .all()
        )

    def get_issue(self, issue_id: str) -> JobIssue:
        issue = self.db.query(JobIssue).filter(JobIssue.id == issue_id).first()
        if issue is None:
            raise NotFoundError(f"Issue not found: {issue_id}", issue_id=issue_id)
        return issue

    def report_issue(self, job_id: str, payload: IssueCreate, reported_by: str) -> JobIssue:
        job = self.jobs.lock_job(job_id)
        reported_at = datetime.now(timezone.utc)
        issue = JobIssue(
            id=new_id(),
            job_id=job.id,
            reported_by=reported_by,
            status=IssueStatus.OPEN,
            created_at=reported_at,
            **payload.model_dump(),
        )
        held = engine.hold_for_issue(
            job,
            {
                "id": issue.id,
                "stageId": issue.stage_id,
                "description": issue.description,
                "reportedBy": reported_by,
                "reportedAt": reported_at.isoformat(),
            },
        )
        self.db.add(issue)
        self.commit()
        self.db.refresh(issue)
        logger.info(
            "issue.reported",
            extra={"event": "issue.reported", "issue_id": issue.id, "job_id": job_id, "stage_id": issue.stage_id},
        )
        if held:
            logger.info("job.held", extra={"event": "job.held", "job_id": job_id, "issue_id": issue.id})
        return issue

    def update_issue(self, issue_id: str, changes: dict[str, Any], actor: str) -> JobIssue:
        issue = self.get_issue(issue_id)
        job = self.jobs.lock_job(issue.job_id)
        updates = dict(changes)
        try:
            new_status = updates.pop("status", None)
            resolved_by = updates.pop("resolved_by", None)
            for name, value in updates.items():
                setattr(issue, name, value)

            if new_status is not None and IssueStatus(new_status) != issue.status:
                issue.status = IssueStatus(new_status)
                if issue.status == IssueStatus.RESOLVED:
                    issue.resolved_at = datetime.now(timezone.utc)
                    issue.resolved_by = resolved_by or actor
                    engine.release_issue(job, issue.id)
                else:
                    issue.resolved_at = None
                    issue.resolved_by = None
            elif resolved_by is not None:
                issue.resolved_by = resolved_by

            if job.active_issue and job.active_issue.get("id") == issue.id and "description" in updates:
                job.active_issue = {**job.active_issue, "description": issue.description}
        except WorkshopException:
            self.rollback()
            raise
        self.commit()
        self.db.refresh(issue)
        logger.info(
            "issue.updated",
            extra={"event": "issue.updated", "issue_id": issue.id, "job_id": issue.job_id},
        )
        return issue

    def delete_issue(self, issue_id: str) -> None:
        issue = self.get_issue(issue_id)
        job = self.jobs.lock_job(issue.job_id)
        engine.release_issue(job, issue.id)
        self.db.delete(issue)
        self.commit()
        logger.info("issue.deleted", extra={"event": "issue.deleted", "issue_id": issue_id, "job_id": job.id})

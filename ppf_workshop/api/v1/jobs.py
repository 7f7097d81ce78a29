"""Job and stage-pipeline endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ppf_workshop.api.v1._authz import require
from ppf_workshop.auth.identity import Identity
from ppf_workshop.core.dependencies import get_db_session
from ppf_workshop.models import JobStatus
from ppf_workshop.schemas.common import MessageResponse
from ppf_workshop.schemas.jobs import (
    JobCreate,
    JobResponse,
    JobSummary,
    JobUpdate,
    StageCommentCreate,
    StageCommentResponse,
    StageUpdate,
)
from ppf_workshop.services.job_service import JobService

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("", response_model=list[JobResponse])
def list_jobs(
    job_status: JobStatus | None = Query(default=None, alias="status"),
    _: Identity = Depends(require("jobs.read")),
    db: Session = Depends(get_db_session),
):
    return JobService(db).list_jobs(status=job_status)


# Declared before /{job_id} so "summary" is not read as an id.
@router.get("/summary", response_model=list[JobSummary])
def jobs_summary(
    job_status: JobStatus | None = Query(default=None, alias="status"),
    _: Identity = Depends(require("jobs.read")),
    db: Session = Depends(get_db_session),
):
    return JobService(db).summarize(status=job_status)


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
def create_job(
    payload: JobCreate,
    _: Identity = Depends(require("jobs.write")),
    db: Session = Depends(get_db_session),
):
    return JobService(db).create_job(payload)


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: str, _: Identity = Depends(require("jobs.read")), db: Session = Depends(get_db_session)):
    return JobService(db).get_job(job_id)


@router.patch("/{job_id}", response_model=JobResponse)
def update_job(
    job_id: str,
    payload: JobUpdate,
    _: Identity = Depends(require("jobs.write")),
    db: Session = Depends(get_db_session),
):
    return JobService(db).update_job(job_id, payload.changes())


@router.delete("/{job_id}", response_model=MessageResponse)
def delete_job(job_id: str, _: Identity = Depends(require("jobs.write")), db: Session = Depends(get_db_session)):
    JobService(db).delete_job(job_id)
    return MessageResponse(message="Job deleted successfully")


@router.post("/{job_id}/advance", response_model=JobResponse)
def advance_job(job_id: str, _: Identity = Depends(require("jobs.write")), db: Session = Depends(get_db_session)):
    return JobService(db).advance(job_id)


@router.post("/{job_id}/regress", response_model=JobResponse)
def regress_job(job_id: str, _: Identity = Depends(require("jobs.write")), db: Session = Depends(get_db_session)):
    return JobService(db).regress(job_id)


@router.post("/{job_id}/deliver", response_model=JobResponse)
def deliver_job(job_id: str, _: Identity = Depends(require("jobs.write")), db: Session = Depends(get_db_session)):
    return JobService(db).deliver(job_id)


@router.patch("/{job_id}/stages/{stage_id}", response_model=JobResponse)
def update_stage(
    job_id: str,
    payload: StageUpdate,
    stage_id: int,
    _: Identity = Depends(require("jobs.write")),
    db: Session = Depends(get_db_session),
):
    return JobService(db).update_stage(job_id, stage_id, payload.stage_changes())


@router.post(
    "/{job_id}/stages/{stage_id}/comments",
    response_model=StageCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_stage_comment(
    job_id: str,
    payload: StageCommentCreate,
    stage_id: int,
    identity: Identity = Depends(require("jobs.write")),
    db: Session = Depends(get_db_session),
):
    comment = JobService(db).add_stage_comment(job_id, stage_id, payload.text, identity.display_name())
    return StageCommentResponse.model_validate(comment)

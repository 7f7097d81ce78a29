"""Job issue endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ppf_workshop.api.v1._authz import require
from ppf_workshop.auth.identity import Identity
from ppf_workshop.core.dependencies import get_db_session
from ppf_workshop.schemas.common import MessageResponse
from ppf_workshop.schemas.issues import IssueCreate, IssueResponse, IssueUpdate
from ppf_workshop.services.issue_service import IssueService

router = APIRouter(tags=["issues"])


@router.get("/jobs/{job_id}/issues", response_model=list[IssueResponse])
def list_issues(job_id: str, _: Identity = Depends(require("jobs.read")), db: Session = Depends(get_db_session)):
    return IssueService(db).list_issues(job_id)


@router.post("/jobs/{job_id}/issues", response_model=IssueResponse, status_code=status.HTTP_201_CREATED)
def report_issue(
    job_id: str,
    payload: IssueCreate,
    identity: Identity = Depends(require("issues.write")),
    db: Session = Depends(get_db_session),
):
    return IssueService(db).report_issue(job_id, payload, reported_by=identity.display_name())


@router.patch("/issues/{issue_id}", response_model=IssueResponse)
def update_issue(
    issue_id: str,
    payload: IssueUpdate,
    identity: Identity = Depends(require("issues.write")),
    db: Session = Depends(get_db_session),
):
    return IssueService(db).update_issue(issue_id, payload.changes(), actor=identity.display_name())


@router.delete("/issues/{issue_id}", response_model=MessageResponse)
def delete_issue(issue_id: str, _: Identity = Depends(require("issues.write")), db: Session = Depends(get_db_session)):
    IssueService(db).delete_issue(issue_id)
    return MessageResponse(message="Issue deleted successfully")

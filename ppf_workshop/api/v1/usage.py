"""Film usage ledger endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ppf_workshop.api.v1._authz import require
from ppf_workshop.auth.identity import Identity
from ppf_workshop.core.dependencies import get_db_session
from ppf_workshop.schemas.common import MessageResponse
from ppf_workshop.schemas.usage import UsageCreate, UsageResponse
from ppf_workshop.services.usage_service import UsageService

router = APIRouter(tags=["ppf-usage"])


@router.get("/jobs/{job_id}/ppf-usage", response_model=list[UsageResponse])
def list_usage(job_id: str, _: Identity = Depends(require("jobs.read")), db: Session = Depends(get_db_session)):
    return UsageService(db).list_usage(job_id)


@router.post("/jobs/{job_id}/ppf-usage", response_model=UsageResponse, status_code=status.HTTP_201_CREATED)
def record_usage(
    job_id: str,
    payload: UsageCreate,
    _: Identity = Depends(require("usage.write")),
    db: Session = Depends(get_db_session),
):
    return UsageService(db).record_usage(job_id, payload)


@router.delete("/ppf-usage/{usage_id}", response_model=MessageResponse)
def delete_usage(usage_id: str, _: Identity = Depends(require("usage.write")), db: Session = Depends(get_db_session)):
    UsageService(db).delete_usage(usage_id)
    return MessageResponse(message="Usage entry deleted successfully")

"""PPF roll inventory endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ppf_workshop.api.v1._authz import require
from ppf_workshop.auth.identity import Identity
from ppf_workshop.core.dependencies import get_db_session
from ppf_workshop.models import RollStatus
from ppf_workshop.schemas.catalog import RollCreate, RollResponse, RollUpdate
from ppf_workshop.schemas.common import MessageResponse
from ppf_workshop.services.catalog_service import RollService

router = APIRouter(prefix="/ppf-rolls", tags=["ppf-rolls"])


@router.get("", response_model=list[RollResponse])
def list_rolls(
    roll_status: RollStatus | None = Query(default=None, alias="status"),
    _: Identity = Depends(require("catalog.read")),
    db: Session = Depends(get_db_session),
):
    return RollService(db).list_rolls(status=roll_status)


@router.post("", response_model=RollResponse, status_code=status.HTTP_201_CREATED)
def create_roll(
    payload: RollCreate,
    _: Identity = Depends(require("catalog.write")),
    db: Session = Depends(get_db_session),
):
    return RollService(db).create_roll(payload)


@router.get("/{roll_id}", response_model=RollResponse)
def get_roll(roll_id: str, _: Identity = Depends(require("catalog.read")), db: Session = Depends(get_db_session)):
    return RollService(db).get_roll(roll_id)


@router.patch("/{roll_id}", response_model=RollResponse)
def update_roll(
    roll_id: str,
    payload: RollUpdate,
    _: Identity = Depends(require("rolls.write")),
    db: Session = Depends(get_db_session),
):
    return RollService(db).update_roll(roll_id, payload.changes())


@router.delete("/{roll_id}", response_model=MessageResponse)
def delete_roll(roll_id: str, _: Identity = Depends(require("catalog.write")), db: Session = Depends(get_db_session)):
    RollService(db).delete_roll(roll_id)
    return MessageResponse(message="Roll deleted successfully")

"""Team member endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ppf_workshop.api.v1._authz import require
from ppf_workshop.auth.identity import Identity
from ppf_workshop.core.dependencies import get_db_session
from ppf_workshop.schemas.common import MessageResponse
from ppf_workshop.schemas.users import UserCreate, UserResponse
from ppf_workshop.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
def list_users(_: Identity = Depends(require("users.read")), db: Session = Depends(get_db_session)):
    return UserService(db).list_users()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    _: Identity = Depends(require("users.write")),
    db: Session = Depends(get_db_session),
):
    return UserService(db).create_user(payload)


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(user_id: str, _: Identity = Depends(require("users.write")), db: Session = Depends(get_db_session)):
    UserService(db).delete_user(user_id)
    return MessageResponse(message="User deleted successfully")

"""Service package endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ppf_workshop.api.v1._authz import require
from ppf_workshop.auth.identity import Identity
from ppf_workshop.core.dependencies import get_db_session
from ppf_workshop.schemas.catalog import PackageCreate, PackageResponse
from ppf_workshop.schemas.common import MessageResponse
from ppf_workshop.services.catalog_service import PackageService

router = APIRouter(prefix="/packages", tags=["packages"])


@router.get("", response_model=list[PackageResponse])
def list_packages(_: Identity = Depends(require("catalog.read")), db: Session = Depends(get_db_session)):
    return PackageService(db).list_packages()


@router.post("", response_model=PackageResponse, status_code=status.HTTP_201_CREATED)
def create_package(
    payload: PackageCreate,
    _: Identity = Depends(require("catalog.write")),
    db: Session = Depends(get_db_session),
):
    return PackageService(db).create_package(payload)


@router.delete("/{package_id}", response_model=MessageResponse)
def delete_package(
    package_id: str,
    _: Identity = Depends(require("catalog.write")),
    db: Session = Depends(get_db_session),
):
    PackageService(db).delete_package(package_id)
    return MessageResponse(message="Package deleted successfully")

"""Auth endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ppf_workshop.api.v1._authz import require
from ppf_workshop.auth.identity import Identity
from ppf_workshop.schemas.auth import IdentityResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/me", response_model=IdentityResponse)
def me(identity: Identity = Depends(require())) -> IdentityResponse:
    return IdentityResponse.model_validate(identity)

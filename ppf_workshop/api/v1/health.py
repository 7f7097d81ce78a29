"""Health endpoints for API v1."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ppf_workshop.core.config import get_config
from ppf_workshop.core.dependencies import get_db_session
from ppf_workshop.schemas.common import HealthResponse

router = APIRouter(tags=["health"])
logger = logging.getLogger(__name__)


@router.get("/health", response_model=HealthResponse)
def health(db: Session = Depends(get_db_session)) -> HealthResponse:
    cfg = get_config()
    try:
        db.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as exc:
        logger.warning("health.database.unreachable", extra={"event": "health.database.unreachable", "error": str(exc)})
        database = "unreachable"
    return HealthResponse(service=cfg.APP_NAME, version=cfg.APP_VERSION, database=database)

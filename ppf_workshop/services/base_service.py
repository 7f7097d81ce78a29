"""Shared service base with robust session lifecycle behavior."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from ppf_workshop.core.exceptions import ConflictError

logger = logging.getLogger(__name__)


class BaseService:
    """Base class for services that operate on a SQLAlchemy session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def commit(self) -> None:
        """Commit current transaction and rollback on failure.

        Uniqueness/foreign-key violations and lost version races surface as
        :class:`ConflictError`; anything else is re-raised unchanged.
        """
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            logger.info("db.commit.integrity_conflict", extra={"event": "db.commit.integrity_conflict"})
            raise ConflictError("Record conflicts with existing data.", error=str(exc.orig)) from exc
        except StaleDataError as exc:
            self.db.rollback()
            logger.info("db.commit.stale", extra={"event": "db.commit.stale"})
            raise ConflictError("Record was modified concurrently; reload and retry.") from exc
        except Exception:
            self.db.rollback()
            raise

    def rollback(self) -> None:
        self.db.rollback()

    def close(self) -> None:
        self.db.close()

    def __enter__(self) -> "BaseService":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type:
            self.rollback()
        self.close()

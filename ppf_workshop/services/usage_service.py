"""Film usage ledger: per-job consumption deducted from roll inventory."""

from __future__ import annotations

import logging

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ppf_workshop.core.exceptions import NotFoundError, ValidationError, WorkshopException
from ppf_workshop.models import JobPpfUsage, PpfRoll, RollStatus
from ppf_workshop.schemas.usage import UsageCreate
from ppf_workshop.services.base_service import BaseService
from ppf_workshop.services.job_service import JobService

logger = logging.getLogger(__name__)


class UsageService(BaseService):
    """Record and remove usage entries, keeping roll lengths in step."""

    def __init__(self, db: Session) -> None:
        super().__init__(db)
        self.jobs = JobService(db)

    def list_usage(self, job_id: str) -> list[JobPpfUsage]:
        self.jobs.get_job(job_id)
        return (
            self.db.query(JobPpfUsage)
            .filter(JobPpfUsage.job_id == job_id)
            .order_by(JobPpfUsage.created_at.asc())
            .all()
        )

    def get_usage(self, usage_id: str) -> JobPpfUsage:
        usage = self.db.query(JobPpfUsage).filter(JobPpfUsage.id == usage_id).first()
        if usage is None:
            raise NotFoundError(f"Usage entry not found: {usage_id}")
        return usage

    def _lock_roll(self, reference: str) -> PpfRoll | None:
        # Accept the row id or the printed roll label.
        return (
            self.db.query(PpfRoll)
            .filter(or_(PpfRoll.id == reference, PpfRoll.roll_id == reference))
            .populate_existing()
            .with_for_update()
            .first()
        )

    def _usable_roll(self, payload: UsageCreate) -> PpfRoll:
        roll = self._lock_roll(payload.roll_id)
        if roll is None:
            raise ValidationError(
                f"Roll not found: {payload.roll_id}",
                errors=[{"field": "rollId", "message": "roll does not exist"}],
            )
        if roll.status != RollStatus.ACTIVE:
            raise ValidationError(
                f"Roll {roll.roll_id} is {roll.status.value}.",
                errors=[{"field": "rollId", "message": "roll is not active"}],
            )
        remaining = roll.remaining_length_mm
        if payload.length_used_mm > remaining:
            raise ValidationError(
                f"Roll {roll.roll_id} has only {remaining} mm remaining.",
                errors=[{"field": "lengthUsedMm", "message": f"exceeds remaining length ({remaining} mm)"}],
                remaining_length_mm=remaining,
            )
        return roll

    def record_usage(self, job_id: str, payload: UsageCreate) -> JobPpfUsage:
        job = self.jobs.get_job(job_id)
        try:
            roll = self._usable_roll(payload)
        except WorkshopException:
            # Releases the row lock taken by _lock_roll.
            self.rollback()
            raise

        roll.used_length_mm = roll.used_length_mm + payload.length_used_mm
        if roll.remaining_length_mm == 0:
            roll.status = RollStatus.DEPLETED
        usage = JobPpfUsage(
            job_id=job.id,
            panel_name=payload.panel_name,
            roll_id=roll.id,
            length_used_mm=payload.length_used_mm,
            notes=payload.notes,
            image_url=payload.image_url,
        )
        self.db.add(usage)
        self.commit()
        self.db.refresh(usage)
        logger.info(
            "usage.recorded",
            extra={"event": "usage.recorded", "job_id": job.id, "roll_id": roll.id},
        )
        if roll.status == RollStatus.DEPLETED:
            logger.info("roll.depleted", extra={"event": "roll.depleted", "roll_id": roll.id})
        return usage

    def delete_usage(self, usage_id: str) -> None:
        """Remove an entry and give its length back to the roll."""
        usage = self.get_usage(usage_id)
        roll = self._lock_roll(usage.roll_id)
        if roll is not None:
            roll.used_length_mm = max(0, roll.used_length_mm - usage.length_used_mm)
            if roll.status == RollStatus.DEPLETED and roll.remaining_length_mm > 0:
                roll.status = RollStatus.ACTIVE
        self.db.delete(usage)
        self.commit()
        logger.info(
            "usage.deleted",
            extra={"event": "usage.deleted", "job_id": usage.job_id, "roll_id": usage.roll_id},
        )

from __future__ import annotations

import pytest

from ppf_workshop.core.exceptions import ConflictError, ValidationError
from ppf_workshop.models import JobPpfUsage, PpfProduct, PpfRoll, RollStatus
from ppf_workshop.schemas.jobs import JobCreate
from ppf_workshop.schemas.usage import UsageCreate
from ppf_workshop.services.catalog_service import RollService
from ppf_workshop.services.job_service import JobService
from ppf_workshop.services.usage_service import UsageService


@pytest.fixture
def job(db_session, packages):
    payload = JobCreate.model_validate(
        {
            "customerName": "Kiran",
            "vehicleBrand": "Audi",
            "vehicleModel": "Q7",
            "vehicleRegNo": "MH12XY0001",
            "package": "Front Kit PPF",
            "promisedDate": "2026-11-03T10:00:00Z",
        }
    )
    return JobService(db_session).create_job(payload)


@pytest.fixture
def roll(db_session):
    product = PpfProduct(name="Ultimate Plus", brand="XPEL", type="Gloss")
    db_session.add(product)
    db_session.commit()
    roll = PpfRoll(roll_id="XPEL-001", product_id=product.id, total_length_mm=15000, used_length_mm=0)
    db_session.add(roll)
    db_session.commit()
    return roll


def _usage(roll_ref, length) -> UsageCreate:
    return UsageCreate.model_validate({"panelName": "Bonnet", "rollId": roll_ref, "lengthUsedMm": length})


def test_usage_deducts_roll_length(db_session, job, roll):
    usage = UsageService(db_session).record_usage(job.id, _usage(roll.id, 1800))

    db_session.refresh(roll)
    assert usage.roll_id == roll.id
    assert roll.used_length_mm == 1800
    assert roll.remaining_length_mm == 13200
    assert roll.status == RollStatus.ACTIVE


def test_usage_accepts_printed_roll_label(db_session, job, roll):
    usage = UsageService(db_session).record_usage(job.id, _usage("XPEL-001", 500))
    assert usage.roll_id == roll.id


def test_usage_exceeding_remaining_is_rejected(db_session, job, roll):
    service = UsageService(db_session)
    service.record_usage(job.id, _usage(roll.id, 14000))

    with pytest.raises(ValidationError) as excinfo:
        service.record_usage(job.id, _usage(roll.id, 1001))

    assert excinfo.value.details["remaining_length_mm"] == 1000
    db_session.refresh(roll)
    assert roll.used_length_mm == 14000
    assert db_session.query(JobPpfUsage).count() == 1


def test_exhausting_roll_marks_it_depleted_and_delete_restores(db_session, job, roll):
    service = UsageService(db_session)
    usage = service.record_usage(job.id, _usage(roll.id, 15000))
    db_session.refresh(roll)
    assert roll.status == RollStatus.DEPLETED

    with pytest.raises(ValidationError):
        service.record_usage(job.id, _usage(roll.id, 1))

    service.delete_usage(usage.id)
    db_session.refresh(roll)
    assert roll.used_length_mm == 0
    assert roll.status == RollStatus.ACTIVE


def test_unknown_roll_is_validation_error(db_session, job):
    with pytest.raises(ValidationError):
        UsageService(db_session).record_usage(job.id, _usage("missing", 10))


def test_roll_with_usage_cannot_be_deleted(db_session, job, roll):
    UsageService(db_session).record_usage(job.id, _usage(roll.id, 100))
    with pytest.raises(ConflictError):
        RollService(db_session).delete_roll(roll.id)


def test_deleting_job_keeps_roll_consumption(db_session, job, roll):
    UsageService(db_session).record_usage(job.id, _usage(roll.id, 2500))
    JobService(db_session).delete_job(job.id)

    assert db_session.query(JobPpfUsage).count() == 0
    db_session.refresh(roll)
    assert roll.used_length_mm == 2500


def test_rejected_usage_releases_locked_roll(db_session, job, roll):
    service = UsageService(db_session)
    with pytest.raises(ValidationError):
        service.record_usage(job.id, _usage(roll.id, 20000))

    assert not db_session.in_transaction()
    service.record_usage(job.id, _usage(roll.id, 100))
    db_session.refresh(roll)
    assert roll.used_length_mm == 100

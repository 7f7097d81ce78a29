from __future__ import annotations

import pytest

from ppf_workshop.core.exceptions import InvalidStateTransition
from ppf_workshop.models import IssueStatus, JobStatus
from ppf_workshop.schemas.issues import IssueCreate
from ppf_workshop.schemas.jobs import JobCreate
from ppf_workshop.services.issue_service import IssueService
from ppf_workshop.services.job_service import JobService


@pytest.fixture
def job(db_session, packages):
    payload = JobCreate.model_validate(
        {
            "customerName": "Meera",
            "vehicleBrand": "Porsche",
            "vehicleModel": "911",
            "vehicleRegNo": "DL3CAB0911",
            "package": "Full Body PPF",
            "promisedDate": "2026-11-05T10:00:00Z",
        }
    )
    return JobService(db_session).create_job(payload)


def _issue(stage_id: int) -> IssueCreate:
    return IssueCreate.model_validate(
        {"stageId": stage_id, "issueType": "dent", "description": "Dent on left door", "severity": "high"}
    )


def test_issue_on_current_stage_holds_job(db_session, job):
    issue = IssueService(db_session).report_issue(job.id, _issue(1), reported_by="Quality Check")

    held = JobService(db_session).get_job(job.id)
    assert issue.status == IssueStatus.OPEN
    assert issue.reported_by == "Quality Check"
    assert held.status == JobStatus.HOLD
    assert held.stages[0]["status"] == "issue"
    assert held.active_issue["id"] == issue.id

    with pytest.raises(InvalidStateTransition):
        JobService(db_session).update_job(job.id, {"status": JobStatus.ACTIVE})


def test_resolving_issue_releases_job(db_session, job):
    service = IssueService(db_session)
    issue = service.report_issue(job.id, _issue(1), reported_by="Quality Check")

    resolved = service.update_issue(issue.id, {"status": IssueStatus.RESOLVED, "resolution_notes": "Pulled"}, actor="Sameer")

    assert resolved.resolved_at is not None
    assert resolved.resolved_by == "Sameer"
    released = JobService(db_session).get_job(job.id)
    assert released.status == JobStatus.ACTIVE
    assert released.stages[0]["status"] == "in-progress"
    assert released.active_issue is None


def test_issue_on_other_stage_is_recorded_only(db_session, job):
    IssueService(db_session).report_issue(job.id, _issue(7), reported_by="Sameer")
    assert JobService(db_session).get_job(job.id).status == JobStatus.ACTIVE


def test_deleting_blocking_issue_releases_job(db_session, job):
    service = IssueService(db_session)
    issue = service.report_issue(job.id, _issue(1), reported_by="Quality Check")
    service.delete_issue(issue.id)

    assert service.list_issues(job.id) == []
    assert JobService(db_session).get_job(job.id).status == JobStatus.ACTIVE


def test_issues_listed_newest_first(db_session, job):
    service = IssueService(db_session)
    first = service.report_issue(job.id, _issue(4), reported_by="A")
    second = service.report_issue(job.id, _issue(5), reported_by="B")
    assert [issue.id for issue in service.list_issues(job.id)] == [second.id, first.id]

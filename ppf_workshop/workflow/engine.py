"""Stage progression rules for the eleven-stage job pipeline.

Every operation works on anything shaped like a job row (``status``,
``current_stage``, ``stages``, ``active_issue``). The new stage list is built
in full before it is assigned back, so an operation that raises leaves the
job untouched. Callers are responsible for persisting the job atomically.
"""

from __future__ import annotations

from typing import Any, Protocol

from ppf_workshop.core.exceptions import (
    BoundaryError,
    InvalidStateTransition,
    NotFoundError,
    PreconditionNotMet,
    ValidationError,
)
from ppf_workshop.models.enums import JobStatus, StageStatus
from ppf_workshop.utils.ids import new_id
from ppf_workshop.workflow.stages import (
    StageComment,
    StageProgress,
    dump_stages,
    load_stages,
    now_iso,
)
from ppf_workshop.workflow.state_machine import JOB_STATUS_MACHINE
from ppf_workshop.workflow.templates import FIRST_STAGE, LAST_STAGE

MUTABLE_STAGE_FIELDS = frozenset({"checklist", "notes", "photos", "assigned_to", "ppf_details"})


class JobLike(Protocol):
    status: Any
    current_stage: int
    stages: list[dict[str, Any]]
    active_issue: dict[str, Any] | None


def _status(job: JobLike) -> str:
    return JobStatus(job.status).value


def _require_active(job: JobLike, action: str) -> None:
    status = _status(job)
    if status != JobStatus.ACTIVE.value:
        raise InvalidStateTransition(f"Cannot {action} a job that is {status}.", status=status)


def _require_open(job: JobLike, action: str) -> None:
    status = _status(job)
    if JOB_STATUS_MACHINE.is_terminal(status):
        raise InvalidStateTransition(f"Cannot {action} a job that is {status}.", status=status)


def _require_stage_id(stage_id: int) -> None:
    if not FIRST_STAGE <= stage_id <= LAST_STAGE:
        raise NotFoundError(f"Stage not found: {stage_id}", stage_id=stage_id)


def advance(job: JobLike, now: str | None = None) -> StageProgress:
    """Complete the current stage and start the next one."""
    _require_active(job, "advance")
    stages = load_stages(job.stages)
    current = job.current_stage
    if current >= LAST_STAGE:
        raise BoundaryError("Job is already at the final stage; use deliver.", current_stage=current)

    stage = stages[current - 1]
    if not stage.checklist_complete:
        raise PreconditionNotMet(
            f"Stage {current} checklist is incomplete.",
            stage_id=current,
            unchecked=stage.unchecked_items,
        )

    stamp = now or now_iso()
    stage.status = StageStatus.COMPLETED
    stage.completed_at = stamp

    upcoming = stages[current]
    upcoming.status = StageStatus.IN_PROGRESS
    upcoming.started_at = stamp
    upcoming.completed_at = None

    job.stages = dump_stages(stages)
    job.current_stage = current + 1
    return upcoming


def regress(job: JobLike) -> StageProgress:
    """Send the job back one stage.

    The stage being left returns to ``pending`` with both timestamps cleared;
    the stage being re-entered keeps its ``startedAt`` but loses ``completedAt``.
    """
    _require_active(job, "regress")
    stages = load_stages(job.stages)
    current = job.current_stage
    if current <= FIRST_STAGE:
        raise BoundaryError("Job is already at the first stage.", current_stage=current)

    leaving = stages[current - 1]
    leaving.status = StageStatus.PENDING
    leaving.started_at = None
    leaving.completed_at = None

    previous = stages[current - 2]
    previous.status = StageStatus.IN_PROGRESS
    previous.completed_at = None

    job.stages = dump_stages(stages)
    job.current_stage = current - 1
    return previous


def deliver(job: JobLike, now: str | None = None) -> StageProgress:
    """Close out the final stage and mark the job delivered."""
    status = _status(job)
    if JOB_STATUS_MACHINE.is_terminal(status):
        raise InvalidStateTransition(f"Job is already {status}.", status=status)
    JOB_STATUS_MACHINE.assert_transition(status, JobStatus.DELIVERED.value)

    stages = load_stages(job.stages)
    if job.current_stage != LAST_STAGE:
        raise PreconditionNotMet(
            f"Job must reach stage {LAST_STAGE} before delivery.",
            current_stage=job.current_stage,
        )
    final = stages[LAST_STAGE - 1]
    if not final.checklist_complete:
        raise PreconditionNotMet(
            f"Stage {LAST_STAGE} checklist is incomplete.",
            stage_id=LAST_STAGE,
            unchecked=final.unchecked_items,
        )

    final.status = StageStatus.COMPLETED
    if final.completed_at is None:
        final.completed_at = now or now_iso()

    job.stages = dump_stages(stages)
    job.status = JobStatus.DELIVERED
    return final


def _checklist_position(stage: StageProgress, toggle: dict[str, Any]) -> int | None:
    # Toggles address an item by label, or by zero-based index when no label is given.
    label = toggle.get("item")
    if label is not None:
        for index, entry in enumerate(stage.checklist):
            if entry.item == label:
                return index
        return None
    index = toggle.get("index")
    if isinstance(index, int) and 0 <= index < len(stage.checklist):
        return index
    return None


def _apply_checklist(stage: StageProgress, toggles: list[dict[str, Any]]) -> None:
    resolved = [(_checklist_position(stage, toggle), toggle) for toggle in toggles]
    unknown = [toggle.get("item", toggle.get("index")) for position, toggle in resolved if position is None]
    if unknown:
        raise ValidationError(
            f"Unknown checklist item(s) for stage {stage.id}.",
            errors=[{"field": "checklist", "message": f"unknown item: {label}"} for label in unknown],
        )
    for position, toggle in resolved:
        stage.checklist[position].checked = bool(toggle["checked"])


def update_stage_fields(job: JobLike, stage_id: int, changes: dict[str, Any]) -> StageProgress:
    """Merge mutable fields into one stage without moving the pipeline."""
    _require_stage_id(stage_id)
    _require_open(job, "edit stages of")
    unsupported = set(changes) - MUTABLE_STAGE_FIELDS
    if unsupported:
        raise ValidationError(
            "Unsupported stage field(s).",
            errors=[{"field": name, "message": "field is not editable"} for name in sorted(unsupported)],
        )

    stages = load_stages(job.stages)
    stage = stages[stage_id - 1]
    if "checklist" in changes:
        _apply_checklist(stage, changes["checklist"] or [])
    if "notes" in changes:
        stage.notes = changes["notes"]
    if "photos" in changes:
        stage.photos = list(changes["photos"] or [])
    if "assigned_to" in changes:
        stage.assigned_to = changes["assigned_to"]
    if "ppf_details" in changes:
        merged = dict(stage.ppf_details or {})
        merged.update(changes["ppf_details"] or {})
        stage.ppf_details = merged

    job.stages = dump_stages(stages)
    return stage


def add_stage_comment(job: JobLike, stage_id: int, text: str, author: str, now: str | None = None) -> StageComment:
    _require_stage_id(stage_id)
    _require_open(job, "comment on")
    stages = load_stages(job.stages)
    comment = StageComment(id=new_id(), text=text, author=author, created_at=now or now_iso())
    stages[stage_id - 1].comments.append(comment)
    job.stages = dump_stages(stages)
    return comment


def hold_for_issue(job: JobLike, issue_ref: dict[str, Any]) -> bool:
    """Flag the current stage and pause the job when an issue lands on it.

    Issues reported against any other stage, or on a job that is not active,
    are recorded without touching the pipeline. Returns whether the job was held.
    """
    if _status(job) != JobStatus.ACTIVE.value or issue_ref["stageId"] != job.current_stage:
        return False
    stages = load_stages(job.stages)
    stages[job.current_stage - 1].status = StageStatus.ISSUE
    job.stages = dump_stages(stages)
    job.status = JobStatus.HOLD
    job.active_issue = dict(issue_ref)
    return True


def release_issue(job: JobLike, issue_id: str) -> bool:
    """Undo :func:`hold_for_issue` once the blocking issue is closed."""
    active = job.active_issue
    if not active or active.get("id") != issue_id:
        return False
    stages = load_stages(job.stages)
    stage = stages[int(active["stageId"]) - 1]
    if stage.status == StageStatus.ISSUE:
        stage.status = StageStatus.IN_PROGRESS
    job.stages = dump_stages(stages)
    job.active_issue = None
    if _status(job) == JobStatus.HOLD.value:
        job.status = JobStatus.ACTIVE
    return True


def change_status(job: JobLike, target: JobStatus | str) -> None:
    """Apply a direct status change (hold, resume, cancel)."""
    current = _status(job)
    target_value = JobStatus(target).value
    if current == target_value:
        return
    if target_value == JobStatus.DELIVERED.value:
        raise InvalidStateTransition("Use the deliver operation to deliver a job.", status=current)
    JOB_STATUS_MACHINE.assert_transition(current, target_value)
    if target_value == JobStatus.ACTIVE.value and job.active_issue:
        raise InvalidStateTransition(
            "Resolve the active issue before resuming the job.",
            issue_id=job.active_issue.get("id"),
        )
    job.status = JobStatus(target_value)


def invariant_violations(job: JobLike) -> list[str]:
    """Describe any broken pipeline invariants (empty when consistent)."""
    problems: list[str] = []
    try:
        stages = load_stages(job.stages)
    except Exception as exc:
        return [str(exc)]
    if not FIRST_STAGE <= job.current_stage <= LAST_STAGE:
        problems.append(f"current_stage out of range: {job.current_stage}")
        return problems
    if _status(job) == JobStatus.ACTIVE.value:
        in_progress = [stage.id for stage in stages if stage.status == StageStatus.IN_PROGRESS]
        if in_progress != [job.current_stage]:
            problems.append(f"in-progress stages {in_progress} != current stage {job.current_stage}")
    return problems

"""Stage-progress records embedded in a job row.

The stage list is persisted as a single JSON value with camelCase keys so the
stored shape matches what the dashboard reads. These dataclasses are the
in-memory view used by the stage engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from ppf_workshop.core.exceptions import WorkshopException
from ppf_workshop.models.enums import StageStatus
from ppf_workshop.workflow.templates import STAGE_COUNT, STAGE_TEMPLATES


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class ChecklistItem:
    item: str
    checked: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"item": self.item, "checked": self.checked}


@dataclass
class StageComment:
    id: str
    text: str
    author: str
    created_at: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text, "author": self.author, "createdAt": self.created_at}


@dataclass
class StageProgress:
    id: int
    name: str
    status: StageStatus = StageStatus.PENDING
    started_at: str | None = None
    completed_at: str | None = None
    assigned_to: str | None = None
    checklist: list[ChecklistItem] = field(default_factory=list)
    notes: str | None = None
    photos: list[str] = field(default_factory=list)
    comments: list[StageComment] = field(default_factory=list)
    ppf_details: dict[str, Any] | None = None

    @property
    def unchecked_items(self) -> list[str]:
        return [entry.item for entry in self.checklist if not entry.checked]

    @property
    def checklist_complete(self) -> bool:
        return not self.unchecked_items

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StageProgress":
        return cls(
            id=int(data["id"]),
            name=str(data["name"]),
            status=StageStatus(data.get("status", StageStatus.PENDING.value)),
            started_at=data.get("startedAt"),
            completed_at=data.get("completedAt"),
            assigned_to=data.get("assignedTo"),
            checklist=[
                ChecklistItem(item=str(entry["item"]), checked=bool(entry.get("checked", False)))
                for entry in data.get("checklist") or []
            ],
            notes=data.get("notes"),
            photos=list(data.get("photos") or []),
            comments=[
                StageComment(
                    id=str(entry["id"]),
                    text=str(entry["text"]),
                    author=str(entry.get("author", "Unknown")),
                    created_at=str(entry.get("createdAt", "")),
                )
                for entry in data.get("comments") or []
            ],
            ppf_details=data.get("ppfDetails"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status.value,
            "startedAt": self.started_at,
            "completedAt": self.completed_at,
            "assignedTo": self.assigned_to,
            "checklist": [entry.to_dict() for entry in self.checklist],
            "notes": self.notes,
            "photos": list(self.photos),
            "comments": [comment.to_dict() for comment in self.comments],
            "ppfDetails": dict(self.ppf_details) if self.ppf_details is not None else None,
        }


def build_initial_stages(started_at: str | None = None) -> list[StageProgress]:
    """Fresh stage list: stage 1 in progress, the rest pending."""
    stamp = started_at or now_iso()
    stages = [
        StageProgress(
            id=template.id,
            name=template.name,
            checklist=[ChecklistItem(item=label) for label in template.checklist],
        )
        for template in STAGE_TEMPLATES
    ]
    stages[0].status = StageStatus.IN_PROGRESS
    stages[0].started_at = stamp
    return stages


def load_stages(raw: list[dict[str, Any]] | None) -> list[StageProgress]:
    """Parse a stored stage list and check it still mirrors the template."""
    stages = [StageProgress.from_dict(entry) for entry in raw or []]
    ids = [stage.id for stage in stages]
    if len(stages) != STAGE_COUNT or ids != [template.id for template in STAGE_TEMPLATES]:
        raise WorkshopException("Stored stage list is corrupt.", stage_ids=ids)
    return stages


def dump_stages(stages: list[StageProgress]) -> list[dict[str, Any]]:
    return [stage.to_dict() for stage in stages]

"""Job schema module."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from pydantic import BeforeValidator, Field, model_validator

from ppf_workshop.models.enums import JobPriority, JobStatus
from ppf_workshop.schemas.common import CamelModel, RequestModel


def _year_as_text(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


VehicleYear = Annotated[str | None, BeforeValidator(_year_as_text), Field(max_length=16)]


class JobCreate(RequestModel):
    customer_name: str = Field(min_length=1, max_length=255)
    customer_phone: str | None = Field(default=None, max_length=64)
    vehicle_brand: str = Field(min_length=1, max_length=120)
    vehicle_model: str = Field(min_length=1, max_length=120)
    vehicle_year: VehicleYear = None
    vehicle_color: str | None = Field(default=None, max_length=64)
    vehicle_reg_no: str = Field(min_length=1, max_length=32)
    vehicle_vin: str | None = Field(default=None, max_length=64)
    package: str = Field(min_length=1, max_length=255)
    promised_date: datetime
    priority: JobPriority = JobPriority.NORMAL
    assigned_to: str | None = Field(default=None, max_length=36)


class JobUpdate(RequestModel):
    customer_name: str | None = Field(default=None, min_length=1, max_length=255)
    customer_phone: str | None = Field(default=None, max_length=64)
    vehicle_brand: str | None = Field(default=None, min_length=1, max_length=120)
    vehicle_model: str | None = Field(default=None, min_length=1, max_length=120)
    vehicle_year: VehicleYear = None
    vehicle_color: str | None = Field(default=None, max_length=64)
    vehicle_reg_no: str | None = Field(default=None, min_length=1, max_length=32)
    vehicle_vin: str | None = Field(default=None, max_length=64)
    package: str | None = Field(default=None, min_length=1, max_length=255)
    promised_date: datetime | None = None
    priority: JobPriority | None = None
    assigned_to: str | None = Field(default=None, max_length=36)
    status: JobStatus | None = None

    @model_validator(mode="after")
    def _required_fields_not_null(self) -> "JobUpdate":
        for name in ("customer_name", "vehicle_brand", "vehicle_model", "vehicle_reg_no", "package",
                     "promised_date", "priority", "status"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class ChecklistToggle(RequestModel):
    item: str | None = None
    index: int | None = Field(default=None, ge=0)
    checked: bool

    @model_validator(mode="after")
    def _has_target(self) -> "ChecklistToggle":
        if self.item is None and self.index is None:
            raise ValueError("checklist toggle needs an item label or an index")
        return self


class PpfDetails(RequestModel):
    brand: str | None = None
    roll_id: str | None = None
    roll_image: str | None = None


class StageUpdate(RequestModel):
    checklist: list[ChecklistToggle] | None = None
    notes: str | None = None
    photos: list[str] | None = None
    assigned_to: str | None = None
    ppf_details: PpfDetails | None = None

    def stage_changes(self) -> dict[str, Any]:
        """Changes in the shape the stage engine expects."""
        changes = self.model_dump(exclude_unset=True)
        if "checklist" in changes:
            changes["checklist"] = [
                {key: value for key, value in toggle.items() if value is not None}
                for toggle in changes["checklist"] or []
            ]
        if changes.get("ppf_details") is not None:
            details = self.ppf_details.model_dump(by_alias=True, exclude_unset=True)
            changes["ppf_details"] = details
        return changes


class StageCommentCreate(RequestModel):
    text: str = Field(min_length=1, max_length=4000)


class StageCommentResponse(CamelModel):
    id: str
    text: str
    author: str
    created_at: str


class JobResponse(CamelModel):
    id: str
    job_no: str
    customer_name: str
    customer_phone: str | None = None
    vehicle_brand: str
    vehicle_model: str
    vehicle_year: str | None = None
    vehicle_color: str | None = None
    vehicle_reg_no: str
    vehicle_vin: str | None = None
    package: str
    status: JobStatus
    promised_date: datetime
    current_stage: int
    # Stored already in wire shape (camelCase keys).
    stages: list[dict[str, Any]]
    created_at: datetime
    priority: JobPriority
    active_issue: dict[str, Any] | None = None
    assigned_to: str | None = None
    version: int


class JobSummary(CamelModel):
    id: str
    job_no: str
    customer_name: str
    vehicle_brand: str
    vehicle_model: str
    vehicle_reg_no: str
    package: str
    status: JobStatus
    current_stage: int
    current_stage_name: str
    priority: JobPriority
    promised_date: datetime
    assigned_to: str | None = None
    active_issue: dict[str, Any] | None = None
    created_at: datetime

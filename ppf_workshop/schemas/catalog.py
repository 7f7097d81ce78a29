"""Service package, PPF product and roll schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, model_validator

from ppf_workshop.models.enums import RollStatus
from ppf_workshop.schemas.common import CamelModel, RequestModel


class PackageCreate(RequestModel):
    name: str = Field(min_length=1, max_length=255)


class PackageResponse(CamelModel):
    id: str
    name: str
    created_at: datetime


class ProductCreate(RequestModel):
    name: str = Field(min_length=1, max_length=255)
    brand: str = Field(min_length=1, max_length=120)
    type: str = Field(min_length=1, max_length=64)
    width_mm: int = Field(default=1520, gt=0)


class ProductResponse(CamelModel):
    id: str
    name: str
    brand: str
    type: str
    width_mm: int
    created_at: datetime


class RollCreate(RequestModel):
    roll_id: str = Field(min_length=1, max_length=64)
    product_id: str = Field(min_length=1, max_length=36)
    batch_no: str | None = Field(default=None, max_length=64)
    total_length_mm: int = Field(gt=0)
    used_length_mm: int = Field(default=0, ge=0)
    image_url: str | None = None

    @model_validator(mode="after")
    def _used_within_total(self) -> "RollCreate":
        if self.used_length_mm > self.total_length_mm:
            raise ValueError("usedLengthMm cannot exceed totalLengthMm")
        return self


class RollUpdate(RequestModel):
    batch_no: str | None = Field(default=None, max_length=64)
    status: RollStatus | None = None
    image_url: str | None = None
    total_length_mm: int | None = Field(default=None, gt=0)
    used_length_mm: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _required_fields_not_null(self) -> "RollUpdate":
        for name in ("status", "total_length_mm", "used_length_mm"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class RollResponse(CamelModel):
    id: str
    roll_id: str
    product_id: str
    batch_no: str | None = None
    total_length_mm: int
    used_length_mm: int
    remaining_length_mm: int
    status: RollStatus
    image_url: str | None = None
    created_at: datetime
    product: ProductResponse | None = None

"""Canonical enum values for the workshop schema."""

from __future__ import annotations

import enum


class UserRole(str, enum.Enum):
    ADMIN = "Admin"
    ADVISOR = "Advisor"
    TECHNICIAN = "Technician"
    QC = "QC"


class JobStatus(str, enum.Enum):
    ACTIVE = "active"
    HOLD = "hold"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class JobPriority(str, enum.Enum):
    NORMAL = "normal"
    HIGH = "high"


class StageStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    ISSUE = "issue"


class RollStatus(str, enum.Enum):
    ACTIVE = "active"
    DEPLETED = "depleted"
    DISPOSED = "disposed"


class IssueType(str, enum.Enum):
    SCRATCH = "scratch"
    DENT = "dent"
    PAINT_DEFECT = "paint_defect"
    SURFACE_DAMAGE = "surface_damage"
    OTHER = "other"


class IssueSeverity(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class IssueStatus(str, enum.Enum):
    OPEN = "open"
    ACKNOWLEDGED = "acknowledged"
    RESOLVED = "resolved"

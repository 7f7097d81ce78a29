"""SQLAlchemy model package for the workshop schema."""

from ppf_workshop.models.base import Base
from ppf_workshop.models.catalog import PpfProduct, ServicePackage
from ppf_workshop.models.enums import (
    IssueSeverity,
    IssueStatus,
    IssueType,
    JobPriority,
    JobStatus,
    RollStatus,
    StageStatus,
    UserRole,
)
from ppf_workshop.models.inventory import JobPpfUsage, PpfRoll
from ppf_workshop.models.issue import JobIssue
from ppf_workshop.models.job import Job
from ppf_workshop.models.user import User

__all__ = [
    "Base",
    "IssueSeverity",
    "IssueStatus",
    "IssueType",
    "Job",
    "JobIssue",
    "JobPpfUsage",
    "JobPriority",
    "JobStatus",
    "PpfProduct",
    "PpfRoll",
    "RollStatus",
    "ServicePackage",
    "StageStatus",
    "User",
    "UserRole",
]

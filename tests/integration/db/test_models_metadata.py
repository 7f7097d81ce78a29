from __future__ import annotations

from sqlalchemy import CheckConstraint, UniqueConstraint

from ppf_workshop.models import Base
import ppf_workshop.models  # noqa: F401


def test_model_metadata_contains_workshop_tables():
    expected = {
        "jobs",
        "users",
        "service_packages",
        "ppf_products",
        "ppf_rolls",
        "job_ppf_usage",
        "job_issues",
    }
    assert expected == set(Base.metadata.tables.keys())


def test_roll_length_constraints_are_declared():
    rolls = Base.metadata.tables["ppf_rolls"]
    checks = {c.name for c in rolls.constraints if isinstance(c, CheckConstraint)}
    assert {"ck_ppf_rolls_used_non_negative", "ck_ppf_rolls_used_within_total"} <= checks
    assert rolls.c.roll_id.unique or any(
        isinstance(c, UniqueConstraint) and "roll_id" in c.columns for c in rolls.constraints
    )


def test_job_number_is_unique_and_versioned():
    jobs = Base.metadata.tables["jobs"]
    assert jobs.c.job_no.unique or any(
        isinstance(c, UniqueConstraint) and "job_no" in c.columns for c in jobs.constraints
    )
    assert "version" in jobs.c

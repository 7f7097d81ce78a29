"""Identifier generation helpers."""

from __future__ import annotations

import re
import uuid

JOB_NO_PATTERN = re.compile(r"^JOB-(\d{4})-(\d{3,})$")


def new_id() -> str:
    """Create a UUID4-based row identifier."""
    return str(uuid.uuid4())


def format_job_no(year: int, sequence: int) -> str:
    """Render the human-readable job number, e.g. ``JOB-2026-007``."""
    return f"JOB-{year}-{sequence:03d}"


def job_no_sequence(job_no: str, year: int) -> int | None:
    """Return the sequence part of ``job_no`` when it belongs to ``year``."""
    match = JOB_NO_PATTERN.match(job_no or "")
    if match is None or int(match.group(1)) != year:
        return None
    return int(match.group(2))


def next_job_no(existing: list[str], year: int) -> str:
    """Pick the next job number for ``year`` given the numbers already issued."""
    sequences = [seq for seq in (job_no_sequence(no, year) for no in existing) if seq is not None]
    return format_job_no(year, max(sequences, default=0) + 1)

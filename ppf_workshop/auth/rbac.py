"""Role-based authorization helpers."""

from __future__ import annotations

from ppf_workshop.core.exceptions import AuthorizationError

# Scope strings are kept explicit for endpoint-level declarations.
_WORKSHOP_SCOPES = {
    "jobs.read",
    "jobs.write",
    "issues.write",
    "usage.write",
    "rolls.write",
    "catalog.read",
    "users.read",
}

ROLE_SCOPES: dict[str, set[str]] = {
    "admin": {
        "*",
    },
    "advisor": set(_WORKSHOP_SCOPES),
    "technician": set(_WORKSHOP_SCOPES),
    "qc": set(_WORKSHOP_SCOPES),
    # Provider default for accounts without a workshop role in their metadata.
    "user": set(_WORKSHOP_SCOPES),
}


def get_scopes_for_role(role: str) -> set[str]:
    """Return scopes granted to a role."""
    return ROLE_SCOPES.get(role.lower(), set())


def has_scopes(role: str, required_scopes: list[str] | set[str] | tuple[str, ...]) -> bool:
    """Check if role includes every required scope."""
    granted = get_scopes_for_role(role)
    if "*" in granted:
        return True
    return set(required_scopes).issubset(granted)


def require_scopes(role: str, required_scopes: list[str] | set[str] | tuple[str, ...]) -> None:
    """Raise when a role lacks required scopes."""
    if has_scopes(role=role, required_scopes=required_scopes):
        return
    missing = sorted(set(required_scopes) - get_scopes_for_role(role))
    raise AuthorizationError(f"Missing required scopes: {', '.join(missing)}", missing=missing)

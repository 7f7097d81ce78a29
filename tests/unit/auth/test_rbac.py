from __future__ import annotations

import pytest

from ppf_workshop.api.v1._authz import _extract_bearer_token
from ppf_workshop.auth.rbac import has_scopes, require_scopes
from ppf_workshop.core.exceptions import AuthenticationError, AuthorizationError


def test_admin_has_every_scope():
    assert has_scopes("Admin", ["catalog.write", "users.write", "jobs.write"]) is True


def test_workshop_roles_work_jobs_but_not_catalog():
    for role in ("Advisor", "Technician", "QC"):
        require_scopes(role, ["jobs.read", "jobs.write", "issues.write", "usage.write", "rolls.write"])
        with pytest.raises(AuthorizationError):
            require_scopes(role, ["catalog.write"])
        with pytest.raises(AuthorizationError):
            require_scopes(role, ["users.write"])


def test_unknown_role_has_no_scopes():
    with pytest.raises(AuthorizationError):
        require_scopes("intruder", ["jobs.read"])


def test_bearer_extraction():
    assert _extract_bearer_token("Bearer abc.def") == "abc.def"
    assert _extract_bearer_token("bearer   abc") == "abc"
    for header in (None, "", "Basic abc", "Bearer", "Bearer   "):
        with pytest.raises(AuthenticationError):
            _extract_bearer_token(header)

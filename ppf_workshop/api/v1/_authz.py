"""Shared authorization helpers for API v1 route modules."""

from __future__ import annotations

import logging
from collections.abc import Callable

from fastapi import Depends, Header, Request

from ppf_workshop.auth.identity import Identity, IdentityProvider
from ppf_workshop.auth.rbac import require_scopes
from ppf_workshop.core.dependencies import get_identity_provider
from ppf_workshop.core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


def _extract_bearer_token(authorization: str | None) -> str:
    if authorization is None or not authorization.strip():
        raise AuthenticationError("Authorization header is required.")
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
        raise AuthenticationError("Authorization header must use Bearer token.")
    return parts[1].strip()


def authorize(authorization: str | None, scopes: list[str], provider: IdentityProvider) -> Identity:
    token = _extract_bearer_token(authorization)
    identity = provider.verify(token)
    require_scopes(identity.role, scopes)
    return identity


def require(*scopes: str) -> Callable[..., Identity]:
    """Build a dependency that authenticates the caller and checks ``scopes``.

    Dependencies resolve before the request body is validated or any handler
    runs, so a rejected token never reaches storage.
    """

    def dependency(
        request: Request,
        authorization: str | None = Header(default=None, alias="Authorization"),
        provider: IdentityProvider = Depends(get_identity_provider),
    ) -> Identity:
        try:
            identity = authorize(authorization=authorization, scopes=list(scopes), provider=provider)
        except AuthenticationError:
            logger.info(
                "auth.request.rejected",
                extra={"event": "auth.request.rejected", "method": request.method, "path": request.url.path},
            )
            raise
        request.state.identity = identity
        return identity

    return dependency


PUBLIC_PATHS = frozenset({"/health"})


def is_public_path(path: str, prefix: str) -> bool:
    if prefix and path.startswith(prefix):
        path = path[len(prefix):]
    return path in PUBLIC_PATHS


def authenticate_request(request: Request) -> Identity:
    """Verify the bearer token outside dependency resolution.

    Request validation runs before ``require(...)`` is resolved, so a
    malformed body would otherwise be reported ahead of a missing token.
    Honors ``dependency_overrides`` so tests see the same provider.
    """
    factory = request.app.dependency_overrides.get(get_identity_provider, get_identity_provider)
    token = _extract_bearer_token(request.headers.get("Authorization"))
    return factory().verify(token)

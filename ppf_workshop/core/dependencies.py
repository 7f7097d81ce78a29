"""Dependency providers for API handlers."""

from __future__ import annotations

from collections.abc import Generator
from functools import lru_cache

from sqlalchemy.orm import Session

from ppf_workshop.auth.identity import IdentityProvider, SupabaseIdentityProvider
from ppf_workshop.core.config import Config, get_config
from ppf_workshop.database.db import get_db


def get_settings() -> Config:
    """Return validated application configuration."""
    return get_config()


def get_db_session() -> Generator[Session, None, None]:
    """Yield SQLAlchemy session for dependency injection."""
    yield from get_db()


@lru_cache(maxsize=1)
def _default_identity_provider() -> SupabaseIdentityProvider:
    return SupabaseIdentityProvider.from_config(get_config())


def get_identity_provider() -> IdentityProvider:
    """Process-wide provider so its token cache is shared across requests."""
    return _default_identity_provider()

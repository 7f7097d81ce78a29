"""Startup validation and bootstrap helpers."""

from __future__ import annotations

import logging

from ppf_workshop.core.config import get_config
from ppf_workshop.core.logging_config import configure_logging
from ppf_workshop.database.db import get_active_database_url, verify_database_connection

logger = logging.getLogger(__name__)


def validate_startup_config() -> None:
    """Fail-fast config and connectivity checks."""
    config = get_config()
    database_ok = verify_database_connection()
    active_database_url = get_active_database_url()
    if not database_ok and config.DB_CONNECTIVITY_REQUIRED:
        raise RuntimeError("Database connectivity check failed.")
    if not database_ok:
        logger.warning(
            "startup.database.connectivity_optional_failed",
            extra={"event": "startup.database.connectivity_optional_failed"},
        )

    if config.is_production and active_database_url.startswith("sqlite"):
        logger.warning(
            "startup.production.sqlite_detected",
            extra={"event": "startup.production.sqlite_detected"},
        )
    if not config.identity_provider_configured:
        logger.warning(
            "startup.auth.provider_unconfigured",
            extra={"event": "startup.auth.provider_unconfigured"},
        )

    logger.info(
        "startup.config.validated",
        extra={"event": "startup.config.validated"},
    )


def bootstrap() -> None:
    """Initialize logging and validate runtime configuration."""
    configure_logging()
    validate_startup_config()

"""Schema creation and default seed data."""

from __future__ import annotations

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config as AlembicConfig

import ppf_workshop.database.db as db_module
from ppf_workshop.core.config import get_config
from ppf_workshop.core.startup import bootstrap
from ppf_workshop.models import Base

PROJECT_ROOT = Path(__file__).resolve().parents[2]

logger = logging.getLogger(__name__)


def _build_alembic_config(database_url: str) -> AlembicConfig:
    cfg = AlembicConfig(str(PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "migrations"))
    cfg.set_main_option("sqlalchemy.url", database_url)
    return cfg


def run_migrations() -> None:
    active_url = db_module.get_active_database_url()
    command.upgrade(_build_alembic_config(active_url), "head")
    logger.info("database.migrations.applied", extra={"event": "database.migrations.applied"})


def create_tables() -> None:
    Base.metadata.create_all(bind=db_module.get_engine())
    logger.info("database.tables.created", extra={"event": "database.tables.created"})


def seed_defaults() -> int:
    """Insert the standard service packages if they are missing."""
    from ppf_workshop.services.catalog_service import PackageService

    with db_module.get_db_session() as session:
        return PackageService(session).seed_defaults()


def init_db() -> None:
    bootstrap()
    run_migrations()
    create_tables()
    if get_config().SEED_DEFAULTS:
        seed_defaults()


if __name__ == "__main__":
    init_db()

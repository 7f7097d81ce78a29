"""Seed default service packages and a starter team roster."""

import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from ppf_workshop.database.db import get_db_session
from ppf_workshop.database.init_db import create_tables
from ppf_workshop.models import User, UserRole
from ppf_workshop.services.catalog_service import PackageService

DEFAULT_USERS = (
    ("admin", "Admin User", UserRole.ADMIN),
    ("sameer", "Sameer", UserRole.TECHNICIAN),
    ("priya", "Priya", UserRole.TECHNICIAN),
    ("vikram", "Vikram", UserRole.TECHNICIAN),
)


def seed_users(db) -> int:
    existing = {username for (username,) in db.query(User.username).all()}
    added = 0
    for username, name, role in DEFAULT_USERS:
        if username in existing:
            continue
        db.add(User(username=username, name=name, role=role))
        added += 1
    db.commit()
    return added


def seed() -> None:
    create_tables()
    with get_db_session() as db:
        packages = PackageService(db).seed_defaults()
        print(f"Seeded {packages} service package(s).")
        users = seed_users(db)
        print(f"Seeded {users} user(s).")


if __name__ == "__main__":
    seed()

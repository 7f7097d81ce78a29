from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ppf_workshop.auth.identity import Identity
from ppf_workshop.core.dependencies import get_db_session, get_identity_provider
from ppf_workshop.core.exceptions import AuthenticationError
from ppf_workshop.main import create_app
from ppf_workshop.models import Base, ServicePackage


class FakeIdentityProvider:
    """Maps fixed tokens to identities; anything else is rejected."""

    def __init__(self) -> None:
        self.tokens = {
            "admin-token": Identity(id="u-admin", email="admin@shop.test", name="Admin User", role="Admin", username="admin"),
            "tech-token": Identity(id="u-tech", email="sameer@shop.test", name="Sameer", role="Technician", username="sameer"),
            "qc-token": Identity(id="u-qc", email="qc@shop.test", name="Quality Check", role="QC", username="qc"),
        }
        self.calls: list[str] = []

    def verify(self, token: str) -> Identity:
        self.calls.append(token)
        try:
            return self.tokens[token]
        except KeyError as exc:
            raise AuthenticationError("Invalid or expired token.") from exc


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def packages(db_session):
    for name in ("Full Body PPF", "Front Kit PPF"):
        db_session.add(ServicePackage(name=name))
    db_session.commit()
    return ["Full Body PPF", "Front Kit PPF"]


@pytest.fixture
def identity_provider():
    return FakeIdentityProvider()


@pytest.fixture
def client(session_factory, identity_provider, packages):
    app = create_app(use_lifespan=False)

    def _override_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db_session] = _override_db
    app.dependency_overrides[get_identity_provider] = lambda: identity_provider
    return TestClient(app)


@pytest.fixture
def admin_headers():
    return {"Authorization": "Bearer admin-token"}


@pytest.fixture
def tech_headers():
    return {"Authorization": "Bearer tech-token"}

"""
conftest.py — Shared Test Fixtures for the dashboard template API

Provides an in-memory SQLite database, FastAPI TestClient with auth
overrides, and factory fixtures for users and templates.

Business Rules:
- All tests run against isolated in-memory DB
- Auth is overridden so most tests don't need an identity header
- Each test function gets a fresh schema

Called by: all test files via pytest autodiscovery
Depends on: app.models (Base), app.database (get_db), app.dependencies
"""

import base64
import json
import os

os.environ["DATABASE_URL"] = "sqlite://"  # Must be set before importing app modules

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.models import AvailableTemplates, Base, DashboardTemplate, UserIdentity
from app.services.base_templates import get_base_template

# ── In-memory SQLite engine ──────────────────────────────────────────

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@event.listens_for(engine, "connect")
def _enable_fk(dbapi_conn, _):
    """SQLite ignores FKs by default — turn them on."""
    dbapi_conn.execute("PRAGMA foreign_keys=ON")


def _encode_identity(user_id) -> str:
    doc = {"identity": {"account_number": "540155", "user": {"user_id": user_id}}}
    return base64.b64encode(json.dumps(doc).encode()).decode()


# ── Fixtures ─────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def db_session():
    """Create all tables, yield a session, then tear down."""
    Base.metadata.create_all(bind=engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def identity_header():
    """Builder for the base64 identity document the gateway would forward."""
    return _encode_identity


@pytest.fixture()
def test_user(db_session: Session) -> UserIdentity:
    user = UserIdentity(account_id="1001", first_login=False)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture()
def other_user(db_session: Session) -> UserIdentity:
    user = UserIdentity(account_id="2002", first_login=False)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def _make_template(db: Session, user: UserIdentity, default=True, display_name=None) -> DashboardTemplate:
    base = get_base_template(AvailableTemplates.LANDING_PAGE)
    t = DashboardTemplate(
        user_identity_id=user.id,
        default=default,
        dashboard_type=AvailableTemplates.LANDING_PAGE.value,
        display_name=display_name or base["displayName"],
        template_config=base["templateConfig"],
    )
    db.add(t)
    db.commit()
    db.refresh(t)
    return t


@pytest.fixture()
def test_template(db_session: Session, test_user: UserIdentity) -> DashboardTemplate:
    """The user's default landing page template."""
    return _make_template(db_session, test_user)


@pytest.fixture()
def other_template(db_session: Session, other_user: UserIdentity) -> DashboardTemplate:
    """A template owned by someone else."""
    return _make_template(db_session, other_user)


@pytest.fixture()
def make_template(db_session: Session):
    """Factory: make_template(user, default=False, display_name=...)."""
    def _factory(user, **kw):
        return _make_template(db_session, user, **kw)
    return _factory


@pytest.fixture()
def client(db_session: Session, test_user: UserIdentity) -> TestClient:
    """FastAPI TestClient with auth overridden to return test_user."""
    from app.database import get_db
    from app.dependencies import require_user
    from app.main import app

    def _override_db():
        yield db_session

    def _override_user():
        return test_user

    app.dependency_overrides[get_db] = _override_db
    app.dependency_overrides[require_user] = _override_user

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture()
def header_client(db_session: Session) -> TestClient:
    """TestClient with real identity-header auth (only the DB is overridden)."""
    from app.database import get_db
    from app.main import app

    def _override_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_db

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()

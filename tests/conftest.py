"""Test fixtures for API and database."""

from __future__ import annotations

import os
from pathlib import Path

TESTS_ROOT = Path(__file__).parent

# Set DATABASE_URL *before* importing folio modules so the app doesn't try to
# open the default data directory.
os.environ.setdefault("DATABASE_URL", "sqlite:///test_folio.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key-with-enough-entropy-000")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from folio.database import Base, build_engine  # noqa: E402
from folio.database import get_db as db_dependency  # noqa: E402
from folio.main import app  # noqa: E402
from folio.security.rate_limit import limiter  # noqa: E402
from folio.services.auth_service import AuthService, create_access_token  # noqa: E402

# Disable rate limiting in tests to prevent cross-test 429 flakes
limiter.enabled = False

TEST_DB_PATH = Path("test_folio_api.db")
TESTING_SESSION_FACTORY: sessionmaker | None = None

ADMIN_USERNAME = "captain"
ADMIN_EMAIL = "captain@example.com"
ADMIN_PASSWORD = "s3cret-pass"


@pytest.fixture(scope="session")
def client():
    global TESTING_SESSION_FACTORY
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()

    engine = build_engine(f"sqlite:///{TEST_DB_PATH}")
    TESTING_SESSION_FACTORY = sessionmaker(
        bind=engine, autocommit=False, autoflush=False
    )
    Base.metadata.create_all(bind=engine)

    def override_get_db():
        db = TESTING_SESSION_FACTORY()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[db_dependency] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.pop(db_dependency, None)
    engine.dispose()
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()


@pytest.fixture
def db_session(client):
    if TESTING_SESSION_FACTORY is None:
        raise RuntimeError("Session factory not initialized")
    session = TESTING_SESSION_FACTORY()
    try:
        yield session
    finally:
        # Ensure database state is isolated between tests
        session.rollback()
        for table in reversed(Base.metadata.sorted_tables):
            session.execute(table.delete())
        session.commit()
        session.close()


@pytest.fixture
def admin(db_session):
    return AuthService(db_session).register(ADMIN_USERNAME, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def auth_headers(admin) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(admin)}"}


@pytest.fixture
def make_project(client, auth_headers):
    def _make(**overrides):
        body = {
            "title": "Starship Tracker",
            "category": "Web Development",
            "image": "https://cdn.example.com/tracker.png",
            "description": "Tracks starships",
            "technologies": ["Python", "FastAPI"],
            **overrides,
        }
        resp = client.post("/api/projects", json=body, headers=auth_headers)
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    return _make


@pytest.fixture
def make_blog(client, auth_headers):
    def _make(**overrides):
        body = {
            "title": "Hello World",
            "content": "This is the first post on the portfolio blog.",
            "tags": ["python"],
            **overrides,
        }
        resp = client.post("/api/blogs", json=body, headers=auth_headers)
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    return _make


@pytest.fixture
def make_contact(client, db_session):
    def _make(**overrides):
        body = {
            "name": "Jane Doe",
            "email": "jane@example.com",
            "message": "I would like to talk about a project.",
            **overrides,
        }
        resp = client.post("/api/contact", json=body)
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    return _make

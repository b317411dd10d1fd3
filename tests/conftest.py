"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient

from minicms.config import Settings
from minicms.database import Base, Database, get_db
from minicms.main import create_app
from minicms.services.sessions import MemorySessionBackend, SessionStore


class AuthHeaders(dict):
    """Dict subclass that also stores user info."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL when DATABASE_URL is set, SQLite locally
if os.getenv("DATABASE_URL"):
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/mini_cms", "/mini_cms_test")
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

test_database = Database(SQLALCHEMY_DATABASE_URL)

TEST_PASSWORD = "pw123"


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    test_database.init_db()
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = test_database.session()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def session_store():
    """Fresh in-memory session store."""
    return SessionStore(MemorySessionBackend())


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=SQLALCHEMY_DATABASE_URL,
        session_backend="memory",
        upload_dir=str(tmp_path / "uploads"),
        openai_api_key=None,
        environment="test",
    )


@pytest.fixture
def app(settings, session_store):
    application = create_app(settings)
    application.state.session_store = session_store
    return application


@pytest.fixture(scope="function")
def client(app, db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def csrf_token(client):
    """Start a session and return its CSRF token."""
    response = client.get("/api/v1/auth/csrf")
    assert response.status_code == 200
    return response.json()["csrf_token"]


@pytest.fixture
def auth_headers(client, csrf_token):
    """Register and log in a user; return CSRF headers with user info."""
    headers = {"X-CSRF-Token": csrf_token}
    response = client.post(
        "/api/v1/auth/register",
        headers=headers,
        json={"name": "Alice", "email": "alice@example.com", "password": TEST_PASSWORD},
    )
    assert response.status_code == 201
    user_id = response.json()["id"]

    response = client.post(
        "/api/v1/auth/login",
        headers=headers,
        json={"email": "alice@example.com", "password": TEST_PASSWORD},
    )
    assert response.status_code == 200

    return AuthHeaders(
        {"X-CSRF-Token": response.json()["csrf_token"]},
        user_id=user_id,
        email="alice@example.com",
    )

"""Pytest configuration and fixtures."""

import os

# Settings are read once, so the test environment must be in place before the app is imported
SQLALCHEMY_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///./test.db")
os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from sweetshop.database import Base, create_db_engine, get_db  # noqa: E402
from sweetshop.main import app  # noqa: E402


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id, username and role."""

    def __init__(self, *args, user_id: int | None = None, username: str = "", role: str = "", **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.username = username
        self.role = role


engine = create_db_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    from sweetshop import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def session_factory():
    """Open independent sessions, e.g. one per thread."""
    return TestingSessionLocal


@pytest.fixture(scope="function")
def client(db):
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


def register(client, username: str, password: str = "password123") -> AuthHeaders:
    """Register a user and return auth headers for them."""
    response = client.post(
        "/api/v1/auth/register",
        json={"username": username, "password": password},
    )
    assert response.status_code == 201, response.text
    data = response.json()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['token']}"},
        user_id=data["user"]["id"],
        username=data["user"]["username"],
        role=data["user"]["role"],
    )


@pytest.fixture
def register_user(client):
    """Return a helper that registers a user and gives back their auth headers."""

    def _register(username: str, password: str = "password123") -> AuthHeaders:
        return register(client, username, password)

    return _register


@pytest.fixture
def admin_headers(client):
    """Register an admin and return auth headers."""
    headers = register(client, "admin")
    assert headers.role == "admin"
    return headers


@pytest.fixture
def user_headers(client):
    """Register a regular user and return auth headers."""
    headers = register(client, "alice")
    assert headers.role == "user"
    return headers


@pytest.fixture
def sweet(client, admin_headers):
    """Create a sweet as admin and return its JSON."""
    response = client.post(
        "/api/v1/sweets",
        headers=admin_headers,
        json={"name": "Ladoo", "category": "Milk", "price": 10, "quantity": 2},
    )
    assert response.status_code == 201, response.text
    return response.json()

"""Shared test fixtures and configuration.

Points the app at an in-memory SQLite database and disables the background
scheduler before anything from homepa is imported.
"""

import os

# Patch env vars BEFORE any homepa imports
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("SCHEDULER_ENABLED", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient

PASSWORD = "Passw0rd"


@pytest.fixture(autouse=True)
def fresh_state():
    """Each test gets an empty database and empty rate-limit windows."""
    from homepa.core.database import dispose_engine
    from homepa.services.rate_limiter import rate_limiter

    dispose_engine()
    rate_limiter.reset()
    yield
    dispose_engine()
    rate_limiter.reset()


@pytest.fixture
def client():
    from homepa.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db_session():
    from homepa.core.database import SessionLocal, get_engine

    db = SessionLocal(bind=get_engine())
    try:
        yield db
    finally:
        db.close()


def register(client, email="alice@example.com", password=PASSWORD, name="Alice"):
    return client.post("/api/auth/register", json={"email": email, "password": password, "name": name})


@pytest.fixture
def make_client():
    """Factory for extra clients with their own cookie jars (one per user)."""
    from homepa.main import app

    clients = []

    def _make():
        test_client = TestClient(app)
        clients.append(test_client)
        return test_client

    yield _make
    for test_client in clients:
        test_client.close()


@pytest.fixture
def alice(client):
    """A client logged in as alice@example.com"""
    response = register(client)
    assert response.status_code == 201
    return client

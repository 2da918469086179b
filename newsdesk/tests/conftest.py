"""
Pytest fixtures for backend tests.
"""

import os
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from newsdesk.config import config, state
from newsdesk.database import Database
from newsdesk.rate_limit import ReadRateLimiter
from newsdesk.read_logger import ReadLogger
from newsdesk.server import app

PASSWORD = "Sup3r$ecret"

ARTICLE_BODY = (
    "This is the body of a test article. It is long enough to pass the "
    "minimum content length check."
)


@pytest.fixture
def temp_db_path():
    """Create a temporary database file path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        yield Path(f.name)
    # Cleanup
    if os.path.exists(f.name):
        os.unlink(f.name)


@pytest.fixture
def test_db(temp_db_path):
    """Create a test database instance."""
    db = Database(temp_db_path)
    yield db


@pytest.fixture
def client(test_db):
    """Create a test client with isolated database and read tracking state."""
    # Store original state
    original_db = state.db
    original_read_limiter = state.read_limiter
    original_read_logger = state.read_logger
    original_scheduler = state.scheduler
    original_scheduler_enabled = config.SCHEDULER_ENABLED
    original_rate_limit = config.RATE_LIMIT_PER_MINUTE

    # Set up test state with fresh instances
    state.db = test_db
    state.read_limiter = ReadRateLimiter(window_seconds=30, cleanup_interval_seconds=60)
    state.read_logger = ReadLogger(test_db)
    state.scheduler = None
    config.SCHEDULER_ENABLED = False
    config.RATE_LIMIT_PER_MINUTE = 0

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    # Restore original state
    state.db = original_db
    state.read_limiter = original_read_limiter
    state.read_logger = original_read_logger
    state.scheduler = original_scheduler
    config.SCHEDULER_ENABLED = original_scheduler_enabled
    config.RATE_LIMIT_PER_MINUTE = original_rate_limit


def signup(client, name="Test Author", email="author@example.com", role="author", password=PASSWORD):
    """Register a user through the API and return the response."""
    return client.post("/auth/signup", json={
        "Name": name,
        "Email": email,
        "Password": password,
        "Role": role,
    })


def login(client, email, password=PASSWORD) -> str:
    """Log in through the API and return the bearer token."""
    response = client.post("/auth/login", json={"Email": email, "Password": password})
    assert response.status_code == 200, response.text
    return response.json()["Object"]["token"]


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client):
    """Factory: sign up and log in a user, returning (user, headers)."""

    def _register(name="Test Author", email="author@example.com", role="author"):
        response = signup(client, name=name, email=email, role=role)
        assert response.status_code == 201, response.text
        token = login(client, email)
        return response.json()["Object"], auth_header(token)

    return _register


@pytest.fixture
def author(register):
    """A signed-up author: (user, headers)."""
    return register()


@pytest.fixture
def create_article(client, author):
    """Factory: create an article as the default author."""

    def _create(title="Test Article", status="Published", category="World",
                content=ARTICLE_BODY, headers=None):
        response = client.post(
            "/articles",
            json={"Title": title, "Content": content, "Category": category, "Status": status},
            headers=headers or author[1],
        )
        assert response.status_code == 201, response.text
        return response.json()["Object"]

    return _create

"""
TASKNEST API - Test Configuration

Shared fixtures for CI-safe testing without MongoDB.
"""

import os

# Settings are read at import time, so these must be set before tasknest loads.
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-tasknest-suite-0123456789")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import asyncio
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from tasknest.main import app
from tasknest.auth.dependencies import get_token_codec
from tasknest.database import get_database
from tasknest.sessions.models import Session
from tasknest.sessions.repository import InMemorySessionRepository, get_session_repository
from tasknest.tasks.repository import InMemoryTaskRepository, get_task_repository
from tasknest.users.models import User
from tasknest.users.repository import InMemoryUserRepository, get_user_repository


# Global in-memory repositories for tests
_test_user_repository = InMemoryUserRepository()
_test_session_repository = InMemorySessionRepository()
_test_task_repository = InMemoryTaskRepository()


async def override_get_user_repository():
    return _test_user_repository


async def override_get_session_repository():
    return _test_session_repository


async def override_get_task_repository():
    return _test_task_repository


async def override_get_database():
    """Mock database whose ping succeeds."""
    mock_db = MagicMock()
    mock_db.command = AsyncMock(return_value={"ok": 1})
    return mock_db


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    _test_user_repository.clear()
    return _test_user_repository


@pytest.fixture
def session_repository() -> InMemorySessionRepository:
    _test_session_repository.clear()
    return _test_session_repository


@pytest.fixture
def task_repository() -> InMemoryTaskRepository:
    _test_task_repository.clear()
    return _test_task_repository


@pytest.fixture
def codec():
    return get_token_codec()


@pytest.fixture
def client(user_repository, session_repository, task_repository):
    """Create test client with in-memory repositories."""
    app.dependency_overrides[get_user_repository] = override_get_user_repository
    app.dependency_overrides[get_session_repository] = override_get_session_repository
    app.dependency_overrides[get_task_repository] = override_get_task_repository
    app.dependency_overrides[get_database] = override_get_database

    yield TestClient(app)
    # Clean up override after test
    app.dependency_overrides.clear()


def register(client: TestClient, name: str, email: str, password: str) -> dict:
    """Register through the API and return the response data ({user, token})."""
    response = client.post(
        "/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.fixture
def registered_user(client) -> dict:
    """Register a test user and return credentials plus issued data."""
    credentials = {"name": "Alice", "email": "a@x.com", "password": "testpassword123"}
    data = register(client, **credentials)
    return {**credentials, "id": data["user"]["id"], "token": data["token"]}


@pytest.fixture
def auth_headers(registered_user) -> dict:
    """Create Authorization headers for authenticated requests."""
    return {"Authorization": f"Bearer {registered_user['token']}"}


@pytest.fixture
def second_user(client) -> dict:
    credentials = {"name": "Bob", "email": "b@x.com", "password": "secondpassword123"}
    data = register(client, **credentials)
    return {**credentials, "id": data["user"]["id"], "token": data["token"]}


@pytest.fixture
def second_auth_headers(second_user) -> dict:
    """Authorization headers for the second user."""
    return {"Authorization": f"Bearer {second_user['token']}"}


def get_user_sync(email: str) -> Optional[User]:
    """Synchronous helper for tests that need direct store access."""
    return asyncio.run(_test_user_repository.get_by_email(email))


def get_session_sync(token: str) -> Optional[Session]:
    return asyncio.run(_test_session_repository.get_by_token(token))

"""
pytest configuration and fixtures for the User Records API
Every test gets a fresh in-memory store, so no state leaks between tests
"""

import pytest
from fastapi.testclient import TestClient

from userapi.app import create_app
from userapi.config.settings import Settings
from userapi.services.memory_store import InMemoryUserStore

TEST_API_KEY = "test-key"


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key=TEST_API_KEY, seed_sample_users=False)


@pytest.fixture
def store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def app(settings, store):
    return create_app(settings=settings, store=store)


@pytest.fixture
def client(app):
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    return {"X-API-Key": TEST_API_KEY}

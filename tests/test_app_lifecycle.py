"""
Application startup and shutdown wiring
"""

from unittest.mock import AsyncMock

from fastapi.testclient import TestClient

from userapi import app as app_module
from userapi.app import create_app
from userapi.config.settings import Settings, StoreBackend
from userapi.services.memory_store import InMemoryUserStore
from userapi.services.postgres_store import PostgresUserStore


def test_memory_backend_is_built_and_seeded_at_startup():
    app = create_app(settings=Settings(api_key="k"))

    with TestClient(app) as client:
        response = client.get("/users", headers={"X-API-Key": "k"})

    assert isinstance(app.state.user_store, InMemoryUserStore)
    assert [user["name"] for user in response.json()] == ["Alice", "Bob"]


def test_postgres_backend_opens_and_closes_pool(monkeypatch):
    pool = AsyncMock()
    pool.fetchrow.return_value = {"id": 1, "name": "Alice"}
    init_database = AsyncMock(return_value=pool)
    close_database = AsyncMock()
    monkeypatch.setattr(app_module, "init_database", init_database)
    monkeypatch.setattr(app_module, "close_database", close_database)

    settings = Settings(api_key="k", store_backend=StoreBackend.POSTGRES, db_close_timeout=2.5)
    app = create_app(settings=settings)

    with TestClient(app) as client:
        response = client.get("/users/1", headers={"X-API-Key": "k"})
        close_database.assert_not_awaited()

    assert response.json() == {"id": 1, "name": "Alice"}
    assert isinstance(app.state.user_store, PostgresUserStore)
    init_database.assert_awaited_once_with(settings)
    close_database.assert_awaited_once_with(pool, timeout=2.5)


def test_injected_store_skips_database(monkeypatch):
    init_database = AsyncMock()
    monkeypatch.setattr(app_module, "init_database", init_database)
    store = InMemoryUserStore()

    app = create_app(settings=Settings(store_backend=StoreBackend.POSTGRES), store=store)
    with TestClient(app):
        pass

    init_database.assert_not_awaited()
    assert app.state.user_store is store

"""
Pool startup (connectivity check and table bootstrap) and bounded shutdown
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import asyncpg
import pytest

from userapi.config.settings import Settings
from userapi.database import connection
from userapi.database.connection import CREATE_USERS_TABLE, close_database, init_database


def make_pool(conn):
    pool = MagicMock()
    pool.acquire.return_value.__aenter__.return_value = conn
    pool.acquire.return_value.__aexit__.return_value = False
    pool.close = AsyncMock()
    return pool


def make_conn():
    conn = MagicMock()
    conn.fetchval = AsyncMock(return_value=1)
    conn.execute = AsyncMock()
    return conn


class TestInitDatabase:

    @pytest.mark.asyncio
    async def test_creates_pool_checks_connection_and_table(self, monkeypatch):
        conn = make_conn()
        pool = make_pool(conn)
        create_pool = AsyncMock(return_value=pool)
        monkeypatch.setattr(connection.asyncpg, "create_pool", create_pool)
        settings = Settings(db_host="db", db_port=6543, db_user="app", db_name="users", db_pool_min=1, db_pool_max=3)

        result = await init_database(settings)

        assert result is pool
        kwargs = create_pool.await_args.kwargs
        assert (kwargs["host"], kwargs["port"], kwargs["user"], kwargs["database"]) == ("db", 6543, "app", "users")
        assert (kwargs["min_size"], kwargs["max_size"]) == (1, 3)
        conn.fetchval.assert_awaited_once_with("SELECT 1")
        conn.execute.assert_awaited_once_with(CREATE_USERS_TABLE)
        conn.remove_log_listener.assert_called_once()
        pool.close.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failed_bootstrap_closes_pool(self, monkeypatch):
        conn = make_conn()
        conn.execute.side_effect = asyncpg.exceptions.InsufficientPrivilegeError("permission denied")
        pool = make_pool(conn)
        monkeypatch.setattr(connection.asyncpg, "create_pool", AsyncMock(return_value=pool))

        with pytest.raises(asyncpg.exceptions.InsufficientPrivilegeError):
            await init_database(Settings())

        conn.remove_log_listener.assert_called_once()
        pool.close.assert_awaited_once()


class TestCloseDatabase:

    @pytest.mark.asyncio
    async def test_closes_pool_within_timeout(self):
        pool = MagicMock()
        pool.close = AsyncMock()

        await close_database(pool, timeout=1)

        pool.close.assert_awaited_once()
        pool.terminate.assert_not_called()

    @pytest.mark.asyncio
    async def test_terminates_pool_that_does_not_drain(self):
        async def hang():
            await asyncio.sleep(5)

        pool = MagicMock()
        pool.close = hang

        await close_database(pool, timeout=0.05)

        pool.terminate.assert_called_once()

    @pytest.mark.asyncio
    async def test_no_pool_is_a_noop(self):
        await close_database(None)

"""
Database connection and pool management
"""

import asyncio
import asyncpg
import logging

from userapi.config.settings import Settings

logger = logging.getLogger(__name__)

CREATE_USERS_TABLE = """
    CREATE TABLE IF NOT EXISTS app_users (
        id SERIAL PRIMARY KEY,
        name TEXT
    )
"""


async def init_database(settings: Settings) -> asyncpg.Pool:
    """Create the connection pool and make sure the users table exists"""
    logger.info(f"Initializing connection to {settings.database_target()}")

    db_pool = await asyncpg.create_pool(
        host=settings.db_host,
        port=settings.db_port,
        user=settings.db_user,
        password=settings.db_password,
        database=settings.db_name,
        min_size=settings.db_pool_min,
        max_size=settings.db_pool_max,
        command_timeout=settings.db_command_timeout,
    )

    # Test connection
    try:
        async with db_pool.acquire() as conn:
            conn.add_log_listener(_log_notice)
            try:
                await conn.fetchval("SELECT 1")
                await conn.execute(CREATE_USERS_TABLE)
            finally:
                conn.remove_log_listener(_log_notice)
    except Exception:
        logger.error("Database startup check failed - closing pool")
        await db_pool.close()
        raise

    logger.info("Database initialized successfully")
    return db_pool


async def close_database(db_pool: asyncpg.Pool, timeout: float = 5.0):
    """Close the pool, waiting at most `timeout` seconds for connections to drain"""
    if db_pool is None:
        return

    logger.info("Closing database pool...")
    try:
        await asyncio.wait_for(db_pool.close(), timeout=timeout)
        logger.info("Database connections closed")
    except asyncio.TimeoutError:
        logger.warning(f"Database pool did not drain within {timeout}s - terminating connections")
        db_pool.terminate()


def _log_notice(connection, message):
    logger.info(f"DB Notice: {message.message}")

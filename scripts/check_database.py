"""
Database connectivity smoke test.

Connects with the same DB_* settings as the server, ensures the users table
exists, inserts a probe row, prints the latest rows and removes the probe.

Usage:
    python scripts/check_database.py
"""

import asyncio
import logging
import sys
from datetime import datetime, timezone

from dotenv import load_dotenv

from userapi.config.settings import get_settings
from userapi.database.connection import close_database, init_database

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def check_database() -> bool:
    settings = get_settings()
    logger.info(f"Attempting to connect to database {settings.db_name} on {settings.db_host}:{settings.db_port}...")

    db_pool = None
    try:
        db_pool = await init_database(settings)

        now = await db_pool.fetchval("SELECT NOW()")
        logger.info(f"Database connection successful! Current DB timestamp: {now}")

        probe_name = f"connectivity-check {datetime.now(timezone.utc).isoformat()}"
        probe_id = await db_pool.fetchval("INSERT INTO app_users (name) VALUES ($1) RETURNING id", probe_name)
        logger.info(f"Inserted probe user {probe_id}")

        rows = await db_pool.fetch("SELECT id, name FROM app_users ORDER BY id DESC LIMIT 5")
        for row in rows:
            print(f"  {row['id']}: {row['name']}")

        await db_pool.execute("DELETE FROM app_users WHERE id = $1", probe_id)
        logger.info("Removed probe user")
        return True

    except Exception as e:
        logger.error(f"Database connection or query failed: {e}")
        return False
    finally:
        await close_database(db_pool, timeout=settings.db_close_timeout)


if __name__ == "__main__":
    load_dotenv()
    sys.exit(0 if asyncio.run(check_database()) else 1)

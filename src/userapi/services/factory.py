"""
Store construction from settings
"""

import logging
from typing import Optional

import asyncpg

from userapi.config.settings import Settings, StoreBackend
from userapi.services.base_store import UserStore
from userapi.services.memory_store import InMemoryUserStore
from userapi.services.postgres_store import PostgresUserStore

logger = logging.getLogger(__name__)


def build_user_store(settings: Settings, pool: Optional[asyncpg.Pool] = None) -> UserStore:
    """Create the user store selected by STORE_BACKEND"""
    if settings.store_backend == StoreBackend.POSTGRES:
        if pool is None:
            raise ValueError("Postgres store requires an initialized database pool")
        store = PostgresUserStore(pool, name_match=settings.name_match)
    else:
        store = InMemoryUserStore(
            name_match=settings.name_match,
            seed_sample_users=settings.seed_sample_users,
        )

    logger.info(f"Using {settings.store_backend.value} user store (name match: {store.name_match.value})")
    return store

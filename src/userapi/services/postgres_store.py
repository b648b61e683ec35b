"""
PostgreSQL-backed user store
"""

import logging
from typing import Any, Dict, List, Optional

import asyncpg

from userapi.config.settings import NameMatch
from userapi.models.user import User
from userapi.services.base_store import UserStore

logger = logging.getLogger(__name__)

# Columns a caller may change through update()
UPDATABLE_FIELDS = ("name",)


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input is matched literally"""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class PostgresUserStore(UserStore):
    """
    User store over the app_users table.

    Every method issues exactly one statement on a connection borrowed from
    the pool. Ids come from the table's serial column. Driver errors
    (asyncpg.PostgresError) propagate to the error handling layer.
    """

    default_name_match = NameMatch.PREFIX

    def __init__(self, pool: asyncpg.Pool, name_match: Optional[NameMatch] = None):
        super().__init__(name_match)
        self.pool = pool

    def name_pattern(self, name_filter: str) -> str:
        pattern = escape_like(name_filter.lower()) + "%"
        if self.name_match == NameMatch.SUBSTRING:
            pattern = "%" + pattern
        return pattern

    async def list(self, name: Optional[str] = None) -> List[User]:
        if name:
            rows = await self.pool.fetch(
                "SELECT id, name FROM app_users WHERE LOWER(name) LIKE $1 ESCAPE '\\' ORDER BY id",
                self.name_pattern(name),
            )
        else:
            rows = await self.pool.fetch("SELECT id, name FROM app_users ORDER BY id")
        return [User(**dict(row)) for row in rows]

    async def get(self, user_id: int) -> Optional[User]:
        row = await self.pool.fetchrow("SELECT id, name FROM app_users WHERE id = $1", user_id)
        return User(**dict(row)) if row else None

    async def create(self, name: str) -> User:
        row = await self.pool.fetchrow(
            "INSERT INTO app_users (name) VALUES ($1) RETURNING id, name",
            name,
        )
        user = User(**dict(row))
        logger.info(f"Added user: {user.id}")
        return user

    async def update(self, user_id: int, changes: Dict[str, Any]) -> Optional[User]:
        fields = [field for field in UPDATABLE_FIELDS if field in changes]
        if not fields:
            return await self.get(user_id)

        assignments = ", ".join(f"{field} = ${index}" for index, field in enumerate(fields, start=2))
        row = await self.pool.fetchrow(
            f"UPDATE app_users SET {assignments} WHERE id = $1 RETURNING id, name",
            user_id,
            *(changes[field] for field in fields),
        )
        return User(**dict(row)) if row else None

    async def delete(self, user_id: int) -> Optional[User]:
        row = await self.pool.fetchrow(
            "DELETE FROM app_users WHERE id = $1 RETURNING id, name",
            user_id,
        )
        return User(**dict(row)) if row else None

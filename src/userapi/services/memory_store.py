"""
Process-local user store
"""

import itertools
import logging
from typing import Any, Dict, List, Optional

from userapi.config.settings import NameMatch
from userapi.models.user import User
from userapi.services.base_store import UserStore

logger = logging.getLogger(__name__)

SAMPLE_USER_NAMES = ("Alice", "Bob")


class InMemoryUserStore(UserStore):
    """
    User store held in an insertion-ordered dict.

    Ids come from a counter owned by the instance, so they are never reused
    after a delete. Nothing here awaits, so every operation runs to completion
    within a single request.
    """

    default_name_match = NameMatch.SUBSTRING

    def __init__(self, name_match: Optional[NameMatch] = None, seed_sample_users: bool = False):
        super().__init__(name_match)
        self._users: Dict[int, User] = {}
        self._ids = itertools.count()

        if seed_sample_users:
            for name in SAMPLE_USER_NAMES:
                self._insert(name)
            logger.info(f"Seeded in-memory store with {len(SAMPLE_USER_NAMES)} sample users")

    def _insert(self, name: str) -> User:
        user = User(id=next(self._ids), name=name)
        self._users[user.id] = user
        return user

    async def list(self, name: Optional[str] = None) -> List[User]:
        users = list(self._users.values())
        if name:
            users = [user for user in users if self.matches_name(user.name, name)]
        return users

    async def get(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    async def create(self, name: str) -> User:
        user = self._insert(name)
        logger.info(f"Added user: {user.id}")
        return user

    async def update(self, user_id: int, changes: Dict[str, Any]) -> Optional[User]:
        user = self._users.get(user_id)
        if user is None:
            return None

        merged = {**user.model_dump(), **changes, "id": user_id}
        self._users[user_id] = User(**merged)
        return self._users[user_id]

    async def delete(self, user_id: int) -> Optional[User]:
        return self._users.pop(user_id, None)

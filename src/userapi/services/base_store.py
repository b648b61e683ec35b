"""
Storage interface shared by every user store backend
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from userapi.config.settings import NameMatch
from userapi.models.user import User


class UserStore(ABC):
    """Registry of user records. Route handlers only ever talk to this interface."""

    default_name_match = NameMatch.SUBSTRING

    def __init__(self, name_match: Optional[NameMatch] = None):
        self.name_match = name_match or self.default_name_match

    @abstractmethod
    async def list(self, name: Optional[str] = None) -> List[User]:
        """All records in creation order, optionally filtered by name (case-insensitive)"""

    @abstractmethod
    async def get(self, user_id: int) -> Optional[User]:
        """Record with the given id, or None"""

    @abstractmethod
    async def create(self, name: str) -> User:
        """Store a new record under the next id"""

    @abstractmethod
    async def update(self, user_id: int, changes: Dict[str, Any]) -> Optional[User]:
        """Merge changes over an existing record. None if the id is unknown."""

    @abstractmethod
    async def delete(self, user_id: int) -> Optional[User]:
        """Remove and return a record. None if the id is unknown."""

    def matches_name(self, candidate: str, name_filter: str) -> bool:
        candidate = candidate.lower()
        name_filter = name_filter.lower()
        if self.name_match == NameMatch.PREFIX:
            return candidate.startswith(name_filter)
        return name_filter in candidate

from abc import ABC, abstractmethod
from typing import Any, Optional

from src.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def find(self, field: str, value: Any) -> Optional[User]:
        """Get the first user whose `field` equals `value`"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

from typing import Any, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find(self, field: str, value: Any) -> Optional[User]:
        """Get the first user whose `field` equals `value`"""
        if field not in User.model_fields:
            raise ValueError(f"User has no field '{field}'")
        stmt = select(User).where(getattr(User, field) == value).limit(1)
        result = await self.session.exec(stmt)
        return result.first()

    async def update(self, user: User) -> User:
        """Update existing user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

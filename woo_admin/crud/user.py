from typing import Optional
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from woo_admin.db.base import get_db
from woo_admin.db.models.user import User

class UserRepository:
    """Reads tenant rows from the users table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id) -> Optional[User]:
        if user_id is None or user_id == "":
            return None
        try:
            user_id = int(user_id)
        except (TypeError, ValueError):
            return None
        stmt = select(User).where(User.id == user_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def get_by_email(self, email: str) -> Optional[User]:
        if not email:
            return None
        stmt = select(User).where(User.email == email)
        result = await self.db.execute(stmt)
        return result.scalars().first()

async def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(db)

from typing import List
from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from woo_admin.db.base import get_db
from woo_admin.db.models.push_token import PushToken

class TokenRegistry:
    """Durable set of device push tokens. Saving the same token twice is a no-op."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def save(self, token: str) -> None:
        stmt = select(PushToken).where(PushToken.token == token)
        result = await self.db.execute(stmt)
        if result.scalars().first():
            return

        self.db.add(PushToken(token=token))
        try:
            await self.db.commit()
        except IntegrityError:
            # A concurrent request stored the same token first
            await self.db.rollback()

    async def list_tokens(self) -> List[str]:
        result = await self.db.execute(select(PushToken.token).order_by(PushToken.created_at))
        return list(result.scalars().all())

async def get_token_registry(db: AsyncSession = Depends(get_db)) -> TokenRegistry:
    return TokenRegistry(db)

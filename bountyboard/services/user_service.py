"""
BountyBoard - User Service
"""
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bountyboard.core.errors import UserNotFoundError
from bountyboard.models import User
from bountyboard.schemas.user import UserCreate

logger = logging.getLogger(__name__)


class UserService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, data: UserCreate) -> User:
        user = User(**data.model_dump())
        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)
        logger.info(f"User registered: {user.username} ({user.id})")
        return user

    async def get(self, user_id: str) -> User:
        user = await self.find(user_id)
        if not user:
            raise UserNotFoundError(user_id)
        return user

    async def find(self, user_id: Optional[str]) -> Optional[User]:
        if not user_id:
            return None
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def update_wallet(self, user_id: str, wallet_address: Optional[str]) -> User:
        user = await self.get(user_id)
        user.wallet_address = wallet_address
        await self.db.flush()
        await self.db.refresh(user)
        return user

    async def list_organizations(self) -> List[str]:
        """Distinct, non-blank organizations of registered users, sorted"""
        result = await self.db.execute(select(User.organization).distinct())
        orgs = {org.strip() for org in result.scalars().all() if org and org.strip()}
        return sorted(orgs)

"""User service for station listeners."""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import ConflictError
from ..core.logging import get_logger
from ..models import User

logger = get_logger(__name__)


class UserService:
    """Service for managing listeners."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    async def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def by_name(self) -> List[User]:
        """All listeners ordered by name."""
        result = await self.db.execute(select(User).order_by(User.name))
        return list(result.scalars().all())

    async def create_user(self, name: str, email: str) -> User:
        existing = await self.db.execute(select(User).where(User.email == email))
        if existing.scalar_one_or_none() is not None:
            raise ConflictError(message=f"User with email {email} already exists", details={"email": email})

        user = User(name=name, email=email)
        self.db.add(user)
        await self.db.commit()

        logger.info("user_created", user_id=str(user.id), name=name)
        return user

"""User persistence service."""
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cafe.core.enums import UserRole
from cafe.core.errors import DuplicateRecordError, PersistenceError
from cafe.db.models import User

logger = logging.getLogger(__name__)


class UserPersistenceService:
    """Service for persisting users."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_user(
        self,
        email: str,
        name: str,
        phone: Optional[str] = None,
        role: UserRole = UserRole.CUSTOMER,
    ) -> User:
        """Create a user. Email addresses are unique."""
        if await self.get_user_by_email(email):
            raise DuplicateRecordError(f"User with email {email} already exists")

        user = User(email=email, name=name, phone=phone, role=UserRole(role).value)
        self.db.add(user)
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"[USERS] Database error creating user: {type(e).__name__}: {e}", exc_info=True)
            raise PersistenceError("Failed to create user") from e

        await self.db.refresh(user)
        return user

    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_user_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

"""User service: lookups and signup.

Routes and the auth gate go through this instead of querying the session
directly. Email lookups hit the unique index on users.email_address.
"""

from typing import Optional

import structlog
from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from courseapi.db.models import User

logger = structlog.get_logger()


class DuplicateEmailError(Exception):
    """Insert hit the unique index on email_address."""


class UserService:
    """Persistence operations for users."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_user_by_email(self, email: str) -> Optional[User]:
        """Point lookup by login identifier. Case-sensitive."""
        result = await self.db.execute(
            select(User).where(User.email_address == email)
        )
        return result.scalars().first()

    async def email_exists(self, email: str) -> bool:
        result = await self.db.execute(
            select(exists().where(User.email_address == email))
        )
        return bool(result.scalar())

    async def create_user(
        self,
        first_name: str,
        last_name: str,
        email_address: str,
        password_hash: str,
    ) -> User:
        """Insert a user whose password is already hashed.

        Raises DuplicateEmailError if another request registered the same
        email between validation and insert.
        """
        user = User(
            first_name=first_name,
            last_name=last_name,
            email_address=email_address,
            password=password_hash,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise DuplicateEmailError(email_address) from e

        await self.db.refresh(user)
        logger.info("user.created", user_id=user.id)
        return user

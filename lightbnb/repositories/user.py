"""
User repository for account lookup and creation.
Passwords are stored exactly as given; hashing happens before this layer.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, insert
from lightbnb.repositories.base import BaseRepository, Record
from lightbnb.models.user import User
from typing import Optional, Mapping, Any
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for reading and creating users."""

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def get_user_with_email(self, email: str) -> Optional[Record]:
        """
        Get a single user given their email.

        The comparison is exact; case sensitivity follows the column collation.

        Args:
            email: Email address to search for

        Returns:
            User record if found, None otherwise
        """
        try:
            query = select(*self.columns).where(User.email == email)
            user = await self.fetch_one(query)

            if user:
                logger.debug(f"Retrieved user by email: {email}")
            else:
                logger.debug(f"User with email {email} not found")

            return user
        except Exception as e:
            logger.error(f"Failed to get user by email {email}: {e}")
            raise

    async def get_user_with_id(self, user_id: Any) -> Optional[Record]:
        """
        Get a single user given their id.

        Args:
            user_id: Primary key of the user

        Returns:
            User record if found, None otherwise
        """
        try:
            query = select(*self.columns).where(User.id == user_id)
            user = await self.fetch_one(query)

            if user:
                logger.debug(f"Retrieved user with id: {user_id}")
            else:
                logger.debug(f"User with id {user_id} not found")

            return user
        except Exception as e:
            logger.error(f"Failed to get user by id {user_id}: {e}")
            raise

    async def add_user(self, user: Mapping[str, Any]) -> Record:
        """
        Add a new user.

        No uniqueness pre-check is made: a duplicate email surfaces as the
        store's integrity error.

        Args:
            user: Mapping with name, email and password

        Returns:
            The created user record
        """
        try:
            stmt = (
                insert(User)
                .values(
                    name=user.get("name"),
                    email=user.get("email"),
                    password=user.get("password"),
                )
                .returning(*self.columns)
            )
            created_user = await self.insert_returning(stmt)
            logger.info(f"Created user: {created_user['email']} (ID: {created_user['id']})")
            return created_user
        except Exception as e:
            logger.error(f"Failed to create user: {e}")
            raise

# ski_scheduler/adapters/outbound/persistence/repositories/user_repository.py

"""
Repository for user operations.

Implements the credential store: lookup by username, creation with a
password hash, deletion by username and listing.
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError

from ski_scheduler.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from ski_scheduler.adapters.outbound.persistence.models import User
from ski_scheduler.application.ports.outbound import ICredentialStore
from ski_scheduler.domain.models.user_domain_model import User as DomainUser
from ski_scheduler.domain.exceptions import (
    ConflictException,
    DuplicateUserException,
    ResourceNotFoundException,
    DatabaseOperationException,
)


class AsyncUserCRUD(AsyncCRUDBase[User], ICredentialStore):
    """
    Async CRUD repository for the User entity.

    Username uniqueness is enforced by the unique index on the table;
    the lookup before insert only gives a friendlier early failure.
    """

    async def get_by_username(self, db: AsyncSession, username: str) -> Optional[User]:
        """
        Find a user by username (case-sensitive).

        Raises:
            DatabaseOperationException: In case of database error
        """
        try:
            query = select(User).where(User.username == username)
            result = await db.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            self.logger.error(f"Error fetching user by username '{username}': {e}")
            raise DatabaseOperationException(
                detail="Error fetching user by username",
                original_error=e
            )

    async def create_with_password(
            self,
            db: AsyncSession,
            *,
            username: str,
            password_hash: str,
            admin: bool
    ) -> User:
        """
        Create a new user from an already hashed password.

        Raises:
            DuplicateUserException: If the username is already taken
            DatabaseOperationException: In case of database error
        """
        existing_user = await self.get_by_username(db, username=username)
        if existing_user:
            self.logger.warning(f"Attempt to create user with existing username: {username}")
            raise DuplicateUserException()

        try:
            db_obj = await self.add(db, User(username=username, password=password_hash, admin=admin))
        except ConflictException:
            # Lost a race against a concurrent registration
            self.logger.warning(f"Unique constraint rejected username: {username}")
            raise DuplicateUserException()

        self.logger.info(f"User created with username: {db_obj.username}")
        return db_obj

    async def delete_by_username(self, db: AsyncSession, *, username: str, commit: bool = True) -> User:
        """
        Delete a user by username and return the deleted record.

        Raises:
            ResourceNotFoundException: If no user has that username
        """
        user = await self.get_by_username(db, username=username)
        if not user:
            raise ResourceNotFoundException(detail=f"No user found with username: {username}")
        return await self.delete_instance(db, user, commit=commit)

    async def list_users(self, db: AsyncSession) -> List[DomainUser]:
        users = await self.get_multi(db)
        return [self.to_domain(user) for user in users]

    def to_domain(self, db_model: User) -> DomainUser:
        """Convert the ORM model to the domain model."""
        return DomainUser(
            id=db_model.id,
            username=db_model.username,
            password=db_model.password,
            admin=db_model.admin,
        )


# Public instance to be used by use cases
user_repository = AsyncUserCRUD(User)

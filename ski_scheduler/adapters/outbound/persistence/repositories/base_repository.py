# ski_scheduler/adapters/outbound/persistence/repositories/base_repository.py

from typing import Any, Generic, List, Optional, Type, TypeVar
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from sqlalchemy.future import select
import logging

from ski_scheduler.adapters.outbound.persistence.models.base_model import Base
from ski_scheduler.domain.exceptions import (
    ConflictException,
    ResourceNotFoundException,
    DatabaseOperationException
)

# Define generic type for SQLAlchemy models
ModelType = TypeVar("ModelType", bound=Base)


class AsyncCRUDBase(Generic[ModelType]):
    """
    Async base class for implementing the Repository pattern.

    Provides generic operations with consistent error handling and logging.
    Mutating methods take ``commit``: with ``commit=False`` they only flush,
    so a caller can group several of them into one transaction.

    Attributes:
        model: SQLAlchemy model class
        logger: Configured logger for the class
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    async def get(self, db: AsyncSession, id: Any) -> Optional[ModelType]:
        """
        Get an entity by ID.

        Args:
            db: Async database session
            id: ID of the entity

        Returns:
            Entity found or None if it doesn't exist
        """
        try:
            query = select(self.model).where(self.model.id == id)
            result = await db.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            self.logger.error(f"Error fetching {self.model.__name__} with ID {id}: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error fetching {self.model.__name__}",
                original_error=e
            )

    async def get_multi(self, db: AsyncSession, **filters) -> List[ModelType]:
        """
        Get every entity matching the equality filters (field=value).

        Raises:
            DatabaseOperationException: If an error occurs in the query
        """
        try:
            query = select(self.model)
            for field, value in filters.items():
                query = query.where(getattr(self.model, field) == value)

            result = await db.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing {self.model.__name__}s: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error listing {self.model.__name__}s",
                original_error=e
            )

    async def add(self, db: AsyncSession, db_obj: ModelType, *, commit: bool = True) -> ModelType:
        """
        Persist a new model instance.

        Raises:
            ConflictException: A unique constraint rejected the row
            DatabaseOperationException: If another database error occurs
        """
        try:
            db.add(db_obj)
            await self._save(db, db_obj, commit)
            self.logger.info(f"{self.model.__name__} created with ID: {db_obj.id}")
            return db_obj

        except IntegrityError as e:
            await db.rollback()
            self.logger.warning(f"Integrity error creating {self.model.__name__}: {str(e)}")
            raise ConflictException(
                detail=f"{self.model.__name__} with these data already exists"
            )

        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Error creating {self.model.__name__}: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error creating {self.model.__name__}",
                original_error=e
            )

    async def update_fields(self, db: AsyncSession, *, db_obj: ModelType, commit: bool = True,
                            **values) -> ModelType:
        """Set attributes on an existing entity and persist them."""
        try:
            for field, value in values.items():
                setattr(db_obj, field, value)
            db.add(db_obj)
            await self._save(db, db_obj, commit)
            return db_obj
        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Error updating {self.model.__name__}: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error updating {self.model.__name__}",
                original_error=e
            )

    async def remove(self, db: AsyncSession, *, id: Any, commit: bool = True) -> ModelType:
        """
        Delete an entity by ID and return it.

        Raises:
            ResourceNotFoundException: If the entity is not found
        """
        db_obj = await self.get(db, id=id)
        if not db_obj:
            raise ResourceNotFoundException(
                detail=f"{self.model.__name__} not found",
                resource_id=id
            )
        return await self.delete_instance(db, db_obj, commit=commit)

    async def delete_instance(self, db: AsyncSession, db_obj: ModelType, *, commit: bool = True) -> ModelType:
        try:
            await db.delete(db_obj)
            if commit:
                await db.commit()
            else:
                await db.flush()
            self.logger.info(f"{self.model.__name__} deleted with ID: {db_obj.id}")
            return db_obj
        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Error deleting {self.model.__name__}: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error deleting {self.model.__name__}",
                original_error=e
            )

    @staticmethod
    async def _save(db: AsyncSession, db_obj: ModelType, commit: bool) -> None:
        if commit:
            await db.commit()
            await db.refresh(db_obj)
        else:
            await db.flush()

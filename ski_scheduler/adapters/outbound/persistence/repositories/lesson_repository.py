# ski_scheduler/adapters/outbound/persistence/repositories/lesson_repository.py

from typing import Any, Dict, List, Optional
from uuid import UUID
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ski_scheduler.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from ski_scheduler.adapters.outbound.persistence.models import Lesson
from ski_scheduler.application.ports.outbound import ILessonRepository
from ski_scheduler.domain.exceptions import DatabaseOperationException, ResourceNotFoundException
from ski_scheduler.domain.models.lesson_domain_model import UNASSIGNED


class AsyncLessonCRUD(AsyncCRUDBase[Lesson], ILessonRepository):
    """Async CRUD repository for the Lesson entity."""

    async def create_lesson(self, db: AsyncSession, *, lesson_data: Dict[str, Any]) -> Lesson:
        return await self.add(db, Lesson(**lesson_data))

    async def get_by_assignee(self, db: AsyncSession, assigned_to: str) -> List[Lesson]:
        return await self.get_multi(db, assigned_to=assigned_to)

    async def switch_assignment(
            self,
            db: AsyncSession,
            *,
            lesson_id: UUID,
            assigned_to: str,
            commit: bool = True
    ) -> Lesson:
        """
        Assign a lesson to a user id or to the unassigned sentinel.

        Raises:
            ResourceNotFoundException: If the lesson does not exist
        """
        lesson = await self.get(db, id=lesson_id)
        if not lesson:
            raise ResourceNotFoundException(detail="Lesson not found", resource_id=lesson_id)

        lesson = await self.update_fields(db, db_obj=lesson, commit=commit, assigned_to=assigned_to)
        self.logger.info(f"Lesson {lesson.id} assigned to {assigned_to}")
        return lesson

    async def claim_unassigned(self, db: AsyncSession, *, lesson_id: UUID, assigned_to: str) -> Optional[Lesson]:
        """
        Assign a lesson only while it is still unassigned.

        The check and the write are one UPDATE statement, so of two callers
        racing for the same lesson exactly one gets it.

        Returns:
            The claimed lesson, or None if it was missing or already taken
        """
        try:
            result = await db.execute(
                update(Lesson)
                .where(Lesson.id == lesson_id, Lesson.assigned_to == UNASSIGNED)
                .values(assigned_to=assigned_to)
                .execution_options(synchronize_session=False)
            )
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Error claiming Lesson {lesson_id}: {str(e)}")
            raise DatabaseOperationException(detail="Error updating Lesson", original_error=e)

        if result.rowcount != 1:
            return None

        self.logger.info(f"Lesson {lesson_id} claimed by {assigned_to}")
        return await db.get(Lesson, lesson_id, populate_existing=True)


lesson_repository = AsyncLessonCRUD(Lesson)

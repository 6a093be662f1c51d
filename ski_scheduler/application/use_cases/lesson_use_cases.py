# ski_scheduler/application/use_cases/lesson_use_cases.py

import logging
from typing import List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from ski_scheduler.adapters.outbound.persistence.repositories.lesson_repository import lesson_repository
from ski_scheduler.adapters.outbound.persistence.repositories.user_repository import user_repository
from ski_scheduler.application.dtos.lesson_dto import LessonCreate, LessonOutput
from ski_scheduler.application.dtos.user_dto import UserOutput
from ski_scheduler.application.ports.inbound import ILessonUseCase
from ski_scheduler.domain.models.lesson_domain_model import UNASSIGNED, LessonState, lesson_state
from ski_scheduler.domain.models.user_domain_model import Credentials
from ski_scheduler.domain.exceptions import (
    ConflictException,
    PermissionDeniedException,
    ResourceNotFoundException,
    ValidationException,
)
from ski_scheduler.shared.utils.input_validation import InputValidator

logger = logging.getLogger(__name__)

REQUIRED_LESSON_FIELDS = ("type", "date", "time_length", "guests", "assigned_to")


class AsyncLessonService(ILessonUseCase):
    """
    Lesson scheduling: admins create and remove lessons, instructors
    see their calendar and claim lessons from the board.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    @staticmethod
    def _require_admin(credentials: Credentials) -> None:
        if not credentials.admin:
            logger.warning(f"Non-admin '{credentials.username}' attempted an admin action")
            raise PermissionDeniedException()

    async def create_lesson(self, credentials: Credentials, data: LessonCreate) -> LessonOutput:
        """
        Create a lesson, either unassigned or for an existing instructor.

        Raises:
            PermissionDeniedException: Caller is not an admin
            ValidationException: Missing field, no guests or unknown assignee
        """
        self._require_admin(credentials)

        labels = InputValidator.field_labels(REQUIRED_LESSON_FIELDS)
        InputValidator.require({labels[name]: getattr(data, name) for name in REQUIRED_LESSON_FIELDS})
        InputValidator.require_positive("Guests", data.guests)

        if data.assigned_to != UNASSIGNED:
            try:
                assignee = await user_repository.get(self.db, id=UUID(data.assigned_to))
            except ValueError:
                assignee = None
            if not assignee:
                raise ValidationException(f"AssignedTo must be '{UNASSIGNED}' or an existing user id")
            # Canonical id form, as compared by the calendar and the self-delete cascade
            data = data.model_copy(update={"assigned_to": str(assignee.id)})

        lesson = await lesson_repository.create_lesson(
            self.db,
            lesson_data=data.model_dump(include=set(REQUIRED_LESSON_FIELDS)),
        )
        return LessonOutput.model_validate(lesson)

    async def retrieve_lessons(self, credentials: Credentials, available_only: bool) -> List[LessonOutput]:
        """Unassigned lessons for the board, otherwise the caller's own lessons."""
        assigned_to = UNASSIGNED if available_only else credentials.user_id
        lessons = await lesson_repository.get_by_assignee(self.db, assigned_to)
        return [LessonOutput.model_validate(lesson) for lesson in lessons]

    async def claim_lesson(self, credentials: Credentials, lesson_id: UUID) -> LessonOutput:
        """
        Assign an unassigned lesson to the caller.

        Claiming a lesson the caller already holds returns it unchanged.

        Raises:
            ResourceNotFoundException: Unknown lesson
            ConflictException: Lesson already assigned to someone else
        """
        lesson = await lesson_repository.get(self.db, id=lesson_id)
        if not lesson:
            raise ResourceNotFoundException(detail="Lesson not found", resource_id=lesson_id)

        if lesson.assigned_to == credentials.user_id:
            return LessonOutput.model_validate(lesson)

        if lesson_state(lesson.assigned_to) is LessonState.ASSIGNED:
            raise ConflictException("Lesson is already assigned to another instructor")

        # The lesson may have been taken since it was read
        claimed = await lesson_repository.claim_unassigned(
            self.db,
            lesson_id=lesson_id,
            assigned_to=credentials.user_id,
        )
        if not claimed:
            raise ConflictException("Lesson is already assigned to another instructor")
        return LessonOutput.model_validate(claimed)

    async def remove_lesson(self, credentials: Credentials, lesson_id: UUID) -> LessonOutput:
        self._require_admin(credentials)
        lesson = await lesson_repository.remove(self.db, id=lesson_id)
        return LessonOutput.model_validate(lesson)

    async def list_users(self, credentials: Credentials) -> List[UserOutput]:
        self._require_admin(credentials)
        users = await user_repository.list_users(self.db)
        return [UserOutput.model_validate(user) for user in users]

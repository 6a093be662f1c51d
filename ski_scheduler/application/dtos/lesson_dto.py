# ski_scheduler/application/dtos/lesson_dto.py

from typing import Optional
from uuid import UUID

from pydantic import Field

from ski_scheduler.application.dtos.base_dto import CustomBaseModel


class LessonCreate(CustomBaseModel):
    """Lesson fields sent by the admin form; completeness is checked by the service."""
    type: Optional[str] = Field(None, description="Free-text label, e.g. 'Private ski'.")
    date: Optional[str] = Field(None, description="Lesson date as sent by the client.")
    time_length: Optional[str] = Field(None, description="Free-text duration, e.g. '2h'.")
    guests: Optional[int] = Field(None, description="Number of guests.")
    assigned_to: Optional[str] = Field(None, description="User id, or 'None' for unassigned.")


class CreateLessonRequest(CustomBaseModel):
    lesson_data: LessonCreate = Field(default_factory=LessonCreate)


class LessonOutput(CustomBaseModel):
    id: UUID
    type: str
    date: str
    time_length: str
    guests: int
    assigned_to: str

# ski_scheduler/adapters/outbound/persistence/models/lesson_model.py

import uuid

from sqlalchemy import Column, Integer, String, Uuid

from ski_scheduler.adapters.outbound.persistence.models.base_model import Base
from ski_scheduler.domain.models.lesson_domain_model import UNASSIGNED


class Lesson(Base):
    """
    A scheduled ski/snowboard lesson.

    ``assigned_to`` holds the string form of a user id, or the
    sentinel ``"None"`` while nobody has claimed the lesson.
    """
    __tablename__ = "lessons"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    type = Column(String, nullable=False)
    date = Column(String, nullable=False)
    time_length = Column(String, nullable=False)
    guests = Column(Integer, nullable=False)
    assigned_to = Column(String, nullable=False, default=UNASSIGNED, index=True)

    def __repr__(self) -> str:
        return f"<Lesson(id={self.id}, date={self.date}, assigned_to={self.assigned_to})>"

# ski_scheduler/adapters/outbound/persistence/repositories/__init__.py

"""
Repository module.

Exports the repository classes and their shared instances.
"""

from ski_scheduler.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from ski_scheduler.adapters.outbound.persistence.repositories.user_repository import (
    AsyncUserCRUD,
    user_repository,
)
from ski_scheduler.adapters.outbound.persistence.repositories.lesson_repository import (
    AsyncLessonCRUD,
    lesson_repository,
)

__all__ = [
    # Classes
    "AsyncCRUDBase",
    "AsyncUserCRUD",
    "AsyncLessonCRUD",

    # Instances
    "user_repository",
    "lesson_repository",
]

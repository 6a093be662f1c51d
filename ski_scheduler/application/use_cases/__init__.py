# ski_scheduler/application/use_cases/__init__.py

"""
Application service module.

Account and session handling live in the auth service, the lesson board
and instructor calendars in the lesson service.
"""

from ski_scheduler.application.use_cases.auth_use_cases import AsyncAuthService
from ski_scheduler.application.use_cases.lesson_use_cases import AsyncLessonService

__all__ = [
    "AsyncAuthService",
    "AsyncLessonService",
]

# ski_scheduler/application/ports/inbound.py

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from ski_scheduler.application.dtos.lesson_dto import LessonCreate, LessonOutput
from ski_scheduler.application.dtos.user_dto import UserOutput
from ski_scheduler.domain.models.user_domain_model import Credentials


class IAuthUseCase(ABC):
    """Interface for authentication use cases."""

    @abstractmethod
    async def register_user(self, username: Optional[str], password: Optional[str],
                            admin: Optional[bool]) -> None:
        """Register a new user."""
        pass

    @abstractmethod
    async def login_user(self, username: Optional[str], password: Optional[str]) -> str:
        """Authenticate a user and return a session token."""
        pass

    @abstractmethod
    async def logout_user(self, token: Optional[str]) -> None:
        """Revoke a session token."""
        pass

    @abstractmethod
    async def decode_token(self, token: Optional[str]) -> Credentials:
        """Return the identity embedded in a token."""
        pass

    @abstractmethod
    async def self_delete(self, token: Optional[str]) -> str:
        """Delete the token owner's account."""
        pass


class ILessonUseCase(ABC):
    """Interface for lesson use cases."""

    @abstractmethod
    async def create_lesson(self, credentials: Credentials, data: LessonCreate) -> LessonOutput:
        pass

    @abstractmethod
    async def retrieve_lessons(self, credentials: Credentials, available_only: bool) -> List[LessonOutput]:
        pass

    @abstractmethod
    async def claim_lesson(self, credentials: Credentials, lesson_id: UUID) -> LessonOutput:
        pass

    @abstractmethod
    async def remove_lesson(self, credentials: Credentials, lesson_id: UUID) -> LessonOutput:
        pass

    @abstractmethod
    async def list_users(self, credentials: Credentials) -> List[UserOutput]:
        pass

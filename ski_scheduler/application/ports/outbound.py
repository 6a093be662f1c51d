# ski_scheduler/application/ports/outbound.py

from abc import ABC, abstractmethod
from typing import Any, List, Optional


class ICredentialStore(ABC):
    """User credential storage interface."""

    @abstractmethod
    async def get_by_username(self, db, username: str) -> Optional[Any]:
        """Get user by username, or None."""
        pass

    @abstractmethod
    async def create_with_password(self, db, *, username: str, password_hash: str, admin: bool) -> Any:
        """Create a user; fails with DuplicateUser when the username is taken."""
        pass

    @abstractmethod
    async def delete_by_username(self, db, *, username: str, commit: bool = True) -> Any:
        """Delete a user; fails with NotFound when absent."""
        pass


class ILessonRepository(ABC):
    """Lesson storage interface."""

    @abstractmethod
    async def get_by_assignee(self, db, assigned_to: str) -> List[Any]:
        """Lessons whose assigned_to equals the given value."""
        pass

    @abstractmethod
    async def switch_assignment(self, db, *, lesson_id: Any, assigned_to: str, commit: bool = True) -> Any:
        """Point a lesson at another user id (or the unassigned sentinel)."""
        pass

    @abstractmethod
    async def claim_unassigned(self, db, *, lesson_id: Any, assigned_to: str) -> Optional[Any]:
        """Assign a lesson if it is still unassigned; None when it is not."""
        pass


class ITokenBlacklist(ABC):
    """Revoked token registry interface."""

    @abstractmethod
    def add(self, token: str) -> None:
        pass

    @abstractmethod
    def has(self, token: str) -> bool:
        pass

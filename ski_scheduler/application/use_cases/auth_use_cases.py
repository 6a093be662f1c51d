# ski_scheduler/application/use_cases/auth_use_cases.py

"""
Service for user authentication.

Registration, login, logout (token revocation), token decoding and
self-service account deletion with its lesson cascade.
"""

import logging
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from ski_scheduler.adapters.outbound.persistence.repositories.user_repository import user_repository
from ski_scheduler.adapters.outbound.persistence.repositories.lesson_repository import lesson_repository
from ski_scheduler.adapters.outbound.security.auth_user_manager import UserAuthManager
from ski_scheduler.application.ports.inbound import IAuthUseCase
from ski_scheduler.application.ports.outbound import ITokenBlacklist
from ski_scheduler.domain.models.lesson_domain_model import UNASSIGNED
from ski_scheduler.domain.models.token_domain_model import TokenState
from ski_scheduler.domain.models.user_domain_model import Credentials
from ski_scheduler.domain.exceptions import (
    ExpiredTokenError,
    InvalidCredentialsException,
    ResourceNotFoundException,
    UnauthorizedException,
)
from ski_scheduler.shared.utils.input_validation import InputValidator

logger = logging.getLogger(__name__)


class AsyncAuthService(IAuthUseCase):
    """
    Business logic of authentication.

    Args:
        db_session: Active SQLAlchemy session
        blacklist: Process-wide registry of revoked tokens
    """

    def __init__(self, db_session: AsyncSession, blacklist: ITokenBlacklist):
        self.db = db_session
        self.blacklist = blacklist

    async def register_user(self, username: Optional[str], password: Optional[str],
                            admin: Optional[bool]) -> None:
        """
        Register a new user.

        Raises:
            ValidationException: If a field is missing or too long
            DuplicateUserException: If the username is already taken
        """
        InputValidator.require({"Username": username, "Password": password, "Admin": admin})
        InputValidator.validate_username(username)
        InputValidator.validate_password(password)

        password_hash = await UserAuthManager.hash_password(password)
        await user_repository.create_with_password(
            self.db,
            username=username,
            password_hash=password_hash,
            admin=bool(admin),
        )
        logger.info(f"Registered user '{username}' (admin={bool(admin)})")

    async def login_user(self, username: Optional[str], password: Optional[str]) -> str:
        """
        Check credentials and issue a session token.

        Raises:
            ValidationException: If a field is missing
            InvalidCredentialsException: Unknown user or wrong password (same message)
        """
        InputValidator.require({"Username": username, "Password": password})

        user = await user_repository.get_by_username(self.db, username=username)
        if not user:
            logger.warning(f"Login attempt with non-existent username: {username}")
            raise InvalidCredentialsException()

        if not await UserAuthManager.verify_password(password, user.password):
            logger.warning(f"Login attempt with incorrect password: {username}")
            raise InvalidCredentialsException()

        return await UserAuthManager.create_access_token(
            user_id=str(user.id),
            username=user.username,
            admin=user.admin,
        )

    async def logout_user(self, token: Optional[str]) -> None:
        """
        Revoke a token until it expires. Calling it twice is harmless.

        An already expired token cannot be used any more, so logging it
        out succeeds without touching the blacklist.

        Raises:
            ValidationException: If the token is missing
            UnauthorizedException: If the token is forged or undecodable
        """
        InputValidator.require({"Token": token})
        try:
            await UserAuthManager.verify_access_token(token)
        except ExpiredTokenError:
            logger.debug("Logout with an expired token; nothing to revoke")
            return

        self.blacklist.add(token)
        logger.info("Token added to blacklist")

    async def decode_token(self, token: Optional[str]) -> Credentials:
        """
        Verify signature and expiry and return the token's identity.

        The blacklist is not consulted here; callers that must reject
        revoked tokens check ``blacklist.has`` as well.

        Raises:
            UnauthorizedException: Missing, malformed, forged or expired token
        """
        if not token:
            raise UnauthorizedException("No token provided")
        return await UserAuthManager.verify_access_token(token)

    async def token_state(self, token: Optional[str]) -> TokenState:
        """Classify a token as valid, expired, revoked or invalid."""
        try:
            await self.decode_token(token)
        except ExpiredTokenError:
            return TokenState.EXPIRED
        except UnauthorizedException:
            return TokenState.INVALID

        if self.blacklist.has(token):
            return TokenState.REVOKED
        return TokenState.VALID

    async def self_delete(self, token: Optional[str]) -> str:
        """
        Delete the token owner's account.

        Every lesson assigned to the user is set back to unassigned, one
        after the other, then the user record is removed. All of it is
        committed together, so a failure leaves nothing half done.

        Returns:
            Username of the deleted account

        Raises:
            UnauthorizedException: Bad token
            ResourceNotFoundException: The user no longer exists
            DatabaseOperationException: Storage failure (everything rolled back)
        """
        credentials = await self.decode_token(token)

        # The username may belong to a newer account than the token's
        user = await user_repository.get_by_username(self.db, username=credentials.username)
        if not user or str(user.id) != credentials.user_id:
            raise ResourceNotFoundException(detail=f"No user found with username: {credentials.username}")

        try:
            lessons = await lesson_repository.get_by_assignee(self.db, credentials.user_id)
            for lesson in lessons:
                await lesson_repository.switch_assignment(
                    self.db,
                    lesson_id=lesson.id,
                    assigned_to=UNASSIGNED,
                    commit=False,
                )

            await user_repository.delete_by_username(self.db, username=credentials.username, commit=False)
            await self.db.commit()

        except Exception:
            await self.db.rollback()
            logger.warning(f"Self-delete of '{credentials.username}' rolled back")
            raise

        logger.info(f"User '{credentials.username}' deleted; {len(lessons)} lessons unassigned")
        return credentials.username

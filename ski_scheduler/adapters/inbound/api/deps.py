# ski_scheduler/adapters/inbound/api/deps.py

"""
Dependencies for injection into API endpoints.

Provides the database session, the application services, the shared
token blacklist and bearer-token authentication via FastAPI Depends().
"""

import logging
from typing import Optional
from fastapi import Depends, Request, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from ski_scheduler.adapters.inbound.api.errors import ApiError
from ski_scheduler.adapters.outbound.persistence.database import get_db
from ski_scheduler.adapters.outbound.security.token_blacklist import TokenBlacklist
from ski_scheduler.application.use_cases.auth_use_cases import AsyncAuthService
from ski_scheduler.application.use_cases.lesson_use_cases import AsyncLessonService
from ski_scheduler.domain.exceptions import RevokedTokenError, UnauthorizedException
from ski_scheduler.domain.models.user_domain_model import Credentials

# Configure logger
logger = logging.getLogger(__name__)

# Missing or non-bearer headers are reported by the endpoints themselves
bearer_scheme = HTTPBearer(auto_error=False)

MISSING_HEADER = "Missing or invalid Authorization header"


########################################################################
# Shared resources and services
########################################################################

def get_token_blacklist(request: Request) -> TokenBlacklist:
    """The process-wide blacklist created by the application lifespan."""
    return request.app.state.token_blacklist


async def get_auth_service(
        db: AsyncSession = Depends(get_db),
        blacklist: TokenBlacklist = Depends(get_token_blacklist),
) -> AsyncAuthService:
    return AsyncAuthService(db, blacklist)


async def get_lesson_service(db: AsyncSession = Depends(get_db)) -> AsyncLessonService:
    return AsyncLessonService(db)


########################################################################
# User Token Authentication
########################################################################

async def get_bearer_token(
        credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> str:
    """
    Extract the bearer token from the Authorization header.

    Raises:
        ApiError: 401 when the header is missing or not a bearer token
    """
    if credentials is None or not credentials.credentials:
        raise ApiError(status.HTTP_401_UNAUTHORIZED, "Unauthorized: No token provided", MISSING_HEADER)
    return credentials.credentials


async def get_current_credentials(
        token: str = Depends(get_bearer_token),
        service: AsyncAuthService = Depends(get_auth_service),
        blacklist: TokenBlacklist = Depends(get_token_blacklist),
) -> Credentials:
    """
    Identity of the caller: a verified, unexpired and not revoked token.

    Raises:
        ApiError: 401 for any token that is not valid
    """
    try:
        credentials = await service.decode_token(token)
    except UnauthorizedException as e:
        raise ApiError(status.HTTP_401_UNAUTHORIZED, "Unauthorized: Invalid token", e)

    if blacklist.has(token):
        logger.warning(f"Revoked token presented by '{credentials.username}'")
        raise ApiError(status.HTTP_401_UNAUTHORIZED, "Unauthorized: Invalid token", RevokedTokenError())

    return credentials

# ski_scheduler/domain/__init__.py

"""
Domain components of the scheduler: exceptions and the user, lesson and
token models.
"""

from ski_scheduler.domain.exceptions import (
    ErrorKind,
    DomainException,
    ValidationException,
    DuplicateUserException,
    InvalidCredentialsException,
    UnauthorizedException,
    InvalidSignatureError,
    ExpiredTokenError,
    MalformedTokenError,
    RevokedTokenError,
    PermissionDeniedException,
    ResourceNotFoundException,
    ConflictException,
    DatabaseOperationException,
)

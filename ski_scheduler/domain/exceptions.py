# ski_scheduler/domain/exceptions.py

"""
Application exceptions.

Every error raised by the services and repositories is a
``DomainException`` tagged with an ``ErrorKind``. The kind decides the
HTTP status at the boundary; the human message travels in ``detail``.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    VALIDATION = "VALIDATION_ERROR"
    DUPLICATE_USER = "DUPLICATE_USER"
    BAD_CREDENTIALS = "BAD_CREDENTIALS"
    UNAUTHORIZED = "UNAUTHORIZED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    STORAGE = "STORAGE_ERROR"


class DomainException(Exception):
    """
    Base exception for all application errors.

    Attributes:
        kind: Tag identifying the error category
        detail: Human readable message
    """

    kind: ErrorKind = ErrorKind.VALIDATION
    default_detail: str = "An unknown error occurred"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)

    @property
    def internal_code(self) -> str:
        return self.kind.value


class ValidationException(DomainException):
    """Missing or invalid input field."""

    kind = ErrorKind.VALIDATION
    default_detail = "Invalid input"


class DuplicateUserException(DomainException):
    """Username already registered."""

    kind = ErrorKind.DUPLICATE_USER
    default_detail = "User already exists"


class InvalidCredentialsException(DomainException):
    """
    Unknown username or wrong password.

    Both cases share one message so callers cannot tell which
    usernames exist.
    """

    kind = ErrorKind.BAD_CREDENTIALS
    default_detail = "User or password doesn't match"


class UnauthorizedException(DomainException):
    """Missing, invalid, expired or revoked session token."""

    kind = ErrorKind.UNAUTHORIZED
    default_detail = "Unauthorized"


class InvalidSignatureError(UnauthorizedException):
    default_detail = "Invalid token signature"


class ExpiredTokenError(UnauthorizedException):
    default_detail = "Token has expired"


class MalformedTokenError(UnauthorizedException):
    default_detail = "Invalid token: cannot decode"


class RevokedTokenError(UnauthorizedException):
    default_detail = "Token has been revoked"


class PermissionDeniedException(DomainException):
    kind = ErrorKind.PERMISSION_DENIED
    default_detail = "Admin privileges required"


class ResourceNotFoundException(DomainException):
    """Requested record does not exist."""

    kind = ErrorKind.NOT_FOUND
    default_detail = "Resource not found"

    def __init__(self, detail: Optional[str] = None, resource_id=None):
        resource_info = f" (ID: {resource_id})" if resource_id is not None else ""
        super().__init__(f"{detail or self.default_detail}{resource_info}")


class ConflictException(DomainException):
    kind = ErrorKind.CONFLICT
    default_detail = "Resource is in a conflicting state"


class DatabaseOperationException(DomainException):
    """
    The underlying store failed or is unreachable.

    The original driver error is kept in ``original_error`` for logging
    and operational notifications; it is not part of ``detail``.
    """

    kind = ErrorKind.STORAGE
    default_detail = "Error executing database operation"

    def __init__(self, detail: Optional[str] = None, original_error: Optional[Exception] = None):
        super().__init__(detail)
        self.original_error = original_error

# ski_scheduler/adapters/inbound/api/errors.py

"""
Error responses of the HTTP API.

Endpoints translate domain exceptions into ``ApiError`` with their own
status and message; the handler renders every one of them as
``{"message": ..., "error": ...}``.
"""

import logging
from typing import Optional, Union

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ski_scheduler.adapters.configuration.config import settings
from ski_scheduler.domain.exceptions import DatabaseOperationException, DomainException, ErrorKind

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "An unknown error occurred"

# Status of every error kind when nothing more specific applies
KIND_STATUS = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.DUPLICATE_USER: status.HTTP_409_CONFLICT,
    ErrorKind.BAD_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.STORAGE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Kinds that keep their own status whatever the endpoint's failure status is
FIXED_STATUS_KINDS = frozenset({
    ErrorKind.PERMISSION_DENIED,
    ErrorKind.NOT_FOUND,
    ErrorKind.CONFLICT,
    ErrorKind.STORAGE,
})


class ApiError(Exception):
    """
    Error returned to the client.

    Args:
        status_code: HTTP status
        message: What the endpoint failed to do
        error: Cause, a domain exception or a plain string
    """

    def __init__(self, status_code: int, message: str, error: Optional[Union[Exception, str]] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.error = error

    @classmethod
    def from_domain(cls, failure_status: int, message: str, exc: DomainException) -> "ApiError":
        """Use ``failure_status`` unless the error kind has a fixed status of its own."""
        if exc.kind in FIXED_STATUS_KINDS:
            return cls(KIND_STATUS[exc.kind], message, exc)
        return cls(failure_status, message, exc)

    @property
    def error_text(self) -> str:
        if self.error is None:
            return UNKNOWN_ERROR
        if isinstance(self.error, DatabaseOperationException) and settings.ENVIRONMENT == "production":
            return "Internal database error"
        return str(self.error) or UNKNOWN_ERROR

    def body(self) -> dict:
        return {"message": self.message, "error": self.error_text}


def error_body(message: str, error: Optional[str] = None) -> dict:
    return {"message": message, "error": error or UNKNOWN_ERROR}


async def report_storage_error(request: Request, subject: str, exc: Exception) -> None:
    """Mail a storage failure to the maintainers, if a notifier is running."""
    notifier = getattr(request.app.state, "error_notifier", None)
    if notifier is None:
        return
    original = getattr(exc, "original_error", None)
    text = f"{request.method} {request.url.path}\n{exc}"
    if original is not None:
        text += f"\nCaused by: {original!r}"
    await notifier.notify(subject, text)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if isinstance(exc.error, DatabaseOperationException):
        logger.error(f"{exc.message}: {exc.error} | Path: {request.url.path}")
        await report_storage_error(request, exc.message, exc.error)
    else:
        logger.warning(f"{exc.message}: {exc.error_text} | Path: {request.url.path}")

    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content=exc.body(), headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and path parameters, rejected before any endpoint runs."""
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    detail = f"{location}: {first.get('msg')}" if location else first.get("msg")
    logger.warning(f"Invalid request: {detail} | Path: {request.url.path}")
    return JSONResponse(status_code=422, content=error_body("Invalid request", detail))

# ski_scheduler/shared/middleware/exception_middleware.py

"""
Middleware for centralized exception handling.

Catches whatever escapes the endpoints and renders it with the same
``{message, error}`` body the endpoints use.
"""

import logging
from typing import Callable

from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware
from jose.exceptions import JWTError

from ski_scheduler.adapters.configuration.config import settings
from ski_scheduler.adapters.inbound.api.errors import KIND_STATUS, error_body, report_storage_error
from ski_scheduler.domain.exceptions import DomainException, ErrorKind

# Configure logger
logger = logging.getLogger(__name__)


class AsyncExceptionMiddleware(BaseHTTPMiddleware):
    """
    Middleware for centralized exception handling.
    Maps each exception family to a status code and a uniform body.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        client = request.client.host if request.client else "N/A"
        try:
            return await call_next(request)

        except DomainException as exc:
            status_code = KIND_STATUS[exc.kind]
            logger.warning(
                f"Domain exception: {exc.detail} | Code: {exc.internal_code} | "
                f"Path: {request.url.path}"
            )
            if exc.kind is ErrorKind.STORAGE:
                await report_storage_error(request, "Storage error", exc)
                if settings.ENVIRONMENT == "production":
                    return JSONResponse(
                        status_code=status_code,
                        content=error_body("Request failed", "Internal database error"),
                    )
            return JSONResponse(status_code=status_code, content=error_body("Request failed", exc.detail))

        except SQLAlchemyError as exc:
            logger.error(
                f"Database error: {type(exc).__name__}: {exc} | "
                f"Path: {request.url.path} | Client: {client}"
            )
            await report_storage_error(request, "Database error", exc)
            error_message = "Internal database error" if settings.ENVIRONMENT == "production" else str(exc)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=error_body("Request failed", error_message),
            )

        except JWTError as exc:
            logger.warning(
                f"Authentication error: {type(exc).__name__} | "
                f"Path: {request.url.path} | Client: {client}"
            )
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content=error_body("Unauthorized: Invalid token", "Please login again."),
            )

        except Exception as exc:
            logger.exception(
                f"Unhandled exception: {type(exc).__name__}: {exc} | "
                f"Path: {request.url.path} | Client: {client}"
            )
            await report_storage_error(request, "Unhandled server error", exc)
            error_message = "Internal server error" if settings.ENVIRONMENT == "production" else str(exc)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=error_body("Internal Server Error", error_message),
            )

# ski_scheduler/shared/middleware/logging_middleware.py

"""
Middleware for HTTP request logging.

One line per request, written when the response is ready. The request
duration is also returned to the client in ``X-Process-Time``.
"""

import time
import logging
from fastapi import Request
from jose import jwt, JWTError
from starlette.middleware.base import BaseHTTPMiddleware
from ski_scheduler.adapters.configuration.config import settings

# Configure logger
logger = logging.getLogger(__name__)

ANONYMOUS = "anonymous"


def caller_name(request: Request) -> str:
    """
    Username claimed by the bearer token, for log lines only.

    The signature is not checked here, so the name is never used for
    anything but logging.
    """
    scheme, _, token = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() != "bearer" or not token:
        return ANONYMOUS
    try:
        return str(jwt.get_unverified_claims(token).get("username", ANONYMOUS))
    except JWTError:
        return "unreadable-token"


class AsyncRequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method, path, status and duration of every request.
    Outside production the client address and the caller are added.
    """

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start_time

        response.headers["X-Process-Time"] = f"{elapsed:.4f}"

        line = f"{request.method} {request.url.path} -> {response.status_code} in {elapsed * 1000:.1f}ms"
        if settings.ENVIRONMENT != "production":
            client = request.client.host if request.client else "N/A"
            line += f" | Client: {client} | User: {caller_name(request)}"

        # Server errors are logged in full by the exception middleware
        logger.log(logging.WARNING if response.status_code >= 500 else logging.INFO, line)
        return response

# ski_scheduler/shared/middleware/security_headers_middleware.py

"""
Middleware adding HTTP security headers.

API responses carry session data, so they are never cached and never
framed. The documentation pages and the static client keep their own
caching and script policies.
"""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

API_PREFIX = "/api/"
DOCS_PATHS = ("/docs", "/redoc", "/openapi.json")

API_CSP = "default-src 'none'; frame-ancestors 'none'; base-uri 'none'"


class AsyncSecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds security headers to every response, stricter ones to API routes."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        path = request.url.path

        # Prevents MIME-type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        if path.startswith(API_PREFIX):
            response.headers["X-Frame-Options"] = "DENY"
            response.headers["Content-Security-Policy"] = API_CSP
            response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, max-age=0"
            response.headers["Pragma"] = "no-cache"
        elif not path.startswith(DOCS_PATHS):
            response.headers["X-Frame-Options"] = "SAMEORIGIN"

        return response

# ski_scheduler/shared/middleware/__init__.py

from ski_scheduler.shared.middleware.exception_middleware import AsyncExceptionMiddleware
from ski_scheduler.shared.middleware.logging_middleware import AsyncRequestLoggingMiddleware
from ski_scheduler.shared.middleware.security_headers_middleware import AsyncSecurityHeadersMiddleware

# Export all for easy imports
__all__ = [
    "AsyncExceptionMiddleware",
    "AsyncRequestLoggingMiddleware",
    "AsyncSecurityHeadersMiddleware",
]

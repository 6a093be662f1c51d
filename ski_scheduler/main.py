# ski_scheduler/main.py

import logging
from pathlib import Path
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from fastapi.openapi.utils import get_openapi

from ski_scheduler.adapters.configuration.config import settings
from ski_scheduler.adapters.inbound.api.errors import (
    ApiError,
    api_error_handler,
    request_validation_handler,
)
from ski_scheduler.adapters.inbound.api.router import api_router
from ski_scheduler.adapters.outbound.notifications.error_notifier import ErrorNotifier
from ski_scheduler.adapters.outbound.persistence.database import create_tables
from ski_scheduler.adapters.outbound.security.token_blacklist import TokenBlacklist
from ski_scheduler.shared.middleware import (
    AsyncExceptionMiddleware,
    AsyncRequestLoggingMiddleware,
    AsyncSecurityHeadersMiddleware,
)

# ─── UNIQUE LOGGING CONFIGURATION ─────────────────────────────────────────────────
level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL, logging.INFO)
logging.basicConfig(
    level=level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


# ────────────────────────────────────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup creates the tables, the token blacklist with its sweeper
    and the error notifier. Shutdown stops the sweeper.
    """
    logger.info("Application starting up...")

    await create_tables()

    app.state.token_blacklist = TokenBlacklist(settings.BLACKLIST_SWEEP_INTERVAL_SECONDS)
    app.state.token_blacklist.start()
    app.state.error_notifier = ErrorNotifier(settings)

    yield

    logger.info("Application shutting down...")
    await app.state.token_blacklist.stop()


# Create FastAPI instance
app = FastAPI(
    title="Ski Lesson Scheduler",
    description="Accounts, sessions and lesson assignments for ski instructors",
    version="1.0.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
)

# Middlewares
app.add_middleware(AsyncSecurityHeadersMiddleware)
app.add_middleware(AsyncRequestLoggingMiddleware)
app.add_middleware(AsyncExceptionMiddleware)

app.add_exception_handler(ApiError, api_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)

# Routers
app.include_router(api_router, prefix="/api")

# Built client, mounted last so it never shadows /api
if settings.STATIC_DIR and Path(settings.STATIC_DIR).is_dir():
    app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="client")
elif settings.STATIC_DIR:
    logger.warning(f"STATIC_DIR {settings.STATIC_DIR!r} not found, client not served")


def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema

    spec = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )

    # Request validation errors use the {message, error} body, not the default schema
    for schema in ("HTTPValidationError", "ValidationError"):
        spec.get("components", {}).get("schemas", {}).pop(schema, None)

    for path in spec.get("paths", {}).values():
        for op in path.values():
            op.get("responses", {}).pop("422", None)

    app.openapi_schema = spec
    return spec


app.openapi = custom_openapi


def run() -> None:
    """Console entry point."""
    uvicorn.run("ski_scheduler.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)

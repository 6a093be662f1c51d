# ski_scheduler/adapters/outbound/persistence/database.py

import logging
from typing import AsyncGenerator
from contextlib import asynccontextmanager
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import NullPool

from ski_scheduler.adapters.configuration.config import settings
from ski_scheduler.adapters.outbound.persistence.models import Base  # noqa: F401 (registers tables)

# Configure logger
logger = logging.getLogger(__name__)

database_url = settings.DATABASE_URL
logger.info(f"Connecting to database: {database_url.split('@')[-1]}")


def _engine_options(url: str) -> dict:
    # SQLite connections are bound to the loop that opened them, so never pool them
    if url.startswith("sqlite"):
        return {"poolclass": NullPool}
    return {
        "pool_size": 20,
        "max_overflow": 10,
        "pool_timeout": 30,
        "pool_recycle": 1800,
        "pool_pre_ping": True,
    }


try:
    engine = create_async_engine(database_url, echo=False, **_engine_options(database_url))

    AsyncSessionLocal = async_sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
        expire_on_commit=False,
    )

    logger.info("Async database connection configured successfully")

except SQLAlchemyError as e:
    logger.error(f"Error connecting to database: {str(e)}")
    raise


@asynccontextmanager
async def get_db_context() -> AsyncGenerator[AsyncSession, None]:
    """
    Provides an async session that is committed on success,
    rolled back on error and always closed.

    Example:
        ```python
        async with get_db_context() as db:
            user = await user_repository.get_by_username(db, "alice")
        ```
    """
    session = AsyncSessionLocal()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a request-scoped session."""
    async with get_db_context() as session:
        yield session


async def create_tables() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_tables() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

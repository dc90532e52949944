"""SQLAlchemy async engine, sessions and the declarative Base.

The engine is built on first use rather than at import, so importing models
or the app never reads settings. With no DATABASE_URL there is no engine and
the session dependencies raise SqlNotConfiguredException (HTTP 503).
Alembic owns the schema; nothing here creates tables.
"""

import logging
from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from docflow.core.config import get_settings
from docflow.domain.exceptions import SqlNotConfiguredException

logger = logging.getLogger(__name__)

engine: AsyncEngine | None = None
AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None


class Base(DeclarativeBase):
    pass


def _ensure_engine() -> None:
    global engine, AsyncSessionLocal
    if AsyncSessionLocal is not None:
        return
    settings = get_settings()
    if not settings.database_url:
        return
    connect_args = {}
    if "asyncpg" in settings.database_url:
        connect_args["command_timeout"] = settings.db_command_timeout
    engine = create_async_engine(
        settings.database_url,
        echo=settings.database_echo,
        pool_pre_ping=True,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_recycle=3600,
        connect_args=connect_args,
    )
    # expire_on_commit=False: repositories map rows to DTOs after the flush,
    # and those DTOs are serialized after the commit.
    AsyncSessionLocal = async_sessionmaker(
        bind=engine, expire_on_commit=False, autoflush=False
    )
    logger.info("Database engine created (pool_size=%d)", settings.db_pool_size)


async def dispose_engine() -> None:
    global engine, AsyncSessionLocal
    if engine is not None:
        await engine.dispose()
    engine = None
    AsyncSessionLocal = None


def _session_factory() -> async_sessionmaker[AsyncSession]:
    _ensure_engine()
    if AsyncSessionLocal is None:
        logger.error(
            "DATABASE_URL is not set; set it (postgresql+asyncpg://...) "
            "and run `alembic upgrade head`"
        )
        raise SqlNotConfiguredException()
    return AsyncSessionLocal


async def get_db() -> AsyncIterator[AsyncSession]:
    """Read-only request session; never commits."""
    async with _session_factory()() as session:
        yield session


async def get_db_transactional() -> AsyncIterator[AsyncSession]:
    """Write request session inside one transaction.

    Commits when the request handler returns, rolls back if it raises.
    All repositories and adapters built for the request share it, so a new
    document, its number, its approval steps and its first history entry
    are committed together or not at all.
    """
    async with _session_factory()() as session:
        async with session.begin():
            yield session

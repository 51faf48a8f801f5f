from __future__ import annotations

from typing import Any, Dict

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from agilesync.config import Settings
from agilesync.shared.database.base_model import Base
from agilesync.shared.logging import get_logger

logger = get_logger(__name__)


def create_database_engine(settings: Settings) -> AsyncEngine:
    """
    Build the async engine with pooling defaults.

    Nothing connects here; the first query does. Tests and SQLite get a
    NullPool so no connection outlives the event loop that opened it.
    """
    url = settings.DATABASE_URL
    kwargs: Dict[str, Any] = {"pool_pre_ping": True}

    if settings.TESTING or url.startswith("sqlite"):
        kwargs["poolclass"] = NullPool
    else:
        kwargs.update(
            pool_size=settings.DATABASE_POOL_SIZE,
            max_overflow=settings.DATABASE_MAX_OVERFLOW,
            pool_timeout=30,
            pool_recycle=3600,
        )

    engine = create_async_engine(url, **kwargs)
    logger.info("Database engine created", dialect=engine.dialect.name)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=True,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create all mapped tables (local/dev and tests; production uses alembic)."""
    # models must be imported so their tables are registered on Base.metadata
    import agilesync.identity.infrastructure.persistence.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ensured", tables=sorted(Base.metadata.tables))


async def check_connection(engine: AsyncEngine) -> Dict[str, Any]:
    try:
        async with engine.connect() as conn:
            res = await conn.execute(text("SELECT 1"))
            ok = res.scalar() == 1
        return {"healthy": ok}
    except Exception as e:
        logger.error("Database health check failed", error=str(e))
        return {"healthy": False, "error": e.__class__.__name__}


async def close_database_engine(engine: AsyncEngine) -> None:
    await engine.dispose()
    logger.info("Database engine disposed")

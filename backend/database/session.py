"""
Database session context managers.
Provides reusable database session management for non-FastAPI contexts.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from config import settings

# Async engine and session factory
_async_engine = None
_async_session_factory = None


def create_engine_for_url(url: str, ssl: Optional[str] = None) -> AsyncEngine:
    """
    Create an async engine with pool settings suited to the backend.
    ssl is passed to asyncpg as-is; None connects without TLS.
    """
    if url.startswith("sqlite"):
        return create_async_engine(url)

    connect_args = {"ssl": ssl} if ssl else {}
    return create_async_engine(
        url,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
        pool_recycle=3600,
        connect_args=connect_args,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Build a session factory bound to the given engine."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


def _get_async_engine() -> AsyncEngine:
    """Get or create async engine."""
    global _async_engine
    if _async_engine is None:
        _async_engine = create_engine_for_url(
            settings.database_url, ssl=settings.database_ssl
        )
    return _async_engine


def _get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get or create async session factory."""
    global _async_session_factory
    if _async_session_factory is None:
        _async_session_factory = create_session_factory(_get_async_engine())
    return _async_session_factory


async def dispose_engine() -> None:
    """Dispose the engine and forget the session factory."""
    global _async_engine, _async_session_factory
    if _async_engine is not None:
        await _async_engine.dispose()
    _async_engine = None
    _async_session_factory = None


@asynccontextmanager
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Async context manager for database sessions in Celery tasks.

    Usage:
        async with get_db_session() as db:
            result = await db.execute(select(Bet))
            await db.commit()

    Yields:
        AsyncSession: SQLAlchemy async database session
    """
    factory = _get_async_session_factory()
    session = factory()
    try:
        yield session
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()

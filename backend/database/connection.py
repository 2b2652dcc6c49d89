"""
Database connection lifecycle.

This module provides:
- Engine initialization and disposal for the API lifespan
- Table creation for local development
- Health check utilities
"""

import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from config import settings
from database.base import Base
from database.session import _get_async_engine, dispose_engine

logger = logging.getLogger(__name__)


async def init_db(create_tables: bool = False) -> None:
    """
    Initialize the async engine.
    Tables are only created when requested; Supabase owns the schema otherwise.
    """
    engine = _get_async_engine()

    if create_tables:
        # Importing models registers every table on Base.metadata
        import models  # noqa: F401

        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created")


async def close_db() -> None:
    """
    Dispose the engine and its connection pool.
    """
    await dispose_engine()


async def check_db_connection() -> bool:
    """
    Check if the database connection is healthy.
    """
    try:
        async with _get_async_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except (SQLAlchemyError, OSError) as e:
        logger.warning(f"Database health check failed: {e}")
        return False


def get_db_info() -> dict:
    """
    Get database connection information and status.
    """
    return {
        "url": _sanitize_database_url(settings.database_url),
        "database": settings.db_name,
        "environment": settings.environment,
    }


def _sanitize_database_url(url: str) -> str:
    """
    Hide password in a database URL for safe logging.
    """
    if "@" not in url or "://" not in url:
        return url

    protocol, rest = url.split("://", 1)
    credentials, host = rest.rsplit("@", 1)
    if ":" in credentials:
        username = credentials.split(":", 1)[0]
        return f"{protocol}://{username}:***@{host}"
    return url

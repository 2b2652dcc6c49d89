"""Shared pytest configuration: test settings and a throwaway database."""

import asyncio
import os
import sys
from pathlib import Path

import pytest

# Settings are read at import time
os.environ.setdefault("DB_USER", "postgres")
os.environ.setdefault("DB_PASSWORD", "postgres")
os.environ.setdefault("DB_HOST", "localhost")
os.environ.setdefault("DB_NAME", "hackarena_test")
os.environ.setdefault("ENVIRONMENT", "test")

sys.path.insert(0, str(Path(__file__).parent.parent))

from database import Base, create_engine_for_url, create_session_factory  # noqa: E402
import models  # noqa: E402,F401


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'hackarena.db'}"


@pytest.fixture
def run_db(database_url):
    """
    Run an async scenario against a fresh database.

    The scenario receives a session factory; its return value is returned.
    """

    def run(scenario):
        async def _main():
            engine = create_engine_for_url(database_url)
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            try:
                return await scenario(create_session_factory(engine))
            finally:
                await engine.dispose()

        return asyncio.run(_main())

    return run

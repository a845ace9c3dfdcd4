# python
"""Database engine and session utilities.

This module sets up the asynchronous database engine and session factory used
by the repositories. Table definitions live in the top-level ``models``
package. It also provides a utility for fetching an asynchronous database
session.
"""
import os
from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import settings

# For testing, prioritize TEST_DATABASE_URL
DB_URL = None
if os.getenv("TESTING") == "true":
    DB_URL = os.getenv("TEST_DATABASE_URL") or settings.test_database_url
else:
    DB_URL = settings.database_url

DB_URL = (DB_URL or "").strip()
if not DB_URL:
    raise RuntimeError(
        "DATABASE_URL is not configured. Set it in the environment or .env file (e.g., DATABASE_URL=mysql+aiomysql://<user>:<pass>@<host>/<db>)."
    )


def build_engine_options(url: str) -> dict[str, Any]:
    """Engine keyword arguments for ``url``.

    Pool sizing and connect timeouts only apply to networked drivers; SQLite
    uses a static pool and rejects them.
    """
    options: dict[str, Any] = {"echo": settings.debug}
    if url.startswith("sqlite"):
        return options
    options.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_pre_ping=True,
    )
    if url.startswith("mysql"):
        options["connect_args"] = {"connect_timeout": settings.db_connect_timeout}
    return options


engine = create_async_engine(DB_URL, **build_engine_options(DB_URL))

AsyncSessionLocal = async_sessionmaker(bind=engine, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, Any]:
    async with AsyncSessionLocal() as session:
        yield session

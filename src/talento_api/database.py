"""Database connection and session management."""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from talento_api.config import get_settings


def build_engine(url: str, **overrides: Any) -> AsyncEngine:
    """Create the async engine for a database URL.

    PostgreSQL gets a sized connection pool. SQLite gets foreign key
    enforcement switched on for every connection so RESTRICT rules hold.

    Args:
        url: SQLAlchemy async database URL
        **overrides: Extra keyword arguments for create_async_engine

    Returns:
        Configured async engine
    """
    settings = get_settings()
    options: dict[str, Any] = {
        # Security: Never echo SQL statements as they may contain sensitive data
        "echo": False,
    }
    if url.startswith("postgresql"):
        options.update(
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            # Validate connections before checkout to detect stale connections
            pool_pre_ping=True,
            pool_recycle=3600,
        )
    options.update(overrides)

    async_engine = create_async_engine(url, **options)

    if url.startswith("sqlite"):

        @event.listens_for(async_engine.sync_engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return async_engine


settings = get_settings()

engine = build_engine(settings.async_database_url)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            raise

"""Shared fixtures: in-memory SQLite database, seeded catalog and an app client."""

import os

# Settings are read at import time by the application modules
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-Zq8#Lw2$Vn5@Kd9!Hr4%Xb7^")
os.environ.setdefault("SESSION_SECRET", "test-session-secret-Mp3&Yt6*Gc1(Fs8)Ju0+")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SMTP_USERNAME", "")
os.environ.setdefault("AI_API_KEY", "")

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from talento_api.database import build_engine, get_db
from talento_api.models.domain.catalog import DEFAULT_DEPARTMENTS, DEFAULT_JOB_TITLES
from talento_api.models.orm import Base, DepartmentORM, JobTitleORM
from talento_api.security.rate_limit import limiter

limiter.enabled = False


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database with the seed catalog."""
    test_engine = build_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    maker = async_sessionmaker(test_engine, expire_on_commit=False)
    async with maker() as session:
        for id_, name, description in DEFAULT_DEPARTMENTS:
            session.add(DepartmentORM(id=id_, name=name, description=description))
        for id_, name, description in DEFAULT_JOB_TITLES:
            session.add(JobTitleORM(id=id_, name=name, description=description))
        await session.commit()

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(
    session_maker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as db_session:
        yield db_session


@pytest.fixture
async def client(
    session_maker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app, with the database swapped for the test one."""
    from talento_api.main import app

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as db_session:
            try:
                yield db_session
                await db_session.commit()
            except Exception:
                await db_session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http:
        yield http
    app.dependency_overrides.clear()

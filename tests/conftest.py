"""
Test configuration and fixtures.

Provides:
- In-memory SQLite engine with all tables created (fresh per test)
- Audited session factory and session
- A stored user to own audited entities
- HTTPX AsyncClient bound to the app with the session dependency overridden
"""
import os
from typing import AsyncGenerator

# Must be set before the app settings are imported
os.environ["DB_URL"] = "sqlite+aiosqlite://"
os.environ["GRAPHQL_EMIT_SCHEMA_FILE"] = ""
os.environ["SEED_SAMPLE_DATA"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from entity_notes.api import app
from entity_notes.audit import AuditedSession
from entity_notes.db import create_schema, get_session
from entity_notes.models import User


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Single-connection in-memory database shared by every session of a test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        expire_on_commit=False,
        class_=AsyncSession,
        sync_session_class=AuditedSession,
    )


@pytest.fixture
async def session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest.fixture
async def user(session: AsyncSession) -> User:
    """Create the user that owns audited entities."""
    user = User(first_name="SomeOne", last_name="else")
    session.add(user)
    await session.commit()
    return user


async def count(session: AsyncSession, model) -> int:
    result = await session.execute(select(func.count()).select_from(model))
    return result.scalar_one()


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest.fixture
async def client(session_maker) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient whose requests use the test database."""
    async def override_get_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()

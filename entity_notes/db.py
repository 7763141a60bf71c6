"""SQLAlchemy 2.x async database setup.

Sessions produced here are ``AuditedSession`` backed, so every flush runs the
audit hook.
"""

from __future__ import annotations

import logging
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from .audit import AuditedSession
from .config import settings
from .models import Base

logger = logging.getLogger(__name__)


engine: AsyncEngine = create_async_engine(settings.db.url, echo=settings.db.echo)

AsyncSessionMaker = async_sessionmaker(
    bind=engine,
    expire_on_commit=False,
    class_=AsyncSession,
    sync_session_class=AuditedSession,
)


async def get_session() -> AsyncIterator[AsyncSession]:
    """FastAPI-friendly async session dependency.

    Usage:
        async def endpoint(session: AsyncSession = Depends(get_session)):
            ...
    """

    async with AsyncSessionMaker() as session:
        yield session


async def create_schema(bind: AsyncEngine = engine) -> None:
    """Create missing tables."""
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"Tables ready: {', '.join(Base.metadata.tables.keys())}")


async def drop_schema(bind: AsyncEngine = engine) -> None:
    """Drop every table owned by the models."""
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

"""Startup tasks: schema creation, SDL emission and the sample writes."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from . import db, models
from .audit import save_entity
from .config import settings
from .schema import schema_sdl

logger = logging.getLogger(__name__)


@dataclass
class SeedResult:
    """Records created by the sample writes."""
    user: models.User
    supplier: models.Supplier
    contact: models.Contact
    some_class: models.SomeClass


def emit_schema_file(path: str | Path) -> Path:
    """Write the GraphQL SDL to ``path``."""
    target = Path(path)
    target.write_text(schema_sdl() + "\n", encoding="utf-8")
    logger.info(f"GraphQL schema written to {target.resolve()}")
    return target


async def seed_sample_data(session: AsyncSession) -> SeedResult:
    """Create a user, a supplier and a contact owned by it, and a SomeClass.

    The user is flushed first so the audit hook can find it.
    """
    user = models.User(first_name="SomeOne", last_name="else")
    session.add(user)
    await session.flush()
    logger.info(f"Created user {user.id}")

    supplier = await save_entity(session, models.Supplier(created_user_id=user.id, created_date=1))
    logger.info(f"Created supplier {supplier.id}")

    contact = await save_entity(session, models.Contact(created_user_id=user.id))
    logger.info(f"Created contact {contact.id}")

    some_class = models.SomeClass(entity_id=contact.id, entity_ref="Contact")
    session.add(some_class)
    await session.commit()

    return SeedResult(user=user, supplier=supplier, contact=contact, some_class=some_class)


async def startup(
    engine: AsyncEngine = db.engine,
    session_maker: async_sessionmaker[AsyncSession] = db.AsyncSessionMaker,
) -> None:
    """Run the configured startup tasks.

    Failures are logged and swallowed so the server keeps serving.
    """
    try:
        if settings.db.create_schema:
            await db.create_schema(engine)
        if settings.graphql.emit_schema_file:
            emit_schema_file(settings.graphql.emit_schema_file)
        if settings.seed_sample_data:
            async with session_maker() as session:
                await seed_sample_data(session)
    except Exception as e:
        logger.exception(f"Startup tasks failed: {e}")

"""Pre-save audit hook writing one Note per created or modified entity.

The hook is a ``before_flush`` listener on ``AuditedSession``. Any flush that
carries a new audited entity, or one with pending column changes, gets a Note
added to the same unit of work, so the entity and its Note commit together.
"""
from __future__ import annotations

import logging
import re
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator

from sqlalchemy import event, inspect
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from . import models

logger = logging.getLogger(__name__)

ACTOR_KEY = "entity_notes.actor"

_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_WORD_SPLIT = re.compile(r"[\W_]+")


class AuditError(Exception):
    """Base error for the audit hook."""
    pass


class UserNotFoundError(AuditError):
    """Raised when the acting user of a save does not exist."""

    def __init__(self, user_id: uuid.UUID):
        self.user_id = user_id
        super().__init__(f"User {user_id} not found")


@dataclass(frozen=True)
class Actor:
    """Who performs a save, and on behalf of which business."""
    user_id: uuid.UUID
    business_id: uuid.UUID | None = None


class AuditedSession(Session):
    """Session class whose flushes run the audit hook."""
    pass


def start_case(name: str) -> str:
    """Turn ``building_type`` or ``buildingType`` into ``Building Type``."""
    spaced = _CAMEL_BOUNDARY.sub(r"\1 \2", name)
    words = [w for w in _WORD_SPLIT.split(spaced) if w]
    return " ".join(w[:1].upper() + w[1:] for w in words)


def modified_fields(entity: Any) -> list[str]:
    """Column attributes of ``entity`` with pending changes, in mapper order."""
    state = inspect(entity)
    return [
        prop.key
        for prop in state.mapper.column_attrs
        if state.attrs[prop.key].history.has_changes()
    ]


def note_body(fields: list[str], user: models.User) -> str:
    """Human readable description of a save."""
    author = f"{user.first_name} {user.last_name}"
    if "created_user_id" in fields:
        return f"Created by {author}"
    changed = ", ".join(start_case(f) for f in fields)
    return f"'{changed}', Updated by {author}"


def build_note(session: Session, entity: models.AuditFields, actor: Actor | None = None) -> models.Note:
    """Prepare ``entity`` for saving and return its audit Note.

    Raises:
        UserNotFoundError: If the acting user does not exist
    """
    if entity.created_user_id is None:
        # placeholder ids never match a user, so unattributed saves fail below
        entity.created_user_id = actor.user_id if actor is not None else uuid.uuid4()
    fields = modified_fields(entity)

    if entity.id is None:
        entity.id = uuid.uuid4()

    user_id = actor.user_id if actor is not None else entity.created_user_id
    user = session.get(models.User, user_id)
    if user is None:
        logger.error(f"Audit failed for {type(entity).__name__} {entity.id}: user {user_id} not found")
        raise UserNotFoundError(user_id)

    now = models.unix_seconds()
    if "created_user_id" in fields and not entity.created_date:
        entity.created_date = now
    entity.edited_date = now

    note = models.Note(
        id=uuid.uuid4(),
        created_user_id=user.id,
        created_business_id=actor.business_id if actor is not None else None,
        entity_id=entity.id,
        entity_ref=type(entity).__name__,
        body=note_body(fields, user),
        created_date=now,
    )
    logger.debug(f"Audit note for {note.entity_ref} {note.entity_id}: {note.body}")
    return note


@event.listens_for(AuditedSession, "before_flush")
def write_audit_notes(session: Session, flush_context, instances) -> None:
    """Add one Note per new or changed audited entity in this flush."""
    actor = session.info.get(ACTOR_KEY)
    pending = [obj for obj in session.new if isinstance(obj, models.AuditFields)]
    changed = [
        obj
        for obj in session.dirty
        if isinstance(obj, models.AuditFields) and session.is_modified(obj)
    ]
    for entity in pending + changed:
        session.add(build_note(session, entity, actor))


@contextmanager
def acting_as(session: AsyncSession | Session, actor: Actor) -> Iterator[None]:
    """Attribute every save inside the block to ``actor``."""
    info = session.info
    previous = info.get(ACTOR_KEY)
    info[ACTOR_KEY] = actor
    try:
        yield
    finally:
        if previous is None:
            info.pop(ACTOR_KEY, None)
        else:
            info[ACTOR_KEY] = previous


async def save_entity(
    session: AsyncSession,
    entity: models.AuditFields,
    *,
    actor: Actor | None = None,
) -> models.AuditFields:
    """Add ``entity`` to the session and flush it, writing its audit Note.

    Args:
        session: Database session
        entity: Job, Property, Supplier or Contact instance
        actor: Acting user and business; defaults to the entity's creating user

    Returns:
        The flushed entity

    Raises:
        UserNotFoundError: If the acting user does not exist
    """
    session.add(entity)
    if actor is None:
        await session.flush()
    else:
        with acting_as(session, actor):
            await session.flush()
    return entity

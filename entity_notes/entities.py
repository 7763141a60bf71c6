"""Polymorphic entity references: kind resolution and loading."""
from __future__ import annotations

import uuid
from collections.abc import Mapping
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from . import models

ENTITY_MODELS: dict[str, type[models.Base]] = {
    "User": models.User,
    "Job": models.Job,
    "Property": models.Property,
    "Supplier": models.Supplier,
    "Contact": models.Contact,
}

# Kinds a Note or SomeClass entity may resolve to
NOTE_ENTITY_KINDS = ("Property", "Contact", "Supplier", "User")

# Checked in order; the first field present decides the kind
DISCRIMINATING_FIELDS = (
    ("contact_type", "Contact"),
    ("building_type", "Property"),
    ("supplier_type", "Supplier"),
    ("first_name", "User"),
)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _has_field(value: Any, name: str) -> bool:
    if isinstance(value, Mapping):
        return name in value or _camel(name) in value
    return hasattr(value, name)


def resolve_entity_kind(value: Any, tag: str | None = None) -> str | None:
    """Return the union kind of a stored entity value, or None.

    An explicit ``tag`` always wins. Untagged values are sniffed by the
    presence of a discriminating field, so two kinds sharing such a field
    resolve to whichever is checked first.
    """
    if tag is not None:
        return tag if tag in NOTE_ENTITY_KINDS else None
    for field, kind in DISCRIMINATING_FIELDS:
        if _has_field(value, field):
            return kind
    return None


async def load_entity(
    session: AsyncSession,
    entity_ref: str,
    entity_id: uuid.UUID,
) -> models.Base | None:
    """Load the target of a tagged reference; None for unknown tags or missing rows."""
    model = ENTITY_MODELS.get(entity_ref)
    if model is None:
        return None
    return await session.get(model, entity_id)


async def first_some_class(session: AsyncSession) -> models.SomeClass | None:
    """First stored SomeClass, if any."""
    result = await session.execute(select(models.SomeClass).limit(1))
    return result.scalars().first()

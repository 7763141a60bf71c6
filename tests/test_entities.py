"""Tests for polymorphic entity resolution and loading."""
import uuid

import pytest

from entity_notes.entities import first_some_class, load_entity, resolve_entity_kind
from entity_notes.models import Contact, SomeClass


@pytest.mark.parametrize(
    "value, expected",
    [
        ({"first_name": "Ada"}, "User"),
        ({"firstName": "Ada"}, "User"),
        ({"contactType": "tenant", "firstName": "Ada"}, "Contact"),
        ({"building_type": "House"}, "Property"),
        ({"supplierType": "plumber"}, "Supplier"),
        ({"title": "Fix roof"}, None),
        ({}, None),
    ],
)
def test_resolve_by_discriminating_field(value, expected):
    assert resolve_entity_kind(value) == expected


def test_tag_wins_over_fields():
    assert resolve_entity_kind({"first_name": "Ada"}, tag="Contact") == "Contact"


def test_tag_outside_union_is_unresolvable():
    assert resolve_entity_kind({"first_name": "Ada"}, tag="Job") is None


def test_resolve_model_instance():
    assert resolve_entity_kind(Contact()) == "Contact"


@pytest.mark.asyncio
async def test_load_entity(session, user):
    contact = Contact(created_user_id=user.id, contact_type="owner")
    session.add(contact)
    await session.commit()

    loaded = await load_entity(session, "Contact", contact.id)
    assert loaded is contact
    assert await load_entity(session, "Contact", uuid.uuid4()) is None
    assert await load_entity(session, "Business", contact.id) is None


@pytest.mark.asyncio
async def test_first_some_class(session, user):
    assert await first_some_class(session) is None

    record = SomeClass(entity_id=user.id, entity_ref="User")
    session.add(record)
    await session.commit()

    assert (await first_some_class(session)).id == record.id

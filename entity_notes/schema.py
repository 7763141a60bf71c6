"""Strawberry GraphQL schema: entity object types, the note entity union and two queries."""
import uuid
from typing import Annotated, Optional, Union

import strawberry
from strawberry.types import Info

from . import entities, models


@strawberry.type(name="User")
class UserType:
    id: strawberry.ID
    first_name: Optional[str]
    last_name: Optional[str]


@strawberry.type
class AuditedType:
    """Fields shared by every audited entity."""
    id: strawberry.ID
    edited_date: int
    created_date: int
    created_user_id: strawberry.Private[uuid.UUID]

    @strawberry.field
    async def created_user(self, info: Info) -> Optional[UserType]:
        user = await info.context["session"].get(models.User, self.created_user_id)
        return to_graphql(user)


@strawberry.type(name="Job")
class JobType(AuditedType):
    title: Optional[str]
    status: Optional[str]


@strawberry.type(name="Property")
class PropertyType(AuditedType):
    building_type: Optional[str]
    address_string: Optional[str]


@strawberry.type(name="Supplier")
class SupplierType(AuditedType):
    supplier_type: Optional[str]
    name: Optional[str]


@strawberry.type(name="Contact")
class ContactType(AuditedType):
    contact_type: Optional[str]
    name: Optional[str]
    surname: Optional[str]
    email: Optional[str]


NoteEntity = Annotated[
    Union[PropertyType, ContactType, SupplierType, UserType],
    strawberry.union("NoteEntityUnion"),
]

_GRAPHQL_TYPES = {
    "User": UserType,
    "Job": JobType,
    "Property": PropertyType,
    "Supplier": SupplierType,
    "Contact": ContactType,
}


def to_graphql(record):
    """Convert a model instance to its GraphQL object, None passes through."""
    if record is None:
        return None
    type_ = _GRAPHQL_TYPES[type(record).__name__]
    values = {
        column.key: getattr(record, column.key)
        for column in models.Base.metadata.tables[record.__tablename__].columns
    }
    values["id"] = strawberry.ID(str(record.id))
    return type_(**values)


async def resolve_note_entity(session, entity_ref: str, entity_id: uuid.UUID):
    """Load a tagged reference as a union member, None when unresolvable."""
    if entities.resolve_entity_kind(None, tag=entity_ref) is None:
        return None
    return to_graphql(await entities.load_entity(session, entity_ref, entity_id))


@strawberry.type(name="SomeClass")
class SomeClassType:
    id: strawberry.ID
    entity_ref: str
    entity_id: strawberry.Private[uuid.UUID]

    @strawberry.field
    async def entity(self, info: Info) -> Optional[NoteEntity]:
        return await resolve_note_entity(info.context["session"], self.entity_ref, self.entity_id)

    @classmethod
    def from_model(cls, record: models.SomeClass) -> "SomeClassType":
        return cls(id=strawberry.ID(str(record.id)), entity_ref=record.entity_ref, entity_id=record.entity_id)


@strawberry.type
class Query:
    @strawberry.field
    async def get_some_class(self, info: Info) -> Optional[SomeClassType]:
        """First stored SomeClass, or null."""
        record = await entities.first_some_class(info.context["session"])
        if record is None:
            return None
        return SomeClassType.from_model(record)

    @strawberry.field
    async def get_note_class(self, info: Info) -> Optional[NoteEntity]:
        """Entity referenced by the first stored SomeClass, or null."""
        session = info.context["session"]
        record = await entities.first_some_class(session)
        if record is None:
            return None
        return await resolve_note_entity(session, record.entity_ref, record.entity_id)


schema = strawberry.Schema(query=Query)


def schema_sdl() -> str:
    """Printed SDL of the schema."""
    return str(schema)

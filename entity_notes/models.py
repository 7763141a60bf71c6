"""Core SQLAlchemy models (2.x style) for audited entities and their notes.

Ids are client-generated UUIDs. Polymorphic references are stored as an
``entity_id`` plus an explicit ``entity_ref`` tag naming the target model.
"""

from __future__ import annotations

import time
import uuid

from sqlalchemy import ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def unix_seconds() -> int:
    """Current time as whole unix seconds."""
    return int(time.time())


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class AuditFields:
    """Shared audit columns composed into every audited entity table."""

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    edited_date: Mapped[int] = mapped_column(Integer, default=0, nullable=False, index=True)
    created_date: Mapped[int] = mapped_column(Integer, default=0, nullable=False, index=True)
    created_user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )


class User(Base):
    """Users table."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    first_name: Mapped[str | None] = mapped_column(String(255))
    last_name: Mapped[str | None] = mapped_column(String(255))


class Job(AuditFields, Base):
    """Jobs table."""
    __tablename__ = "jobs"

    title: Mapped[str | None] = mapped_column(String(255))
    status: Mapped[str | None] = mapped_column(String(50), index=True)


class Property(AuditFields, Base):
    """Properties table."""
    __tablename__ = "properties"

    building_type: Mapped[str | None] = mapped_column(String(100))
    address_string: Mapped[str | None] = mapped_column(String(500))


class Supplier(AuditFields, Base):
    """Suppliers table."""
    __tablename__ = "suppliers"

    supplier_type: Mapped[str | None] = mapped_column(String(100))
    name: Mapped[str | None] = mapped_column(String(255))


class Contact(AuditFields, Base):
    """Contacts table."""
    __tablename__ = "contacts"

    contact_type: Mapped[str | None] = mapped_column(String(100))
    name: Mapped[str | None] = mapped_column(String(255))
    surname: Mapped[str | None] = mapped_column(String(255))
    email: Mapped[str | None] = mapped_column(String(255), index=True)


class Note(Base):
    """Audit notes, one per create or update of an audited entity.

    Append only: nothing in the service updates or deletes a note.
    """
    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    created_user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    created_business_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, index=True)
    entity_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    entity_ref: Mapped[str] = mapped_column(String(50), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    created_date: Mapped[int] = mapped_column(Integer, default=unix_seconds, nullable=False)

    __table_args__ = (
        Index("ix_notes_entity", "entity_ref", "entity_id"),
    )


class SomeClass(Base):
    """Holder of one polymorphic entity reference, read by the GraphQL queries."""
    __tablename__ = "some_classes"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    entity_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    entity_ref: Mapped[str] = mapped_column(String(50), nullable=False)


AUDITED_MODELS: tuple[type[Base], ...] = (Job, Property, Supplier, Contact)

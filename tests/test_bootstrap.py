"""Tests for the startup tasks and sample writes."""
import logging

import pytest
from sqlalchemy import select

from entity_notes import bootstrap
from entity_notes.config import settings
from entity_notes.models import Note, User

from .conftest import count


@pytest.mark.asyncio
async def test_seed_sample_data(session):
    result = await bootstrap.seed_sample_data(session)

    assert result.user.first_name == "SomeOne"
    assert result.supplier.created_date == 1
    assert result.supplier.created_user_id == result.user.id
    assert result.contact.created_user_id == result.user.id
    assert result.some_class.entity_ref == "Contact"
    assert result.some_class.entity_id == result.contact.id

    notes = (await session.execute(select(Note))).scalars().all()
    assert sorted(n.entity_ref for n in notes) == ["Contact", "Supplier"]
    assert {n.body for n in notes} == {"Created by SomeOne else"}


def test_emit_schema_file(tmp_path):
    target = bootstrap.emit_schema_file(tmp_path / "schema.graphql")

    text = target.read_text(encoding="utf-8")
    assert "union NoteEntityUnion" in text
    assert "getNoteClass" in text


@pytest.mark.asyncio
async def test_startup_runs_configured_tasks(engine, session_maker, session, tmp_path, monkeypatch):
    schema_file = tmp_path / "schema.graphql"
    monkeypatch.setattr(settings.graphql, "emit_schema_file", str(schema_file))
    monkeypatch.setattr(settings, "seed_sample_data", True)

    await bootstrap.startup(engine, session_maker)

    assert schema_file.exists()
    assert await count(session, User) == 1
    assert await count(session, Note) == 2


@pytest.mark.asyncio
async def test_startup_failure_is_logged_not_raised(engine, session_maker, monkeypatch, caplog):
    async def broken_seed(session):
        raise RuntimeError("store unavailable")

    monkeypatch.setattr(settings, "seed_sample_data", True)
    monkeypatch.setattr(bootstrap, "seed_sample_data", broken_seed)

    with caplog.at_level(logging.ERROR, logger="entity_notes.bootstrap"):
        await bootstrap.startup(engine, session_maker)

    assert "Startup tasks failed: store unavailable" in caplog.text

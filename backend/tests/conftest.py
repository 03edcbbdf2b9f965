"""
Jotter Backend — Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock standing in for AsyncSession
    ├── mock_store:      adapter whose session() yields mock_db_session
    ├── make_note:       factory for unsaved Note instances
    ├── store:           real StoreAdapter on a throw-away SQLite file
    └── test_client:     HTTPX AsyncClient wired to the app and `store`
"""

import os
import tempfile

# Settings are read at import time; point them at a scratch store before any
# app module is imported.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="jotter_test_"), "notes.db"
)
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["NOTES_API_URL"] = ""

import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.database import StoreAdapter, get_store
from app.models.note import Note
from app.ui.board import NoteBoard
from app.ui.client import NotesApiClient


@pytest.fixture
def mock_db_session():
    """
    Mock async session.

    Usage:
        mock_db_session.get.return_value = note
        result = await note_service.update_note(mock_store, payload)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock(return_value=None)
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def mock_store(mock_db_session):
    """Adapter stand-in; `mock_store.session` records whether the store was touched."""

    @asynccontextmanager
    async def session():
        yield mock_db_session

    store = MagicMock(spec=StoreAdapter)
    store.session = MagicMock(side_effect=session)
    return store


@pytest.fixture
def make_note():
    """Builds a Note that was created an hour ago and never updated."""

    def factory(**overrides) -> Note:
        created = datetime.now(timezone.utc) - timedelta(hours=1)
        fields = {
            "id": uuid.uuid4(),
            "title": "Groceries",
            "content": "milk, eggs",
            "created_at": created,
            "updated_at": created,
        }
        fields.update(overrides)
        return Note(**fields)

    return factory


@pytest_asyncio.fixture
async def store(tmp_path):
    """A real adapter on its own SQLite file; disposed after the test."""
    adapter = StoreAdapter(database_url=f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}")
    yield adapter
    await adapter.dispose()


@pytest_asyncio.fixture
async def test_client(store):
    """
    HTTPX AsyncClient talking to the app over ASGITransport.

    The app's store dependency is overridden with `store`, and the UI board
    is rebuilt so it reaches the API in-process as well.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/notes")
            assert response.status_code == 200
    """
    from app.main import app

    app.dependency_overrides[get_store] = lambda: store
    board = NoteBoard(NotesApiClient("http://test", transport=ASGITransport(app=app)))
    app.state.board = board

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    await board.client.aclose()
    del app.state.board
    app.dependency_overrides.clear()

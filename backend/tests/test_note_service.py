"""
Jotter Backend — Note Service Unit Tests
=========================================

What:  Tests for NoteService list/create/update/delete.
How:   Presence checks and failure wrapping use a mock store; update and
       delete run against a real SQLite store (the `store` fixture).

What we test:
    ✅ Presence checks reject input before the store is touched
    ✅ Whitespace-only input is accepted
    ✅ Timestamps on create and update
    ✅ Unknown or malformed ids raise NotFoundError
    ✅ Unexpected store failures become StoreError
    ✅ Update and delete racing a delete: the loser gets NotFoundError
"""

import asyncio
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFoundError, StoreError, ValidationError
from app.models.note import Note
from app.schemas.note import MessageResponse, NoteCreate, NoteUpdate
from app.services.note_service import NoteService


class TestNoteServiceCreate:
    """Tests for create_note."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_create_note_success(self, mock_store, mock_db_session):
        result = await self.service.create_note(
            mock_store, NoteCreate(title="Groceries", content="milk, eggs")
        )

        assert result.title == "Groceries"
        assert result.content == "milk, eggs"
        assert isinstance(result.id, uuid.UUID)
        assert result.created_at == result.updated_at
        mock_db_session.add.assert_called_once()
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"title": "", "content": "milk"},
            {"title": "Groceries", "content": ""},
            {"title": "Groceries"},
            {"content": "milk"},
            {},
        ],
    )
    async def test_create_note_missing_fields(self, mock_store, payload):
        with pytest.raises(ValidationError, match="Title and content are required"):
            await self.service.create_note(mock_store, NoteCreate(**payload))

        mock_store.session.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_note_whitespace_is_accepted(self, mock_store):
        result = await self.service.create_note(mock_store, NoteCreate(title="   ", content=" "))

        assert result.title == "   "
        mock_store.session.assert_called_once()

    @pytest.mark.asyncio
    async def test_create_note_store_failure(self, mock_store, mock_db_session):
        mock_db_session.commit = AsyncMock(side_effect=RuntimeError("disk I/O error"))

        with pytest.raises(StoreError) as exc_info:
            await self.service.create_note(mock_store, NoteCreate(title="a", content="b"))

        assert "disk" not in exc_info.value.message
        assert exc_info.value.context["error_type"] == "RuntimeError"


class TestNoteServiceUpdate:
    """Tests for update_note, against a real SQLite store."""

    def setup_method(self):
        self.service = NoteService()

    async def _seed(self, store, **fields):
        payload = {"title": "Groceries", "content": "milk, eggs"}
        payload.update(fields)
        return await self.service.create_note(store, NoteCreate(**payload))

    @pytest.mark.asyncio
    async def test_update_note_success(self, store):
        created = await self._seed(store)

        result = await self.service.update_note(
            store,
            NoteUpdate(id=str(created.id), title="Groceries", content="milk, eggs, bread"),
        )

        assert result.content == "milk, eggs, bread"
        assert result.id == created.id
        assert result.created_at == created.created_at
        assert result.updated_at > result.created_at

    @pytest.mark.asyncio
    async def test_update_note_keeps_updated_at_increasing(self, store):
        """A clock reading behind the stored updated_at still moves it forward."""
        created = await self._seed(store)
        future = datetime.now(timezone.utc) + timedelta(minutes=5)
        async with store.session() as db:
            await db.execute(
                update(Note).where(Note.id == created.id).values(updated_at=future)
            )
            await db.commit()

        result = await self.service.update_note(
            store, NoteUpdate(id=str(created.id), title="t", content="c")
        )

        assert result.updated_at == future + timedelta(microseconds=1)

    @pytest.mark.asyncio
    async def test_update_note_timestamps_are_utc(self, store):
        """SQLite drops the offset; values still come back as UTC."""
        created = await self._seed(store)

        result = await self.service.update_note(
            store, NoteUpdate(id=str(created.id), title="t", content="c")
        )

        assert result.created_at.tzinfo is not None
        assert result.updated_at.tzinfo is not None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"title": "t", "content": "c"},
            {"id": "", "title": "t", "content": "c"},
            {"id": str(uuid.uuid4()), "content": "c"},
            {"id": str(uuid.uuid4()), "title": "t", "content": ""},
        ],
    )
    async def test_update_note_missing_fields(self, mock_store, payload):
        with pytest.raises(ValidationError, match="ID, title, and content are required"):
            await self.service.update_note(mock_store, NoteUpdate(**payload))

        mock_store.session.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_note_not_found(self, store):
        await self._seed(store)

        with pytest.raises(NotFoundError, match="Note not found"):
            await self.service.update_note(
                store, NoteUpdate(id=str(uuid.uuid4()), title="t", content="c")
            )

    @pytest.mark.asyncio
    async def test_update_note_malformed_id(self, mock_store):
        with pytest.raises(NotFoundError):
            await self.service.update_note(
                mock_store, NoteUpdate(id="not-a-uuid", title="t", content="c")
            )

        mock_store.session.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_loses_to_concurrent_delete(self, store, monkeypatch):
        """A delete committed between the lookup and the write wins."""
        created = await self._seed(store)
        read_updated_at = AsyncSession.scalar

        async def read_then_delete(session, *args, **kwargs):
            value = await read_updated_at(session, *args, **kwargs)
            async with store.session() as other:
                await other.execute(delete(Note).where(Note.id == created.id))
                await other.commit()
            return value

        monkeypatch.setattr(AsyncSession, "scalar", read_then_delete)

        with pytest.raises(NotFoundError, match="Note not found"):
            await self.service.update_note(
                store, NoteUpdate(id=str(created.id), title="t", content="c")
            )

        monkeypatch.undo()
        assert await self.service.list_notes(store) == []

    @pytest.mark.asyncio
    async def test_update_note_store_failure(self, mock_store, mock_db_session):
        mock_db_session.scalar = AsyncMock(side_effect=RuntimeError("connection reset"))

        with pytest.raises(StoreError, match="Could not update the note"):
            await self.service.update_note(
                mock_store, NoteUpdate(id=str(uuid.uuid4()), title="t", content="c")
            )


class TestNoteServiceDelete:
    """Tests for delete_note."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_delete_note_success(self, store):
        created = await self.service.create_note(store, NoteCreate(title="a", content="b"))

        result = await self.service.delete_note(store, str(created.id))

        assert result.message == "Note deleted"
        assert await self.service.list_notes(store) == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("note_id", [None, ""])
    async def test_delete_note_missing_id(self, mock_store, note_id):
        with pytest.raises(ValidationError, match="ID is required"):
            await self.service.delete_note(mock_store, note_id)

        mock_store.session.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_note_not_found(self, store):
        with pytest.raises(NotFoundError):
            await self.service.delete_note(store, str(uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_concurrent_deletes_have_one_winner(self, store):
        created = await self.service.create_note(store, NoteCreate(title="a", content="b"))

        results = await asyncio.gather(
            self.service.delete_note(store, str(created.id)),
            self.service.delete_note(store, str(created.id)),
            return_exceptions=True,
        )

        assert sum(isinstance(r, MessageResponse) for r in results) == 1
        assert sum(isinstance(r, NotFoundError) for r in results) == 1

    @pytest.mark.asyncio
    async def test_delete_note_store_failure(self, mock_store, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=RuntimeError("connection reset"))

        with pytest.raises(StoreError):
            await self.service.delete_note(mock_store, str(uuid.uuid4()))


class TestNoteServiceList:
    """Tests for list_notes."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_list_notes_empty(self, mock_store, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = mock_result

        assert await self.service.list_notes(mock_store) == []

    @pytest.mark.asyncio
    async def test_list_notes_with_results(self, mock_store, mock_db_session, make_note):
        notes = [make_note(title=f"Note {i}") for i in range(3)]
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = notes
        mock_db_session.execute.return_value = mock_result

        result = await self.service.list_notes(mock_store)

        assert [n.title for n in result] == ["Note 0", "Note 1", "Note 2"]
        assert [n.id for n in result] == [n.id for n in notes]

    @pytest.mark.asyncio
    async def test_list_notes_store_unreachable(self, mock_store):
        @asynccontextmanager
        async def session():
            raise ConnectionRefusedError("store down")
            yield  # pragma: no cover

        mock_store.session = MagicMock(side_effect=session)

        with pytest.raises(StoreError):
            await self.service.list_notes(mock_store)

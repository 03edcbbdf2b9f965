"""
Jotter Backend — Note Service
==============================

What:  The four note operations: list, create, update, delete.
How:   Each operation validates its input first, then opens one session on
       the shared store connection and performs a single point operation.
Who:   Called by the /api/notes route handlers.

Error Handling:
    ValidationError  raised before the store is touched
    NotFoundError    raised after the store was consulted
    anything else    logged with traceback and wrapped in StoreError, so the
                     caller only ever sees a generic server error
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from sqlalchemy import delete, desc, select, update

from app.database import StoreAdapter
from app.exceptions import JotterError, NotFoundError, StoreError, ValidationError
from app.models.note import Note, utc_now
from app.schemas.note import MessageResponse, NoteCreate, NoteResponse, NoteUpdate

logger = logging.getLogger(__name__)


def _parse_id(raw: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(raw))
    except ValueError:
        return None


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_response(note: Note) -> NoteResponse:
    return NoteResponse(
        id=note.id,
        title=note.title,
        content=note.content,
        created_at=note.created_at,
        updated_at=note.updated_at,
    )


class NoteService:
    """
    Business logic layer for note operations.

    Stateless: the store adapter is passed to every call, so routes can inject
    the process-wide adapter and tests can inject their own.
    """

    async def list_notes(self, store: StoreAdapter) -> List[NoteResponse]:
        """
        All notes, newest first.

        Query plan:
            SELECT * FROM notes ORDER BY created_at DESC
            → idx_notes_created_at
        """
        try:
            async with store.session() as db:
                result = await db.execute(select(Note).order_by(desc(Note.created_at)))
                notes = result.scalars().all()
                return [_to_response(note) for note in notes]
        except Exception as e:
            logger.error("Store error listing notes: %s", str(e), exc_info=True)
            raise StoreError(
                message="Could not retrieve notes. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def create_note(self, store: StoreAdapter, payload: NoteCreate) -> NoteResponse:
        """
        Persist a new note; the store side assigns id and both timestamps.

        Raises:
            ValidationError: title or content missing/empty (→ 400)
            StoreError: the write failed (→ 500)
        """
        missing = payload.missing_fields()
        if missing:
            raise ValidationError(
                message="Title and content are required",
                context={"missing": missing},
            )

        try:
            async with store.session() as db:
                now = utc_now()
                note = Note(
                    id=uuid.uuid4(),
                    title=payload.title,
                    content=payload.content,
                    created_at=now,
                    updated_at=now,
                )
                db.add(note)
                await db.commit()
                logger.info("Note created: %s", note.id)
                return _to_response(note)
        except Exception as e:
            logger.error("Unexpected error creating note: %s", str(e), exc_info=True)
            raise StoreError(
                message="Could not save the note. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def update_note(self, store: StoreAdapter, payload: NoteUpdate) -> NoteResponse:
        """
        Replace title and content of an existing note.

        id and created_at never change; updated_at moves forward.

        Raises:
            ValidationError: id, title or content missing/empty (→ 400)
            NotFoundError: no note with that id (→ 404)
            StoreError: the write failed (→ 500)
        """
        missing = payload.missing_fields()
        if missing:
            raise ValidationError(
                message="ID, title, and content are required",
                context={"missing": missing},
            )

        note_id = _parse_id(payload.id)
        if note_id is None:
            raise NotFoundError(resource="note", resource_id=payload.id)

        try:
            async with store.session() as db:
                previous = await db.scalar(select(Note.updated_at).where(Note.id == note_id))
                if previous is None:
                    raise NotFoundError(resource="note", resource_id=payload.id)

                now = utc_now()
                previous = _as_utc(previous)
                # Keep updated_at strictly increasing even on a coarse clock
                if now <= previous:
                    now = previous + timedelta(microseconds=1)

                # A delete that lands after the read leaves no row to return
                result = await db.execute(
                    update(Note)
                    .where(Note.id == note_id)
                    .values(title=payload.title, content=payload.content, updated_at=now)
                    .returning(Note)
                )
                note = result.scalar_one_or_none()
                if note is None:
                    raise NotFoundError(resource="note", resource_id=payload.id)

                await db.commit()
                logger.info("Note updated: %s", note.id)
                return _to_response(note)
        except JotterError:
            raise
        except Exception as e:
            logger.error("Unexpected error updating note %s: %s", payload.id, str(e), exc_info=True)
            raise StoreError(
                message="Could not update the note. Please try again.",
                context={"note_id": payload.id, "error_type": type(e).__name__},
            )

    async def delete_note(self, store: StoreAdapter, note_id: Optional[str]) -> MessageResponse:
        """
        Permanently remove a note.

        Raises:
            ValidationError: id missing/empty (→ 400)
            NotFoundError: no note with that id (→ 404)
            StoreError: the delete failed (→ 500)
        """
        if not note_id:
            raise ValidationError(message="ID is required", field="id")

        parsed_id = _parse_id(note_id)
        if parsed_id is None:
            raise NotFoundError(resource="note", resource_id=note_id)

        try:
            async with store.session() as db:
                result = await db.execute(
                    delete(Note).where(Note.id == parsed_id).returning(Note.id)
                )
                if result.scalar_one_or_none() is None:
                    raise NotFoundError(resource="note", resource_id=note_id)

                await db.commit()
                logger.info("Note deleted: %s", note_id)
                return MessageResponse(message="Note deleted")
        except JotterError:
            raise
        except Exception as e:
            logger.error("Unexpected error deleting note %s: %s", note_id, str(e), exc_info=True)
            raise StoreError(
                message="Could not delete the note. Please try again.",
                context={"note_id": note_id, "error_type": type(e).__name__},
            )


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()

"""
Jotter Backend — Notes Route Handlers
======================================

What:  GET / POST / PUT / DELETE on /api/notes.
How:   Parses the request, delegates to NoteService, returns JSON. Errors are
       raised as JotterError subclasses and rendered by the global handlers
       registered in main.py.
Who:   Called by the browser UI (through NotesApiClient) and by any
       programmatic client. DELETE needs no confirmation at this level.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.database import StoreAdapter, get_store
from app.schemas.note import (
    ErrorResponse,
    MessageResponse,
    NoteCreate,
    NoteResponse,
    NoteUpdate,
)
from app.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses={
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="List all notes, newest first",
)
async def list_notes(store: StoreAdapter = Depends(get_store)) -> List[NoteResponse]:
    return await note_service.list_notes(store)


@router.post(
    "/notes",
    status_code=201,
    response_model=NoteResponse,
    responses={
        400: {"description": "Title or content missing", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    payload: NoteCreate,
    store: StoreAdapter = Depends(get_store),
) -> NoteResponse:
    return await note_service.create_note(store, payload)


@router.put(
    "/notes",
    response_model=NoteResponse,
    responses={
        400: {"description": "id, title or content missing", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Replace a note's title and content",
)
async def update_note(
    payload: NoteUpdate,
    store: StoreAdapter = Depends(get_store),
) -> NoteResponse:
    return await note_service.update_note(store, payload)


@router.delete(
    "/notes",
    response_model=MessageResponse,
    responses={
        400: {"description": "id missing", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    note_id: Optional[str] = Query(default=None, alias="id", description="Note identifier"),
    store: StoreAdapter = Depends(get_store),
) -> MessageResponse:
    return await note_service.delete_note(store, note_id)

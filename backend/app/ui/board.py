"""
Jotter UI — Note Board State Machine
=====================================

What:  All transient UI state (note list, draft form, edit target, error
       banner) and the transitions that change it.
How:   Explicit states, independent of rendering:

           ┌─────────┐  refresh ok   ┌───────┐
           │ loading │──────────────▶│ ready │
           └─────────┘               └───────┘
                │  ▲                   │   ▲
      refresh   │  │ refresh           │   │ refresh ok
      failed    ▼  │                   ▼   │
           ┌─────────┐  submit/delete failed
           │  error  │◀───────────────────
           └─────────┘

       The local list is never patched after a mutation; a successful
       submit or delete always refetches the full list.
Who:   Driven by the /ui routes; tested directly with a fake client.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from app.schemas.note import NoteResponse
from app.ui.client import ApiRequestError, NotesApiClient

logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Failed to load notes"
NOTE_NOT_FOUND_MESSAGE = "Note not found"


class BoardState(str, Enum):
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass
class NoteDraft:
    title: str = ""
    content: str = ""


class NoteBoard:
    """
    UI state for one notes board.

    Attributes:
        state:      Current BoardState
        notes:      Last fetched list (kept while an error is shown)
        draft:      Form contents
        editing_id: Id of the note selected for edit, or None for create mode
        error:      Message for the inline banner, or None
    """

    def __init__(self, client: NotesApiClient):
        self.client = client
        self.state = BoardState.LOADING
        self.notes: List[NoteResponse] = []
        self.draft = NoteDraft()
        self.editing_id: Optional[str] = None
        self.error: Optional[str] = None

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    def find(self, note_id: str) -> Optional[NoteResponse]:
        for note in self.notes:
            if str(note.id) == str(note_id):
                return note
        return None

    async def refresh(self) -> None:
        """Fetch the full list: loading → ready, or loading → error."""
        self.state = BoardState.LOADING
        try:
            self.notes = await self.client.list_notes()
        except ApiRequestError as e:
            logger.warning("Refresh failed: %s", e.message)
            self.error = LOAD_FAILED_MESSAGE
            self.state = BoardState.ERROR
            return
        self.error = None
        self.state = BoardState.READY

    async def submit(self, title: Optional[str] = None, content: Optional[str] = None) -> bool:
        """
        Create, or update when a note is selected for edit.

        Returns True on success. On failure the draft stays as typed.
        """
        if title is not None:
            self.draft.title = title
        if content is not None:
            self.draft.content = content
        self.error = None

        try:
            if self.editing_id is not None:
                await self.client.update_note(self.editing_id, self.draft.title, self.draft.content)
            else:
                await self.client.create_note(self.draft.title, self.draft.content)
        except ApiRequestError as e:
            self.error = e.message
            self.state = BoardState.ERROR
            return False

        await self.refresh()
        self.draft = NoteDraft()
        self.editing_id = None
        return True

    def select_for_edit(self, note: NoteResponse) -> None:
        self.editing_id = str(note.id)
        self.draft = NoteDraft(title=note.title, content=note.content)

    def select_for_edit_by_id(self, note_id: str) -> bool:
        """Select a note from the current list; an unknown id shows an error."""
        note = self.find(note_id)
        if note is None:
            self.error = NOTE_NOT_FOUND_MESSAGE
            self.state = BoardState.ERROR
            return False
        self.select_for_edit(note)
        return True

    def cancel_edit(self) -> None:
        self.editing_id = None
        self.draft = NoteDraft()

    async def delete(self, note_id: str, confirm: Callable[[Optional[NoteResponse]], bool]) -> bool:
        """
        Delete after explicit confirmation.

        `confirm` receives the note (None if it is not in the current list)
        and must return True for the request to be sent. Returns True when
        the note was deleted.
        """
        if not confirm(self.find(note_id)):
            return False

        try:
            await self.client.delete_note(note_id)
        except ApiRequestError as e:
            self.error = e.message
            self.state = BoardState.ERROR
            return False

        if self.editing_id == str(note_id):
            self.cancel_edit()
        await self.refresh()
        return True

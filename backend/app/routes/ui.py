"""
Jotter Backend — Browser UI Routes
===================================

What:  Serves the notes board as HTML and accepts its form posts.
How:   Each route drives one NoteBoard transition and re-renders the page.
       The board talks to /api/notes through NotesApiClient, in-process via
       httpx.ASGITransport unless NOTES_API_URL points elsewhere.

Route Inventory:
    GET  /                          refresh + render
    POST /ui/notes                  submit (create or update)
    POST /ui/notes/{id}/edit        select-for-edit
    POST /ui/cancel                 cancel-edit
    POST /ui/notes/{id}/delete      delete (requires the confirm checkbox)

One board per process; there is no per-user state.
"""

import httpx
from fastapi import APIRouter, Depends, FastAPI, Form, Request
from fastapi.responses import HTMLResponse

from app.config import settings
from app.ui.board import NoteBoard
from app.ui.client import NotesApiClient
from app.ui.render import render_board

router = APIRouter(tags=["UI"], include_in_schema=False)

IN_PROCESS_BASE_URL = "http://jotter.internal"


def build_board(app: FastAPI) -> NoteBoard:
    if settings.notes_api_url:
        client = NotesApiClient(settings.notes_api_url, timeout=settings.ui_request_timeout)
    else:
        client = NotesApiClient(
            IN_PROCESS_BASE_URL,
            transport=httpx.ASGITransport(app=app),
            timeout=settings.ui_request_timeout,
        )
    return NoteBoard(client)


def get_board(request: Request) -> NoteBoard:
    board = getattr(request.app.state, "board", None)
    if board is None:
        board = build_board(request.app)
        request.app.state.board = board
    return board


def _page(board: NoteBoard) -> HTMLResponse:
    return HTMLResponse(render_board(board))


@router.get("/", response_class=HTMLResponse)
async def show_board(board: NoteBoard = Depends(get_board)) -> HTMLResponse:
    await board.refresh()
    return _page(board)


@router.post("/ui/notes", response_class=HTMLResponse)
async def submit_note(
    title: str = Form(default=""),
    content: str = Form(default=""),
    board: NoteBoard = Depends(get_board),
) -> HTMLResponse:
    await board.submit(title=title, content=content)
    return _page(board)


@router.post("/ui/notes/{note_id}/edit", response_class=HTMLResponse)
async def edit_note(note_id: str, board: NoteBoard = Depends(get_board)) -> HTMLResponse:
    board.select_for_edit_by_id(note_id)
    return _page(board)


@router.post("/ui/cancel", response_class=HTMLResponse)
async def cancel_edit(board: NoteBoard = Depends(get_board)) -> HTMLResponse:
    board.cancel_edit()
    return _page(board)


@router.post("/ui/notes/{note_id}/delete", response_class=HTMLResponse)
async def delete_note(
    note_id: str,
    confirm: str = Form(default=""),
    board: NoteBoard = Depends(get_board),
) -> HTMLResponse:
    await board.delete(note_id, confirm=lambda _note: confirm == "yes")
    return _page(board)

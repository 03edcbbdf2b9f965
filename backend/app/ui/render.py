"""
Jotter UI — HTML Rendering
===========================

Turns a NoteBoard into a complete HTML page. Plain forms only; every value
taken from a note or the draft is escaped.
"""

from datetime import datetime
from html import escape
from typing import List

from app.schemas.note import NoteResponse
from app.ui.board import BoardState, NoteBoard

_STYLE = """
body { font-family: system-ui, sans-serif; background: #f8fafc; color: #0f172a; margin: 0; }
main { max-width: 48rem; margin: 0 auto; padding: 2.5rem 1rem; }
header { text-align: center; margin-bottom: 2.5rem; }
section.card, li.note { background: #fff; border-radius: 1rem; padding: 1.5rem; box-shadow: 0 1px 3px rgba(0,0,0,.1); }
section.card { margin-bottom: 2rem; }
label { display: block; font-size: .875rem; margin-top: 1rem; }
input[type=text], textarea { width: 100%; box-sizing: border-box; padding: .5rem 1rem; border: 1px solid #cbd5e1; border-radius: .5rem; }
.banner { background: #fee2e2; color: #b91c1c; border-radius: .5rem; padding: .5rem 1rem; }
ul.notes { list-style: none; padding: 0; }
li.note { margin-bottom: 1rem; }
.note-content { white-space: pre-line; color: #334155; }
.meta { font-size: .75rem; color: #64748b; }
.actions form { display: inline; }
"""


def _format_time(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M UTC")


def _render_form(board: NoteBoard) -> str:
    heading = "Edit Note" if board.is_editing else "Add a New Note"
    button = "Update Note" if board.is_editing else "Add Note"
    banner = f'<p class="banner" role="alert">{escape(board.error)}</p>' if board.error else ""
    cancel = (
        '<form method="post" action="/ui/cancel"><button type="submit">Cancel</button></form>'
        if board.is_editing
        else ""
    )
    return f"""
<section class="card">
  <h2>{heading}</h2>
  {banner}
  <form method="post" action="/ui/notes">
    <label for="title">Title</label>
    <input id="title" type="text" name="title" value="{escape(board.draft.title)}" placeholder="Note title" required>
    <label for="content">Content</label>
    <textarea id="content" name="content" rows="4" placeholder="Write your note here" required>{escape(board.draft.content)}</textarea>
    <p><button type="submit">{button}</button></p>
  </form>
  {cancel}
</section>"""


def _render_note(note: NoteResponse) -> str:
    note_id = escape(str(note.id))
    return f"""
    <li class="note" id="note-{note_id}">
      <h3>{escape(note.title)}</h3>
      <p class="note-content">{escape(note.content)}</p>
      <div class="actions">
        <form method="post" action="/ui/notes/{note_id}/edit"><button type="submit">Edit</button></form>
        <form method="post" action="/ui/notes/{note_id}/delete">
          <label><input type="checkbox" name="confirm" value="yes" required> Are you sure?</label>
          <button type="submit">Delete</button>
        </form>
      </div>
      <p class="meta">Created {_format_time(note.created_at)}</p>
    </li>"""


def _render_list(board: NoteBoard) -> str:
    if board.state == BoardState.LOADING:
        body = "<p>Loading notes...</p>"
    elif not board.notes:
        body = "<p>No notes found. Start by adding one!</p>"
    else:
        items: List[str] = [_render_note(note) for note in board.notes]
        body = '<ul class="notes">' + "".join(items) + "\n</ul>"
    return f"""
<section>
  <h2>Your Notes</h2>
  {body}
</section>"""


def render_board(board: NoteBoard) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Notes App</title>
<style>{_STYLE}</style>
</head>
<body>
<main>
<header>
  <h1>Notes App</h1>
  <p>Create, edit, and organize your notes seamlessly.</p>
</header>
{_render_form(board)}
{_render_list(board)}
</main>
</body>
</html>
"""

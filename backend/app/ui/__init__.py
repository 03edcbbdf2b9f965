# UI package init
"""
Jotter UI — Browser Board
==========================

    - client.py:  NotesApiClient, the httpx client for /api/notes
    - board.py:   NoteBoard, the loading/ready/error state machine
    - render.py:  HTML page for a board

The /ui routes in app/routes/ui.py wire these together.
"""

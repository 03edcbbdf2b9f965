# Routes package init
"""
Jotter Backend — Routes Package
================================

Route Inventory:
    - notes.py:   GET/POST/PUT/DELETE /api/notes
    - health.py:  GET /health
    - ui.py:      GET / and the /ui form posts (browser board)

Routes are thin: they extract request data, call a service or the board,
and shape the response.
"""

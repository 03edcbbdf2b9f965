"""
Jotter Backend — Application Package
=====================================

A small note-taking web application: a server-rendered board in the browser,
a JSON API over a single notes collection, and a lazily-connected store.

    ┌─────────────────────────────────────┐
    │   UI (board state machine + HTML)   │  ← talks to the API over HTTP
    ├─────────────────────────────────────┤
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← validation, point operations
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │     Database (Persistence Adapter)  │  ← one cached async connection
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"

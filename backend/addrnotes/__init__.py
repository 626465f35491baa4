"""
AddrNotes Backend — Application Package Initializer
====================================================

What: Marks the `addrnotes` directory as a Python package.
Why:  Enables module imports like `from addrnotes.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend keeps a small layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Validation, Handlers)   │  ← Field rules, key derivation, merge
    ├─────────────────────────────────────┤
    │       Store (NoteStore contract)    │  ← get / save / delete / query
    ├─────────────────────────────────────┤
    │     Database (SQLAlchemy backend)   │  ← Async sessions, `notes` table
    └─────────────────────────────────────┘

    Every layer below the routes can be exercised without HTTP, and the store
    can be swapped for an in-memory double in tests.
"""

__version__ = "1.0.0"

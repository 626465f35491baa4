"""
AddrNotes Backend — FastAPI Dependencies
==========================================

What:  Provides the note store and note service to route handlers.
Why:   The store is process-wide state created once at import, but routes
       receive it through Depends() rather than importing it, so tests can
       swap it with `app.dependency_overrides[get_note_store]`.

Example usage in a route:
    @router.get("/notes")
    async def list_notes(service: NoteService = Depends(get_note_service)):
        return await service.list_notes()
"""

from fastapi import Depends

from addrnotes.database import async_session_factory
from addrnotes.services.note_service import NoteService
from addrnotes.services.sql_store import SqlNoteStore
from addrnotes.services.store_base import NoteStore

# Singleton: the session factory is configuration only, safe to share
note_store = SqlNoteStore(async_session_factory)


def get_note_store() -> NoteStore:
    return note_store


def get_note_service(store: NoteStore = Depends(get_note_store)) -> NoteService:
    return NoteService(store)

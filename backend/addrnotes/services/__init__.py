# Services package init
"""
AddrNotes Backend — Services Layer
====================================

What:  Business logic sitting between routes (HTTP) and storage.

Service Inventory:
    - validator:    field extraction and validation (address, integers, units)
    - keys:         address → storage key
    - records:      note record type and defined-field merging
    - NoteStore:    abstract key-value storage contract
    - SqlNoteStore: NoteStore on async SQLAlchemy
    - NoteService:  the create-or-update / read / delete / list operations
"""

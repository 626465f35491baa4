# Routes package init
"""
AddrNotes Backend — API Routes Package
========================================

Route Inventory:
    - notes.py:   POST /api/notes          (create or update a note)
                  POST /api/notes/read     (read one note)
                  POST /api/notes/delete   (delete one note)
                  GET  /api/notes          (list notes ascending by value)
    - health.py:  GET  /health             (service health check)

Routes are THIN: they take the JSON body, call NoteService, and return its
result. Errors are turned into responses by the handlers in main.py.
"""

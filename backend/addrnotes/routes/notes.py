"""
AddrNotes Backend — Notes Route Handlers
==========================================

What:  HTTP entry points for the four note operations.
How:   Takes the JSON body as a plain dict, delegates to NoteService, returns JSON.

Why a plain dict body (not a Pydantic request model):
    The validator distinguishes "field absent" from "field sent as null" and
    rejects non-integer text such as "12.5" with its own message. A request
    model would fill defaults and coerce types before the validator saw them.

Error responses (handled by global exception handlers in main.py):
    HTTP 400: ValidationError (bad or missing field)
    HTTP 404: NotFoundError (read of an unknown address)
    HTTP 500: StorageError or anything unexpected
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends

from addrnotes.dependencies import get_note_service
from addrnotes.schemas.note import ErrorResponse, NoteActionResponse, NoteResponse
from addrnotes.services.note_service import NoteService

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix="/api", tags=["Notes"])

ERROR_RESPONSES = {
    400: {"description": "Invalid or missing field", "model": ErrorResponse},
    500: {"description": "Storage error", "model": ErrorResponse},
}


@router.post(
    "/notes",
    response_model=NoteActionResponse,
    responses=ERROR_RESPONSES,
    summary="Create or update a note",
    description=(
        "Creates the note for `addr`, or merges the supplied fields into the existing note. "
        "`costUnit` is required when `cost` is sent and `valueUnit` when `value` is sent."
    ),
)
async def create_or_update_note(
    body: Dict[str, Any] = Body(..., examples=[{"addr": "1BoatSLRHtKNngkdXEeobR76b53LETtpyT", "cost": 5, "costUnit": "USD"}]),
    service: NoteService = Depends(get_note_service),
) -> NoteActionResponse:
    return await service.create_or_update(body)


@router.post(
    "/notes/read",
    response_model=NoteResponse,
    response_model_exclude_none=True,
    responses={
        **ERROR_RESPONSES,
        404: {"description": "No note with that address", "model": ErrorResponse},
    },
    summary="Read one note",
)
async def read_note(
    body: Dict[str, Any] = Body(...),
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    """Stored fields of the note plus its `addr`; fields never set are omitted."""
    return await service.read(body)


@router.post(
    "/notes/delete",
    response_model=NoteActionResponse,
    responses=ERROR_RESPONSES,
    summary="Delete one note",
    description="Deleting an address with no stored note also succeeds.",
)
async def delete_note(
    body: Dict[str, Any] = Body(...),
    service: NoteService = Depends(get_note_service),
) -> NoteActionResponse:
    return await service.delete(body)


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    response_model_exclude_none=True,
    responses={500: ERROR_RESPONSES[500]},
    summary="List all notes ascending by value",
    description="Notes without a value come first; equal values are ordered by address.",
)
async def list_notes(
    service: NoteService = Depends(get_note_service),
) -> List[NoteResponse]:
    notes = await service.list_notes()
    logger.debug("Listing %d notes", len(notes))
    return notes

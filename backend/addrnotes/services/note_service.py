"""
AddrNotes Backend — Note Service (Operation Handlers)
=======================================================

What:  The four note operations: create-or-update, read, delete, list.
Why:   Encapsulates validation, key derivation and record merging in one
       place, independent of HTTP concerns.
How:   Each call runs Validate → Locate → Mutate/Read → Respond. A failure at
       any stage raises and aborts the remaining stages; nothing is retried.
Who:   Called by route handlers; calls the validator and the injected NoteStore.

Orchestration Flow (create_or_update):
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────┐
    │ Validate │───▶│ derive_key  │───▶│ store.get    │───▶│ merge +  │
    │  fields  │    │             │    │ (or empty)   │    │ store.save│
    └──────────┘    └─────────────┘    └──────────────┘    └──────────┘

Concurrency:
    The get-then-save in create_or_update is not wrapped in a transaction.
    Two concurrent writes to one address race and the last save wins.

Design Decision:
    NoteService holds only its store. The store is a long-lived handle with
    no per-request state, so one NoteService can serve every request.
"""

import logging
from typing import Any, Dict, List, Mapping

from addrnotes.exceptions import NotFoundError
from addrnotes.schemas.note import NoteActionResponse, NoteResponse
from addrnotes.services.keys import NOTE_KIND, derive_key
from addrnotes.services.records import NoteRecord, merge_defined
from addrnotes.services.store_base import NoteStore
from addrnotes.services.validator import (
    FieldOptions,
    OPTIONAL_NOT_NULL,
    extract_address,
    extract_cost,
    extract_text_field,
    extract_value,
)

logger = logging.getLogger(__name__)

# Listing order: ascending by this record field
LIST_ORDER_FIELD = "value"


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - create_or_update(): validate, merge defined fields, save
        - read():             fetch one note or raise NotFoundError
        - delete():           idempotent removal
        - list_notes():       every note ascending by value

    Error Handling Strategy:
        Validation errors are raised before the store is touched.
        StorageError from the store propagates unchanged; it has already
        been logged with its traceback by the store.
    """

    def __init__(self, store: NoteStore):
        self.store = store

    @staticmethod
    def _validate_write_fields(fields: Mapping[str, Any]) -> Dict[str, Any]:
        cost = extract_cost(fields)
        value = extract_value(fields)
        return {
            "cost": cost,
            "costUnit": extract_text_field(
                fields, "costUnit", FieldOptions(mandatory=cost is not None, disallow_null=True)
            ),
            "status": extract_text_field(fields, "status", OPTIONAL_NOT_NULL),
            "value": value,
            "valueUnit": extract_text_field(
                fields, "valueUnit", FieldOptions(mandatory=value is not None, disallow_null=True)
            ),
        }

    async def create_or_update(self, fields: Mapping[str, Any]) -> NoteActionResponse:
        """
        Create the note for `addr`, or merge the supplied fields into it.

        Only fields present in the request overwrite stored values; anything
        not sent keeps its stored value.

        Returns:
            NoteActionResponse with action "created" when nothing was stored
            under the address before, "updated" otherwise.

        Raises:
            ValidationError subclasses: bad field (nothing read or written)
            StorageError: the lookup or the save failed
        """
        params = self._validate_write_fields(fields)
        addr = extract_address(fields)
        key = derive_key(addr)

        existing = await self.store.get(key)
        if existing is None:
            action = "created"
            record: NoteRecord = {}
        else:
            action = "updated"
            record = existing

        merge_defined(params, record)
        await self.store.save(key, record)

        logger.info("Note %s %s", addr, action)
        return NoteActionResponse(addr=addr, action=action)

    async def read(self, fields: Mapping[str, Any]) -> NoteResponse:
        """
        Fetch the note stored under `addr`.

        Raises:
            NotFoundError: nothing stored under the address
        """
        addr = extract_address(fields)
        record = await self.store.get(derive_key(addr))
        if record is None:
            raise NotFoundError(addr)
        return NoteResponse(addr=addr, **record)

    async def delete(self, fields: Mapping[str, Any]) -> NoteActionResponse:
        """Remove the note for `addr`. Deleting an unknown address still succeeds."""
        addr = extract_address(fields)
        await self.store.delete(derive_key(addr))
        logger.info("Note %s deleted", addr)
        return NoteActionResponse(addr=addr, action="deleted")

    async def list_notes(self) -> List[NoteResponse]:
        """
        Every stored note, ascending by value.

        Notes without a value come first; equal values are ordered by address.
        Each note carries the address recovered from its storage key.
        """
        results = await self.store.query(NOTE_KIND, LIST_ORDER_FIELD)
        return [NoteResponse(addr=key.name, **record) for key, record in results]

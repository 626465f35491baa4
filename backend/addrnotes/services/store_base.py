"""
AddrNotes Backend — Abstract Note Store Interface
===================================================

What:  Abstract base class defining the key-value storage contract.
Why:   NoteService only needs get / save / delete / query by key. Keeping
       that behind an interface lets tests run against an in-memory double
       and leaves room for a different managed datastore later.
How:   Concrete stores inherit from NoteStore and implement every method.
Who:   Called by NoteService; the concrete store is chosen in dependencies.py.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from addrnotes.services.keys import StorageKey
from addrnotes.services.records import NoteRecord


class NoteStore(ABC):
    """
    Abstract key-value store for note records.

    Contract:
        - Records are plain dicts of defined fields; absent fields are missing keys
        - save() replaces the whole record stored under the key; concurrent
          saves to one key never fail, the last one to commit wins
        - delete() of a key with nothing stored succeeds silently
        - query() orders ascending by one field; records lacking that field
          come first, ties are broken by ascending key name
        - Backend failures surface as StorageError
    """

    @abstractmethod
    async def get(self, key: StorageKey) -> Optional[NoteRecord]:
        """Return the record stored under `key`, or None when there is none."""
        ...

    @abstractmethod
    async def save(self, key: StorageKey, record: NoteRecord) -> None:
        """Store `record` under `key`, creating or replacing it."""
        ...

    @abstractmethod
    async def delete(self, key: StorageKey) -> None:
        """Remove whatever is stored under `key`."""
        ...

    @abstractmethod
    async def query(self, kind: str, order_by: str) -> List[Tuple[StorageKey, NoteRecord]]:
        """
        Every record of `kind`, ordered ascending by the `order_by` field.

        Returns:
            (key, record) pairs so callers can recover each record's name.

        Raises:
            ValueError: `order_by` is not a note field (a caller bug, not a
                        backend failure)
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the backend is reachable.

        Returns: True if a trivial round trip succeeds, False otherwise.
        """
        ...

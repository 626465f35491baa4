"""
AddrNotes Backend — Storage Key Derivation
============================================

What:  Maps a validated note address to the key the store files it under.
Why:   All four operations must agree on the key; deriving it in one place
       keeps the mapping one-to-one and identical everywhere.
"""

from typing import NamedTuple

NOTE_KIND = "Note"


class StorageKey(NamedTuple):
    """Identifies one stored entity: its kind plus a unique name within that kind."""
    kind: str
    name: str


def derive_key(addr: str) -> StorageKey:
    """Key for the note stored under `addr`; the address is the key name."""
    return StorageKey(kind=NOTE_KIND, name=addr)

"""
AddrNotes Backend — Note Records
==================================

A stored note is a plain mapping from field name to an int or a str.
A field that was never set is simply missing from the mapping; the address is
never part of the record (it lives in the storage key).
"""

from typing import Dict, Mapping, Optional, Union

FieldValue = Union[int, str]
NoteRecord = Dict[str, FieldValue]


def merge_defined(
    source: Mapping[str, Optional[FieldValue]],
    target: NoteRecord,
) -> NoteRecord:
    """
    Copy every field of `source` that holds a value into `target`.

    None in `source` means "not supplied", so those fields leave `target`
    untouched. `target` is updated in place and returned.
    """
    for field, field_value in source.items():
        if field_value is not None:
            target[field] = field_value
    return target

"""
AddrNotes Backend — Request Field Validator
=============================================

What:  Extracts and validates named fields from a raw request body mapping.
Why:   Handlers receive arbitrary JSON objects; every rule about presence,
       null-ness, integer syntax, sign and address format lives here.
How:   Pure functions over the passed-in mapping. Each one either returns the
       validated value (None meaning "not supplied") or raises a
       ValidationError subclass naming the field and the expected format.
Who:   Called by NoteService before any storage call is made.

Address format (Base58):
    Digits 1-9, upper-case A-Z without I and O, lower-case a-z without l.
    Length strictly between 25 and 36, i.e. 26 to 35 characters.
"""

import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from addrnotes.exceptions import (
    InvalidAddressCharsError,
    InvalidAddressLengthError,
    MissingFieldError,
    NegativeValueError,
    NotAnIntegerError,
    NotAStringError,
    NullFieldError,
    ValueTooLargeError,
)

BASE58_INVALID = re.compile(r"[^1-9A-HJ-NP-Za-km-z]")
BASE58_DESCRIPTION = (
    "the numerals 1–9 (not 0), upper-case letters excluding O and I, "
    "and lower-case letters excluding l"
)

# Exclusive bounds on the address length
ADDR_MIN_EXCLUSIVE = 25
ADDR_MAX_EXCLUSIVE = 36

# Largest integer a double holds exactly (2**53 - 1); fits a BIGINT column
MAX_AMOUNT = 9007199254740991


@dataclass(frozen=True)
class FieldOptions:
    """
    How a single field is extracted.

    Attributes:
        display_name:  Human name used in error messages (defaults to the field name)
        mandatory:     Fail with MissingFieldError when the field is absent
        disallow_null: Fail with NullFieldError when the field is present but null
    """
    display_name: Optional[str] = None
    mandatory: bool = False
    disallow_null: bool = False


OPTIONAL = FieldOptions()
OPTIONAL_NOT_NULL = FieldOptions(disallow_null=True)


def extract_field(
    fields: Mapping[str, Any],
    name: str,
    options: FieldOptions = OPTIONAL,
) -> Any:
    """
    Return the raw value of `name`, or None when it was not supplied.

    Raises:
        MissingFieldError: absent and `options.mandatory`
        NullFieldError:    present as null and `options.disallow_null`
    """
    if name not in fields:
        if options.mandatory:
            raise MissingFieldError(name, options.display_name)
        return None
    raw = fields[name]
    if raw is None and options.disallow_null:
        raise NullFieldError(name, options.display_name)
    return raw


def _integer_text(raw: Any) -> str:
    # JSON numbers with an integral value (12.0) read as "12"
    if isinstance(raw, float) and raw.is_integer():
        return str(int(raw))
    return str(raw).strip()


def extract_integer_field(
    fields: Mapping[str, Any],
    name: str,
    options: FieldOptions = OPTIONAL,
) -> Optional[int]:
    """
    Extract `name` and parse it as an integer.

    The value is accepted only if its trimmed text form equals the text form
    of the parsed integer, so "12.5", "12abc", "007", "+5" and booleans are
    all rejected while 12, "12" and " 12 " are accepted.

    Raises:
        NotAnIntegerError: the text does not round-trip through int()
    """
    raw = extract_field(fields, name, options)
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise NotAnIntegerError(name, str(raw).lower())

    text = _integer_text(raw)
    try:
        parsed = int(text)
    except ValueError:
        raise NotAnIntegerError(name, text) from None
    if str(parsed) != text:
        raise NotAnIntegerError(name, text, str(parsed))
    return parsed


def extract_text_field(
    fields: Mapping[str, Any],
    name: str,
    options: FieldOptions = OPTIONAL,
) -> Optional[str]:
    """Extract `name`, requiring a string when it is supplied."""
    raw = extract_field(fields, name, options)
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise NotAStringError(name, options.display_name)
    return raw


def extract_address(fields: Mapping[str, Any]) -> str:
    """
    Extract the mandatory, non-null `addr` field and check its Base58 form.

    Raises:
        MissingFieldError / NullFieldError / NotAStringError
        InvalidAddressLengthError: length outside 26..35
        InvalidAddressCharsError:  any character outside the Base58 alphabet
    """
    addr = extract_text_field(
        fields,
        "addr",
        FieldOptions(display_name="address", mandatory=True, disallow_null=True),
    )
    if not ADDR_MIN_EXCLUSIVE < len(addr) < ADDR_MAX_EXCLUSIVE:
        raise InvalidAddressLengthError(len(addr))
    if BASE58_INVALID.search(addr):
        raise InvalidAddressCharsError(BASE58_DESCRIPTION)
    return addr


def _extract_non_negative(fields: Mapping[str, Any], name: str) -> Optional[int]:
    number = extract_integer_field(fields, name, OPTIONAL_NOT_NULL)
    if number is None:
        return None
    if number < 0:
        raise NegativeValueError(name)
    if number > MAX_AMOUNT:
        raise ValueTooLargeError(name, MAX_AMOUNT)
    return number


def extract_cost(fields: Mapping[str, Any]) -> Optional[int]:
    return _extract_non_negative(fields, "cost")


def extract_value(fields: Mapping[str, Any]) -> Optional[int]:
    return _extract_non_negative(fields, "value")

"""
AddrNotes Backend — Custom Exception Hierarchy
================================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by the validator, the note service and the store; caught by global handlers.

Exception Hierarchy:
    AddrNotesError (base)
    ├── ValidationError                  → 400 Bad Request (client can fix)
    │   ├── MissingFieldError
    │   ├── NullFieldError
    │   ├── NotAnIntegerError
    │   ├── NegativeValueError
    │   ├── ValueTooLargeError
    │   ├── NotAStringError
    │   ├── InvalidAddressLengthError
    │   └── InvalidAddressCharsError
    ├── NotFoundError                    → 404 Not Found
    └── StorageError                     → 500 Internal Server Error

    With LEGACY_STATUS_CODES enabled, every branch maps to 500.
"""

from typing import Any, Dict, Optional


class AddrNotesError(Exception):
    """
    Base exception for all AddrNotes application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, and returned as `details` for
                  client errors only)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(AddrNotesError):
    """
    Raised when a request field fails validation.

    Always detected before any storage call is made, so a ValidationError
    means nothing was read or written.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class MissingFieldError(ValidationError):
    """A mandatory field is absent from the request body."""

    def __init__(self, field: str, display_name: Optional[str] = None):
        super().__init__(
            message=(
                f"The {display_name or field} is not provided.  "
                f'Please ensure the "{field}" property exists in the request.'
            ),
            field=field,
        )


class NullFieldError(ValidationError):
    """A field that may not be null was sent as null."""

    def __init__(self, field: str, display_name: Optional[str] = None):
        super().__init__(
            message=f"The {display_name or field} may not be null.",
            field=field,
        )


class NotAnIntegerError(ValidationError):
    """The field's text form does not round-trip through integer parsing."""

    def __init__(self, field: str, text: str, parsed: Optional[str] = None):
        super().__init__(
            message=f'{field} is not an integer ("{parsed if parsed is not None else "NaN"}" != "{text}").',
            field=field,
            context={"received": text},
        )


class NegativeValueError(ValidationError):
    """An integer field that must be zero or more was negative."""

    def __init__(self, field: str, display_name: Optional[str] = None):
        super().__init__(
            message=f"The {display_name or field} cannot be negative.",
            field=field,
        )


class ValueTooLargeError(ValidationError):
    """An integer field exceeded the largest amount a note can hold."""

    def __init__(self, field: str, maximum: int):
        super().__init__(
            message=f"The {field} cannot be greater than {maximum}.",
            field=field,
            context={"maximum": maximum},
        )


class NotAStringError(ValidationError):
    """A text field was sent as a number, object, list or boolean."""

    def __init__(self, field: str, display_name: Optional[str] = None):
        super().__init__(
            message=f'The {display_name or field} must be a string.  Please send the "{field}" property as text.',
            field=field,
        )


class InvalidAddressLengthError(ValidationError):
    def __init__(self, length: int):
        super().__init__(
            message=(
                "The address is invalid length.  Please ensure the \"addr\" property "
                "has between 25 and 36 characters (exclusive)."
            ),
            field="addr",
            context={"length": length},
        )


class InvalidAddressCharsError(ValidationError):
    def __init__(self, description: str):
        super().__init__(
            message=(
                "The address contains invalid characters.  Please ensure the \"addr\" "
                f"property contains only {description}."
            ),
            field="addr",
        )


class NotFoundError(AddrNotesError):
    """
    Raised when no note is stored under the requested address.

    The store returns None for a missing key; the note service converts that
    into this exception so the route layer never sees storage details.
    """

    def __init__(
        self,
        addr: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["addr"] = addr
        super().__init__(
            message=f"There are no notes with the address {addr}.",
            context=ctx,
        )
        self.addr = addr


class StorageError(AddrNotesError):
    """
    Raised when the storage backend fails.

    Security Note:
        The message returned to the client is always generic.
        The driver error is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A storage error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

"""
AddrNotes Backend — Pydantic Response Schemas
===============================================

What:  Pydantic models defining what the API returns.
Why:   Automatic serialization and OpenAPI doc generation.
How:   Routes declare these as response models with `response_model_exclude_none`,
       so fields a note never had are left out of the JSON instead of sent as null.

Request bodies are deliberately NOT modelled here: the validator needs to see
absent fields, explicit nulls and raw JSON types exactly as sent, which a
Pydantic request model would coerce away.

Field naming:
    Python attributes are snake_case; the JSON aliases keep the camelCase
    names clients send (`costUnit`, `valueUnit`).
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class NoteActionResponse(BaseModel):
    """
    What:  Acknowledgement of a write.
    Who:   Returned by POST /api/notes ("created" / "updated") and
           POST /api/notes/delete ("deleted").
    """
    addr: str = Field(description="Address of the note that was written")
    action: Literal["created", "updated", "deleted"] = Field(
        description="What happened to the note"
    )


class NoteResponse(BaseModel):
    """
    What:  A stored note plus the address it is stored under.
    Who:   Returned by POST /api/notes/read and, as list items, GET /api/notes.
    """
    addr: str = Field(description="Base58 note address")
    cost: Optional[int] = Field(default=None, description="Non-negative cost")
    cost_unit: Optional[str] = Field(default=None, alias="costUnit", description="Unit of the cost")
    value: Optional[int] = Field(default=None, description="Non-negative value")
    value_unit: Optional[str] = Field(default=None, alias="valueUnit", description="Unit of the value")
    status: Optional[str] = Field(default=None, description="Free-form status text")

    model_config = {"populate_by_name": True}


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models: one error format across all endpoints
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "validation_error",
            "message": "The cost cannot be negative.",
            "details": {"field": "cost"},
            "request_id": "1f2e3d4c"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and storage status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Storage connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")

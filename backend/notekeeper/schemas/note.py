"""
Notekeeper Backend — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract.
How:   FastAPI uses these models to read request bodies, serialize responses,
       and generate the OpenAPI document.

Request bodies are deliberately permissive (every field is `Any`): type and
format checks are done by the service's validate step so that every problem
is reported as a `{field, message}` record instead of a framework 422.
"""

import datetime as dt
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_serializer


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteInput(BaseModel):
    """
    Body of POST / and PUT /{id}.

    Unknown keys (including a client-supplied `id`) are ignored.
    """
    title: Any = Field(default=None, description="Note title, 1-255 characters")
    text: Any = Field(default=None, description="Note body")
    datetime: Any = Field(default=None, description="ISO 8601 date/time of the note")

    model_config = {
        "extra": "ignore",
        "json_schema_extra": {
            "examples": [
                {"title": "Shopping", "text": "milk, eggs", "datetime": "2023-01-01T00:00:00Z"}
            ]
        },
    }


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


def _as_utc(value: dt.datetime) -> dt.datetime:
    """Naive datetimes (e.g. read back from SQLite) are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)


class NoteResponse(BaseModel):
    """
    A persisted note.

    `datetime` is always serialized in UTC with a `Z` suffix,
    e.g. "2023-01-01T00:00:00Z".
    """
    id: int = Field(description="Identifier assigned by the database")
    title: str = Field(description="Note title")
    text: str = Field(description="Note body (sanitized)")
    datetime: dt.datetime = Field(description="Note date/time (UTC ISO 8601)")

    model_config = {"from_attributes": True}

    @field_serializer("datetime")
    def serialize_datetime(self, value: dt.datetime) -> str:
        return _as_utc(value).isoformat().replace("+00:00", "Z")


class FieldError(BaseModel):
    """One failed validation rule."""
    field: str = Field(description="Name of the offending input field")
    message: str = Field(description="Human-readable description of the rule")


class NotFoundResponse(BaseModel):
    """Body returned when the requested note does not exist."""
    error: str = Field(default="Note not found")


class ErrorResponse(BaseModel):
    """
    Body returned for server-side failures.

    The request id correlates the response with the server logs.
    """
    error: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


FieldErrorList = List[FieldError]

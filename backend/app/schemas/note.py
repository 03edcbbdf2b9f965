"""
Jotter Backend — Pydantic Request/Response Schemas
===================================================

What:  Pydantic models defining the API contract between the UI and the backend.
How:   FastAPI uses these models to parse request bodies, serialize responses,
       and generate the OpenAPI documentation.

Request records declare every field optional on purpose: a missing field is
a business-level `ValidationError` (400 with a readable message), checked by
the service through `missing_fields()` before the store is touched.

On the wire notes use camelCase (`createdAt`, `updatedAt`); Python code uses
the snake_case field names.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _missing(**fields: Optional[str]) -> List[str]:
    # Falsy check only: "" and None are missing, "   " is not
    return [name for name, value in fields.items() if not value]


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """Body of POST /api/notes."""
    title: Optional[str] = Field(default=None, description="Note title")
    content: Optional[str] = Field(default=None, description="Note body, may contain newlines")

    def missing_fields(self) -> List[str]:
        return _missing(title=self.title, content=self.content)


class NoteUpdate(BaseModel):
    """Body of PUT /api/notes. Full replace of title and content."""
    id: Optional[str] = Field(default=None, description="Identifier of the note to update")
    title: Optional[str] = Field(default=None, description="New title")
    content: Optional[str] = Field(default=None, description="New content")

    def missing_fields(self) -> List[str]:
        return _missing(id=self.id, title=self.title, content=self.content)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    Wire representation of a note: {id, title, content, createdAt, updatedAt}.

    Also used by the UI client to parse API responses, so it validates from
    either the camelCase aliases or the field names.
    """
    id: uuid.UUID = Field(description="Unique note identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note content")
    created_at: datetime = Field(description="Creation time (UTC ISO 8601)")
    updated_at: datetime = Field(description="Last update time (UTC ISO 8601)")

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Stores such as SQLite drop the offset; values are always UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


class MessageResponse(BaseModel):
    """Plain confirmation payload, e.g. {"message": "Note deleted"}."""
    message: str = Field(description="Human-readable confirmation")


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "Note not found",
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and store status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")

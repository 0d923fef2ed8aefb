"""Event document model."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class EventMode(str, Enum):
    """How attendees take part in an event."""

    ONLINE = "online"
    OFFLINE = "offline"
    HYBRID = "hybrid"


EVENT_FIELDS = (
    "title",
    "description",
    "overview",
    "image",
    "venue",
    "location",
    "date",
    "time",
    "mode",
    "audience",
    "agenda",
    "organizer",
    "tags",
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EventCreate(BaseModel):
    """Schema for creating an event.

    Fields are optional here so that missing values are reported by the
    validation pipeline with a structured error instead of a pydantic one.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    overview: Optional[str] = None
    image: Optional[str] = None
    venue: Optional[str] = None
    location: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    mode: Optional[str] = None
    audience: Optional[str] = None
    agenda: Optional[list[str]] = None
    organizer: Optional[str] = None
    tags: Optional[list[str]] = None


class EventUpdate(BaseModel):
    """Schema for updating an event."""

    title: Optional[str] = None
    description: Optional[str] = None
    overview: Optional[str] = None
    image: Optional[str] = None
    venue: Optional[str] = None
    location: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    mode: Optional[str] = None
    audience: Optional[str] = None
    agenda: Optional[list[str]] = None
    organizer: Optional[str] = None
    tags: Optional[list[str]] = None


class EventRecord(BaseModel):
    """Normalized event, ready to be persisted."""

    title: str = Field(..., min_length=1, max_length=100)
    slug: str
    description: str = Field(..., min_length=1, max_length=1000)
    overview: str = Field(..., min_length=1, max_length=500)
    image: str
    venue: str
    location: str
    date: str  # YYYY-MM-DD
    time: str  # HH:MM, 24-hour
    mode: EventMode
    audience: str
    agenda: list[str] = Field(..., min_length=1)
    organizer: str
    tags: list[str] = Field(..., min_length=1)


class Event(EventRecord):
    """Complete event model with metadata."""

    id: UUID = Field(default_factory=uuid4)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    class Config:
        from_attributes = True

"""Pydantic models for event documents."""

from .event import Event, EventCreate, EventMode, EventRecord, EventUpdate

__all__ = [
    "Event",
    "EventCreate",
    "EventMode",
    "EventRecord",
    "EventUpdate",
]

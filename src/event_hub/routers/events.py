"""Event API endpoints."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query

from ..config import get_settings
from ..errors import DuplicateKeyError, EventValidationError
from ..models.event import Event, EventCreate, EventMode, EventUpdate
from ..repositories.event_repo import EventRepository

router = APIRouter(prefix="/events", tags=["Events"])


@router.post("", response_model=Event, status_code=201)
async def create_event(data: EventCreate) -> Event:
    """Create a new event."""
    try:
        return await EventRepository.create(data)
    except EventValidationError as e:
        raise HTTPException(status_code=422, detail=e.to_dict())
    except DuplicateKeyError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("", response_model=list[Event])
async def list_events(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    mode: Optional[EventMode] = None,
) -> list[Event]:
    """List all events in chronological order."""
    return await EventRepository.list_all(
        skip=skip,
        limit=limit,
        mode=mode.value if mode else None,
    )


@router.get("/featured", response_model=list[Event])
async def list_featured_events(
    limit: Optional[int] = Query(None, ge=1, le=50),
) -> list[Event]:
    """Upcoming events for the home page."""
    if limit is None:
        limit = get_settings().featured_events_limit
    return await EventRepository.list_featured(limit=limit)


@router.get("/search", response_model=list[Event])
async def search_events(
    q: str = Query(..., min_length=1),
    limit: int = Query(20, ge=1, le=100),
) -> list[Event]:
    """Search events by title, location or tag."""
    return await EventRepository.search(q, limit=limit)


@router.get("/by-slug/{slug}", response_model=Event)
async def get_event(slug: str) -> Event:
    """Get an event by slug."""
    event = await EventRepository.get_by_slug(slug)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


@router.put("/{event_id}", response_model=Event)
async def update_event(event_id: UUID, data: EventUpdate) -> Event:
    """Update an event."""
    try:
        event = await EventRepository.update(event_id, data)
    except EventValidationError as e:
        raise HTTPException(status_code=422, detail=e.to_dict())
    except DuplicateKeyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event

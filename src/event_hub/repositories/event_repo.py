"""Event repository for Neo4j operations."""

import logging
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

from neo4j.exceptions import ConstraintError

from ..database import Neo4jDatabase
from ..errors import DuplicateKeyError
from ..models.event import EVENT_FIELDS, Event, EventCreate, EventUpdate
from ..validation import normalize_and_validate

logger = logging.getLogger("event_repository")


def _to_params(event: Event) -> dict[str, Any]:
    """Flatten an Event into Neo4j node properties."""
    params = event.model_dump(exclude={"id", "mode", "created_at", "updated_at"})
    params.update(
        id=str(event.id),
        mode=event.mode.value,
        created_at=event.created_at.isoformat(),
        updated_at=event.updated_at.isoformat(),
    )
    return params


def _from_node(node: Any) -> Event:
    """Build an Event from a stored node."""
    return Event(
        id=UUID(node["id"]),
        slug=node["slug"],
        created_at=datetime.fromisoformat(node["created_at"]),
        updated_at=datetime.fromisoformat(node["updated_at"]),
        **{field: node[field] for field in EVENT_FIELDS},
    )


class EventRepository:
    """Repository for Event node operations.

    Writes go through the normalization pipeline first; the unique
    constraint on `slug` is left to Neo4j.
    """

    @staticmethod
    async def create(data: EventCreate) -> Event:
        """Validate and create a new Event node.

        Raises:
            EventValidationError: If the candidate fails validation.
            DuplicateKeyError: If another event already has the derived slug.
        """
        record = normalize_and_validate(data.model_dump(), is_new_record=True)
        now = datetime.now(timezone.utc)
        event = Event(created_at=now, updated_at=now, **record.model_dump())

        query = """
        CREATE (e:Event {
            id: $id,
            slug: $slug,
            title: $title,
            description: $description,
            overview: $overview,
            image: $image,
            venue: $venue,
            location: $location,
            date: $date,
            time: $time,
            mode: $mode,
            audience: $audience,
            agenda: $agenda,
            organizer: $organizer,
            tags: $tags,
            created_at: $created_at,
            updated_at: $updated_at
        })
        RETURN e
        """

        try:
            async with Neo4jDatabase.get_session() as session:
                result = await session.run(query, **_to_params(event))
                await result.consume()
        except ConstraintError as e:
            logger.warning(f"Rejected event with duplicate slug: {event.slug}")
            raise DuplicateKeyError(event.slug) from e

        logger.info(f"Created event {event.id} ({event.slug})")
        return event

    @staticmethod
    async def get_by_id(event_id: UUID) -> Optional[Event]:
        """Get an Event by ID."""
        query = """
        MATCH (e:Event {id: $id})
        RETURN e
        """

        async with Neo4jDatabase.get_session() as session:
            result = await session.run(query, id=str(event_id))
            record = await result.single()

            if not record:
                return None
            return _from_node(record["e"])

    @staticmethod
    async def get_by_slug(slug: str) -> Optional[Event]:
        """Get an Event by its slug."""
        query = """
        MATCH (e:Event {slug: $slug})
        RETURN e
        """

        async with Neo4jDatabase.get_session() as session:
            result = await session.run(query, slug=slug)
            record = await result.single()

            if not record:
                return None
            return _from_node(record["e"])

    @staticmethod
    async def list_all(
        skip: int = 0,
        limit: int = 100,
        mode: Optional[str] = None,
    ) -> list[Event]:
        """List Events in chronological order, optionally filtered by mode."""
        query = """
        MATCH (e:Event)
        WHERE $mode IS NULL OR e.mode = $mode
        RETURN e
        ORDER BY e.date, e.time
        SKIP $skip
        LIMIT $limit
        """

        async with Neo4jDatabase.get_session() as session:
            result = await session.run(query, mode=mode, skip=skip, limit=limit)
            records = await result.data()

            return [_from_node(r["e"]) for r in records]

    @staticmethod
    async def list_featured(
        limit: int = 6,
        from_date: Optional[str] = None,
    ) -> list[Event]:
        """List upcoming Events, starting from `from_date` (today, UTC)."""
        if from_date is None:
            from_date = datetime.now(timezone.utc).date().isoformat()

        query = """
        MATCH (e:Event)
        WHERE e.date >= $from_date
        RETURN e
        ORDER BY e.date, e.time
        LIMIT $limit
        """

        async with Neo4jDatabase.get_session() as session:
            result = await session.run(query, from_date=from_date, limit=limit)
            records = await result.data()

            return [_from_node(r["e"]) for r in records]

    @staticmethod
    async def search(query_text: str, limit: int = 20) -> list[Event]:
        """Search Events by title, location or tag."""
        query = """
        MATCH (e:Event)
        WHERE toLower(e.title) CONTAINS toLower($text)
           OR toLower(e.location) CONTAINS toLower($text)
           OR any(tag IN e.tags WHERE toLower(tag) CONTAINS toLower($text))
        RETURN e
        ORDER BY e.date, e.time
        LIMIT $limit
        """

        async with Neo4jDatabase.get_session() as session:
            result = await session.run(query, text=query_text, limit=limit)
            records = await result.data()

            return [_from_node(r["e"]) for r in records]

    @staticmethod
    async def update(event_id: UUID, data: EventUpdate) -> Optional[Event]:
        """Update an Event, re-running normalization for the changed fields.

        Returns None when no event has the given ID.

        Raises:
            EventValidationError: If the merged record fails validation.
            DuplicateKeyError: If a new title derives a slug already in use.
        """
        existing = await EventRepository.get_by_id(event_id)
        if not existing:
            return None

        current = existing.model_dump()
        patch = {k: v for k, v in data.model_dump().items() if v is not None}
        changed = {k for k, v in patch.items() if current.get(k) != v}
        if not changed:
            return existing

        record = normalize_and_validate(
            {**current, **patch},
            is_new_record=False,
            changed_fields=changed,
        )
        event = Event(
            id=existing.id,
            created_at=existing.created_at,
            updated_at=datetime.now(timezone.utc),
            **record.model_dump(),
        )

        updates = _to_params(event)
        del updates["created_at"]
        set_clause = ", ".join(f"e.{k} = ${k}" for k in updates if k != "id")
        query = f"""
        MATCH (e:Event {{id: $id}})
        SET {set_clause}
        RETURN e
        """

        try:
            async with Neo4jDatabase.get_session() as session:
                result = await session.run(query, **updates)
                stored = await result.single()
        except ConstraintError as e:
            logger.warning(f"Rejected update of {event_id}, duplicate slug: {event.slug}")
            raise DuplicateKeyError(event.slug) from e

        if not stored:
            return None

        logger.info(f"Updated event {event_id} (changed: {', '.join(sorted(changed))})")
        return _from_node(stored["e"])

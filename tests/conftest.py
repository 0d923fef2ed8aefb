"""Pytest configuration and fixtures."""

from contextlib import asynccontextmanager

import pytest
import pytest_asyncio
from neo4j.exceptions import ConstraintError

from event_hub.database import Neo4jDatabase
from event_hub.models.event import EventCreate
from event_hub.repositories.event_repo import EventRepository


class FakeResult:
    """Stand-in for a Neo4j async result."""

    def __init__(self, rows):
        self._rows = rows

    async def single(self):
        return self._rows[0] if self._rows else None

    async def data(self):
        return list(self._rows)

    async def consume(self):
        return None


class FakeNeo4jSession:
    """In-memory Neo4j session that understands the repository's queries."""

    def __init__(self, store):
        self.store = store

    def _check_slug(self, slug, event_id):
        for node in self.store.values():
            if node["slug"] == slug and node["id"] != event_id:
                raise ConstraintError(
                    f"Node already exists with label `Event` and property `slug` = '{slug}'"
                )

    def _sorted(self, nodes):
        return sorted(nodes, key=lambda n: (n["date"], n["time"]))

    async def run(self, query, parameters=None, **kwargs):
        """Mock query execution, with the driver's `AsyncSession.run` signature."""
        params = {**(parameters or {}), **kwargs}
        if "CREATE (e:Event" in query:
            self._check_slug(params["slug"], params["id"])
            self.store[params["id"]] = dict(params)
            return FakeResult([{"e": dict(params)}])

        if "SET" in query:
            node = self.store.get(params["id"])
            if node is None:
                return FakeResult([])
            self._check_slug(params["slug"], params["id"])
            node.update(params)
            return FakeResult([{"e": dict(node)}])

        if "{id: $id}" in query:
            node = self.store.get(params["id"])
            return FakeResult([{"e": dict(node)}] if node else [])

        if "{slug: $slug}" in query:
            rows = [{"e": dict(n)} for n in self.store.values() if n["slug"] == params["slug"]]
            return FakeResult(rows)

        if "$from_date" in query:
            nodes = [n for n in self.store.values() if n["date"] >= params["from_date"]]
            return FakeResult([{"e": dict(n)} for n in self._sorted(nodes)[: params["limit"]]])

        if "$text" in query:
            text = params["text"].lower()
            nodes = [
                n
                for n in self.store.values()
                if text in n["title"].lower()
                or text in n["location"].lower()
                or any(text in tag.lower() for tag in n["tags"])
            ]
            return FakeResult([{"e": dict(n)} for n in self._sorted(nodes)[: params["limit"]]])

        if "MATCH (e:Event)" in query:
            nodes = [
                n
                for n in self.store.values()
                if params.get("mode") is None or n["mode"] == params["mode"]
            ]
            skip, limit = params["skip"], params["limit"]
            return FakeResult([{"e": dict(n)} for n in self._sorted(nodes)[skip : skip + limit]])

        # Constraints, indexes and anything else
        return FakeResult([])


@pytest.fixture
def event_store(monkeypatch):
    """Patch Neo4jDatabase with an in-memory store, keyed by event ID."""
    store = {}
    session = FakeNeo4jSession(store)

    @asynccontextmanager
    async def get_session():
        yield session

    monkeypatch.setattr(Neo4jDatabase, "get_session", get_session)
    return store


@pytest.fixture
def event_data():
    """Raw field values for a valid event."""
    return {
        "title": "  Dev Conf 2025!!  ",
        "description": "A conference for developers.",
        "overview": "Talks, workshops and networking.",
        "image": " /images/event1.png ",
        "venue": "Moscone Center",
        "location": "San Francisco, CA",
        "date": "March 5, 2025",
        "time": "2:30 PM",
        "mode": "hybrid",
        "audience": "Developers",
        "agenda": ["Keynote", "Workshops"],
        "organizer": "Dev Community",
        "tags": ["conference", "web"],
    }


@pytest_asyncio.fixture
async def stored_event(event_store, event_data):
    """An event already persisted through the repository."""
    return await EventRepository.create(EventCreate(**event_data))

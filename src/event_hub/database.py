"""Neo4j connection for the event store."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from neo4j import AsyncGraphDatabase, AsyncDriver, AsyncSession
from neo4j.exceptions import Neo4jError, ServiceUnavailable

from .config import get_settings
from .errors import EventHubError

logger = logging.getLogger("event_store")

# Unique constraints back the slug invariant; the index serves listings.
SCHEMA_STATEMENTS = [
    "CREATE CONSTRAINT event_id IF NOT EXISTS FOR (e:Event) REQUIRE e.id IS UNIQUE",
    "CREATE CONSTRAINT event_slug IF NOT EXISTS FOR (e:Event) REQUIRE e.slug IS UNIQUE",
    "CREATE INDEX event_date_mode IF NOT EXISTS FOR (e:Event) ON (e.date, e.mode)",
]


class StoreUnavailableError(EventHubError):
    """Raised when the event store cannot be reached."""

    pass


class Neo4jDatabase:
    """Holds the driver for the event store and hands out sessions."""

    _driver: AsyncDriver | None = None

    @classmethod
    async def connect(cls) -> None:
        """Open the driver and check the server is reachable.

        Raises:
            StoreUnavailableError: If Neo4j does not answer.
        """
        settings = get_settings()
        driver = AsyncGraphDatabase.driver(
            settings.neo4j_uri,
            auth=(settings.neo4j_user, settings.neo4j_password),
        )
        try:
            await driver.verify_connectivity()
        except (ServiceUnavailable, OSError) as e:
            await driver.close()
            raise StoreUnavailableError(
                f"Event store unavailable at {settings.neo4j_uri}: {e}"
            ) from e

        cls._driver = driver
        logger.info(f"Connected to {settings.neo4j_uri} (database: {settings.neo4j_database})")

    @classmethod
    async def disconnect(cls) -> None:
        """Close the driver if one is open."""
        if cls._driver:
            await cls._driver.close()
            cls._driver = None
            logger.info("Event store connection closed")

    @classmethod
    def get_driver(cls) -> AsyncDriver:
        """Get the connected driver."""
        if not cls._driver:
            raise RuntimeError("Event store not connected. Call connect() first.")
        return cls._driver

    @classmethod
    @asynccontextmanager
    async def get_session(cls) -> AsyncGenerator[AsyncSession, None]:
        """Session on the configured database, closed on exit."""
        driver = cls.get_driver()
        session = driver.session(database=get_settings().neo4j_database)
        try:
            yield session
        finally:
            await session.close()


async def init_constraints() -> None:
    """Create the Event constraints and indexes if they are missing."""
    async with Neo4jDatabase.get_session() as session:
        for statement in SCHEMA_STATEMENTS:
            try:
                result = await session.run(statement)
                await result.consume()
            except Neo4jError as e:
                logger.error(f"Schema statement failed: {statement}: {e}")
                raise
    logger.info(f"Ensured {len(SCHEMA_STATEMENTS)} event schema statements")

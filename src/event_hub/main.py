"""Event Hub - FastAPI Application."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .database import Neo4jDatabase, init_constraints
from .routers import events_router

logger = logging.getLogger("event_hub")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Startup
    settings = get_settings()
    logger.info(f"Starting {settings.service_name} v{settings.service_version}")

    await Neo4jDatabase.connect()
    logger.info("Connected to Neo4j")

    await init_constraints()
    logger.info("Database constraints initialized")

    yield

    # Shutdown
    await Neo4jDatabase.disconnect()
    logger.info("Disconnected from Neo4j")


settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Event Hub",
    description="Listing service for developer events",
    version=settings.service_version,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(events_router, prefix="/api")


@app.get("/")
async def root() -> dict:
    """Root endpoint."""
    return {
        "service": settings.service_name,
        "version": settings.service_version,
        "headline": "The hub for every dev event you can't miss",
        "tagline": "Hackathons, meetups, and conferences, all in one place",
        "featured": "/api/events/featured",
        "docs": "/docs",
    }


@app.get("/health")
async def health() -> dict:
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "event_hub.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )

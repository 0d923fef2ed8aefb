"""Seed script for initial event data."""

import asyncio

from event_hub.database import Neo4jDatabase, init_constraints
from event_hub.models.event import EventCreate
from event_hub.repositories.event_repo import EventRepository

EVENTS = [
    EventCreate(
        title="React Summit 2026",
        description="The biggest React conference worldwide, two days of talks and workshops.",
        overview="Talks on server components, performance and the React ecosystem.",
        image="/images/event1.png",
        venue="Beurs van Berlage",
        location="Amsterdam, Netherlands",
        date="June 12, 2026",
        time="9:00 AM",
        mode="hybrid",
        audience="Frontend engineers",
        agenda=["Registration", "Keynote", "Workshops", "Closing panel"],
        organizer="GitNation",
        tags=["react", "frontend", "javascript"],
    ),
    EventCreate(
        title="PyCon DE & PyData",
        description="Community conference for Python developers and data scientists.",
        overview="Three days of talks, tutorials and sprints.",
        image="/images/event2.png",
        venue="Darmstadtium",
        location="Darmstadt, Germany",
        date="2026-11-20",
        time="10:00",
        mode="offline",
        audience="Python developers",
        agenda=["Opening", "Talks", "Sprints"],
        organizer="Python Software Verband",
        tags=["python", "data"],
    ),
    EventCreate(
        title="Hack the Cloud: 48h Hackathon",
        description="Build something on open cloud tooling in 48 hours.",
        overview="Teams of up to four, mentors on call, prizes for the best demos.",
        image="/images/event3.png",
        venue="Online",
        location="Worldwide",
        date="December 4, 2026",
        time="6:30 PM",
        mode="online",
        audience="Developers of all levels",
        agenda=["Kickoff", "Hacking", "Demos"],
        organizer="Open Cloud Community",
        tags=["hackathon", "cloud"],
    ),
    EventCreate(
        title="Rust Meetup Berlin",
        description="Monthly meetup with lightning talks about Rust in production.",
        overview="Two talks followed by pizza and networking.",
        image="/images/event4.png",
        venue="c-base",
        location="Berlin, Germany",
        date="2026-11-05",
        time="7:00 PM",
        mode="offline",
        audience="Rust developers",
        agenda=["Talk 1", "Talk 2", "Networking"],
        organizer="Rust Berlin",
        tags=["rust", "meetup"],
    ),
]


async def seed_data():
    """Seed Neo4j with sample developer events."""
    await Neo4jDatabase.connect()
    await init_constraints()

    async with Neo4jDatabase.get_session() as session:
        # Clear existing data
        await session.run("MATCH (e:Event) DETACH DELETE e")
    print("🧹 Cleared existing events")

    for data in EVENTS:
        event = await EventRepository.create(data)
        print(f"📅 {event.date} {event.time}  {event.slug}")

    await Neo4jDatabase.disconnect()
    print(f"\n✅ Created {len(EVENTS)} events")


if __name__ == "__main__":
    asyncio.run(seed_data())

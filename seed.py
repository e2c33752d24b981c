"""
Seed script -- populates the database with sample courts for reviewers.

Run after migrations:
    python seed.py

Creates:
  - 8 active courts around Cebu City
  - 1 inactive court and 1 court without coordinates (both hidden from the map)
"""

import asyncio

from sqlalchemy import text

from courtnav.infrastructure.database import async_session_factory, engine
from courtnav.infrastructure.models import CourtModel


COURTS = [
    {"id": "c1", "name": "Ayala Center Pickleball Courts", "city": "Cebu City", "lat": 10.3181, "lng": 123.9050, "rating": 4.8, "phone": "+63 32 888 1001"},
    {"id": "c2", "name": "Banilad Sports Hub", "city": "Cebu City", "lat": 10.3420, "lng": 123.9110, "rating": 4.5, "phone": "+63 32 888 1002"},
    {"id": "c3", "name": "Capitol Site Courts", "city": "Cebu City", "lat": 10.3170, "lng": 123.8910, "rating": 4.2, "phone": None},
    {"id": "c4", "name": "IT Park Rooftop Courts", "city": "Cebu City", "lat": 10.3300, "lng": 123.9060, "rating": 4.9, "phone": "+63 32 888 1004"},
    {"id": "c5", "name": "Mandaue Community Courts", "city": "Mandaue City", "lat": 10.3460, "lng": 123.9320, "rating": 4.0, "phone": None},
    {"id": "c6", "name": "Lapu-Lapu Beachside Courts", "city": "Lapu-Lapu City", "lat": 10.3100, "lng": 123.9790, "rating": 4.6, "phone": "+63 32 888 1006"},
    {"id": "c7", "name": "Talisay Pickle Park", "city": "Talisay City", "lat": 10.2450, "lng": 123.8490, "rating": 3.9, "phone": None},
    {"id": "c8", "name": "South Road Properties Courts", "city": "Cebu City", "lat": 10.2830, "lng": 123.8800, "rating": 4.4, "phone": "+63 32 888 1008"},
]


async def seed():
    async with async_session_factory() as session:
        # Check if already seeded
        result = await session.execute(text("SELECT count(*) FROM courts"))
        if result.scalar() > 0:
            print("Database already seeded. Skipping.")
            return

        # ── Active courts ─────────────────────────────────────────────
        for c in COURTS:
            session.add(
                CourtModel(
                    id=c["id"],
                    name=c["name"],
                    city=c["city"],
                    latitude=c["lat"],
                    longitude=c["lng"],
                    rating=c["rating"],
                    phone_number=c["phone"],
                    is_active=True,
                )
            )
        print(f"  Created {len(COURTS)} courts")

        # ── Courts the map must not show ──────────────────────────────
        session.add(
            CourtModel(
                id="c9", name="Closed Guadalupe Court", city="Cebu City",
                latitude=10.3290, longitude=123.8890, is_active=False,
            )
        )
        session.add(
            CourtModel(
                id="c10", name="Unmapped Barangay Court", city="Cebu City",
                latitude=None, longitude=None, is_active=True,
            )
        )
        print("  Created 1 inactive and 1 unmapped court")

        await session.commit()
        print("\nSeed complete!")


async def main():
    print("Seeding database...")
    await seed()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())

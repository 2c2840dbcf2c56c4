"""
Seed script -- populates the database with sample data for local runs.

Run after migrations:
    python seed.py

Creates:
  - 2 owners
  - 4 chair models with rated speeds
  - 8 chairs (one inactive, one without telemetry, one busy)
  - latest location rows for located chairs
  - 5 rides: 4 unmatched, 1 in progress on the busy chair
"""

import asyncio
from datetime import datetime, timedelta, timezone

from sqlalchemy import text

from chair_dispatch.domain.enums import RideStatus
from chair_dispatch.infrastructure.database import async_session_factory, engine
from chair_dispatch.infrastructure.models import (
    ChairLocationModel,
    ChairModel,
    ChairTypeModel,
    OwnerModel,
    RideModel,
    RideStatusModel,
)

OWNERS = ["Seat Works", "Rolling Lounge"]

CHAIR_TYPES = [
    {"name": "RetroRocker", "speed": 2},
    {"name": "AeroSeat", "speed": 3},
    {"name": "ComfortGlide", "speed": 5},
    {"name": "LoungeRunner", "speed": 7},
]

CHAIRS = [
    {"owner": 0, "name": "aero-01", "model": "AeroSeat", "active": True, "at": (10, 10)},
    {"owner": 0, "name": "aero-02", "model": "AeroSeat", "active": True, "at": (40, -20)},
    {"owner": 0, "name": "glide-01", "model": "ComfortGlide", "active": True, "at": (-30, 15)},
    {"owner": 0, "name": "retro-01", "model": "RetroRocker", "active": False, "at": (0, 0)},
    {"owner": 1, "name": "runner-01", "model": "LoungeRunner", "active": True, "at": (120, 80)},
    {"owner": 1, "name": "runner-02", "model": "LoungeRunner", "active": True, "at": None},
    {"owner": 1, "name": "glide-02", "model": "ComfortGlide", "active": True, "at": (5, 5)},
    {"owner": 1, "name": "proto-01", "model": "Prototype", "active": True, "at": (1, 1)},
]

# (pickup, destination)
RIDES = [
    ((0, 0), (25, 30)),
    ((12, -4), (-10, 40)),
    ((50, 50), (90, 70)),
    ((-20, 8), (0, -35)),
]


async def seed():
    async with async_session_factory() as session:
        # Check if already seeded
        result = await session.execute(text("SELECT count(*) FROM owners"))
        if result.scalar() > 0:
            print("Database already seeded. Skipping.")
            return

        # ── Owners & models ───────────────────────────────────────────
        owners = [OwnerModel(name=name) for name in OWNERS]
        session.add_all(owners)
        session.add_all(ChairTypeModel(**t) for t in CHAIR_TYPES)
        await session.flush()
        print(f"  Created {len(owners)} owners, {len(CHAIR_TYPES)} chair models")

        # ── Chairs & telemetry ────────────────────────────────────────
        now = datetime.now(timezone.utc)
        chairs = []
        for c in CHAIRS:
            chair = ChairModel(
                owner_id=owners[c["owner"]].id,
                name=c["name"],
                model=c["model"],
                is_active=c["active"],
            )
            session.add(chair)
            chairs.append((chair, c["at"]))
        await session.flush()

        for chair, at in chairs:
            if at is None:
                continue
            session.add(
                ChairLocationModel(
                    chair_id=chair.id,
                    latitude=at[0],
                    longitude=at[1],
                    created_at=now,
                )
            )
        print(f"  Created {len(chairs)} chairs")

        # ── Rides ─────────────────────────────────────────────────────
        for i, (pickup, destination) in enumerate(RIDES):
            session.add(
                RideModel(
                    pickup_latitude=pickup[0],
                    pickup_longitude=pickup[1],
                    destination_latitude=destination[0],
                    destination_longitude=destination[1],
                    created_at=now + timedelta(seconds=i),
                )
            )

        # glide-02 is carrying a passenger: two of six stages sent
        busy = RideModel(
            chair_id=chairs[6][0].id,
            pickup_latitude=3,
            pickup_longitude=3,
            destination_latitude=60,
            destination_longitude=-10,
            created_at=now - timedelta(minutes=5),
        )
        session.add(busy)
        await session.flush()
        for status in (RideStatus.MATCHING, RideStatus.ENROUTE):
            session.add(
                RideStatusModel(ride_id=busy.id, status=status, chair_sent_at=now)
            )
        session.add(RideStatusModel(ride_id=busy.id, status=RideStatus.PICKUP))
        print(f"  Created {len(RIDES) + 1} rides")

        await session.commit()
        print("\nSeed complete!")


async def main():
    print("Seeding database...")
    await seed()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())

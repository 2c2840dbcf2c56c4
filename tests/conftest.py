"""
Shared test fixtures.

Uses an in-memory SQLite database (via aiosqlite) so tests run without
Docker / PostgreSQL / Redis.  The production models have no
PostgreSQL-only column types, so the real metadata is created directly.
SQLite ignores ``FOR UPDATE``; row locking itself is not exercised here.
``file_session_factory`` gives every session its own connection, for
tests that interleave two cycles.
"""

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from chair_dispatch.domain.enums import RideStatus
from chair_dispatch.infrastructure.database import Base
from chair_dispatch.infrastructure.models import (
    ChairModel,
    ChairTypeModel,
    OwnerModel,
    RideModel,
)
from chair_dispatch.infrastructure.repositories import (
    ChairRepository,
    RideRepository,
)

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"

T0 = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


# ── Fixtures ──────────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Fresh schema per test; yields a factory usable by the matcher."""
    engine = create_async_engine(
        TEST_DB_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def file_session_factory(
    tmp_path,
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'dispatch.db'}", echo=False
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def world(session_factory):
    """Builder for owners, chairs, telemetry, rides and status history."""
    return World(session_factory)


@pytest.fixture
def file_world(file_session_factory):
    return World(file_session_factory)


# ── Data builder ──────────────────────────────────────────────────────


class World:
    def __init__(self, session_factory):
        self.session_factory = session_factory
        self._owner_id = None
        self._clock = 0

    def _tick(self) -> datetime:
        self._clock += 1
        return T0 + timedelta(seconds=self._clock)

    async def _owner(self, session) -> int:
        if self._owner_id is None:
            owner = OwnerModel(name="owner")
            session.add(owner)
            await session.flush()
            self._owner_id = owner.id
        return self._owner_id

    async def chair_model(self, name: str, speed: int) -> None:
        async with self.session_factory() as session:
            session.add(ChairTypeModel(name=name, speed=speed))
            await session.commit()

    async def chair(
        self,
        *,
        speed: int | None = 1,
        at: tuple[int, int] | None = (0, 0),
        active: bool = True,
        model: str | None = None,
    ) -> int:
        """Create a chair; ``speed`` registers a dedicated model unless *model* is given."""
        async with self.session_factory() as session:
            owner_id = await self._owner(session)
            if model is None:
                model = f"model-{self._tick().timestamp()}"
                if speed is not None:
                    session.add(ChairTypeModel(name=model, speed=speed))
            chair = ChairModel(
                owner_id=owner_id, name="chair", model=model, is_active=active
            )
            session.add(chair)
            await session.flush()
            if at is not None:
                await ChairRepository(session).add_location(
                    chair.id, at[0], at[1], created_at=self._tick()
                )
            await session.commit()
            return chair.id

    async def move(self, chair_id: int, at: tuple[int, int]) -> None:
        async with self.session_factory() as session:
            await ChairRepository(session).add_location(
                chair_id, at[0], at[1], created_at=self._tick()
            )
            await session.commit()

    async def ride(
        self,
        *,
        destination: tuple[int, int] | None = (0, 0),
        pickup: tuple[int, int] = (0, 0),
        chair_id: int | None = None,
        sent: int = 0,
    ) -> int:
        """Create a ride; *sent* stages get a ``chair_sent_at`` timestamp."""
        async with self.session_factory() as session:
            repo = RideRepository(session)
            ride = await repo.create_ride(
                pickup_latitude=pickup[0],
                pickup_longitude=pickup[1],
                destination_latitude=destination[0] if destination else None,
                destination_longitude=destination[1] if destination else None,
                chair_id=chair_id,
                created_at=self._tick(),
            )
            for status in list(RideStatus)[:sent]:
                await repo.add_status(ride.id, status, chair_sent_at=self._tick())
            await session.commit()
            return ride.id

    async def chair_of(self, ride_id: int) -> int | None:
        async with self.session_factory() as session:
            ride = await session.get(RideModel, ride_id)
            return ride.chair_id

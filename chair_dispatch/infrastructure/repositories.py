"""
Repository Pattern -- abstracts DB access so domain logic stays DB-agnostic.

Each repository receives an ``AsyncSession`` (unit-of-work) and exposes
domain-relevant queries only.  Repositories never commit: the caller owns
the transaction boundary.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, distinct, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from .models import (
    ChairLocationModel,
    ChairModel,
    ChairTypeModel,
    RideModel,
    RideStatusModel,
)
from chair_dispatch.domain.entities import (
    AssignmentConflict,
    ChairCandidate,
    Location,
    Ride,
)
from chair_dispatch.domain.enums import RIDE_STATUS_STAGES, RideStatus


def to_ride(model: RideModel) -> Ride:
    """Map a ``rides`` row onto the domain entity."""
    destination = None
    if (
        model.destination_latitude is not None
        and model.destination_longitude is not None
    ):
        destination = Location(
            model.destination_latitude, model.destination_longitude
        )
    return Ride(
        id=model.id,
        pickup=Location(model.pickup_latitude, model.pickup_longitude),
        destination=destination,
        chair_id=model.chair_id,
        created_at=model.created_at,
    )


def oldest_unmatched_query():
    """Oldest unassigned ride, row-locked, skipping rows other cycles hold."""
    return (
        select(RideModel)
        .where(RideModel.chair_id.is_(None))
        .order_by(RideModel.created_at, RideModel.id)
        .limit(1)
        .with_for_update(skip_locked=True)
    )


class RideRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_ride(
        self,
        *,
        pickup_latitude: int,
        pickup_longitude: int,
        destination_latitude: Optional[int],
        destination_longitude: Optional[int],
        user_id: Optional[int] = None,
        chair_id: Optional[int] = None,
        created_at: Optional[datetime] = None,
    ) -> RideModel:
        ride = RideModel(
            user_id=user_id,
            chair_id=chair_id,
            pickup_latitude=pickup_latitude,
            pickup_longitude=pickup_longitude,
            destination_latitude=destination_latitude,
            destination_longitude=destination_longitude,
        )
        if created_at is not None:
            ride.created_at = created_at
        self.session.add(ride)
        await self.session.flush()
        return ride

    async def add_status(
        self,
        ride_id: int,
        status: RideStatus,
        chair_sent_at: Optional[datetime] = None,
    ) -> RideStatusModel:
        event = RideStatusModel(
            ride_id=ride_id, status=status, chair_sent_at=chair_sent_at
        )
        self.session.add(event)
        await self.session.flush()
        return event

    async def get_by_id(self, ride_id: int) -> Optional[RideModel]:
        return await self.session.get(RideModel, ride_id)

    async def get_oldest_unmatched_for_update(self) -> Optional[RideModel]:
        """SELECT ... FOR UPDATE SKIP LOCKED on the oldest ride without a chair.

        A ride held by a concurrent cycle is passed over, so this cycle
        moves straight on to the next-oldest unmatched ride.
        """
        result = await self.session.execute(oldest_unmatched_query())
        return result.scalar_one_or_none()

    async def assign_chair(self, ride_id: int, chair_id: int) -> None:
        """Bind *chair_id* to a still-unassigned ride or raise."""
        result = await self.session.execute(
            update(RideModel)
            .where(RideModel.id == ride_id, RideModel.chair_id.is_(None))
            .values(chair_id=chair_id, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise AssignmentConflict(ride_id)


class ChairRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def add_location(
        self,
        chair_id: int,
        latitude: int,
        longitude: int,
        created_at: Optional[datetime] = None,
    ) -> ChairLocationModel:
        location = ChairLocationModel(
            chair_id=chair_id, latitude=latitude, longitude=longitude
        )
        if created_at is not None:
            location.created_at = created_at
        self.session.add(location)
        await self.session.flush()
        return location

    async def get_candidates(self) -> list[ChairCandidate]:
        """
        Every active chair with its latest location, rated speed and a
        derived availability flag, in chair-id order.

        Availability is computed from ``ride_statuses`` history: a ride is
        open while fewer than ``RIDE_STATUS_STAGES`` distinct stages carry
        ``chair_sent_at``; a chair is available iff it has no open ride.
        """
        latest = select(
            ChairLocationModel.chair_id,
            ChairLocationModel.latitude,
            ChairLocationModel.longitude,
            func.row_number()
            .over(
                partition_by=ChairLocationModel.chair_id,
                order_by=(
                    ChairLocationModel.created_at.desc(),
                    ChairLocationModel.id.desc(),
                ),
            )
            .label("rn"),
        ).subquery("latest_location")

        busy_chairs = (
            select(RideModel.chair_id)
            .outerjoin(
                RideStatusModel,
                and_(
                    RideStatusModel.ride_id == RideModel.id,
                    RideStatusModel.chair_sent_at.is_not(None),
                ),
            )
            .where(RideModel.chair_id.is_not(None))
            .group_by(RideModel.id, RideModel.chair_id)
            .having(func.count(distinct(RideStatusModel.status)) < RIDE_STATUS_STAGES)
        )

        result = await self.session.execute(
            select(
                ChairModel.id,
                ChairModel.name,
                ChairModel.model,
                ChairModel.is_active,
                ChairTypeModel.speed,
                latest.c.latitude,
                latest.c.longitude,
                ChairModel.id.not_in(busy_chairs).label("available"),
            )
            .select_from(ChairModel)
            .outerjoin(ChairTypeModel, ChairTypeModel.name == ChairModel.model)
            .outerjoin(
                latest,
                and_(latest.c.chair_id == ChairModel.id, latest.c.rn == 1),
            )
            .where(ChairModel.is_active.is_(True))
            .order_by(ChairModel.id)
        )

        candidates: list[ChairCandidate] = []
        for row in result.all():
            location = None
            if row.latitude is not None and row.longitude is not None:
                location = Location(row.latitude, row.longitude)
            candidates.append(
                ChairCandidate(
                    id=row.id,
                    name=row.name,
                    model=row.model,
                    speed=row.speed,
                    location=location,
                    is_active=bool(row.is_active),
                    is_available=bool(row.available),
                )
            )
        return candidates
